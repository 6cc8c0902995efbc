from __future__ import annotations

import random


DEFAULT_WORDS = [
    "cat", "dog", "sun", "tree", "house", "car", "robot", "alien", "pizza", "dragon",
]

# Wrong answers used by simulated agent guesses.
DECOY_WORDS = [
    "cat", "dog", "sun", "tree", "house", "car", "robot", "alien", "pizza", "dragon",
    "ball", "star", "flower", "book", "pencil", "phone", "chair", "table", "shoe", "hat",
    "apple", "banana", "cookie", "cake", "fish", "bird", "plane", "boat", "train", "bus",
    "mountain", "river", "ocean", "cloud", "rain", "snow", "fire", "ice", "key", "door",
    "window", "computer", "mouse", "keyboard", "screen", "watch", "glasses", "shirt", "pants",
]


def normalize_word(text: str) -> str:
    return (text or "").strip().lower()


def pick_word(words: list[str] | None = None, rng: random.Random | None = None) -> str:
    pool = words or DEFAULT_WORDS
    return normalize_word((rng or random).choice(pool))
