from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


RoomStatus = Literal["waiting", "in-game"]
RoundState = Literal["drawing", "guessing", "ended"]


@dataclass
class Player:
    id: str
    name: str
    score: int = 0
    is_agent: bool = False
    model_id: str | None = None


@dataclass
class GuessRecord:
    player_id: str
    guess: str
    correct: bool


@dataclass
class Round:
    round_number: int
    word: str
    drawer_id: str
    model_id: str | None = None
    started_at_ms: int = 0
    guesses: list[GuessRecord] = field(default_factory=list)
    state: RoundState = "drawing"
    svg: str | None = None
    image: str | None = None


@dataclass
class Room:
    id: str
    players: dict[str, Player] = field(default_factory=dict)
    current_round: Round | None = None
    history: list[Round] = field(default_factory=list)
    status: RoomStatus = "waiting"
