from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable

from ..exceptions import RoundNotFound
from .models import GuessRecord, Room, Round
from .scoring import ScoringRules, score_correct_guess
from .store import RoomStore
from .words import normalize_word

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class GuessOutcome:
    round: Round
    correct: bool
    recorded: bool
    points: dict[str, int] = field(default_factory=dict)


def is_live(room: Room, round_number: int) -> bool:
    """True while ``round_number`` is still the room's unfinished current round."""
    cur = room.current_round
    return cur is not None and cur.round_number == round_number and cur.state != "ended"


def is_current(room: Room, round_: Round) -> bool:
    """Identity check for results that outlive a call: numbers restart after a reset."""
    return room.current_round is round_ and round_.state != "ended"


class RoundProcessor:
    """Owns every mutation of a room's current round."""

    def __init__(
        self,
        store: RoomStore,
        rules: ScoringRules | None = None,
        eligible_guessers: str = "all",
        clock: Callable[[], int] = now_ms,
    ) -> None:
        if eligible_guessers not in ("all", "humans"):
            raise ValueError(f"Unknown eligible guesser policy: {eligible_guessers}")
        self.store = store
        self.rules = rules or ScoringRules()
        self.eligible_guessers = eligible_guessers
        self.clock = clock

    def start_round(self, room_id: str, drawer_id: str, word: str, model_id: str | None) -> Round:
        with self.store.lock:
            room = self.store.require(room_id)
            round_ = Round(
                round_number=len(room.history) + 1,
                word=normalize_word(word),
                drawer_id=drawer_id,
                model_id=model_id,
                started_at_ms=self.clock(),
            )
            room.current_round = round_
            room.status = "in-game"
            logger.info(
                "[round-start] room=%s round=%d drawer=%s",
                room_id, round_.round_number, drawer_id,
            )
            return round_

    def attach_drawing(self, room_id: str, round_: Round, svg: str, image: str) -> bool:
        """Store a finished drawing; returns False if ``round_`` is no longer current."""
        with self.store.lock:
            room = self.store.get(room_id)
            if room is None or not is_current(room, round_):
                return False
            round_.svg = svg
            round_.image = image
            round_.state = "guessing"
            return True

    def mark_guessing(self, room_id: str, round_: Round) -> bool:
        with self.store.lock:
            room = self.store.get(room_id)
            if room is None or not is_current(room, round_):
                return False
            round_.state = "guessing"
            return True

    def record_guess(self, room_id: str, player_id: str, text: str) -> GuessOutcome:
        with self.store.lock:
            room = self.store.require(room_id)
            round_ = room.current_round
            if round_ is None:
                raise RoundNotFound(room_id)

            if player_id not in room.players:
                logger.debug("[guess-outsider] room=%s player=%s", room_id, player_id)
                return GuessOutcome(round=round_, correct=False, recorded=False)

            if player_id == round_.drawer_id:
                logger.debug("[guess-drawer] room=%s player=%s", room_id, player_id)
                return GuessOutcome(round=round_, correct=False, recorded=False)

            if any(g.player_id == player_id for g in round_.guesses):
                logger.debug("[guess-dup] room=%s player=%s", room_id, player_id)
                return GuessOutcome(round=round_, correct=False, recorded=False)

            correct = normalize_word(text) == normalize_word(round_.word)
            points: dict[str, int] = {}
            if correct:
                points = score_correct_guess(room, round_, player_id, self.rules, self.clock())

            round_.guesses.append(GuessRecord(player_id=player_id, guess=text, correct=correct))
            return GuessOutcome(round=round_, correct=correct, recorded=True, points=points)

    def _counts_toward_quota(self, room: Room, player_id: str) -> bool:
        p = room.players.get(player_id)
        if p is None or p.id == room.current_round.drawer_id:
            return False
        return self.eligible_guessers == "all" or not p.is_agent

    def eligible_count(self, room: Room) -> int:
        if room.current_round is None:
            return 0
        return sum(1 for pid in room.players if self._counts_toward_quota(room, pid))

    def correct_count(self, room: Room) -> int:
        """Correct guesses from current members who count toward the quota."""
        if room.current_round is None:
            return 0
        return sum(
            1 for g in room.current_round.guesses
            if g.correct and self._counts_toward_quota(room, g.player_id)
        )

    def all_guessed(self, room_id: str) -> bool:
        with self.store.lock:
            room = self.store.get(room_id)
            if room is None or room.current_round is None:
                return False
            eligible = self.eligible_count(room)
            return eligible > 0 and self.correct_count(room) >= eligible

    def end_round(self, room_id: str, round_number: int | None = None) -> Round | None:
        """Close the current round. No-op (returns None) if it already ended."""
        with self.store.lock:
            room = self.store.get(room_id)
            if room is None or room.current_round is None:
                return None
            if round_number is not None and not is_live(room, round_number):
                return None

            ended = room.current_round
            ended.state = "ended"
            room.history.append(ended)
            room.current_round = None
            room.status = "waiting"
            logger.info("[round-end] room=%s round=%d", room_id, ended.round_number)
            return ended
