from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable

from ..ai.client import GatewayClient
from ..ai.retry import with_retry
from ..exceptions import NoDrawingAvailable, RoundNotFound
from ..realtime import events
from .models import Player, Room
from .rounds import GuessOutcome, RoundProcessor, is_current, now_ms
from .scheduler import TurnScheduler
from .scoring import ScoringRules
from .state import players_public, room_public_state, scoreboard
from .store import RoomStore
from .timer import TimerRegistry

logger = logging.getLogger(__name__)


@dataclass
class AIGuessResult:
    guess: str
    correct: bool
    correct_word: str
    model: str
    round_number: int


class GameService:
    """Entry points the transport layer calls into."""

    def __init__(
        self,
        store: RoomStore,
        scheduler: TurnScheduler,
        socketio,
        ai,
        config,
    ) -> None:
        self.store = store
        self.scheduler = scheduler
        self.processor = scheduler.processor
        self.timers = scheduler.timers
        self.socketio = socketio
        self.ai = ai
        self.guess_model = config.AI_GUESS_MODEL
        self.ai_retries = int(config.AI_RETRIES)
        self.ai_retry_delay_sec = float(config.AI_RETRY_DELAY_SEC)

    @classmethod
    def from_config(
        cls,
        config,
        socketio,
        ai=None,
        store: RoomStore | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> "GameService":
        store = store or RoomStore()
        ai = ai or GatewayClient.from_config(config)
        rng = rng or random.Random()
        processor = RoundProcessor(
            store,
            rules=ScoringRules.from_config(config),
            eligible_guessers=config.ELIGIBLE_GUESSERS,
            clock=clock,
        )
        timers = TimerRegistry(store, socketio, config, rng=rng)
        scheduler = TurnScheduler(store, processor, timers, socketio, ai, config, rng=rng)
        return cls(store, scheduler, socketio, ai, config)

    # ---- rooms ----

    def create_room(self, room_id: str) -> Room:
        return self.store.create(room_id)

    def get_room(self, room_id: str) -> Room | None:
        return self.store.get(room_id)

    def join_room(self, room_id: str, player_id: str, name: str, create_missing: bool = False) -> list[Player]:
        if create_missing and self.store.get(room_id) is None:
            logger.info("[room-autocreate] room=%s", room_id)
            self.store.create(room_id)

        players = self.store.add_player(room_id, player_id, name)
        self._broadcast_roster(room_id)
        return players

    def leave_room(self, room_id: str, player_id: str) -> list[Player]:
        players = self.store.remove_player(room_id, player_id)
        if self.store.get(room_id) is not None:
            self._broadcast_roster(room_id)
        return players

    def leave_all(self, player_id: str) -> list[str]:
        left = []
        for room in self.store.list_rooms():
            if player_id in room.players and not room.players[player_id].is_agent:
                self.leave_room(room.id, player_id)
                left.append(room.id)
        return left

    def reset_game(self, room_id: str) -> Room:
        self.store.require(room_id)
        self.timers.stop(room_id)
        self.scheduler.cancel_transition(room_id)
        room = self.store.reset(room_id)
        self.socketio.emit(events.GAME_RESET, room_public_state(room), to=room_id)
        self.scheduler.emit_scoreboard(room_id)
        return room

    # ---- rounds ----

    def start_round(self, room_id: str) -> bool:
        """Ask for the next round. False when one is running or already on its way."""
        self.store.require(room_id)
        if self.timers.is_running(room_id):
            logger.info("[start-ignored] room=%s round in progress", room_id)
            return False
        return self.scheduler.request_next_round(room_id, reason="start")

    def submit_guess(self, room_id: str, player_id: str, text: str) -> GuessOutcome:
        return self.scheduler.submit_guess(room_id, player_id, text)

    def request_ai_guess(self, room_id: str) -> AIGuessResult | None:
        """Have the guessing model look at the current drawing.

        Returns None when the round changed while the model was thinking.
        """
        room = self.store.require(room_id)
        round_ = room.current_round
        if round_ is None:
            raise RoundNotFound(room_id)
        if not round_.image:
            raise NoDrawingAvailable(room_id)

        round_number, image, word = round_.round_number, round_.image, round_.word
        guess = with_retry(
            lambda: self.ai.guess_from_image(self.guess_model, image),
            retries=self.ai_retries,
            delay_sec=self.ai_retry_delay_sec,
            sleep=self.socketio.sleep,
        )

        room = self.store.get(room_id)
        if room is None or not is_current(room, round_):
            logger.info("[ai-guess-stale] room=%s round=%d guess=%s", room_id, round_number, guess)
            return None

        result = AIGuessResult(
            guess=guess,
            correct=guess == word,
            correct_word=word,
            model=self.guess_model,
            round_number=round_number,
        )
        self.socketio.emit(
            events.AI_GUESS,
            {
                "roomId": room_id,
                "roundNumber": round_number,
                "guess": result.guess,
                "isCorrect": result.correct,
                "correctWord": result.correct_word,
                "model": result.model,
            },
            to=room_id,
        )
        return result

    # ---- views ----

    def scoreboard(self, room_id: str) -> list[dict]:
        return scoreboard(self.store.require(room_id))

    def room_state(self, room_id: str, viewer_id: str | None = None) -> dict:
        return room_public_state(self.store.require(room_id), viewer_id=viewer_id)

    def _broadcast_roster(self, room_id: str) -> None:
        room = self.store.get(room_id)
        if room is None:
            return
        self.socketio.emit(
            events.ROOM_PLAYERS,
            {"roomId": room_id, "players": players_public(room.players.values())},
            to=room_id,
        )
        self.scheduler.emit_scoreboard(room_id)
