"""Turn scheduling: who draws next, and the round-start sequence.

A round advance can be requested from three places at once (an explicit
start, the timer running out, everyone guessing). Each room therefore holds
a transition lease while the cool-down and round start run; any request that
arrives while the lease is held is dropped. A room reset revokes the lease, so
a transition still in its cool-down does nothing when it wakes.

``socketio`` is anything with ``emit``, ``start_background_task`` and
``sleep`` (the Flask-SocketIO server in production).
"""
from __future__ import annotations

import logging
import random
from threading import Lock

from ..ai.client import Drawing, mock_drawing
from ..ai.retry import with_retry
from ..exceptions import AIServiceError, RoundNotFound
from ..realtime import events
from .models import Player, Room, Round
from .rounds import GuessOutcome, RoundProcessor, is_live
from .state import round_public, scoreboard
from .store import RoomStore
from .timer import TimerRegistry
from .words import pick_word

logger = logging.getLogger(__name__)


class TransitionLease:
    """Per-room "transition in flight" marker.

    ``acquire`` hands out a token; ``release`` with a token only clears the
    marker that token created, so a revoked transition cannot free a newer one.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._held: dict[str, int] = {}
        self._seq = 0

    def acquire(self, room_id: str) -> int | None:
        with self._lock:
            if room_id in self._held:
                return None
            self._seq += 1
            self._held[room_id] = self._seq
            return self._seq

    def release(self, room_id: str, token: int | None = None) -> None:
        with self._lock:
            if token is None or self._held.get(room_id) == token:
                self._held.pop(room_id, None)

    def valid(self, room_id: str, token: int) -> bool:
        with self._lock:
            return self._held.get(room_id) == token

    def held(self, room_id: str) -> bool:
        with self._lock:
            return room_id in self._held


class TurnScheduler:
    def __init__(
        self,
        store: RoomStore,
        processor: RoundProcessor,
        timers: TimerRegistry,
        socketio,
        ai,
        config,
        rng: random.Random | None = None,
    ) -> None:
        self.store = store
        self.processor = processor
        self.timers = timers
        self.socketio = socketio
        self.ai = ai
        self.rng = rng or random.Random()
        self.lease = TransitionLease()
        self.cooldown_sec = float(config.COOLDOWN_SEC)
        self.ai_retries = int(config.AI_RETRIES)
        self.ai_retry_delay_sec = float(config.AI_RETRY_DELAY_SEC)
        self.mock_fallback = bool(config.AI_MOCK_FALLBACK)

    # ---- drawer rotation ----

    def next_drawer(self, room: Room) -> Player:
        """Cycle through the agent roster by completed-round count.

        Rooms without agents fall back to cycling through human players.
        """
        agents = [p for p in room.players.values() if p.is_agent]
        pool = agents or list(room.players.values())
        if not pool:
            raise RoundNotFound(room.id)
        return pool[len(room.history) % len(pool)]

    # ---- transitions ----

    def request_next_round(self, room_id: str, reason: str = "start") -> bool:
        token = self.lease.acquire(room_id)
        if token is None:
            logger.info("[transition-skip] room=%s reason=%s already in flight", room_id, reason)
            return False

        logger.info("[transition-begin] room=%s reason=%s cooldown=%ss", room_id, reason, self.cooldown_sec)
        try:
            self.socketio.start_background_task(self._run_transition, room_id, token)
        except Exception:
            self.lease.release(room_id, token)
            raise
        return True

    def cancel_transition(self, room_id: str) -> None:
        """Revoke a pending transition; it notices after its cool-down and does nothing."""
        if self.lease.held(room_id):
            logger.info("[transition-cancel] room=%s", room_id)
        self.lease.release(room_id)

    def _run_transition(self, room_id: str, token: int) -> None:
        try:
            self.socketio.sleep(self.cooldown_sec)
            if not self.lease.valid(room_id, token):
                logger.info("[transition-revoked] room=%s", room_id)
                return
            self._start_round(room_id)
        except AIServiceError as exc:
            logger.error("[drawing-failed] room=%s: %s", room_id, exc)
            self.socketio.emit(
                events.ROUND_ERROR,
                {"roomId": room_id, "error": "drawing_failed", "message": str(exc)},
                to=room_id,
            )
        finally:
            self.lease.release(room_id, token)

    def _start_round(self, room_id: str) -> None:
        room = self.store.get(room_id)
        if room is None:
            logger.info("[transition-abort] room=%s gone", room_id)
            return

        stalled = room.current_round
        if stalled is not None:
            self.end_round(room_id, stalled.round_number, "abandoned")

        drawer = self.next_drawer(room)
        round_ = self.processor.start_round(room_id, drawer.id, pick_word(rng=self.rng), drawer.model_id)

        self.socketio.emit(
            events.ROUND_STARTED,
            {"roomId": room_id, "round": round_public(round_), "drawer": drawer.name, "drawerId": drawer.id},
            to=room_id,
        )

        if drawer.is_agent:
            drawing = self._acquire_drawing(drawer.model_id, round_.word)
            if not self.processor.attach_drawing(room_id, round_, drawing.svg, drawing.image):
                logger.info("[drawing-stale] room=%s round=%d", room_id, round_.round_number)
                return
            self.socketio.emit(
                events.ROUND_DRAWING,
                {
                    "roomId": room_id,
                    "roundNumber": round_.round_number,
                    "drawer": drawer.name,
                    "svg": drawing.svg,
                    "image": drawing.image,
                },
                to=room_id,
            )
        else:
            self.processor.mark_guessing(room_id, round_)
            self.socketio.emit(
                events.ROUND_INSTRUCTION,
                {"roomId": room_id, "roundNumber": round_.round_number, "word": round_.word},
                to=drawer.id,
            )

        self.timers.start(room_id, round_.round_number, self)

    def _acquire_drawing(self, model_id: str | None, word: str) -> Drawing:
        try:
            return with_retry(
                lambda: self.ai.generate_drawing(model_id, word),
                retries=self.ai_retries,
                delay_sec=self.ai_retry_delay_sec,
                sleep=self.socketio.sleep,
            )
        except AIServiceError:
            if not self.mock_fallback:
                raise
            logger.warning("[drawing-fallback] model=%s word=%s", model_id, word)
            return mock_drawing(word)

    # ---- guesses and round end ----

    def submit_guess(self, room_id: str, player_id: str, text: str) -> GuessOutcome:
        outcome = self.processor.record_guess(room_id, player_id, text)
        if not outcome.recorded:
            return outcome

        room = self.store.get(room_id)
        player = room.players.get(player_id) if room else None
        name = player.name if player else None

        if outcome.correct:
            self.socketio.emit(
                events.GUESS_NEW,
                {
                    "roomId": room_id,
                    "playerId": player_id,
                    "playerName": name,
                    "guess": events.CORRECT_GUESS_MARKER,
                    "isCorrect": True,
                },
                to=room_id,
                skip_sid=player_id,
            )
            if player is not None and not player.is_agent:
                self.socketio.emit(
                    events.GUESS_NEW,
                    {
                        "roomId": room_id,
                        "playerId": player_id,
                        "playerName": "You",
                        "guess": f"Yesss! The word was {outcome.round.word}",
                        "word": outcome.round.word,
                        "isCorrect": True,
                    },
                    to=player_id,
                )
            self.emit_scoreboard(room_id)
        else:
            self.socketio.emit(
                events.GUESS_NEW,
                {"roomId": room_id, "playerId": player_id, "playerName": name, "guess": text, "isCorrect": False},
                to=room_id,
            )

        if self.processor.all_guessed(room_id):
            self.end_round(room_id, outcome.round.round_number, "all_guessed")
        return outcome

    def end_round(self, room_id: str, round_number: int, reason: str) -> Round | None:
        """End ``round_number`` if it is still live; abandoned rounds do not chain."""
        self.timers.stop(room_id)
        ended = self.processor.end_round(room_id, round_number)
        if ended is None:
            return None

        self.socketio.emit(
            events.ROUND_ENDED,
            {
                "roomId": room_id,
                "round": round_public(ended, reveal=True),
                "reason": reason,
                "message": events.END_REASONS.get(reason, reason),
            },
            to=room_id,
        )
        self.emit_scoreboard(room_id)

        if reason != "abandoned":
            self.request_next_round(room_id, reason=reason)
        return ended

    def emit_scoreboard(self, room_id: str) -> None:
        room = self.store.get(room_id)
        if room is None:
            return
        self.socketio.emit(events.ROOM_SCOREBOARD, {"roomId": room_id, "scoreboard": scoreboard(room)}, to=room_id)

    # ---- timer callbacks ----

    def on_tick(self, room_id: str, round_number: int, seconds_left: int) -> None:
        self.socketio.emit(
            events.GAME_TICK,
            {"roomId": room_id, "roundNumber": round_number, "secondsLeft": seconds_left},
            to=room_id,
        )

    def on_time_up(self, room_id: str, round_number: int) -> None:
        self.end_round(room_id, round_number, "time_up")

    def on_ai_guess(self, room_id: str, round_number: int, agent_id: str, text: str) -> None:
        room = self.store.get(room_id)
        if room is None or not is_live(room, round_number):
            return
        try:
            self.submit_guess(room_id, agent_id, text)
        except RoundNotFound:
            logger.debug("[ai-guess-late] room=%s round=%d", room_id, round_number)
