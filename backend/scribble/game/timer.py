from __future__ import annotations

import logging
import random
from threading import RLock
from typing import Protocol

from .rounds import is_live
from .store import RoomStore
from .words import DECOY_WORDS

logger = logging.getLogger(__name__)


class TimerListener(Protocol):
    def on_tick(self, room_id: str, round_number: int, seconds_left: int) -> None: ...

    def on_time_up(self, room_id: str, round_number: int) -> None: ...

    def on_ai_guess(self, room_id: str, round_number: int, agent_id: str, text: str) -> None: ...


class RoundTimer:
    """Countdown for one round, run as a socketio background task."""

    def __init__(
        self,
        registry: "TimerRegistry",
        room_id: str,
        round_number: int,
        listener: TimerListener,
    ) -> None:
        self.registry = registry
        self.room_id = room_id
        self.round_number = round_number
        self.listener = listener
        self.seconds_left = registry.duration_sec
        self.active = True

    def stop(self) -> None:
        self.active = False

    def run(self) -> None:
        reg = self.registry
        while self.active:
            reg.socketio.sleep(reg.tick_sec)
            if not self.active:
                return

            room = reg.store.get(self.room_id)
            if room is None or not is_live(room, self.round_number):
                reg.discard(self)
                return

            self.seconds_left -= 1
            self.listener.on_tick(self.room_id, self.round_number, self.seconds_left)

            if self.seconds_left <= 0:
                reg.discard(self)
                logger.info("[timer-fire] room=%s round=%d", self.room_id, self.round_number)
                self.listener.on_time_up(self.room_id, self.round_number)
                return

            self._maybe_simulate_guess()

    def _maybe_simulate_guess(self) -> None:
        reg = self.registry
        if reg.rng.random() >= reg.ai_guess_chance:
            return

        with reg.store.lock:
            room = reg.store.get(self.room_id)
            if room is None or not is_live(room, self.round_number):
                return
            round_ = room.current_round
            agents = [p.id for p in room.players.values() if p.is_agent and p.id != round_.drawer_id]
            word = round_.word
        if not agents:
            return

        agent_id = reg.rng.choice(agents)
        elapsed = reg.duration_sec - self.seconds_left
        if reg.rng.random() < reg.ai_correct_chance and elapsed >= reg.ai_min_elapsed_sec:
            text = word
        else:
            text = reg.rng.choice(DECOY_WORDS)
        self.listener.on_ai_guess(self.room_id, self.round_number, agent_id, text)


class TimerRegistry:
    """At most one running RoundTimer per room."""

    def __init__(self, store: RoomStore, socketio, config, rng: random.Random | None = None) -> None:
        self.store = store
        self.socketio = socketio
        self.rng = rng or random.Random()
        self.duration_sec = int(config.ROUND_DURATION_SEC)
        self.tick_sec = float(config.TICK_INTERVAL_SEC)
        self.ai_guess_chance = float(config.AI_GUESS_CHANCE)
        self.ai_correct_chance = float(config.AI_CORRECT_CHANCE)
        self.ai_min_elapsed_sec = int(config.AI_MIN_ELAPSED_SEC)
        self._lock = RLock()
        self._timers: dict[str, RoundTimer] = {}

    def start(self, room_id: str, round_number: int, listener: TimerListener) -> RoundTimer:
        timer = RoundTimer(self, room_id, round_number, listener)
        with self._lock:
            previous = self._timers.pop(room_id, None)
            if previous is not None:
                previous.stop()
            self._timers[room_id] = timer
        logger.info(
            "[timer-set] room=%s round=%d duration=%ds",
            room_id, round_number, self.duration_sec,
        )
        self.socketio.start_background_task(timer.run)
        return timer

    def stop(self, room_id: str) -> None:
        with self._lock:
            timer = self._timers.pop(room_id, None)
        if timer is not None:
            timer.stop()

    def discard(self, timer: RoundTimer) -> None:
        with self._lock:
            if self._timers.get(timer.room_id) is timer:
                del self._timers[timer.room_id]
        timer.stop()

    def is_running(self, room_id: str) -> bool:
        with self._lock:
            timer = self._timers.get(room_id)
            return timer is not None and timer.active
