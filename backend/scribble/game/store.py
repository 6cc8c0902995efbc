from __future__ import annotations

import logging
from threading import RLock

from ..exceptions import RoomAlreadyExists, RoomNotFound
from .models import Player, Room

logger = logging.getLogger(__name__)


# Fixed agent roster seeded into every room, in drawing order.
AI_AGENTS = [
    {"id": "ai-gemini", "name": "Gemini", "model_id": "google/gemini-1.5-pro"},
    {"id": "ai-chatgpt", "name": "ChatGPT", "model_id": "openai/gpt-4o"},
    {"id": "ai-claude", "name": "Claude", "model_id": "anthropic/claude-3-5-sonnet"},
    {"id": "ai-llama", "name": "Llama", "model_id": "meta/llama-3-70b"},
    {"id": "ai-mistral", "name": "Mistral", "model_id": "mistralai/mistral-large"},
]


class RoomStore:
    """In-memory registry of rooms keyed by room id.

    One instance lives for the lifetime of the app (or of a test) and is
    handed to everything that reads or mutates game state.
    """

    def __init__(self, agents: list[dict] | None = None) -> None:
        self._lock = RLock()
        self._rooms: dict[str, Room] = {}
        self._agents = list(AI_AGENTS if agents is None else agents)

    @property
    def lock(self) -> RLock:
        return self._lock

    def create(self, room_id: str) -> Room:
        with self._lock:
            if room_id in self._rooms:
                raise RoomAlreadyExists(room_id)

            room = Room(id=room_id)
            for agent in self._agents:
                room.players[agent["id"]] = Player(
                    id=agent["id"],
                    name=agent["name"],
                    is_agent=True,
                    model_id=agent["model_id"],
                )
            self._rooms[room_id] = room
            logger.info("[room-create] room=%s agents=%d", room_id, len(self._agents))
            return room

    def get(self, room_id: str) -> Room | None:
        with self._lock:
            return self._rooms.get(room_id)

    def require(self, room_id: str) -> Room:
        room = self.get(room_id)
        if room is None:
            raise RoomNotFound(room_id)
        return room

    def list_rooms(self) -> list[Room]:
        with self._lock:
            return list(self._rooms.values())

    def add_player(self, room_id: str, player_id: str, name: str) -> list[Player]:
        with self._lock:
            room = self.require(room_id)
            if player_id not in room.players:
                room.players[player_id] = Player(id=player_id, name=name)
                logger.info("[player-join] room=%s player=%s name=%s", room_id, player_id, name)
            return list(room.players.values())

    def remove_player(self, room_id: str, player_id: str) -> list[Player]:
        with self._lock:
            room = self._rooms.get(room_id)
            if room is None:
                return []

            player = room.players.get(player_id)
            # Agents stay for the room's lifetime.
            if player is not None and not player.is_agent:
                del room.players[player_id]
                logger.info("[player-leave] room=%s player=%s", room_id, player_id)
            return list(room.players.values())

    def reset(self, room_id: str) -> Room:
        with self._lock:
            room = self.require(room_id)
            room.current_round = None
            room.history = []
            room.status = "waiting"
            for p in room.players.values():
                p.score = 0
            logger.info("[room-reset] room=%s", room_id)
            return room
