from __future__ import annotations

import logging

from flask import request
from flask_socketio import SocketIO, emit, join_room, leave_room

from ..exceptions import ScribbleError
from ..game.service import GameService
from . import events

logger = logging.getLogger(__name__)


def _validate_name(name: str) -> bool:
    n = (name or "").strip()
    if not n:
        return False
    if len(n) > 16:
        return False
    # Avoid obvious HTML/script injection.
    if "<" in n or ">" in n:
        return False
    # No control characters.
    for ch in n:
        if ord(ch) < 32:
            return False
    return True


def _room_id(payload: dict) -> str:
    return str(payload.get("roomId", "")).strip()


def register_socketio_handlers(socketio: SocketIO, service: GameService, auto_create_rooms: bool = True) -> None:
    def _fail(exc: ScribbleError, event: str = events.ROOM_ERROR) -> dict:
        emit(event, {"error": exc.code, "message": str(exc)})
        return {"ok": False, "error": exc.code}

    @socketio.on("room:join")
    def room_join(data):
        payload = data or {}
        room_id = _room_id(payload)
        name = str(payload.get("name", "")).strip()

        if not room_id or not _validate_name(name):
            emit(events.ROOM_ERROR, {"error": "invalid_payload"})
            return {"ok": False, "error": "invalid_payload"}

        join_room(room_id)
        try:
            players = service.join_room(room_id, request.sid, name, create_missing=auto_create_rooms)
        except ScribbleError as exc:
            leave_room(room_id)
            return _fail(exc)

        emit(events.ROOM_JOINED, {"roomId": room_id, "state": service.room_state(room_id, viewer_id=request.sid)})
        return {"ok": True, "players": len(players)}

    @socketio.on("room:leave")
    def room_leave(data):
        payload = data or {}
        room_id = _room_id(payload)
        if not room_id:
            return {"ok": False, "error": "invalid_room"}

        leave_room(room_id)
        service.leave_room(room_id, request.sid)
        return {"ok": True}

    @socketio.on("game:start")
    def game_start(data):
        payload = data or {}
        room_id = _room_id(payload)
        if not room_id:
            emit(events.ROOM_ERROR, {"error": "invalid_room"})
            return {"ok": False, "error": "invalid_room"}

        try:
            scheduled = service.start_round(room_id)
        except ScribbleError as exc:
            return _fail(exc)
        return {"ok": True, "scheduled": scheduled}

    @socketio.on("game:reset")
    def game_reset(data):
        payload = data or {}
        room_id = _room_id(payload)
        if not room_id:
            emit(events.ROOM_ERROR, {"error": "invalid_room"})
            return {"ok": False, "error": "invalid_room"}

        try:
            service.reset_game(room_id)
        except ScribbleError as exc:
            return _fail(exc)
        return {"ok": True}

    @socketio.on("guess:submit")
    def guess_submit(data):
        payload = data or {}
        room_id = _room_id(payload)
        text = str(payload.get("text", ""))
        if not room_id or not text.strip():
            return {"ok": False, "error": "invalid_payload"}

        try:
            outcome = service.submit_guess(room_id, request.sid, text)
        except ScribbleError as exc:
            return _fail(exc, events.ROUND_ERROR)
        return {"ok": True, "correct": outcome.correct, "recorded": outcome.recorded}

    @socketio.on("ai:guess")
    def ai_guess(data):
        payload = data or {}
        room_id = _room_id(payload)
        if not room_id:
            return {"ok": False, "error": "invalid_room"}

        try:
            result = service.request_ai_guess(room_id)
        except ScribbleError as exc:
            logger.warning("[ai-guess-failed] room=%s: %s", room_id, exc)
            return _fail(exc, events.ROUND_ERROR)

        if result is None:
            return {"ok": False, "error": "stale_round"}
        return {
            "ok": True,
            "guess": result.guess,
            "correct": result.correct,
            "correctWord": result.correct_word,
        }

    @socketio.on("disconnect")
    def on_disconnect(*args):
        # Remove player from any rooms where present (linear scan)
        for room_id in service.leave_all(request.sid):
            logger.info("[disconnect] room=%s player=%s", room_id, request.sid)
