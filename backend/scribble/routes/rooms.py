from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from ..exceptions import RoomAlreadyExists, RoomNotFound

bp = Blueprint("rooms", __name__)


def _service():
    return current_app.extensions["scribble"]


@bp.post("/rooms")
def create_room():
    data = request.get_json(silent=True) or {}
    room_id = str(data.get("roomId", "")).strip()
    if not room_id:
        return jsonify({"error": "invalid_payload", "message": "Room ID is required."}), 400

    try:
        room = _service().create_room(room_id)
    except RoomAlreadyExists as exc:
        return jsonify({"error": exc.code, "message": str(exc)}), 409

    return jsonify({"message": f"Room {room.id} created.", "room": {"id": room.id, "status": room.status}}), 201


@bp.get("/rooms/<room_id>")
def get_room(room_id: str):
    try:
        return jsonify(_service().room_state(room_id))
    except RoomNotFound as exc:
        return jsonify({"error": exc.code}), 404


@bp.get("/rooms/<room_id>/scoreboard")
def get_scoreboard(room_id: str):
    try:
        return jsonify({"roomId": room_id, "scoreboard": _service().scoreboard(room_id)})
    except RoomNotFound as exc:
        return jsonify({"error": exc.code}), 404


@bp.post("/rooms/<room_id>/reset")
def reset_room(room_id: str):
    try:
        _service().reset_game(room_id)
        return jsonify(_service().room_state(room_id))
    except RoomNotFound as exc:
        return jsonify({"error": exc.code}), 404
