from __future__ import annotations

from .models import Player, Room, Round
from ..realtime.events import CORRECT_GUESS_MARKER


def player_public(p: Player) -> dict:
    return {
        "id": p.id,
        "name": p.name,
        "score": p.score,
        "isAgent": p.is_agent,
        "modelId": p.model_id,
    }


def players_public(players) -> list[dict]:
    return [player_public(p) for p in players]


def scoreboard(room: Room) -> list[dict]:
    ranked = sorted(room.players.values(), key=lambda p: p.score, reverse=True)
    return [
        {"playerId": p.id, "name": p.name, "score": p.score, "isAgent": p.is_agent, "rank": i + 1}
        for i, p in enumerate(ranked)
    ]


def round_public(round_: Round, reveal: bool = False) -> dict:
    reveal = reveal or round_.state == "ended"
    payload = {
        "roundNumber": round_.round_number,
        "drawerId": round_.drawer_id,
        "modelId": round_.model_id,
        "startedAtMs": round_.started_at_ms,
        "state": round_.state,
        "wordLength": len(round_.word),
        "guesses": [
            {
                "playerId": g.player_id,
                "guess": g.guess if (reveal or not g.correct) else CORRECT_GUESS_MARKER,
                "correct": g.correct,
            }
            for g in round_.guesses
        ],
        "svg": round_.svg,
        "image": round_.image,
    }
    if reveal:
        payload["word"] = round_.word
    return payload


def room_public_state(room: Room, viewer_id: str | None = None) -> dict:
    cur = room.current_round
    current = None
    if cur is not None:
        current = round_public(cur)
        if viewer_id and viewer_id == cur.drawer_id:
            current["word"] = cur.word

    return {
        "id": room.id,
        "status": room.status,
        "players": players_public(room.players.values()),
        "currentRound": current,
        "history": [round_public(r, reveal=True) for r in room.history],
        "roundsPlayed": len(room.history),
    }
