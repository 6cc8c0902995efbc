from __future__ import annotations

from dataclasses import dataclass

from .models import Room, Round


SCORING_MODES = ("flat", "time_decay")


@dataclass(frozen=True)
class ScoringRules:
    mode: str = "flat"
    guesser_points: int = 10
    drawer_points: int = 10
    time_bonus_max: int = 5
    time_bonus_window_sec: int = 60

    @classmethod
    def from_config(cls, config) -> "ScoringRules":
        mode = getattr(config, "SCORING_MODE", "flat")
        if mode not in SCORING_MODES:
            raise ValueError(f"Unknown scoring mode: {mode}")
        return cls(
            mode=mode,
            guesser_points=int(getattr(config, "GUESSER_POINTS", 10)),
            drawer_points=int(getattr(config, "DRAWER_POINTS", 10)),
            time_bonus_max=int(getattr(config, "TIME_BONUS_MAX", 5)),
            time_bonus_window_sec=int(getattr(config, "TIME_BONUS_WINDOW_SEC", 60)),
        )


def guesser_award(rules: ScoringRules, elapsed_ms: int) -> int:
    if rules.mode != "time_decay" or rules.time_bonus_window_sec <= 0:
        return rules.guesser_points

    window_ms = rules.time_bonus_window_sec * 1000
    remaining = max(0, window_ms - max(0, elapsed_ms))
    return rules.guesser_points + round(rules.time_bonus_max * remaining / window_ms)


def score_correct_guess(
    room: Room,
    round_: Round,
    guesser_id: str,
    rules: ScoringRules,
    now_ms: int,
) -> dict[str, int]:
    """Apply points for a correct guess and return the deltas.

    Must run before the guess is appended to ``round_.guesses``: the drawer
    is paid only when no correct guess has been recorded yet, and never when
    the drawer is an agent.
    """
    deltas: dict[str, int] = {}

    if guesser_id in room.players:
        deltas[guesser_id] = guesser_award(rules, now_ms - round_.started_at_ms)

    first_correct = not any(g.correct for g in round_.guesses)
    drawer = room.players.get(round_.drawer_id)
    if first_correct and drawer is not None and not drawer.is_agent and drawer.id != guesser_id:
        deltas[drawer.id] = deltas.get(drawer.id, 0) + rules.drawer_points

    for pid, points in deltas.items():
        room.players[pid].score += points

    return deltas
