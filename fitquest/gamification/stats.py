"""Strength, Endurance and Discipline for FitQuest characters.

Stat Gains
----------
- Strength session (weights, lifting, resistance):  +1 Strength
- Cardio session (running, HIIT, endurance):        +1 Endurance
- Anything else counts as balanced:                 +1 of each
- Every 7 days of streak:                           +2 Discipline

Every stat is capped at ``MAX_STAT`` (100).
"""

from __future__ import annotations

import logging

from ..database.db import get_session
from ..database.models import Character
from ..errors import CharacterNotFoundError

logger = logging.getLogger(__name__)


# ── stat constants ───────────────────────────────────────────────────────

MAX_STAT = 100
STRENGTH_PER_SESSION = 1
ENDURANCE_PER_SESSION = 1
DISCIPLINE_PER_WEEK_STREAK = 2

STATS = ("strength", "endurance", "discipline")

STRENGTH_KEYWORDS = ("strength", "weights", "resistance", "lifting")
CARDIO_KEYWORDS = ("cardio", "running", "endurance", "hiit")


# ── pure helpers ─────────────────────────────────────────────────────────


def clamp_stat(value: int) -> int:
    return max(0, min(MAX_STAT, value))


def power_level(strength: int, endurance: int, discipline: int) -> int:
    """Combined stat score."""
    return (strength + endurance + discipline) // 3


def _tier(value: int, names: tuple[str, str, str, str]) -> str:
    if value < 25:
        return names[0]
    if value < 50:
        return names[1]
    if value < 75:
        return names[2]
    return names[3]


def stat_modifiers(strength: int, endurance: int, discipline: int) -> dict:
    """Avatar look driven by stats."""
    return {
        "muscle_tier": _tier(strength, ("normal", "defined", "muscular", "huge")),
        "leanness_tier": _tier(endurance, ("standard", "lean", "athletic", "shredded")),
        "aura_tier": _tier(discipline, ("none", "faint", "bright", "radiant")),
        "power_level": power_level(strength, endurance, discipline),
    }


# Ordered ascending; first bound the value is under wins.
STAT_LABELS: list[tuple[int, str]] = [
    (10, "Novice"),
    (25, "Beginner"),
    (50, "Intermediate"),
    (75, "Advanced"),
    (90, "Expert"),
]


def stat_label(value: int) -> str:
    for bound, label in STAT_LABELS:
        if value < bound:
            return label
    return "Master"


def stat_labels(strength: int, endurance: int, discipline: int) -> dict[str, str]:
    return {
        "strength": stat_label(strength),
        "endurance": stat_label(endurance),
        "discipline": stat_label(discipline),
    }


def stat_gains_for_focus(focus: str | None) -> dict[str, int]:
    """Map a session focus / type string to stat increments."""
    lower = (focus or "").lower()
    gains: dict[str, int] = {}
    if any(word in lower for word in STRENGTH_KEYWORDS):
        gains["strength"] = STRENGTH_PER_SESSION
    if any(word in lower for word in CARDIO_KEYWORDS):
        gains["endurance"] = ENDURANCE_PER_SESSION
    if not gains:
        gains = {"strength": 1, "endurance": 1}
    return gains


# ── persistence ──────────────────────────────────────────────────────────


class StatsManager:
    """Reads and writes character stats."""

    def increment(self, user_id: str, stat: str, amount: int = 1) -> int:
        """Add *amount* to *stat* (capped) and return the new value."""
        if stat not in STATS:
            raise ValueError(f"unknown stat {stat!r}")
        with get_session() as db:
            character = _load(db, user_id)
            value = clamp_stat(getattr(character, stat) + amount)
            setattr(character, stat, value)
            return value

    def set_stats(
        self, user_id: str, strength: int, endurance: int, discipline: int,
    ) -> dict[str, int]:
        """Overwrite all three stats, clamped to ``[0, MAX_STAT]``."""
        values = {
            "strength": clamp_stat(strength),
            "endurance": clamp_stat(endurance),
            "discipline": clamp_stat(discipline),
        }
        with get_session() as db:
            character = _load(db, user_id)
            for stat, value in values.items():
                setattr(character, stat, value)
        logger.info("Set stats for user %s: %s", user_id, values)
        return values

    def apply_session(self, user_id: str, focus: str | None) -> dict[str, int]:
        """Apply the gains for one completed session; returns the gains."""
        gains = stat_gains_for_focus(focus)
        with get_session() as db:
            character = _load(db, user_id)
            for stat, amount in gains.items():
                setattr(character, stat, clamp_stat(getattr(character, stat) + amount))
        return gains


def _load(db, user_id: str) -> Character:
    character = db.query(Character).filter_by(user_id=user_id).first()
    if character is None:
        raise CharacterNotFoundError(user_id)
    return character
