"""Progression updates for a completed training session.

``SessionRewards.on_session_complete`` is the single call the booking
and workout-logging flows make when a session is marked COMPLETED:

1. make sure the client has a character
2. award session XP (keyed by the session id, so replays award nothing)
3. grow strength / endurance according to the session focus
4. advance the daily streak
"""

from __future__ import annotations

import logging
from datetime import datetime

from ..settings import Settings
from .stats import CARDIO_KEYWORDS, STRENGTH_KEYWORDS, StatsManager
from .streaks import StreakTracker
from .xp import XPEngine

logger = logging.getLogger(__name__)

SELF_LOGGED = "SELF_LOGGED"

SESSION_SOURCE = "session_complete"
COACHED_NOTE = "Completed training session"
SELF_LOGGED_NOTE = "Self-logged workout"

STRENGTH_NOTE_KEYWORDS = ("strength", "weights", "bench", "squat", "deadlift")
CARDIO_NOTE_KEYWORDS = ("cardio", "running", "treadmill", "bike", "elliptical")


def detect_session_type(session_type: str | None = None, notes: str | None = None) -> str:
    """Return ``"strength"``, ``"cardio"`` or ``"balanced"``.

    The session type wins; the free-text notes are only consulted when
    the type says nothing.
    """
    lower_type = (session_type or "").lower()
    lower_notes = (notes or "").lower()

    if any(word in lower_type for word in STRENGTH_KEYWORDS):
        return "strength"
    if any(word in lower_type for word in CARDIO_KEYWORDS):
        return "cardio"
    if any(word in lower_notes for word in STRENGTH_NOTE_KEYWORDS):
        return "strength"
    if any(word in lower_notes for word in CARDIO_NOTE_KEYWORDS):
        return "cardio"
    return "balanced"


class SessionRewards:
    """Applies XP, stats and streak updates for completed sessions."""

    def __init__(
        self,
        xp_engine: XPEngine | None = None,
        stats: StatsManager | None = None,
        streaks: StreakTracker | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.xp_engine = xp_engine or XPEngine()
        self.stats = stats or StatsManager()
        self.streaks = streaks or StreakTracker(self.xp_engine, self.stats)
        self.settings = settings or Settings()

    def on_session_complete(
        self,
        session_id: str,
        user_id: str,
        focus_type: str | None = None,
        workout_type: str | None = None,
        now: datetime | None = None,
    ) -> dict:
        """Process one completed session.

        Returns a dict with ``xp_awarded``, ``duplicate``, ``level_up``
        (``None`` or ``{"old_level", "new_level", "unlocks"}``),
        ``stats_updated`` and ``streak_update``.
        """
        self.xp_engine.initialize_character(user_id)

        # one source for every kind of session, so a session id pays out once
        if workout_type == SELF_LOGGED:
            amount, note = self.settings.self_logged_xp, SELF_LOGGED_NOTE
        else:
            amount, note = self.settings.session_xp, COACHED_NOTE

        award = self.xp_engine.award_xp(
            user_id, amount, SESSION_SOURCE, reference_id=str(session_id), note=note,
        )
        if award["duplicate"]:
            return {
                "xp_awarded": 0,
                "duplicate": True,
                "level_up": None,
                "stats_updated": {},
                "streak_update": None,
            }

        stats_updated = self.stats.apply_session(user_id, (focus_type or "balanced").lower())
        streak = self.streaks.update_streak(user_id, now=now)

        level_up = None
        if award["did_level_up"]:
            level_up = {
                "old_level": award["old_level"],
                "new_level": award["new_level"],
                "unlocks": award["unlocks"],
            }

        logger.info(
            "Session %s complete for user %s: +%d XP, streak %d",
            session_id, user_id, award["xp_earned"], streak["current_streak"],
        )
        return {
            "xp_awarded": award["xp_earned"],
            "duplicate": False,
            "level_up": level_up,
            "stats_updated": stats_updated,
            "streak_update": {
                "current_streak": streak["current_streak"],
                "longest_streak": streak["longest_streak"],
                "bonus_awarded": streak["bonus_awarded"],
                "discipline_gained": streak["discipline_gained"],
            },
        }
