"""Daily workout streaks.

A streak counts consecutive calendar days with at least one completed
workout.  Working out again the same day changes nothing; missing a day
resets the streak to 1 on the next workout.

Streak Bonuses
--------------
- Day 7:           +150 XP
- Day 30:          +500 XP
- Day 90:          +1500 XP
- Every 7th day:   +2 Discipline
"""

from __future__ import annotations

import logging
from datetime import date, datetime

from ..database.db import get_session
from ..database.models import Character
from ..errors import CharacterNotFoundError
from .stats import DISCIPLINE_PER_WEEK_STREAK, StatsManager
from .xp import XP_REWARDS, XPEngine

logger = logging.getLogger(__name__)

STREAK_BONUSES: dict[int, tuple[int, str]] = {
    7: (XP_REWARDS["streak_7_days"], "7-day streak!"),
    30: (XP_REWARDS["streak_30_days"], "30-day streak!"),
    90: (XP_REWARDS["streak_90_days"], "90-day streak!"),
}


class StreakTracker:
    """Keeps ``current_streak`` / ``longest_streak`` up to date."""

    def __init__(
        self,
        xp_engine: XPEngine | None = None,
        stats: StatsManager | None = None,
    ) -> None:
        self.xp_engine = xp_engine or XPEngine()
        self.stats = stats or StatsManager()

    def update_streak(self, user_id: str, now: datetime | None = None) -> dict:
        """Record a workout on *now* (default: the current time).

        Returns a dict with ``streak_updated``, ``current_streak``,
        ``longest_streak``, ``streak_broken``, ``bonus_awarded`` and
        ``discipline_gained``.
        """
        if now is None:
            now = datetime.now()
        today = now.date()

        with get_session() as db:
            character = db.query(Character).filter_by(user_id=user_id).first()
            if character is None:
                raise CharacterNotFoundError(user_id)

            last = character.last_workout_date.date() if character.last_workout_date else None
            days = (today - last).days if last is not None else None

            if days is not None and days <= 0:
                # same day (or a back-dated call) — nothing changes
                return {
                    "streak_updated": False,
                    "current_streak": character.current_streak,
                    "longest_streak": character.longest_streak,
                    "streak_broken": False,
                    "bonus_awarded": False,
                    "discipline_gained": False,
                }

            if days == 1:
                new_streak = character.current_streak + 1
            else:
                new_streak = 1

            character.current_streak = new_streak
            character.longest_streak = max(character.longest_streak, new_streak)
            character.last_workout_date = now
            longest = character.longest_streak

        streak_broken = days is not None and days > 1
        if streak_broken:
            logger.info("Streak broken for user %s after %d days", user_id, days)

        bonus_awarded = False
        discipline_gained = False
        if days == 1:
            if new_streak in STREAK_BONUSES:
                amount, note = STREAK_BONUSES[new_streak]
                self.xp_engine.award_xp(
                    user_id, amount, "streak_bonus",
                    reference_id=f"streak-{new_streak}-{today.isoformat()}",
                    note=note,
                )
                bonus_awarded = True
            if new_streak % 7 == 0:
                self.stats.increment(user_id, "discipline", DISCIPLINE_PER_WEEK_STREAK)
                discipline_gained = True

        return {
            "streak_updated": True,
            "current_streak": new_streak,
            "longest_streak": longest,
            "streak_broken": streak_broken,
            "bonus_awarded": bonus_awarded,
            "discipline_gained": discipline_gained,
        }

    def streak_status(self, user_id: str, today: date | None = None) -> dict:
        """Current streak state, for reminders.

        ``is_at_risk`` means the last workout was yesterday: skip today
        and the streak resets.
        """
        if today is None:
            today = date.today()

        with get_session() as db:
            character = db.query(Character).filter_by(user_id=user_id).first()
            if character is None:
                return {
                    "current_streak": 0,
                    "longest_streak": 0,
                    "last_workout_date": None,
                    "is_at_risk": False,
                    "days_until_break": 0,
                }

            is_at_risk = False
            if character.last_workout_date is not None:
                is_at_risk = (today - character.last_workout_date.date()).days == 1

            return {
                "current_streak": character.current_streak,
                "longest_streak": character.longest_streak,
                "last_workout_date": character.last_workout_date,
                "is_at_risk": is_at_risk,
                "days_until_break": 1 if is_at_risk else 0,
            }
