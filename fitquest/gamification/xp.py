"""XP awards for FitQuest — the core progression loop.

XP Awards
---------
- Coached session completed:      100 XP
- Self-logged workout:             75 XP
- Daily / weekly / monthly quest:  50 / 200 / 1000 XP
- New personal record:             50 XP
- Streak of 7 / 30 / 90 days:     150 / 500 / 1500 XP
- Referral:                        500 XP

Leveling itself lives in :mod:`.levels`; this module only moves XP
around and persists it.

XP Event System
---------------
``XPEngine`` is a :class:`QObject` that emits two signals:

* **xp_awarded(data)** — user, amount, source, totals after the award
* **level_up(data)**   — old/new level, tier, unlocks earned

Persistence
-----------
``award_xp`` updates the ``Character`` row and appends an ``XPLog`` row
in one transaction.  It is idempotent per ``(user_id, source,
reference_id)``: replaying an award that carries a ``reference_id``
returns ``xp_earned=0`` and ``duplicate=True``.  A unique index on
those columns backs the guard when two replays race.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from ..database.db import get_session
from ..database.models import Character, XPLog
from ..errors import CharacterNotFoundError, InvalidAwardError
from .customization import DEFAULT_CUSTOMIZATION
from .levels import (
    DEFAULT_CONFIG,
    LevelConfig,
    level_for_xp,
    levels_gained,
    tier_for_level,
    unlocks_at_level,
)
from .unlockables import UnlockManager

logger = logging.getLogger(__name__)


# ── award constants (easy to tweak) ──────────────────────────────────────

XP_REWARDS: dict[str, int] = {
    # session completion
    "session_complete": 100,
    "session_complete_unscheduled": 75,   # self-reported workout

    # quests
    "daily_quest": 50,
    "weekly_quest": 200,
    "monthly_quest": 1000,

    # milestones
    "new_pr": 50,
    "streak_7_days": 150,
    "streak_30_days": 500,
    "streak_90_days": 1500,

    # social
    "referral": 500,
}


# ── XP engine ────────────────────────────────────────────────────────────


class XPEngine(QObject):
    """Handles XP awards, leveling, and persistence.

    Signals
    -------
    xp_awarded(data: dict)
        Emitted after every XP award that changed anything.  Keys:
        ``user_id``, ``amount``, ``source``, ``total_xp``, ``level``.
    level_up(data: dict)
        Emitted when the character reaches a new level.  Keys:
        ``user_id``, ``old_level``, ``new_level``, ``tier``, ``unlocks``.
    """

    xp_awarded = pyqtSignal(object)
    level_up = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        config: LevelConfig = DEFAULT_CONFIG,
        unlock_manager: UnlockManager | None = None,
    ) -> None:
        super().__init__(parent)
        self.config = config
        self.unlock_manager = unlock_manager or UnlockManager()

    # ── characters ───────────────────────────────────────────────────────

    def initialize_character(self, user_id: str) -> Character:
        """Return the user's character, creating a fresh one if needed."""
        with get_session() as db:
            character = db.query(Character).filter_by(user_id=user_id).first()
            if character is not None:
                return character

            character = Character(
                user_id=user_id,
                level=1,
                xp=0,
                strength=0,
                endurance=0,
                discipline=0,
                current_streak=0,
                longest_streak=0,
                avatar_config=dict(DEFAULT_CUSTOMIZATION),
                public_profile=False,
            )
            db.add(character)
            logger.info("Created RPG character for user %s", user_id)
            return character

    def get_character(self, user_id: str) -> Character:
        with get_session() as db:
            character = db.query(Character).filter_by(user_id=user_id).first()
            if character is None:
                raise CharacterNotFoundError(user_id)
            return character

    # ── main entry point ─────────────────────────────────────────────────

    def award_xp(
        self,
        user_id: str,
        amount: int,
        source: str,
        reference_id: str | None = None,
        note: str | None = None,
    ) -> dict:
        """Award (or, for admin corrections, deduct) XP.

        Raises :class:`CharacterNotFoundError` for an unknown user and
        :class:`InvalidAwardError` if *amount* isn't an int.  The XP
        total never goes below zero.

        Returns a dict with ``xp_earned``, ``duplicate``, ``old_xp``,
        ``new_xp``, ``old_level``, ``new_level``, ``did_level_up``,
        ``tier`` and ``unlocks`` (the unlocks granted at each level
        reached by this award).
        """
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise InvalidAwardError(f"XP amount must be an integer, got {amount!r}")

        with get_session() as db:
            character = db.query(Character).filter_by(user_id=user_id).first()
            if character is None:
                raise CharacterNotFoundError(user_id)

            # ── idempotency guard ────────────────────────────────────
            if reference_id is not None and self._already_awarded(
                db, user_id, source, reference_id,
            ):
                return self._duplicate_result(character, source, reference_id)

            # log row first: the unique award index turns a concurrent replay
            # into an IntegrityError, and the character is re-read under lock
            entry = XPLog(
                user_id=user_id,
                amount=amount,
                source=source,
                reference_id=reference_id,
                note=note,
            )
            db.add(entry)
            try:
                db.flush()
            except IntegrityError:
                db.rollback()
                character = db.query(Character).filter_by(user_id=user_id).one()
                return self._duplicate_result(character, source, reference_id)

            db.refresh(character, with_for_update=True)
            old_xp = character.xp
            old_level = character.level

            # ── apply to character ──────────────────────────────────
            new_xp = max(old_xp + amount, 0)
            new_level = level_for_xp(new_xp, config=self.config)
            character.xp = new_xp
            character.level = new_level
            entry.amount = new_xp - old_xp

            did_level_up = new_level > old_level
            unlocks: list[str] = []
            for level in levels_gained(old_xp, new_xp, config=self.config):
                unlocks.extend(unlocks_at_level(level, config=self.config))
            if did_level_up:
                self.unlock_manager.check_and_unlock(user_id, new_level, db=db)

        logger.info(
            "Awarded %+d XP to user %s (%s): %d -> %d, level %d -> %d",
            amount, user_id, source, old_xp, new_xp, old_level, new_level,
        )

        # ── emit signals ─────────────────────────────────────────────
        self.xp_awarded.emit({
            "user_id": user_id,
            "amount": new_xp - old_xp,
            "source": source,
            "total_xp": new_xp,
            "level": new_level,
        })
        if did_level_up:
            self.level_up.emit({
                "user_id": user_id,
                "old_level": old_level,
                "new_level": new_level,
                "tier": tier_for_level(new_level),
                "unlocks": unlocks,
            })

        return {
            "xp_earned": new_xp - old_xp,
            "duplicate": False,
            "old_xp": old_xp,
            "new_xp": new_xp,
            "old_level": old_level,
            "new_level": new_level,
            "did_level_up": did_level_up,
            "tier": tier_for_level(new_level),
            "unlocks": unlocks,
        }

    # ── history ──────────────────────────────────────────────────────────

    def xp_history(self, user_id: str, limit: int = 50) -> list[XPLog]:
        """Most recent XP log rows for *user_id*, newest first."""
        with get_session() as db:
            return (
                db.query(XPLog)
                .filter_by(user_id=user_id)
                .order_by(XPLog.created_at.desc(), XPLog.id.desc())
                .limit(limit)
                .all()
            )

    def xp_by_source(self, user_id: str, source: str) -> int:
        """Total XP *user_id* has earned from *source*."""
        with get_session() as db:
            total = (
                db.query(func.coalesce(func.sum(XPLog.amount), 0))
                .filter(XPLog.user_id == user_id, XPLog.source == source)
                .scalar()
            )
            return int(total)
