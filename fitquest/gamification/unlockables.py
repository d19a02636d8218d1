"""Milestone unlocks for FitQuest characters.

Unlock Catalog
--------------
Built from the milestones in :data:`~.levels.DEFAULT_CONFIG`:

    Lv 5   Avatar accessories
    Lv 10  Advanced avatar customization
    Lv 15  Elite outfit tier
    Lv 20  Legendary cosmetics
    Lv 20  Master title
    Lv 25  Custom quest creation

Persistence
-----------
Earned unlocks are stored in the ``Unlock`` table, one row per
character and unlock.  ``UnlockManager`` handles the check-and-unlock
logic and the per-character queries.

Registry
--------
``REGISTRY`` is a module-level singleton that wraps every unlockable and
exposes look-up helpers (``get``, ``next_upcoming``, ``teasers``).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session as OrmSession

from ..database.db import get_session
from ..database.models import Unlock
from .levels import DEFAULT_CONFIG, LevelConfig

logger = logging.getLogger(__name__)


def unlock_key(name: str) -> str:
    """``"Elite outfit tier unlocked"`` → ``"elite_outfit_tier"``."""
    name = re.sub(r"\s+unlocked$", "", name.strip(), flags=re.IGNORECASE)
    return re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_")


@dataclass(frozen=True)
class UnlockableItem:
    key: str
    name: str              # the display string, e.g. "Master title unlocked"
    required_level: int


# ── unlock registry ─────────────────────────────────────────────────────


class UnlockRegistry:
    """Single source of truth for every milestone unlock.

    Populated from a :class:`LevelConfig`'s milestones, in milestone order.
    """

    def __init__(self, config: LevelConfig = DEFAULT_CONFIG) -> None:
        self._items: dict[str, UnlockableItem] = {}
        for milestone in config.milestones:
            for name in milestone.unlocks:
                key = unlock_key(name)
                self._items[key] = UnlockableItem(
                    key=key, name=name, required_level=milestone.level,
                )

    # ── queries ─────────────────────────────────────────────────────

    def all_items(self) -> list[UnlockableItem]:
        return list(self._items.values())

    def get(self, key: str) -> UnlockableItem | None:
        return self._items.get(key)

    def earned_by(self, level: int) -> list[UnlockableItem]:
        return [i for i in self._items.values() if i.required_level <= level]

    def next_upcoming(self, current_level: int) -> UnlockableItem | None:
        """Return the lowest-level unlock the character hasn't reached yet."""
        candidates = [
            i for i in self._items.values() if i.required_level > current_level
        ]
        if not candidates:
            return None
        return min(candidates, key=lambda i: i.required_level)

    def teasers(self, current_level: int, count: int = 3) -> list[UnlockableItem]:
        """Return the next *count* upcoming unlocks."""
        candidates = sorted(
            (i for i in self._items.values() if i.required_level > current_level),
            key=lambda i: i.required_level,
        )
        return candidates[:count]


# Module-level singleton
REGISTRY = UnlockRegistry()


# ── manager ─────────────────────────────────────────────────────────────


class UnlockManager:
    """Checks eligibility and records unlocks in the database."""

    def __init__(self, registry: UnlockRegistry = REGISTRY) -> None:
        self.registry = registry

    def check_and_unlock(
        self, user_id: str, current_level: int, db: OrmSession | None = None,
    ) -> list[dict]:
        """Record every unlock the character has earned but not received.

        Pass *db* to join an open session; otherwise a new one is used.
        Returns ``{"key", "name", "level"}`` dicts for the new rows.
        """
        if db is None:
            with get_session() as db:
                return self._check_and_unlock(db, user_id, current_level)
        return self._check_and_unlock(db, user_id, current_level)

    def _check_and_unlock(
        self, db: OrmSession, user_id: str, current_level: int,
    ) -> list[dict]:
        existing_keys = {
            u.unlock_key
            for u in db.query(Unlock).filter_by(user_id=user_id).all()
        }

        new_unlocks: list[dict] = []
        for item in self.registry.earned_by(current_level):
            if item.key in existing_keys:
                continue
            db.add(Unlock(
                user_id=user_id,
                level=item.required_level,
                unlock_key=item.key,
                name=item.name,
                unlocked_at=datetime.now(),
            ))
            new_unlocks.append({
                "key": item.key,
                "name": item.name,
                "level": item.required_level,
            })

        if new_unlocks:
            db.flush()
            logger.info(
                "User %s unlocked %s", user_id,
                ", ".join(u["key"] for u in new_unlocks),
            )
        return new_unlocks

    # ── queries ─────────────────────────────────────────────────────

    def get_all_unlocked(self, user_id: str) -> list[str]:
        """Unlock keys the character holds, in the order they were earned."""
        with get_session() as db:
            rows = (
                db.query(Unlock)
                .filter_by(user_id=user_id)
                .order_by(Unlock.level, Unlock.id)
                .all()
            )
            return [u.unlock_key for u in rows]

    def is_unlocked(self, user_id: str, key: str) -> bool:
        with get_session() as db:
            return (
                db.query(Unlock)
                .filter_by(user_id=user_id, unlock_key=key)
                .count() > 0
            )
