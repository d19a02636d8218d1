"""Level math for FitQuest — XP totals in, levels and progress out.

Leveling Curve
--------------
Levels are grouped into tiers.  Every level inside a tier costs the same
amount of XP, and each tier costs more than the one before it:

    Lv 1-5    100 XP per level
    Lv 6-10   200 XP per level
    Lv 11-20  400 XP per level
    Lv 21-30  600 XP per level
    Lv 31-50  800 XP per level

Level 50 is the cap.

Tier Names
----------
    1-5    BEGINNER
    6-10   INTERMEDIATE
    11-20  ADVANCED
    21-30  ELITE
    31+    MASTER

Milestone Unlocks
-----------------
    Lv 5   Avatar accessories
    Lv 10  Advanced avatar customization
    Lv 15  Elite outfit tier
    Lv 20  Legendary cosmetics, Master title
    Lv 25  Custom quest creation

Every function here is pure and total: negative, zero and huge inputs
clamp to the nearest boundary instead of raising, because the values
come straight out of the database.  The tables live in an immutable
:class:`LevelConfig`; pass ``config=`` to use a different one.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


# ── configuration ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Tier:
    """A band of levels that all cost ``xp_per_level`` XP."""

    min_level: int
    max_level: int
    xp_per_level: int

    @property
    def span(self) -> int:
        return self.max_level - self.min_level + 1


@dataclass(frozen=True)
class Milestone:
    level: int
    unlocks: tuple[str, ...]


@dataclass(frozen=True)
class LevelConfig:
    """Tier table, level cap and milestone unlocks.

    Validated once on construction; a malformed table raises
    ``ValueError`` here rather than inside the level functions.
    """

    tiers: tuple[Tier, ...]
    max_level: int
    milestones: tuple[Milestone, ...] = ()

    def __post_init__(self) -> None:
        if not self.tiers:
            raise ValueError("LevelConfig needs at least one tier")
        if self.tiers[0].min_level != 1:
            raise ValueError("the first tier must start at level 1")
        for tier in self.tiers:
            if tier.max_level < tier.min_level or tier.xp_per_level <= 0:
                raise ValueError(f"invalid tier: {tier}")
        for lower, upper in zip(self.tiers, self.tiers[1:]):
            if lower.max_level + 1 != upper.min_level:
                raise ValueError(f"tiers are not adjacent: {lower} / {upper}")
            if upper.xp_per_level <= lower.xp_per_level:
                raise ValueError("xp_per_level must increase with each tier")
        if not 1 <= self.max_level <= self.tiers[-1].max_level:
            raise ValueError("max_level must fall inside the tier table")
        levels = [m.level for m in self.milestones]
        if levels != sorted(set(levels)):
            raise ValueError("milestones must be unique and ascending")

    def tier_containing(self, level: int) -> Tier:
        """Tier for *level*; levels past the table use the last tier."""
        for tier in self.tiers:
            if level <= tier.max_level:
                return tier
        return self.tiers[-1]


DEFAULT_CONFIG = LevelConfig(
    tiers=(
        Tier(min_level=1, max_level=5, xp_per_level=100),
        Tier(min_level=6, max_level=10, xp_per_level=200),
        Tier(min_level=11, max_level=20, xp_per_level=400),
        Tier(min_level=21, max_level=30, xp_per_level=600),
        Tier(min_level=31, max_level=50, xp_per_level=800),
    ),
    max_level=50,
    milestones=(
        Milestone(5, ("Avatar accessories unlocked",)),
        Milestone(10, ("Advanced avatar customization unlocked",)),
        Milestone(15, ("Elite outfit tier unlocked",)),
        Milestone(20, ("Legendary cosmetics unlocked", "Master title unlocked")),
        Milestone(25, ("Custom quest creation unlocked",)),
    ),
)

MAX_LEVEL = DEFAULT_CONFIG.max_level


class LevelTier(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    ELITE = "ELITE"
    MASTER = "MASTER"


# Ordered descending so the first match wins.
LEVEL_TIERS: list[tuple[int, LevelTier]] = [
    (31, LevelTier.MASTER),
    (21, LevelTier.ELITE),
    (11, LevelTier.ADVANCED),
    (6, LevelTier.INTERMEDIATE),
    (1, LevelTier.BEGINNER),
]


class LevelProgress(NamedTuple):
    current: int       # XP earned since the last level boundary
    required: int      # XP the level being worked on costs (0 at the cap)
    percentage: int    # 0-100


# ── level math ───────────────────────────────────────────────────────────


def xp_for_level(level: int, *, config: LevelConfig = DEFAULT_CONFIG) -> int:
    """Total cumulative XP required to *reach* the given level.

    ``xp_for_level(1)`` is 0 (you start at level 1 with zero XP).
    """
    if level <= 1:
        return 0

    total = 0
    for tier in config.tiers:
        if level > tier.max_level:
            total += tier.span * tier.xp_per_level
        else:
            return total + (level - tier.min_level) * tier.xp_per_level

    last = config.tiers[-1]
    return total + (level - last.max_level - 1) * last.xp_per_level


def level_for_xp(total_xp: int, *, config: LevelConfig = DEFAULT_CONFIG) -> int:
    """Return the level a character is at given their total XP."""
    remaining = total_xp
    level = 1
    for tier in config.tiers:
        for _ in range(tier.span):
            if level >= config.max_level or remaining < tier.xp_per_level:
                return level
            remaining -= tier.xp_per_level
            level += 1
    return min(level, config.max_level)


def level_progress(total_xp: int, *, config: LevelConfig = DEFAULT_CONFIG) -> LevelProgress:
    """Progress inside the current level.

    At the level cap there is nothing left to earn, so this reports
    ``LevelProgress(0, 0, 100)``.  Below the cap the percentage tops out
    at 99.
    """
    level = level_for_xp(total_xp, config=config)
    if level >= config.max_level:
        return LevelProgress(current=0, required=0, percentage=100)

    floor = xp_for_level(level, config=config)
    required = xp_for_level(level + 1, config=config) - floor
    current = max(total_xp - floor, 0)
    # 100 is reserved for the cap
    percentage = min(max(round(current / required * 100), 0), 99)
    return LevelProgress(current=current, required=required, percentage=percentage)


def will_level_up(
    current_xp: int, xp_gain: int, *, config: LevelConfig = DEFAULT_CONFIG,
) -> bool:
    """True if adding *xp_gain* moves the character to a higher level."""
    if xp_gain <= 0:
        return False
    return (
        level_for_xp(current_xp + xp_gain, config=config)
        > level_for_xp(current_xp, config=config)
    )


def levels_gained(
    old_xp: int, new_xp: int, *, config: LevelConfig = DEFAULT_CONFIG,
) -> list[int]:
    """Every level newly reached going from *old_xp* to *new_xp*."""
    old_level = level_for_xp(old_xp, config=config)
    new_level = level_for_xp(new_xp, config=config)
    return list(range(old_level + 1, new_level + 1))


# ── tiers & unlocks ──────────────────────────────────────────────────────


def tier_for_level(level: int) -> LevelTier:
    """Return the tier name for *level*."""
    for threshold, tier in LEVEL_TIERS:
        if level >= threshold:
            return tier
    return LevelTier.BEGINNER


def unlocks_for_level(level: int, *, config: LevelConfig = DEFAULT_CONFIG) -> list[str]:
    """Everything unlocked by the time a character reaches *level*."""
    unlocks: list[str] = []
    for milestone in config.milestones:
        if milestone.level > level:
            break
        unlocks.extend(milestone.unlocks)
    return unlocks


def unlocks_at_level(level: int, *, config: LevelConfig = DEFAULT_CONFIG) -> list[str]:
    """Only the unlocks granted on reaching exactly *level*."""
    for milestone in config.milestones:
        if milestone.level == level:
            return list(milestone.unlocks)
    return []
