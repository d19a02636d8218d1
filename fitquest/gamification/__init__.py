"""Gamification package."""

from .levels import (
    DEFAULT_CONFIG,
    MAX_LEVEL,
    LevelConfig,
    LevelProgress,
    LevelTier,
    Milestone,
    Tier,
    level_for_xp,
    level_progress,
    levels_gained,
    tier_for_level,
    unlocks_at_level,
    unlocks_for_level,
    will_level_up,
    xp_for_level,
)
from .unlockables import REGISTRY, UnlockableItem, UnlockManager, UnlockRegistry
from .xp import XP_REWARDS, XPEngine
from .stats import StatsManager, power_level, stat_label, stat_modifiers
from .streaks import StreakTracker
from .session import SessionRewards, detect_session_type
from .customization import CustomizationManager, available_options, parse_avatar_config

__all__ = [
    "DEFAULT_CONFIG",
    "MAX_LEVEL",
    "LevelConfig",
    "LevelProgress",
    "LevelTier",
    "Milestone",
    "Tier",
    "level_for_xp",
    "level_progress",
    "levels_gained",
    "tier_for_level",
    "unlocks_at_level",
    "unlocks_for_level",
    "will_level_up",
    "xp_for_level",
    "REGISTRY",
    "UnlockableItem",
    "UnlockManager",
    "UnlockRegistry",
    "XP_REWARDS",
    "XPEngine",
    "StatsManager",
    "power_level",
    "stat_label",
    "stat_modifiers",
    "StreakTracker",
    "SessionRewards",
    "detect_session_type",
    "CustomizationManager",
    "available_options",
    "parse_avatar_config",
]
