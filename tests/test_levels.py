"""Tests for the leveling engine.

Covers: cumulative XP per level, level lookup, clamping at both ends,
progress inside a level (including the level cap), level-up checks,
tier names, milestone unlocks, and custom level tables.
"""

import pytest

from fitquest.gamification.levels import (
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


# ═══════════════════════════════════════════════════════════════════════════
#  XP FOR LEVEL
# ═══════════════════════════════════════════════════════════════════════════


class TestXPForLevel:

    def test_level_1_is_zero(self):
        assert xp_for_level(1) == 0

    def test_below_level_1_is_zero(self):
        assert xp_for_level(0) == 0
        assert xp_for_level(-7) == 0

    def test_tier_1(self):
        assert xp_for_level(2) == 100
        assert xp_for_level(3) == 200
        assert xp_for_level(5) == 400

    def test_first_level_of_tier_2(self):
        """Level 5 → 6 still costs the tier-1 rate."""
        assert xp_for_level(6) == 500

    def test_tier_2_rate(self):
        assert xp_for_level(7) == 700
        assert xp_for_level(10) == 1300
        assert xp_for_level(11) == 1500

    def test_upper_tiers(self):
        assert xp_for_level(12) == 1900
        assert xp_for_level(21) == 5500
        assert xp_for_level(31) == 11500
        assert xp_for_level(50) == 26700

    def test_one_past_the_cap(self):
        assert xp_for_level(MAX_LEVEL + 1) == 27500

    def test_strictly_increasing(self):
        for level in range(1, MAX_LEVEL + 5):
            assert xp_for_level(level + 1) > xp_for_level(level)

    def test_consistent_across_calls(self):
        assert xp_for_level(10) == xp_for_level(10)


# ═══════════════════════════════════════════════════════════════════════════
#  LEVEL FOR XP
# ═══════════════════════════════════════════════════════════════════════════


class TestLevelForXP:

    def test_zero_xp(self):
        assert level_for_xp(0) == 1

    def test_just_below_level_2(self):
        assert level_for_xp(99) == 1

    def test_exactly_level_2(self):
        assert level_for_xp(100) == 2

    def test_tier_1(self):
        assert [level_for_xp(x) for x in (0, 100, 200, 300, 400)] == [1, 2, 3, 4, 5]

    def test_tier_2(self):
        assert [level_for_xp(x) for x in (500, 700, 900, 1100, 1300)] == [6, 7, 8, 9, 10]

    def test_tier_3(self):
        assert level_for_xp(1500) == 11
        assert level_for_xp(1900) == 12
        assert level_for_xp(2300) == 13

    def test_negative_xp(self):
        assert level_for_xp(-100) == 1

    def test_caps_at_max_level(self):
        cap_xp = xp_for_level(MAX_LEVEL + 1)
        assert level_for_xp(cap_xp) == MAX_LEVEL
        assert level_for_xp(cap_xp + 10_000) == MAX_LEVEL

    def test_very_large_xp(self):
        assert level_for_xp(100_000) == MAX_LEVEL
        assert level_for_xp(10 ** 12) == MAX_LEVEL

    def test_roundtrip_every_level(self):
        for level in range(1, MAX_LEVEL + 1):
            assert level_for_xp(xp_for_level(level)) == level

    def test_one_below_each_boundary(self):
        for level in range(2, MAX_LEVEL + 1):
            assert level_for_xp(xp_for_level(level) - 1) == level - 1

    def test_monotonic(self):
        previous = level_for_xp(-10)
        for xp in range(-10, 30_000, 37):
            current = level_for_xp(xp)
            assert current >= previous
            previous = current


# ═══════════════════════════════════════════════════════════════════════════
#  LEVEL PROGRESS
# ═══════════════════════════════════════════════════════════════════════════


class TestLevelProgress:

    def test_exact_boundary_is_zero(self):
        progress = level_progress(100)
        assert progress.current == 0
        assert progress.percentage == 0

    def test_halfway(self):
        assert level_progress(150).percentage == 50

    def test_one_xp_short_never_shows_100(self):
        """699 XP is 199 of 200 toward level 7; 100% only means the cap."""
        progress = level_progress(699)
        assert progress.current == 199
        assert progress.percentage == 99

    def test_below_cap_always_under_100(self):
        for xp in range(0, xp_for_level(MAX_LEVEL), 37):
            assert level_progress(xp).percentage <= 99

    def test_required_for_level_1(self):
        assert level_progress(50).required == 100

    def test_tier_transition(self):
        """450 XP is level 5 with 50 XP toward level 6."""
        progress = level_progress(450)
        assert progress.current == 50
        assert progress.required == 100

    def test_tier_2_required(self):
        progress = level_progress(600)
        assert progress == LevelProgress(current=100, required=200, percentage=50)

    def test_negative_xp(self):
        progress = level_progress(-50)
        assert progress.current == 0
        assert progress.percentage == 0

    def test_at_max_level(self):
        assert level_progress(xp_for_level(MAX_LEVEL)) == LevelProgress(0, 0, 100)

    def test_beyond_max_level(self):
        assert level_progress(10 ** 9) == LevelProgress(0, 0, 100)

    def test_percentage_in_range(self):
        for xp in range(0, 28_000, 113):
            assert 0 <= level_progress(xp).percentage <= 100


# ═══════════════════════════════════════════════════════════════════════════
#  WILL LEVEL UP
# ═══════════════════════════════════════════════════════════════════════════


class TestWillLevelUp:

    def test_no_level_up(self):
        assert will_level_up(50, 10) is False

    def test_crossing_boundary(self):
        assert will_level_up(95, 10) is True

    def test_zero_gain(self):
        assert will_level_up(100, 0) is False

    def test_negative_gain(self):
        assert will_level_up(100, -50) is False

    def test_multi_level_jump(self):
        assert will_level_up(50, 200) is True

    def test_at_cap(self):
        assert will_level_up(xp_for_level(MAX_LEVEL), 100_000) is False


class TestLevelsGained:

    def test_none(self):
        assert levels_gained(0, 50) == []

    def test_multi_level(self):
        assert levels_gained(50, 250) == [2, 3]

    def test_xp_going_down(self):
        assert levels_gained(500, 100) == []


# ═══════════════════════════════════════════════════════════════════════════
#  TIERS
# ═══════════════════════════════════════════════════════════════════════════


class TestLevelTier:

    @pytest.mark.parametrize("level, tier", [
        (1, LevelTier.BEGINNER),
        (5, LevelTier.BEGINNER),
        (6, LevelTier.INTERMEDIATE),
        (10, LevelTier.INTERMEDIATE),
        (11, LevelTier.ADVANCED),
        (20, LevelTier.ADVANCED),
        (21, LevelTier.ELITE),
        (30, LevelTier.ELITE),
        (31, LevelTier.MASTER),
        (50, LevelTier.MASTER),
        (500, LevelTier.MASTER),
    ])
    def test_tier(self, level, tier):
        assert tier_for_level(level) is tier

    def test_level_0(self):
        assert tier_for_level(0) is LevelTier.BEGINNER

    def test_negative_level(self):
        assert tier_for_level(-1) is LevelTier.BEGINNER

    def test_tier_compares_as_string(self):
        assert tier_for_level(31) == "MASTER"


# ═══════════════════════════════════════════════════════════════════════════
#  UNLOCKS
# ═══════════════════════════════════════════════════════════════════════════


class TestUnlocks:

    def test_level_1_empty(self):
        assert unlocks_for_level(1) == []

    def test_level_4_empty(self):
        assert unlocks_for_level(4) == []

    def test_level_5(self):
        assert "Avatar accessories unlocked" in unlocks_for_level(5)

    def test_level_10(self):
        assert "Advanced avatar customization unlocked" in unlocks_for_level(10)

    def test_level_15(self):
        assert "Elite outfit tier unlocked" in unlocks_for_level(15)

    def test_level_20_is_cumulative(self):
        assert unlocks_for_level(20) == [
            "Avatar accessories unlocked",
            "Advanced avatar customization unlocked",
            "Elite outfit tier unlocked",
            "Legendary cosmetics unlocked",
            "Master title unlocked",
        ]

    def test_between_milestones(self):
        assert unlocks_for_level(12) == unlocks_for_level(10)

    def test_level_25(self):
        assert "Custom quest creation unlocked" in unlocks_for_level(25)

    def test_beyond_max_level(self):
        unlocks = unlocks_for_level(100)
        assert "Custom quest creation unlocked" in unlocks
        assert len(unlocks) == 6

    def test_exactly_two_at_level_20(self):
        unlocks = unlocks_at_level(20)
        assert "Legendary cosmetics unlocked" in unlocks
        assert "Master title unlocked" in unlocks
        assert len(unlocks) == 2

    def test_nothing_at_non_milestone(self):
        assert unlocks_at_level(7) == []
        assert unlocks_at_level(0) == []


# ═══════════════════════════════════════════════════════════════════════════
#  LEVEL CONFIG
# ═══════════════════════════════════════════════════════════════════════════


class TestLevelConfig:

    def test_first_tier(self):
        first = DEFAULT_CONFIG.tiers[0]
        assert (first.min_level, first.max_level, first.xp_per_level) == (1, 5, 100)

    def test_tiers_are_adjacent(self):
        tiers = DEFAULT_CONFIG.tiers
        for lower, upper in zip(tiers, tiers[1:]):
            assert lower.max_level + 1 == upper.min_level

    def test_xp_per_level_increases(self):
        rates = [t.xp_per_level for t in DEFAULT_CONFIG.tiers]
        assert rates == sorted(rates)
        assert len(set(rates)) == len(rates)

    def test_max_level(self):
        assert DEFAULT_CONFIG.max_level == MAX_LEVEL == 50

    def test_immutable(self):
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.max_level = 99

    def test_gap_between_tiers_rejected(self):
        with pytest.raises(ValueError):
            LevelConfig(tiers=(Tier(1, 5, 100), Tier(7, 10, 200)), max_level=10)

    def test_cheaper_tier_rejected(self):
        with pytest.raises(ValueError):
            LevelConfig(tiers=(Tier(1, 5, 100), Tier(6, 10, 50)), max_level=10)

    def test_must_start_at_level_1(self):
        with pytest.raises(ValueError):
            LevelConfig(tiers=(Tier(2, 5, 100),), max_level=5)

    def test_max_level_outside_table_rejected(self):
        with pytest.raises(ValueError):
            LevelConfig(tiers=(Tier(1, 5, 100),), max_level=6)

    def test_unsorted_milestones_rejected(self):
        with pytest.raises(ValueError):
            LevelConfig(
                tiers=(Tier(1, 5, 100),), max_level=5,
                milestones=(Milestone(4, ("b",)), Milestone(2, ("a",))),
            )


class TestCustomConfig:

    @pytest.fixture
    def small(self):
        return LevelConfig(
            tiers=(Tier(1, 3, 10), Tier(4, 5, 20)),
            max_level=5,
            milestones=(Milestone(3, ("Badge",)),),
        )

    def test_xp_for_level(self, small):
        assert xp_for_level(4, config=small) == 30
        assert xp_for_level(5, config=small) == 50

    def test_level_for_xp(self, small):
        assert level_for_xp(49, config=small) == 4
        assert level_for_xp(50, config=small) == 5
        assert level_for_xp(10 ** 6, config=small) == 5

    def test_progress_at_cap(self, small):
        assert level_progress(50, config=small) == LevelProgress(0, 0, 100)

    def test_unlocks(self, small):
        assert unlocks_for_level(2, config=small) == []
        assert unlocks_for_level(5, config=small) == ["Badge"]

    def test_cap_below_table_end(self):
        config = LevelConfig(tiers=(Tier(1, 10, 100),), max_level=3)
        assert level_for_xp(5000, config=config) == 3
