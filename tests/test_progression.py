# tests/test_progression.py
"""
Progression Tests - Unit Tests for XP and Level Math

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- lineplay.domain.progression (level functions)
- lineplay.domain.models (ProgressionState)
- pytest (testing framework)
"""
import pytest

from lineplay.domain.models import ProgressionState
from lineplay.domain.progression import (
    apply_xp,
    game_xp,
    level_for_total_xp,
    level_title,
    streak_xp_bonus,
    total_xp_for_level,
    xp_for_level,
    xp_progress_percent,
)


class TestXpForLevel:
    def test_first_levels(self):
        assert xp_for_level(1) == 1000
        assert xp_for_level(2) == 1200
        assert xp_for_level(3) == 1440
        assert xp_for_level(4) == 1728
        assert xp_for_level(5) == 2073  # 2073.6 floored

    def test_below_one_requires_nothing(self):
        assert xp_for_level(0) == 0
        assert xp_for_level(-3) == 0

    def test_grows_monotonically(self):
        values = [xp_for_level(level) for level in range(1, 60)]
        assert values == sorted(values)
        assert len(set(values)) == len(values)

    def test_total_xp_for_level(self):
        assert total_xp_for_level(1) == 0
        assert total_xp_for_level(2) == 1000
        assert total_xp_for_level(4) == 1000 + 1200 + 1440


class TestApplyXp:
    def test_exact_level_up(self):
        result = apply_xp(ProgressionState.initial(), 1000)
        assert result.state == ProgressionState(xp=0, level=2, xp_to_next_level=1200)
        assert result.levels_gained == 1

    def test_no_level_up(self):
        result = apply_xp(ProgressionState.initial(), 999)
        assert result.state == ProgressionState(xp=999, level=1, xp_to_next_level=1000)
        assert result.levels_gained == 0

    def test_multi_level_carry(self):
        result = apply_xp(ProgressionState.initial(), 1000 + 1200 + 1440 + 5)
        assert result.state == ProgressionState(xp=5, level=4, xp_to_next_level=1728)
        assert result.levels_gained == 3

    def test_zero_gain_keeps_state(self):
        state = ProgressionState(xp=10, level=3, xp_to_next_level=1440)
        assert apply_xp(state, 0).state == state

    def test_negative_gain_rejected(self):
        with pytest.raises(ValueError):
            apply_xp(ProgressionState.initial(), -1)

    def test_invariant_holds(self):
        state = ProgressionState.initial()
        for gain in (0, 1, 250, 999, 5000, 12345, 100000):
            state = apply_xp(state, gain).state
            assert 0 <= state.xp < state.xp_to_next_level
            assert state.xp_to_next_level == xp_for_level(state.level)

    def test_bulk_equals_incremental(self):
        total = 7000
        bulk = apply_xp(ProgressionState.initial(), total).state

        step = ProgressionState.initial()
        for _ in range(total):
            step = apply_xp(step, 1).state

        assert bulk == step

    def test_bulk_equals_chunked(self):
        bulk = apply_xp(ProgressionState.initial(), 250_000).state
        chunked = ProgressionState.initial()
        for chunk in (1, 999, 48_000, 1, 200_999):
            chunked = apply_xp(chunked, chunk).state
        assert bulk == chunked


class TestLevelForTotalXp:
    @pytest.mark.parametrize("total, level", [
        (0, 1),
        (999, 1),
        (1000, 2),
        (2199, 2),
        (2200, 3),
    ])
    def test_boundaries(self, total, level):
        assert level_for_total_xp(total) == level

    @pytest.mark.parametrize("total", [0, 1, 1000, 3639, 3640, 50_000, 1_000_000])
    def test_agrees_with_apply_xp(self, total):
        assert level_for_total_xp(total) == apply_xp(ProgressionState.initial(), total).state.level


class TestXpProgressPercent:
    def test_floor(self):
        assert xp_progress_percent(0, 1000) == 0
        assert xp_progress_percent(999, 1000) == 99
        assert xp_progress_percent(1, 3) == 33

    def test_non_positive_requirement(self):
        assert xp_progress_percent(5, 0) == 100
        assert xp_progress_percent(5, -10) == 100

    def test_clamped(self):
        assert xp_progress_percent(5000, 1000) == 100


class TestGameXp:
    def test_base_only(self):
        assert game_xp(won=False, high_score_beaten=False) == 10

    def test_all_bonuses(self):
        assert game_xp(won=True, high_score_beaten=True, base_xp=20, streak_bonus=30) == 90

    def test_streak_xp_bonus_capped(self):
        assert streak_xp_bonus(0) == 0
        assert streak_xp_bonus(3) == 15
        assert streak_xp_bonus(10) == 50
        assert streak_xp_bonus(40) == 50


class TestLevelTitle:
    @pytest.mark.parametrize("level, title", [
        (1, "Novice"),
        (4, "Novice"),
        (5, "Apprentice"),
        (10, "Skilled"),
        (20, "Veteran"),
        (30, "Expert"),
        (40, "Master"),
        (50, "Legendary"),
        (99, "Legendary"),
    ])
    def test_titles(self, level, title):
        assert level_title(level) == title
