# tests/test_streaks.py
"""
Streak Tests - Unit Tests for Daily Streak Rules

This module contains unit tests for streak continuity, the 7-day reward
cycle, bonus days and calendar-day handling across timezones.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- lineplay.domain.streaks (streak functions)
- lineplay.domain.models (StreakState, RewardTable, reward tables)
- lineplay.domain.errors (AlreadyClaimedToday)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from datetime import date, datetime, timedelta, timezone  # Claim dates and timestamps

from lineplay.domain.errors import AlreadyClaimedToday
from lineplay.domain.models import (
    POINTS_REWARD_TABLE,
    TOKEN_REWARD_TABLE,
    RewardTable,
    StreakState,
)
from lineplay.domain.streaks import (
    calendar_day,
    can_claim_today,
    claim,
    day_in_cycle,
    is_streak_bonus_day,
    reward_for_day,
    streak_reward,
)

TODAY = date(2026, 3, 10)
YESTERDAY = TODAY - timedelta(days=1)


class TestCycle:
    @pytest.mark.parametrize("streak_day, expected", [
        (1, 1), (6, 6), (7, 7), (8, 1), (14, 7), (15, 1),
    ])
    def test_day_in_cycle(self, streak_day, expected):
        assert day_in_cycle(streak_day) == expected

    def test_points_rewards(self):
        assert [streak_reward(d) for d in range(1, 8)] == [1, 1, 1, 2, 2, 3, 5]
        assert streak_reward(8) == 1
        assert streak_reward(14) == 5

    def test_bonus_day(self):
        assert is_streak_bonus_day(7)
        assert is_streak_bonus_day(14)
        assert not is_streak_bonus_day(8)
        assert not is_streak_bonus_day(1)

    def test_reward_for_day_prefers_table(self):
        assert reward_for_day(7, TOKEN_REWARD_TABLE) == 300
        assert reward_for_day(7, POINTS_REWARD_TABLE) == 5

    def test_reward_for_day_falls_back(self):
        partial = RewardTable({7: 1000})
        assert reward_for_day(7, partial) == 1000
        assert reward_for_day(6, partial) == 3
        assert reward_for_day(4, None) == 2


class TestRewardTable:
    def test_rejects_bad_day(self):
        with pytest.raises(ValueError):
            RewardTable({8: 10})
        with pytest.raises(ValueError):
            RewardTable({0: 10})

    def test_rejects_negative_reward(self):
        with pytest.raises(ValueError):
            RewardTable({1: -1})

    def test_merged_overrides(self):
        merged = TOKEN_REWARD_TABLE.merged({"7": 500})
        assert merged.get(7) == 500
        assert merged.get(1) == 50
        assert TOKEN_REWARD_TABLE.get(7) == 300


class TestCanClaimToday:
    def test_first_claim(self):
        assert can_claim_today(StreakState(), TODAY)

    def test_same_day_blocked(self):
        state = StreakState(current_streak=1, longest_streak=1, last_claim_date=TODAY)
        assert not can_claim_today(state, TODAY)

    def test_ignores_time_of_day(self):
        state = StreakState(
            current_streak=1,
            longest_streak=1,
            last_claim_date=datetime(2026, 3, 10, 0, 5, tzinfo=timezone.utc),
        )
        assert not can_claim_today(state, datetime(2026, 3, 10, 23, 55, tzinfo=timezone.utc))
        assert can_claim_today(state, datetime(2026, 3, 11, 0, 0, tzinfo=timezone.utc))


class TestClaim:
    def test_first_claim_starts_streak(self):
        outcome = claim(StreakState(), TODAY, TOKEN_REWARD_TABLE)
        assert outcome.day == 1
        assert outcome.reward == 50
        assert not outcome.continued
        assert outcome.state.current_streak == 1
        assert outcome.state.longest_streak == 1
        assert outcome.state.last_claim_date == TODAY
        assert outcome.state.claimed_days == frozenset({1})
        assert outcome.state.streak_start_date == TODAY

    def test_consecutive_day_continues(self):
        state = StreakState(
            current_streak=2,
            longest_streak=5,
            last_claim_date=YESTERDAY,
            claimed_days=frozenset({1, 2}),
            streak_start_date=YESTERDAY - timedelta(days=1),
        )
        outcome = claim(state, TODAY, TOKEN_REWARD_TABLE)
        assert outcome.continued
        assert outcome.day == 3
        assert outcome.reward == 100
        assert outcome.state.current_streak == 3
        assert outcome.state.longest_streak == 5
        assert outcome.state.claimed_days == frozenset({1, 2, 3})
        assert outcome.state.streak_start_date == YESTERDAY - timedelta(days=1)

    def test_gap_resets_streak(self):
        state = StreakState(
            current_streak=4,
            longest_streak=4,
            last_claim_date=TODAY - timedelta(days=2),
            claimed_days=frozenset({1, 2, 3, 4}),
        )
        outcome = claim(state, TODAY, TOKEN_REWARD_TABLE)
        assert not outcome.continued
        assert outcome.day == 1
        assert outcome.state.current_streak == 1
        assert outcome.state.longest_streak == 4
        assert outcome.state.claimed_days == frozenset({1})
        assert outcome.state.streak_start_date == TODAY

    def test_day_seven_bonus(self):
        state = StreakState(
            current_streak=6,
            longest_streak=6,
            last_claim_date=YESTERDAY,
            claimed_days=frozenset(range(1, 7)),
        )
        outcome = claim(state, TODAY, TOKEN_REWARD_TABLE)
        assert outcome.day == 7
        assert outcome.state.current_streak == 7
        assert outcome.state.longest_streak == 7
        assert outcome.reward == TOKEN_REWARD_TABLE.get(7)
        assert is_streak_bonus_day(outcome.day)

    def test_cycle_wraps_after_day_seven(self):
        state = StreakState(
            current_streak=7,
            longest_streak=7,
            last_claim_date=YESTERDAY,
            claimed_days=frozenset(range(1, 8)),
        )
        outcome = claim(state, TODAY, POINTS_REWARD_TABLE)
        assert outcome.day == 1
        assert outcome.reward == 1
        assert outcome.state.current_streak == 8

    def test_double_claim_fails_and_leaves_state(self):
        first = claim(StreakState(), TODAY, TOKEN_REWARD_TABLE)
        with pytest.raises(AlreadyClaimedToday):
            claim(first.state, TODAY, TOKEN_REWARD_TABLE)
        assert first.state.current_streak == 1
        assert first.state.last_claim_date == TODAY

    def test_missing_table_entry_uses_formula(self):
        outcome = claim(StreakState(), TODAY, RewardTable({7: 999}))
        assert outcome.reward == 1

    def test_no_table_uses_formula(self):
        outcome = claim(StreakState(), TODAY)
        assert outcome.reward == 1

    def test_accepts_datetimes(self):
        state = StreakState(current_streak=1, longest_streak=1, last_claim_date=YESTERDAY)
        outcome = claim(state, datetime(2026, 3, 10, 18, 30, tzinfo=timezone.utc), TOKEN_REWARD_TABLE)
        assert outcome.continued
        assert outcome.state.last_claim_date == TODAY


class TestTimezonePolicy:
    def test_aware_datetime_converted(self):
        plus_three = timezone(timedelta(hours=3))
        # 01:00 at UTC+3 is still the previous day in UTC
        moment = datetime(2026, 3, 11, 1, 0, tzinfo=plus_three)
        assert calendar_day(moment) == date(2026, 3, 10)
        assert calendar_day(moment, plus_three) == date(2026, 3, 11)

    def test_naive_datetime_taken_as_is(self):
        assert calendar_day(datetime(2026, 3, 11, 23, 59)) == date(2026, 3, 11)

    def test_policy_changes_continuity(self):
        plus_three = timezone(timedelta(hours=3))
        state = StreakState(current_streak=1, longest_streak=1, last_claim_date=date(2026, 3, 10))
        moment = datetime(2026, 3, 11, 1, 0, tzinfo=plus_three)

        assert not can_claim_today(state, moment)
        outcome = claim(state, moment, TOKEN_REWARD_TABLE, tz=plus_three)
        assert outcome.continued
        assert outcome.state.last_claim_date == date(2026, 3, 11)
