# src/lineplay/domain/streaks.py
"""
Daily Streaks - Streak Continuity and Reward Calculations

Pure functions for the daily login streak.

Streak rules:
- A player can claim once per calendar day
- The streak continues if the previous claim was exactly one calendar day earlier
- Otherwise it restarts at 1
- Rewards follow a repeating 7-day cycle with a bonus on day 7

Calendar days are taken in a single timezone policy (UTC unless the caller
passes another zone). ``date`` values are used as they are, naive
``datetime`` values are assumed to already be in the policy zone, and aware
``datetime`` values are converted to it before the time of day is dropped.

Files that USE this module:
- lineplay.application.streak_service (claim_daily_reward, get_streak_info)
- lineplay.adapters.formatting.formatter (streak calendar)
- tests.test_streaks (unit tests)

Files that this module USES:
- lineplay.domain.models (StreakState, StreakClaim, RewardTable)
- lineplay.domain.errors (AlreadyClaimedToday)
"""
from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional, Union

from lineplay.domain.errors import AlreadyClaimedToday
from lineplay.domain.models import (
    POINTS_REWARD_TABLE,
    STREAK_CYCLE_DAYS,
    RewardTable,
    StreakClaim,
    StreakState,
)

DateLike = Union[date, datetime]


def calendar_day(value: DateLike, tz: tzinfo = timezone.utc) -> date:
    """
    Truncate a date or datetime to its calendar date in ``tz``.

    Args:
        value: date, naive datetime (already in tz) or aware datetime
        tz: Timezone policy for aware datetimes (default: UTC)

    Returns:
        Calendar date
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    return value


def day_in_cycle(streak_day: int) -> int:
    """Position of ``streak_day`` in the 7-day cycle (1-7)."""
    return ((streak_day - 1) % STREAK_CYCLE_DAYS) + 1


def streak_reward(streak_day: int) -> int:
    """
    Reward for a streak day using the built-in points cycle.

    Day 1-3: 1, day 4-5: 2, day 6: 3, day 7: 5 (bonus day).
    """
    reward = POINTS_REWARD_TABLE.get(day_in_cycle(streak_day))
    return reward if reward is not None else 1


def is_streak_bonus_day(streak_day: int) -> bool:
    """Every 7th streak day is a bonus day."""
    return streak_day % STREAK_CYCLE_DAYS == 0


def reward_for_day(day: int, reward_table: Optional[RewardTable] = None) -> int:
    """Look up ``day`` in the table, falling back to the cycle formula."""
    if reward_table is not None:
        reward = reward_table.get(day)
        if reward is not None:
            return reward
    return streak_reward(day)


def can_claim_today(state: StreakState, today: DateLike, tz: tzinfo = timezone.utc) -> bool:
    """True if nothing was claimed yet on ``today``'s calendar date."""
    if state.last_claim_date is None:
        return True
    return calendar_day(state.last_claim_date, tz) != calendar_day(today, tz)


def is_consecutive(state: StreakState, today: DateLike, tz: tzinfo = timezone.utc) -> bool:
    """True if the last claim was exactly one calendar day before ``today``."""
    if state.last_claim_date is None:
        return False
    yesterday = calendar_day(today, tz) - timedelta(days=1)
    return calendar_day(state.last_claim_date, tz) == yesterday


def next_claim_day(state: StreakState, today: DateLike, tz: tzinfo = timezone.utc) -> int:
    """Day of the cycle a claim on ``today`` would land on."""
    if is_consecutive(state, today, tz):
        return (state.current_streak % STREAK_CYCLE_DAYS) + 1
    return 1


def claim(
    state: StreakState,
    today: DateLike,
    reward_table: Optional[RewardTable] = None,
    tz: tzinfo = timezone.utc,
) -> StreakClaim:
    """
    Claim the daily streak reward.

    Does not touch any ledger: the caller applies the returned reward.

    Args:
        state: Current streak state
        today: Claim date (date or datetime)
        reward_table: Rewards per cycle day; days missing from it use the cycle formula
        tz: Timezone policy for calendar-day comparisons

    Returns:
        StreakClaim with the new state, cycle day and reward

    Raises:
        AlreadyClaimedToday: If a claim was already made on today's calendar date
    """
    if not can_claim_today(state, today, tz):
        raise AlreadyClaimedToday(
            f"Daily reward already claimed on {calendar_day(today, tz).isoformat()}"
        )

    claim_date = calendar_day(today, tz)
    continued = is_consecutive(state, today, tz)

    if continued:
        day = (state.current_streak % STREAK_CYCLE_DAYS) + 1
        current = state.current_streak + 1
        claimed_days = state.claimed_days | {day}
        started = state.streak_start_date or claim_date
    else:
        day = 1
        current = 1
        claimed_days = frozenset({1})
        started = claim_date

    new_state = replace(
        state,
        current_streak=current,
        longest_streak=max(state.longest_streak, current),
        last_claim_date=claim_date,
        claimed_days=frozenset(claimed_days),
        streak_start_date=started,
    )
    return StreakClaim(
        state=new_state,
        day=day,
        reward=reward_for_day(day, reward_table),
        continued=continued,
    )
