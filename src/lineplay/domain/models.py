# src/lineplay/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains domain models representing core business concepts:
- Level progression state
- Daily streak state and claim results
- Token transactions and accounts

Token amounts are plain ``int`` values in base units (see
``lineplay.domain.amounts``); there is no float anywhere in the money path.

Files that USE this module:
- lineplay.domain.* (progression and streak functions return these models)
- lineplay.application.* (services load, update and persist accounts)
- lineplay.adapters.* (persistence and formatting read these models)
- tests.* (tests use domain models for test data)

Files that this module USES:
- None (pure domain layer, no external dependencies)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from dataclasses import dataclass, field  # Decorator for creating data classes
from datetime import date, datetime  # Calendar dates for streaks, timestamps for transactions
from typing import Mapping, Optional, Tuple  # Type hints

BASE_LEVEL_XP = 1000
STREAK_CYCLE_DAYS = 7

# Transaction kinds recorded in the ledger
TX_EARN = "EARN"
TX_SPEND = "SPEND"
TX_CLAIM = "CLAIM"
TX_REFERRAL_BONUS = "REFERRAL_BONUS"
TX_GAME_REWARD = "GAME_REWARD"
TX_DAILY_REWARD = "DAILY_REWARD"
TX_STREAK_BONUS = "STREAK_BONUS"
TX_ACHIEVEMENT_REWARD = "ACHIEVEMENT_REWARD"

TRANSACTION_KINDS = frozenset({
    TX_EARN,
    TX_SPEND,
    TX_CLAIM,
    TX_REFERRAL_BONUS,
    TX_GAME_REWARD,
    TX_DAILY_REWARD,
    TX_STREAK_BONUS,
    TX_ACHIEVEMENT_REWARD,
})


@dataclass(frozen=True)
class ProgressionState:
    """
    Per-account level progression.

    Attributes:
        xp: XP collected inside the current level (always < xp_to_next_level)
        level: Current level, starting at 1
        xp_to_next_level: XP required to complete the current level
    """
    xp: int = 0
    level: int = 1
    xp_to_next_level: int = BASE_LEVEL_XP

    @classmethod
    def initial(cls) -> ProgressionState:
        return cls(xp=0, level=1, xp_to_next_level=BASE_LEVEL_XP)


@dataclass(frozen=True)
class LevelUpResult:
    """New progression state plus the number of levels gained by the update."""
    state: ProgressionState
    levels_gained: int


@dataclass(frozen=True)
class StreakState:
    """
    Per-account daily login streak.

    Attributes:
        current_streak: Consecutive calendar days claimed
        longest_streak: Best streak ever reached (>= current_streak)
        last_claim_date: Calendar date of the last claim, None before the first claim
        claimed_days: Days of the 7-day cycle claimed in the running streak
        streak_start_date: Calendar date the running streak started
    """
    current_streak: int = 0
    longest_streak: int = 0
    last_claim_date: Optional[date] = None
    claimed_days: frozenset = frozenset()
    streak_start_date: Optional[date] = None


@dataclass(frozen=True)
class StreakClaim:
    """
    Outcome of a successful daily claim.

    Attributes:
        state: Updated streak state to persist
        day: Day of the 7-day cycle that was claimed (1-7)
        reward: Reward amount for that day, to be applied to an external ledger
        continued: True if the claim extended the previous streak
    """
    state: StreakState
    day: int
    reward: int
    continued: bool


class RewardTable:
    """
    Streak rewards indexed by day of the 7-day cycle.

    Keys must be in 1..7 and values non-negative. A table may be partial;
    lookups for days without an entry return None and callers fall back to
    the cycle formula.
    """

    __slots__ = ("_rewards",)

    def __init__(self, rewards: Mapping[int, int]):
        cleaned = {}
        for day, reward in rewards.items():
            day = int(day)
            reward = int(reward)
            if not 1 <= day <= STREAK_CYCLE_DAYS:
                raise ValueError(f"Streak reward day must be in 1..7, got {day}")
            if reward < 0:
                raise ValueError(f"Streak reward for day {day} must be >= 0, got {reward}")
            cleaned[day] = reward
        self._rewards = cleaned

    def get(self, day: int) -> Optional[int]:
        return self._rewards.get(day)

    def as_dict(self) -> dict:
        return dict(sorted(self._rewards.items()))

    def merged(self, overrides: Mapping[int, int]) -> RewardTable:
        """Return a new table where ``overrides`` take precedence."""
        combined = dict(self._rewards)
        combined.update({int(k): int(v) for k, v in overrides.items()})
        return RewardTable(combined)

    def __contains__(self, day: int) -> bool:
        return day in self._rewards

    def __len__(self) -> int:
        return len(self._rewards)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RewardTable):
            return NotImplemented
        return self._rewards == other._rewards

    def __repr__(self) -> str:
        return f"RewardTable({self.as_dict()!r})"


# Generic reward-points variant
POINTS_REWARD_TABLE = RewardTable({1: 1, 2: 1, 3: 1, 4: 2, 5: 2, 6: 3, 7: 5})

# Token-claim variant shown to users (LINE tokens per day)
TOKEN_REWARD_TABLE = RewardTable({1: 50, 2: 75, 3: 100, 4: 125, 5: 150, 6: 200, 7: 300})


@dataclass(frozen=True)
class TokenTransaction:
    """
    A single ledger entry.

    Attributes:
        kind: One of TRANSACTION_KINDS
        amount: Signed amount in base units (negative for spends)
        balance: Account balance in base units after this entry
        source: Human-readable origin, e.g. "Day 3 Streak Bonus"
        created_at: UTC timestamp
    """
    kind: str
    amount: int
    balance: int
    source: str
    created_at: datetime


@dataclass(frozen=True)
class ReferralStats:
    """Referral counters for an account."""
    total_referrals: int = 0
    tier: int = 1


@dataclass(frozen=True)
class Account:
    """
    Everything the economy tracks for one player.

    Balances are in base units.
    """
    account_id: str
    balance: int = 0
    total_earned: int = 0
    progression: ProgressionState = field(default_factory=ProgressionState.initial)
    streak: StreakState = field(default_factory=StreakState)
    referral: ReferralStats = field(default_factory=ReferralStats)
    transactions: Tuple[TokenTransaction, ...] = ()
