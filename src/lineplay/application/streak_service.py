# src/lineplay/application/streak_service.py
"""
Streak Service - Daily Login Streaks and Rewards

Contains the use cases for daily login streaks:
- Streak info for display (current/longest streak, claim status, upcoming rewards)
- Claiming the daily reward and crediting it to the ledger
- Reward configuration lookups

Streak rules live in lineplay.domain.streaks. A claim and its ledger credit
are written in the same serialized account update, so a reward is never
paid without the streak being advanced and vice versa.

Files that USE this module:
- lineplay.app (composition root)
- tests.test_services (unit tests)

Files that this module USES:
- lineplay.application.account_manager (serialized account updates)
- lineplay.application.ledger (apply_credit for streak rewards)
- lineplay.domain.streaks (claim, can_claim_today, next_claim_day, reward_for_day)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone, tzinfo
from typing import Callable, List, Optional, Tuple

from lineplay.application.account_manager import AccountManager
from lineplay.application.ledger import apply_credit
from lineplay.domain.errors import AlreadyClaimedToday
from lineplay.domain.models import (
    STREAK_CYCLE_DAYS,
    TOKEN_REWARD_TABLE,
    TX_STREAK_BONUS,
    Account,
    RewardTable,
    StreakClaim,
)
from lineplay.domain.streaks import (
    calendar_day,
    can_claim_today,
    claim,
    is_streak_bonus_day,
    next_claim_day,
    reward_for_day,
)

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class StreakInfo:
    """
    Streak summary for display.

    Attributes:
        current_streak: Consecutive days claimed
        longest_streak: Best streak ever
        can_claim: True if today's reward is still available
        next_day: Cycle day the next claim lands on (1-7)
        next_reward: Reward for next_day
        next_is_bonus_day: True if next_day is the day-7 bonus
        last_claim_date: Date of the last claim
        claimed_days: Cycle days claimed in the running streak
        rewards: (day, reward) for the whole cycle
    """
    current_streak: int
    longest_streak: int
    can_claim: bool
    next_day: int
    next_reward: int
    next_is_bonus_day: bool
    last_claim_date: Optional[date]
    claimed_days: frozenset
    rewards: List[Tuple[int, int]]


class StreakService:
    """Daily streak use cases for stored accounts."""

    def __init__(
        self,
        accounts: AccountManager,
        reward_table: RewardTable = TOKEN_REWARD_TABLE,
        tz: tzinfo = timezone.utc,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """
        Initialize the streak service.

        Args:
            accounts: Account manager used for reads and serialized updates
            reward_table: Streak rewards in whole LINE tokens
            tz: Timezone policy for calendar days
            clock: Returns the current time (injectable for tests)
        """
        self.accounts = accounts
        self.reward_table = reward_table
        self.tz = tz
        self.clock = clock

    def _today(self) -> date:
        return calendar_day(self.clock(), self.tz)

    def get_reward_config(self) -> List[Tuple[int, int]]:
        """Rewards for every day of the cycle, defaults filled in."""
        return [(day, self.get_reward_for_day(day)) for day in range(1, STREAK_CYCLE_DAYS + 1)]

    def get_reward_for_day(self, day: int) -> int:
        """Configured reward for a cycle day, falling back to the cycle formula."""
        return reward_for_day(day, self.reward_table)

    def can_claim_today(self, account_id: str) -> bool:
        account = self.accounts.require(account_id)
        return can_claim_today(account.streak, self._today(), self.tz)

    def get_streak_info(self, account_id: str) -> StreakInfo:
        """
        Build the streak summary shown to the player.

        Raises:
            AccountNotFound: If no such account exists
        """
        account = self.accounts.require(account_id)
        today = self._today()
        streak = account.streak
        claimable = can_claim_today(streak, today, self.tz)
        next_day = next_claim_day(streak, today, self.tz) if claimable else (
            (streak.current_streak % STREAK_CYCLE_DAYS) + 1
        )

        return StreakInfo(
            current_streak=streak.current_streak,
            longest_streak=streak.longest_streak,
            can_claim=claimable,
            next_day=next_day,
            next_reward=self.get_reward_for_day(next_day),
            next_is_bonus_day=is_streak_bonus_day(next_day),
            last_claim_date=streak.last_claim_date,
            claimed_days=streak.claimed_days,
            rewards=self.get_reward_config(),
        )

    def claim_daily_reward(self, account_id: str) -> StreakClaim:
        """
        Claim today's streak reward and credit it as STREAK_BONUS.

        Steps:
        1. Check that nothing was claimed today
        2. Continue or reset the streak
        3. Look up the reward for the cycle day
        4. Persist the new streak state together with the ledger credit

        Returns:
            StreakClaim with day, reward and the new streak state

        Raises:
            AccountNotFound: If no such account exists
            AlreadyClaimedToday: If today's reward was already claimed
        """
        now = self.clock()
        result_holder = {}

        def _update(account: Account) -> Account:
            outcome = claim(account.streak, now, self.reward_table, self.tz)
            result_holder["claim"] = outcome
            account = replace(account, streak=outcome.state)
            if outcome.reward:
                account = apply_credit(
                    account,
                    self.accounts.codec.units(outcome.reward),
                    f"Day {outcome.day} Streak Bonus",
                    TX_STREAK_BONUS,
                    now,
                )
            return account

        try:
            self.accounts.update(account_id, _update)
        except AlreadyClaimedToday:
            logger.info("Daily reward already claimed today by %s", account_id)
            raise

        outcome = result_holder["claim"]
        logger.info(
            "Account %s claimed streak day %d (+%d LINE, streak=%d)",
            account_id, outcome.day, outcome.reward, outcome.state.current_streak,
        )
        return outcome
