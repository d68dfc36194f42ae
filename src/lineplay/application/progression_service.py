# src/lineplay/application/progression_service.py
"""
Progression Service - XP Awards and Game Results

Applies XP gains to stored accounts and pays out game rewards. The level math
itself lives in lineplay.domain.progression; this service reads the account,
applies the pure functions and persists the result in one serialized update.

Files that USE this module:
- lineplay.app (composition root)
- tests.test_services (unit tests)

Files that this module USES:
- lineplay.application.account_manager (serialized account updates)
- lineplay.application.ledger (apply_credit for game rewards)
- lineplay.domain.progression (apply_xp, game_xp, streak_xp_bonus)
- lineplay.domain.rewards (game_reward)
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from lineplay.application.account_manager import AccountManager
from lineplay.application.ledger import apply_credit
from lineplay.domain.models import TX_GAME_REWARD, Account, LevelUpResult
from lineplay.domain.progression import apply_xp, game_xp, streak_xp_bonus
from lineplay.domain.rewards import game_reward

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameResult:
    """Rewards granted for a finished game."""
    xp: int
    tokens: int
    level_up: LevelUpResult


class ProgressionService:
    """XP and game reward use cases."""

    def __init__(self, accounts: AccountManager, rng: Optional[random.Random] = None):
        self.accounts = accounts
        self.rng = rng

    def add_xp(self, account_id: str, xp: int) -> LevelUpResult:
        """
        Add XP to an account, handling level-ups.

        Args:
            account_id: Account to update
            xp: Non-negative XP gain

        Returns:
            LevelUpResult for the update
        """
        result_holder = {}

        def _update(account: Account) -> Account:
            result = apply_xp(account.progression, xp)
            result_holder["result"] = result
            return replace(account, progression=result.state)

        self.accounts.update(account_id, _update)
        result = result_holder["result"]
        if result.levels_gained:
            logger.info("Account %s reached level %d (+%d)",
                        account_id, result.state.level, result.levels_gained)
        return result

    def record_game(
        self,
        account_id: str,
        score: int,
        min_reward: int,
        max_reward: int,
        won: bool,
        high_score_beaten: bool = False,
        max_score: Optional[int] = None,
        base_xp: int = 10,
        now: Optional[datetime] = None,
    ) -> GameResult:
        """
        Grant XP and LINE tokens for a finished game.

        XP includes the streak bonus for the account's current daily streak.
        Token reward is in whole LINE and credited as GAME_REWARD.

        Returns:
            GameResult with granted XP, tokens and the level-up outcome
        """
        result_holder = {}

        def _update(account: Account) -> Account:
            xp = game_xp(
                won=won,
                high_score_beaten=high_score_beaten,
                base_xp=base_xp,
                streak_bonus=streak_xp_bonus(account.streak.current_streak),
            )
            tokens = game_reward(score, min_reward, max_reward, won, max_score, rng=self.rng)
            level_up = apply_xp(account.progression, xp)
            result_holder["result"] = GameResult(xp=xp, tokens=tokens, level_up=level_up)

            account = replace(account, progression=level_up.state)
            if tokens:
                account = apply_credit(
                    account,
                    self.accounts.codec.units(tokens),
                    "Game Reward",
                    TX_GAME_REWARD,
                    now,
                )
            return account

        self.accounts.update(account_id, _update)
        result = result_holder["result"]
        logger.info("Game recorded for %s: +%d XP, +%d LINE", account_id, result.xp, result.tokens)
        return result
