# src/lineplay/domain/rewards.py
"""
Reward Calculations - Token and XP Rewards

Pure functions for game, achievement and task rewards. All amounts here are
whole LINE tokens; the ledger converts them to base units.

Files that USE this module:
- lineplay.application.progression_service (game rewards)
- lineplay.application.account_manager (welcome bonus)
- tests.test_rewards (unit tests)

Files that this module USES:
- None (pure functions)
"""
from __future__ import annotations

import math
import random
from typing import Optional, Tuple

WELCOME_BONUS = 500
WIN_BONUS_RATE = 0.2


def game_reward(
    score: int,
    min_reward: int,
    max_reward: int,
    won: bool,
    max_score: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> int:
    """
    Token reward for a finished game.

    With a positive ``max_score`` the reward scales with score/max_score
    between min_reward and max_reward. Without it the base reward is drawn
    uniformly from [min_reward, max_reward). Winning adds 20%, floored.

    Args:
        score: Player's score
        min_reward: Minimum reward for the game
        max_reward: Maximum reward for the game
        won: Whether the player won
        max_score: Optional score that earns max_reward
        rng: Random source for the unscaled case (default: module random)

    Returns:
        Whole-token reward
    """
    if max_score and max_score > 0:
        ratio = min(score / max_score, 1)
        base = math.floor(min_reward + (max_reward - min_reward) * ratio)
    else:
        rng = rng or random
        base = math.floor(rng.random() * (max_reward - min_reward)) + min_reward

    win_bonus = math.floor(base * WIN_BONUS_RATE) if won else 0
    return base + win_bonus


def achievement_reward(target_value: int) -> Tuple[int, int]:
    """
    Rewards for an achievement, scaled logarithmically with its target.

    Returns:
        (tokens, xp), at least (50, 25)
    """
    scale = math.log2(target_value + 1)
    return max(50, math.floor(scale * 50)), max(25, math.floor(scale * 25))


def apply_multiplier(base: int, multiplier: float) -> int:
    """Apply an event/promotion multiplier to a reward, flooring the result."""
    return math.floor(base * multiplier)


def task_reward(base_reward: int, base_xp: int, bonus_multiplier: float = 1) -> Tuple[int, int]:
    """Rewards for completing a task: (tokens, xp) with an optional multiplier."""
    return (
        apply_multiplier(base_reward, bonus_multiplier),
        apply_multiplier(base_xp, bonus_multiplier),
    )
