# src/lineplay/domain/progression.py
"""
Level Progression - XP and Level Calculations

Pure functions for XP and level math.

Level system:
- XP required per level grows by 20%: floor(1000 * 1.2 ** (level - 1))
- Level 1: 1000 XP, level 2: 1200 XP, level 3: 1440 XP, level 4: 1728 XP
- The requirement is per level, not cumulative

The growth factor is applied as the exact fraction 6/5 so large levels do not
drift the way repeated float multiplication would.

Files that USE this module:
- lineplay.application.progression_service (add_xp, record_game)
- lineplay.adapters.formatting.formatter (progress bar and level titles)
- tests.test_progression (unit tests)

Files that this module USES:
- lineplay.domain.models (ProgressionState, LevelUpResult)
"""
from __future__ import annotations

from lineplay.domain.models import BASE_LEVEL_XP, LevelUpResult, ProgressionState

_GROWTH_NUM = 6
_GROWTH_DEN = 5

GAME_WIN_XP = 15
HIGH_SCORE_XP = 25
MAX_STREAK_XP_BONUS = 50

_LEVEL_TITLES = (
    (50, "Legendary"),
    (40, "Master"),
    (30, "Expert"),
    (20, "Veteran"),
    (10, "Skilled"),
    (5, "Apprentice"),
)


def xp_for_level(level: int) -> int:
    """
    XP required to complete ``level``.

    Args:
        level: Level number (levels below 1 require 0 XP)

    Returns:
        floor(1000 * 1.2 ** (level - 1))
    """
    if level < 1:
        return 0
    n = level - 1
    return (BASE_LEVEL_XP * _GROWTH_NUM ** n) // (_GROWTH_DEN ** n)


def total_xp_for_level(target_level: int) -> int:
    """Total XP needed to reach ``target_level`` starting from level 1."""
    return sum(xp_for_level(level) for level in range(1, target_level))


def apply_xp(state: ProgressionState, xp_gained: int) -> LevelUpResult:
    """
    Add XP to a progression state, carrying excess XP into level-ups.

    Args:
        state: Current progression state
        xp_gained: Non-negative XP to add

    Returns:
        LevelUpResult with the new state and the number of levels gained

    Raises:
        ValueError: If xp_gained is negative
    """
    if xp_gained < 0:
        raise ValueError("xp_gained must be >= 0")

    xp = state.xp + xp_gained
    level = state.level
    xp_needed = state.xp_to_next_level

    while xp >= xp_needed:
        xp -= xp_needed
        level += 1
        xp_needed = xp_for_level(level)

    return LevelUpResult(
        state=ProgressionState(xp=xp, level=level, xp_to_next_level=xp_needed),
        levels_gained=level - state.level,
    )


def level_for_total_xp(total_xp: int) -> int:
    """Level reached from level 1 after collecting ``total_xp`` lifetime XP."""
    level = 1
    accumulated = 0
    while True:
        needed = xp_for_level(level)
        if accumulated + needed > total_xp:
            return level
        accumulated += needed
        level += 1


def xp_progress_percent(xp: int, xp_to_next_level: int) -> int:
    """Progress toward the next level as a whole percentage in [0, 100]."""
    if xp_to_next_level <= 0:
        return 100
    return max(0, min(100, (100 * xp) // xp_to_next_level))


def game_xp(won: bool, high_score_beaten: bool, base_xp: int = 10, streak_bonus: int = 0) -> int:
    """XP for finishing a game: base XP plus win, high-score and streak bonuses."""
    xp = base_xp
    if won:
        xp += GAME_WIN_XP
    if high_score_beaten:
        xp += HIGH_SCORE_XP
    if streak_bonus:
        xp += streak_bonus
    return xp


def streak_xp_bonus(current_streak: int) -> int:
    """5 XP per streak day, capped at 50."""
    return min(max(current_streak, 0) * 5, MAX_STREAK_XP_BONUS)


def level_title(level: int) -> str:
    for min_level, title in _LEVEL_TITLES:
        if level >= min_level:
            return title
    return "Novice"
