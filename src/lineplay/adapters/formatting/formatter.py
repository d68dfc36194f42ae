# src/lineplay/adapters/formatting/formatter.py
"""
Display Formatter - Text Formatting and Presentation

This module handles text formatting for balances, level progress and the
7-day streak calendar shown on the dashboard and in notifications.

Files that USE this module:
- tests.test_formatter (unit tests)

Files that this module USES:
- lineplay.domain.amounts (AmountCodec for balance display)
- lineplay.domain.models (ProgressionState, StreakState)
- lineplay.domain.progression (xp_progress_percent, level_title)
- lineplay.domain.streaks (is_streak_bonus_day)
"""
from __future__ import annotations

from typing import Iterable, List, Tuple

from lineplay.domain.amounts import AmountCodec, line_codec
from lineplay.domain.models import ProgressionState, StreakState
from lineplay.domain.progression import level_title, xp_progress_percent
from lineplay.domain.streaks import is_streak_bonus_day

BAR_WIDTH = 10


def format_balance(amount: int, places: int = 2, codec: AmountCodec = line_codec,
                   symbol: str = "LINE") -> str:
    """
    Format a base-unit amount for display with thousands separators.

    Args:
        amount: Amount in base units
        places: Fractional digits to show (truncated, not rounded)
        codec: Codec for the token's precision
        symbol: Token symbol appended to the number

    Returns:
        String like "1,234.50 LINE"
    """
    fixed = codec.format_fixed(amount, places)
    sign = ""
    if fixed.startswith("-"):
        sign, fixed = "-", fixed[1:]
    int_part, dot, frac_part = fixed.partition(".")
    grouped = f"{int(int_part):,}"
    return f"{sign}{grouped}{dot}{frac_part} {symbol}"


def _bar(percent: int, width: int = BAR_WIDTH) -> str:
    filled = (percent * width) // 100
    return "█" * filled + "░" * (width - filled)


def format_progress(state: ProgressionState) -> str:
    """
    Format level progress as two lines: level/title and an XP bar.

    Example:
        Level 3 (Novice)
        [██░░░░░░░░] 300/1440 XP (20%)
    """
    percent = xp_progress_percent(state.xp, state.xp_to_next_level)
    return (
        f"Level {state.level} ({level_title(state.level)})\n"
        f"[{_bar(percent)}] {state.xp}/{state.xp_to_next_level} XP ({percent}%)"
    )


def format_streak(state: StreakState, rewards: Iterable[Tuple[int, int]]) -> str:
    """
    Format the 7-day streak calendar.

    Args:
        state: Streak state of the player
        rewards: (day, reward) pairs, e.g. StreakService.get_reward_config()

    Returns:
        Header line followed by one line per cycle day
    """
    lines: List[str] = [
        f"🔥 Streak: {state.current_streak} day(s) (best: {state.longest_streak})"
    ]
    for day, reward in rewards:
        mark = "✅" if day in state.claimed_days else "⬜"
        bonus = " 🎁" if is_streak_bonus_day(day) else ""
        lines.append(f"{mark} Day {day}: {reward} LINE{bonus}")
    return "\n".join(lines)
