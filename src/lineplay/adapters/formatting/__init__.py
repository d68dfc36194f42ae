# src/lineplay/adapters/formatting/__init__.py
"""
Formatting Adapters - Display Formatting

This package contains text formatting for balances, progress and streaks.
"""

from lineplay.adapters.formatting.formatter import (
    format_balance,
    format_progress,
    format_streak,
)

__all__ = [
    "format_balance",
    "format_progress",
    "format_streak",
]
