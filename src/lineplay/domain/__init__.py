# src/lineplay/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models and business rules.
No dependencies on infrastructure or external systems.
"""

from lineplay.domain.models import (
    Account,
    LevelUpResult,
    POINTS_REWARD_TABLE,
    ProgressionState,
    ReferralStats,
    RewardTable,
    StreakClaim,
    StreakState,
    TOKEN_REWARD_TABLE,
    TokenTransaction,
)
from lineplay.domain.errors import (
    AccountNotFound,
    AlreadyClaimedToday,
    DomainError,
    InsufficientBalance,
    InvalidAmountFormat,
)
from lineplay.domain.amounts import (
    AmountCodec,
    LINE_DECIMALS,
    format_line,
    format_line_fixed,
    line_codec,
    parse_line,
)

__all__ = [
    "Account",
    "LevelUpResult",
    "POINTS_REWARD_TABLE",
    "ProgressionState",
    "ReferralStats",
    "RewardTable",
    "StreakClaim",
    "StreakState",
    "TOKEN_REWARD_TABLE",
    "TokenTransaction",
    "AccountNotFound",
    "AlreadyClaimedToday",
    "DomainError",
    "InsufficientBalance",
    "InvalidAmountFormat",
    "AmountCodec",
    "LINE_DECIMALS",
    "format_line",
    "format_line_fixed",
    "line_codec",
    "parse_line",
]
