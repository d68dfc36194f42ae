# src/lineplay/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains application services that orchestrate domain logic
over stored accounts.
"""

from lineplay.application.account_manager import AccountManager
from lineplay.application.ledger import TokenLedger, apply_credit, apply_debit
from lineplay.application.progression_service import GameResult, ProgressionService
from lineplay.application.referral_service import ReferralResult, ReferralService
from lineplay.application.streak_service import StreakInfo, StreakService

__all__ = [
    "AccountManager",
    "TokenLedger",
    "apply_credit",
    "apply_debit",
    "GameResult",
    "ProgressionService",
    "ReferralResult",
    "ReferralService",
    "StreakInfo",
    "StreakService",
]
