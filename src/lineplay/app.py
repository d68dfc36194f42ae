# src/lineplay/app.py
"""
Application Composition Root - Service Wiring

This module wires the store, account manager and services from Settings.
Route handlers build one LinePlay container at startup and pass it (or the
individual services) to their request handlers.

Files that USE this module:
- Host applications (HTTP route handlers, workers)
- tests.test_services (TestCreateApp wiring tests)

Files that this module USES:
- lineplay.config (Settings, get_settings)
- lineplay.shared.logging_conf (setup_logging)
- lineplay.adapters.persistence.file_store (AccountFileStore)
- lineplay.application.* (services)
- lineplay.domain.amounts (AmountCodec)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import logging  # Standard library for logging messages
from dataclasses import dataclass  # Container for wired services
from typing import Optional  # Type hints for optional values

from lineplay.adapters.persistence.file_store import AccountFileStore  # JSON account storage
from lineplay.application.account_manager import AccountManager  # Serialized account updates
from lineplay.application.ledger import TokenLedger  # Balance changes
from lineplay.application.progression_service import ProgressionService  # XP and game rewards
from lineplay.application.referral_service import ReferralService  # Referral bonuses
from lineplay.application.streak_service import StreakService  # Daily streak rewards
from lineplay.config import Settings, get_settings  # Configuration
from lineplay.domain.amounts import AmountCodec  # Fixed-point codec
from lineplay.shared.logging_conf import setup_logging  # Configure logging with file rotation

logger = logging.getLogger(__name__)


@dataclass
class LinePlay:
    """All services wired against one account store."""
    settings: Settings
    codec: AmountCodec
    accounts: AccountManager
    ledger: TokenLedger
    progression: ProgressionService
    streaks: StreakService
    referrals: ReferralService


def create_app(settings: Optional[Settings] = None, configure_logging: bool = False) -> LinePlay:
    """
    Build the services for one process.

    Args:
        settings: Settings to use (defaults to get_settings())
        configure_logging: Also run setup_logging() from the logging settings

    Returns:
        LinePlay container
    """
    settings = settings or get_settings()

    if configure_logging:
        setup_logging(
            level=logging.INFO,
            log_file=settings.log_file,
            log_dir=settings.log_dir,
            max_bytes=settings.log_max_bytes,
            backup_count=settings.log_backup_count,
            log_to_stdout=settings.log_stdout,
        )

    codec = AmountCodec(settings.line_decimals)
    store = AccountFileStore(settings.accounts_file)
    accounts = AccountManager(store, codec=codec, welcome_bonus=settings.welcome_bonus)

    app = LinePlay(
        settings=settings,
        codec=codec,
        accounts=accounts,
        ledger=TokenLedger(accounts, codec),
        progression=ProgressionService(accounts),
        streaks=StreakService(
            accounts,
            reward_table=settings.reward_table,
            tz=settings.timezone_policy,
        ),
        referrals=ReferralService(accounts),
    )

    logger.info(
        "LinePlay ready: decimals=%d, streak rewards=%s (%s), accounts=%s",
        settings.line_decimals,
        settings.streak_reward_variant,
        settings.streak_timezone,
        settings.accounts_file,
    )
    return app
