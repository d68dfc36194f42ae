# src/lineplay/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Logging configuration
"""

from lineplay.shared.validators import (
    validate_display_name,
    validate_referral_code,
    validate_reward_table,
    validate_timezone,
    validate_username,
)
from lineplay.shared.logging_conf import setup_logging

__all__ = [
    "validate_username",
    "validate_display_name",
    "validate_referral_code",
    "validate_timezone",
    "validate_reward_table",
    "setup_logging",
]
