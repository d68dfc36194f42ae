# src/lineplay/shared/validators.py
"""
Input Validation Utilities - Profile and Configuration Validation

This module provides validation functions for player-facing input (usernames,
display names, referral codes) and for configuration values (timezone names,
streak reward tables).

Files that USE this module:
- lineplay.config.settings (uses validation functions in Settings field validators)
- lineplay.application.referral_service (referral code check)

Files that this module USES:
- None (pure utility functions)
"""
import re
from typing import Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def validate_username(username: str) -> bool:
    """
    Validate username format.

    Rules:
    - 3-20 characters
    - Alphanumeric and underscores only
    - Cannot start or end with an underscore

    Args:
        username: Username to validate

    Returns:
        True if valid, False otherwise
    """
    if not username:
        return False

    if len(username) < 3 or len(username) > 20:
        return False
    if username.startswith('_') or username.endswith('_'):
        return False
    return bool(re.fullmatch(r'[a-zA-Z0-9_]+', username))


def validate_display_name(display_name: str) -> bool:
    """
    Validate display name.

    Empty is allowed; at most 50 characters and no leading/trailing whitespace.
    """
    return display_name.strip() == display_name and len(display_name) <= 50


def validate_referral_code(code: str) -> bool:
    """
    Validate referral code format (LINE-XXXXXXXX, case insensitive).

    Args:
        code: Referral code to validate

    Returns:
        True if valid, False otherwise
    """
    if not code:
        return False
    return bool(re.fullmatch(r'LINE-[A-Z0-9]{8}', code.upper()))


def validate_timezone(name: str) -> bool:
    """
    Validate an IANA timezone name.

    Args:
        name: Timezone name like "UTC" or "Europe/Berlin"

    Returns:
        True if the zone can be loaded, False otherwise
    """
    if not name:
        return False
    if name.upper() == "UTC":
        return True
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True


def validate_reward_table(table: Mapping[int, int]) -> bool:
    """
    Validate a streak reward table.

    Keys must be days 1-7 and values non-negative integers. Partial tables are valid.
    """
    for day, reward in table.items():
        try:
            day = int(day)
            reward = int(reward)
        except (TypeError, ValueError):
            return False
        if not 1 <= day <= 7 or reward < 0:
            return False
    return True
