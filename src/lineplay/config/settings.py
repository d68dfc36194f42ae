# src/lineplay/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Supports environment variables (and a .env file) with validation.

There is no import-time settings instance: the composition root calls
get_settings() (or builds Settings explicitly) and passes the values down.

Files that USE this module:
- lineplay.app (loads settings and wires services)
- lineplay.application.* (services read reward table, timezone and bonuses)
- lineplay.adapters.persistence.file_store (accounts file path)

Files that this module USES:
- lineplay.shared.validators (validation functions for settings)
- lineplay.domain.models (built-in streak reward tables)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from datetime import timezone, tzinfo  # Timezone policy for calendar days
from functools import lru_cache  # Cache the default settings instance
from pathlib import Path  # Object-oriented filesystem paths
from typing import Dict, Literal, Optional  # Type hints
from zoneinfo import ZoneInfo  # IANA timezones for non-UTC policies

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from lineplay.domain.models import POINTS_REWARD_TABLE, TOKEN_REWARD_TABLE, RewardTable
from lineplay.shared.validators import (
    validate_reward_table,  # Validate streak reward day/amount pairs
    validate_timezone,  # Validate IANA timezone names
)


class Settings(BaseSettings):
    """Economy settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # --- Token ---
    line_decimals: int = Field(default=9, alias="LINE_DECIMALS", ge=0, le=36)
    welcome_bonus: int = Field(default=500, alias="WELCOME_BONUS", ge=0)  # whole LINE tokens

    # --- Daily streak ---
    # "token" is the table shown to players (50..300 LINE), "points" the generic 1..5 table
    streak_reward_variant: Literal["token", "points"] = Field(
        default="token", alias="STREAK_REWARD_VARIANT"
    )
    # JSON object like {"7": 500}; entries take precedence over the variant's table
    streak_reward_overrides: Dict[int, int] = Field(
        default_factory=dict, alias="STREAK_REWARD_OVERRIDES"
    )
    streak_timezone: str = Field(default="UTC", alias="STREAK_TIMEZONE")

    # --- Persistence ---
    accounts_file: Path = Field(
        default=Path("./data/accounts.json"), alias="ACCOUNTS_FILE"
    )

    # --- Logging ---
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="LINEPLAY_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @property
    def reward_table(self) -> RewardTable:
        """Streak reward table for the configured variant with overrides applied."""
        base = TOKEN_REWARD_TABLE if self.streak_reward_variant == "token" else POINTS_REWARD_TABLE
        if not self.streak_reward_overrides:
            return base
        return base.merged(self.streak_reward_overrides)

    @property
    def timezone_policy(self) -> tzinfo:
        """Timezone used to truncate timestamps to calendar days."""
        if self.streak_timezone.upper() == "UTC":
            return timezone.utc
        return ZoneInfo(self.streak_timezone)

    @field_validator("streak_reward_overrides")
    @classmethod
    def validate_reward_overrides(cls, v: Dict[int, int]) -> Dict[int, int]:
        """Validate reward override days and amounts."""
        if not validate_reward_table(v):
            raise ValueError("STREAK_REWARD_OVERRIDES days must be 1-7 with non-negative rewards")
        return v

    @field_validator("streak_timezone")
    @classmethod
    def validate_streak_timezone(cls, v: str) -> str:
        """Validate timezone name."""
        if not validate_timezone(v):
            raise ValueError(f"Unknown STREAK_TIMEZONE: {v!r}")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings from the process environment, built once on first use."""
    return Settings()
