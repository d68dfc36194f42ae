# src/lineplay/config/__init__.py
"""
Configuration Module

Provides centralized configuration management using Pydantic Settings.
Supports environment variables and an optional .env file.
"""

from lineplay.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
