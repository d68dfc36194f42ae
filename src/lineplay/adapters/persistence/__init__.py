# src/lineplay/adapters/persistence/__init__.py
"""
Persistence Adapters - Data Storage

This package contains adapters for persisting accounts:
- File-based storage (JSON)
"""

from lineplay.adapters.persistence.file_store import (
    AccountFileStore,
    account_from_json,
    account_to_json,
)

__all__ = [
    "AccountFileStore",
    "account_from_json",
    "account_to_json",
]
