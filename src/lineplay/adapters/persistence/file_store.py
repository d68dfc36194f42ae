# src/lineplay/adapters/persistence/file_store.py
"""
File Store - Account Persistence and Data Storage

This module handles persistent storage of player accounts using a JSON file.
Accounts are keyed by id; token amounts are written as integer strings so
base-unit values survive round-trips without precision loss.

Files that USE this module:
- lineplay.application.account_manager (AccountManager loads and saves through AccountFileStore)
- lineplay.app (creates the store from settings)
- tests.test_file_store (unit tests)

Files that this module USES:
- lineplay.domain.models (Account and nested state models)
"""
from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Union

from lineplay.domain.models import (
    STREAK_CYCLE_DAYS,
    Account,
    ProgressionState,
    ReferralStats,
    StreakState,
    TokenTransaction,
)

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def _date_or_none(raw: Optional[str]) -> Optional[date]:
    if not raw:
        return None
    return date.fromisoformat(raw[:10])


def _parse_ts(raw: Optional[str]) -> datetime:
    # Accept both "...Z" and "+00:00"
    if isinstance(raw, str):
        ts = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        return ts.astimezone(timezone.utc)
    return datetime.now(timezone.utc)


def account_to_json(account: Account) -> dict:
    """
    Convert Account to a JSON-serializable dictionary.

    Returns:
        Dictionary with amounts as integer strings and ISO-formatted dates
    """
    streak = account.streak
    return {
        "account_id": account.account_id,
        "balance": str(account.balance),
        "total_earned": str(account.total_earned),
        "progression": {
            "xp": account.progression.xp,
            "level": account.progression.level,
            "xp_to_next_level": account.progression.xp_to_next_level,
        },
        "streak": {
            "current_streak": streak.current_streak,
            "longest_streak": streak.longest_streak,
            "last_claim_date": streak.last_claim_date.isoformat() if streak.last_claim_date else None,
            "claimed_days": sorted(streak.claimed_days),
            "streak_start_date": (
                streak.streak_start_date.isoformat() if streak.streak_start_date else None
            ),
        },
        "referral": {
            "total_referrals": account.referral.total_referrals,
            "tier": account.referral.tier,
        },
        "transactions": [
            {
                "kind": tx.kind,
                "amount": str(tx.amount),
                "balance": str(tx.balance),
                "source": tx.source,
                "created_at": tx.created_at.isoformat(),
            }
            for tx in account.transactions
        ],
    }


def account_from_json(data: dict) -> Account:
    """
    Create Account from a JSON dictionary.

    Missing nested sections fall back to their defaults. Streak state is
    checked: claimed days must lie in the 7-day cycle and the current
    streak may not exceed the longest one.

    Raises:
        KeyError, ValueError, TypeError: If required fields are missing or malformed
    """
    prog = data.get("progression") or {}
    streak = data.get("streak") or {}
    referral = data.get("referral") or {}
    default_progression = ProgressionState.initial()

    current_streak = int(streak.get("current_streak", 0))
    longest_streak = int(streak.get("longest_streak", 0))
    if current_streak < 0 or current_streak > longest_streak:
        raise ValueError(
            f"Invalid streak: current {current_streak}, longest {longest_streak}"
        )
    claimed_days = frozenset(int(d) for d in streak.get("claimed_days", []))
    out_of_cycle = sorted(d for d in claimed_days if not 1 <= d <= STREAK_CYCLE_DAYS)
    if out_of_cycle:
        raise ValueError(f"Claimed days outside 1..{STREAK_CYCLE_DAYS}: {out_of_cycle}")

    return Account(
        account_id=str(data["account_id"]),
        balance=int(data.get("balance", "0")),
        total_earned=int(data.get("total_earned", "0")),
        progression=ProgressionState(
            xp=int(prog.get("xp", default_progression.xp)),
            level=int(prog.get("level", default_progression.level)),
            xp_to_next_level=int(prog.get("xp_to_next_level", default_progression.xp_to_next_level)),
        ),
        streak=StreakState(
            current_streak=current_streak,
            longest_streak=longest_streak,
            last_claim_date=_date_or_none(streak.get("last_claim_date")),
            claimed_days=claimed_days,
            streak_start_date=_date_or_none(streak.get("streak_start_date")),
        ),
        referral=ReferralStats(
            total_referrals=int(referral.get("total_referrals", 0)),
            tier=int(referral.get("tier", 1)),
        ),
        transactions=tuple(
            TokenTransaction(
                kind=tx["kind"],
                amount=int(tx["amount"]),
                balance=int(tx["balance"]),
                source=tx.get("source", ""),
                created_at=_parse_ts(tx.get("created_at")),
            )
            for tx in data.get("transactions", [])
        ),
    )


class AccountFileStore:
    """JSON file holding every account, rewritten atomically on each save."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _state_path(self) -> Path:
        """
        Get path to accounts file and ensure directory exists.

        Returns:
            Path object pointing to accounts file
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        return self.path

    def save_all(self, accounts: Dict[str, Account]) -> None:
        """
        Save all accounts to the JSON file using atomic write.

        Uses temporary file + atomic rename to prevent corrupted files.

        Args:
            accounts: Accounts keyed by account id

        Raises:
            RuntimeError: If the file cannot be written
        """
        p = self._state_path()
        payload = {
            "version": SCHEMA_VERSION,
            "accounts": {
                account_id: account_to_json(account)
                for account_id, account in sorted(accounts.items())
            },
        }

        temp_fd, temp_path = tempfile.mkstemp(
            suffix=".json.tmp",
            dir=str(p.parent),
            text=True
        )

        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())

            os.replace(temp_path, str(p))
        except Exception as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise RuntimeError(f"Failed to save accounts file: {e}") from e

    def _backup_corrupt(self, p: Path, reason: object) -> Path:
        """Copy the accounts file aside so skipped data is not lost on the next save."""
        backup_path = p.with_suffix(".json.corrupt")
        shutil.copy2(p, backup_path)
        logger.warning("Accounts file corrupted, backed up to %s: %s", backup_path, reason)
        return backup_path

    def load_all(self) -> Dict[str, Account]:
        """
        Load all accounts from the JSON file.

        Handles corrupt files gracefully by:
        1. Attempting to load the file
        2. If JSON decode fails or the layout is wrong, backing up the corrupt
           file and starting empty
        3. Skipping individual accounts that fail schema validation, after
           backing up the file so the next save does not lose them

        Returns:
            Accounts keyed by account id (empty if the file does not exist)
        """
        p = self._state_path()
        if not p.exists():
            return {}

        with p.open("r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                self._backup_corrupt(p, e)
                return {}

        raw_accounts = data.get("accounts", {}) if isinstance(data, dict) else None
        if raw_accounts is None and isinstance(data, dict):
            raw_accounts = {}
        if not isinstance(raw_accounts, dict):
            self._backup_corrupt(p, "expected an object with an 'accounts' object")
            return {}

        accounts: Dict[str, Account] = {}
        skipped = []
        for account_id, raw in raw_accounts.items():
            try:
                accounts[account_id] = account_from_json(raw)
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                logger.error("Skipping unreadable account %s: %s", account_id, e)
                skipped.append(account_id)

        if skipped:
            self._backup_corrupt(p, f"unreadable accounts {skipped}")
        logger.info("Loaded %d accounts from %s", len(accounts), p)
        return accounts
