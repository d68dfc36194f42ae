# src/lineplay/application/account_manager.py
"""
Account Manager - Centralized Account State Management

This module owns the in-memory view of player accounts and their
persistence. Every change goes through update(), which serializes the
read-modify-write per account and writes the result to the store before
the new value becomes visible.

Files that USE this module:
- lineplay.application.ledger (TokenLedger updates balances through update())
- lineplay.application.progression_service (XP updates)
- lineplay.application.streak_service (streak updates)
- lineplay.application.referral_service (referral counters)
- lineplay.app (composition root)

Files that this module USES:
- lineplay.adapters.persistence.file_store (AccountFileStore for persistence)
- lineplay.domain.models (Account, TokenTransaction)
- lineplay.domain.amounts (AmountCodec for the welcome bonus)
"""
from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from lineplay.adapters.persistence.file_store import AccountFileStore
from lineplay.domain.amounts import AmountCodec, line_codec
from lineplay.domain.errors import AccountNotFound
from lineplay.domain.models import TX_EARN, Account, TokenTransaction
from lineplay.domain.rewards import WELCOME_BONUS

logger = logging.getLogger(__name__)


class AccountManager:
    """Manages player accounts with persistence."""

    def __init__(
        self,
        store: AccountFileStore,
        codec: AmountCodec = line_codec,
        welcome_bonus: int = WELCOME_BONUS,
    ):
        """
        Initialize the manager and load persisted accounts.

        Args:
            store: Persistence backend
            codec: Amount codec used to convert the welcome bonus to base units
            welcome_bonus: Whole LINE tokens credited to new accounts
        """
        self.store = store
        self.codec = codec
        self.welcome_bonus = welcome_bonus
        self._accounts: Dict[str, Account] = {}
        self._global_lock = threading.Lock()
        self._account_locks: Dict[str, threading.Lock] = {}
        self._load_from_persistence()

    def _load_from_persistence(self) -> None:
        self._accounts = self.store.load_all()

    def _lock_for(self, account_id: str, create: bool = False) -> threading.Lock:
        """
        Get the lock serializing changes to one account.

        Locks exist only for known accounts, or for ids about to be created
        when ``create`` is set.

        Raises:
            AccountNotFound: If the account does not exist and ``create`` is False
        """
        with self._global_lock:
            lock = self._account_locks.get(account_id)
            if lock is None:
                if not create and account_id not in self._accounts:
                    raise AccountNotFound(f"Account not found: {account_id}")
                lock = self._account_locks[account_id] = threading.Lock()
            return lock

    def _persist(self, account: Account) -> None:
        with self._global_lock:
            snapshot = dict(self._accounts)
            snapshot[account.account_id] = account
            self.store.save_all(snapshot)
            self._accounts = snapshot

    def get(self, account_id: str) -> Optional[Account]:
        """
        Get an account by id.

        Returns:
            Account if it exists, None otherwise
        """
        return self._accounts.get(account_id)

    def require(self, account_id: str) -> Account:
        """
        Get an account by id or fail.

        Raises:
            AccountNotFound: If no such account exists
        """
        account = self.get(account_id)
        if account is None:
            raise AccountNotFound(f"Account not found: {account_id}")
        return account

    def get_or_create(self, account_id: str, now: Optional[datetime] = None) -> Account:
        """
        Get an account, creating it with the welcome bonus if it does not exist.

        Args:
            account_id: Account identifier
            now: Creation timestamp (defaults to current UTC time)

        Returns:
            Existing or newly created Account
        """
        with self._lock_for(account_id, create=True):
            existing = self.get(account_id)
            if existing is not None:
                return existing

            now = now or datetime.now(timezone.utc)
            bonus = self.codec.units(self.welcome_bonus)
            transactions = ()
            if bonus:
                transactions = (TokenTransaction(
                    kind=TX_EARN,
                    amount=bonus,
                    balance=bonus,
                    source="Welcome Bonus",
                    created_at=now,
                ),)
            account = Account(
                account_id=account_id,
                balance=bonus,
                total_earned=bonus,
                transactions=transactions,
            )
            self._persist(account)
            logger.info("Created account %s with welcome bonus %d LINE", account_id, self.welcome_bonus)
            return account

    def update(self, account_id: str, fn: Callable[[Account], Account]) -> Account:
        """
        Apply ``fn`` to the stored account and persist the result.

        Calls for the same account are serialized; ``fn`` may raise a domain
        error, in which case nothing is written and the error propagates.

        Args:
            account_id: Account identifier
            fn: Pure function from the current Account to the new Account

        Returns:
            The persisted Account

        Raises:
            AccountNotFound: If no such account exists
            RuntimeError: If the store cannot be written
        """
        with self._lock_for(account_id):
            current = self.require(account_id)
            updated = fn(current)
            if updated.account_id != account_id:
                updated = replace(updated, account_id=account_id)
            self._persist(updated)
            return updated

    def all_accounts(self) -> Dict[str, Account]:
        return dict(self._accounts)
