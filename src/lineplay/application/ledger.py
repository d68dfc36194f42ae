# src/lineplay/application/ledger.py
"""
Token Ledger - Balance Changes and Transaction History

All amounts are base units. Each balance change appends a TokenTransaction
carrying the resulting balance.

Files that USE this module:
- lineplay.application.streak_service (streak rewards)
- lineplay.application.progression_service (game rewards)
- lineplay.application.referral_service (referral bonuses)
- tests.test_services (unit tests)

Files that this module USES:
- lineplay.application.account_manager (serialized account updates)
- lineplay.domain.models (Account, TokenTransaction, transaction kinds)
"""
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

from lineplay.application.account_manager import AccountManager
from lineplay.domain.amounts import AmountCodec, line_codec
from lineplay.domain.errors import InsufficientBalance
from lineplay.domain.models import TRANSACTION_KINDS, TX_EARN, TX_SPEND, Account, TokenTransaction

logger = logging.getLogger(__name__)


def apply_credit(
    account: Account,
    amount: int,
    source: str,
    kind: str = TX_EARN,
    now: Optional[datetime] = None,
) -> Account:
    """
    Return ``account`` with ``amount`` base units added and the transaction recorded.

    Only positive amounts count toward total_earned.
    """
    if kind not in TRANSACTION_KINDS:
        raise ValueError(f"Unknown transaction kind: {kind}")

    balance = account.balance + amount
    tx = TokenTransaction(
        kind=kind,
        amount=amount,
        balance=balance,
        source=source,
        created_at=now or datetime.now(timezone.utc),
    )
    return replace(
        account,
        balance=balance,
        total_earned=account.total_earned + max(amount, 0),
        transactions=account.transactions + (tx,),
    )


def apply_debit(
    account: Account,
    amount: int,
    source: str,
    now: Optional[datetime] = None,
) -> Account:
    """
    Return ``account`` with ``amount`` base units spent.

    Raises:
        ValueError: If amount is negative
        InsufficientBalance: If the balance does not cover amount
    """
    if amount < 0:
        raise ValueError("amount must be >= 0")
    if account.balance < amount:
        raise InsufficientBalance(
            f"Insufficient balance for {account.account_id}: has {account.balance}, needs {amount}"
        )

    balance = account.balance - amount
    tx = TokenTransaction(
        kind=TX_SPEND,
        amount=-amount,
        balance=balance,
        source=source,
        created_at=now or datetime.now(timezone.utc),
    )
    return replace(account, balance=balance, transactions=account.transactions + (tx,))


class TokenLedger:
    """Credits and debits account balances through the AccountManager."""

    def __init__(self, accounts: AccountManager, codec: AmountCodec = line_codec):
        self.accounts = accounts
        self.codec = codec

    def credit(
        self,
        account_id: str,
        amount: int,
        source: str,
        kind: str = TX_EARN,
        now: Optional[datetime] = None,
    ) -> Account:
        """
        Add ``amount`` base units to an account.

        Args:
            account_id: Account to credit
            amount: Amount in base units
            source: Human-readable origin of the tokens
            kind: Transaction kind (default: EARN)
            now: Transaction timestamp (defaults to current UTC time)

        Returns:
            Updated Account
        """
        account = self.accounts.update(
            account_id, lambda acc: apply_credit(acc, amount, source, kind, now)
        )
        logger.info("Credited %s LINE to %s (%s: %s)",
                    self.codec.format(amount), account_id, kind, source)
        return account

    def credit_tokens(
        self,
        account_id: str,
        tokens: int,
        source: str,
        kind: str = TX_EARN,
        now: Optional[datetime] = None,
    ) -> Account:
        """Credit a whole number of LINE tokens."""
        return self.credit(account_id, self.codec.units(tokens), source, kind, now)

    def debit(
        self,
        account_id: str,
        amount: int,
        source: str,
        now: Optional[datetime] = None,
    ) -> Account:
        """
        Spend ``amount`` base units from an account.

        Raises:
            InsufficientBalance: If the balance does not cover amount
        """
        account = self.accounts.update(
            account_id, lambda acc: apply_debit(acc, amount, source, now)
        )
        logger.info("Debited %s LINE from %s (%s)", self.codec.format(amount), account_id, source)
        return account

    def balance(self, account_id: str) -> int:
        return self.accounts.require(account_id).balance
