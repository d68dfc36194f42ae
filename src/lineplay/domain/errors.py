# src/lineplay/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

This module defines domain-specific exceptions that represent
business rule violations and domain errors.
"""


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class InvalidAmountFormat(DomainError, ValueError):
    """Raised when a LINE amount string cannot be parsed."""

    def __init__(self, text: str):
        super().__init__(f'Invalid LINE amount: "{text}"')
        self.text = text


class AlreadyClaimedToday(DomainError):
    """Raised when the daily streak reward was already claimed for the calendar day."""
    pass


class InsufficientBalance(DomainError):
    """Raised when a debit exceeds the account balance."""
    pass


class AccountNotFound(DomainError):
    """Raised when requested account cannot be found."""
    pass
