# src/lineplay/domain/amounts.py
"""
LINE Amounts - Fixed-Point Decimal Codec

LINE uses 9 decimals. Amounts are stored and combined as integers in base
units (1 LINE = 10**9 base units); this module converts between user-facing
decimal strings and those integers.

Rules:
- Never use floating point for token amounts
- Use parse() for user input -> ledger/chain
- Use format() / format_fixed() for ledger/chain -> display

Files that USE this module:
- lineplay.application.ledger (credits whole-token rewards in base units)
- lineplay.adapters.formatting.formatter (balance display)
- lineplay.adapters.persistence.file_store (parse_raw for stored amounts)
- tests.test_amounts (unit tests)

Files that this module USES:
- lineplay.domain.errors (InvalidAmountFormat)
"""
from __future__ import annotations

import re

from lineplay.domain.errors import InvalidAmountFormat

LINE_DECIMALS = 9

_AMOUNT_RE = re.compile(r"-?[0-9]*\.?[0-9]*")


class AmountCodec:
    """Converts between decimal strings and base-unit integers for a fixed precision."""

    def __init__(self, decimals: int = LINE_DECIMALS):
        if decimals < 0:
            raise ValueError("decimals must be >= 0")
        self.decimals = decimals
        self.base = 10 ** decimals

    def parse(self, text: str) -> int:
        """
        Parse a decimal string into base units.

        Commas and surrounding whitespace are ignored. Extra fractional digits
        beyond ``decimals`` are truncated, never rounded.

        Args:
            text: Decimal string like "30.5", "1,000" or "-0.001"

        Returns:
            Amount in base units ("30.5" -> 30500000000 with 9 decimals)

        Raises:
            InvalidAmountFormat: If the string is not a plain decimal number
        """
        if text is None or not text.strip():
            return 0

        cleaned = text.replace(",", "").strip()
        if not cleaned or not _AMOUNT_RE.fullmatch(cleaned):
            raise InvalidAmountFormat(text)

        negative = cleaned.startswith("-")
        body = cleaned[1:] if negative else cleaned
        int_part, _, frac_part = body.partition(".")
        if not int_part and not frac_part:
            # ".", "-" and "-." carry no digits
            raise InvalidAmountFormat(text)

        frac_part = (frac_part + "0" * self.decimals)[:self.decimals]
        value = int(int_part or "0") * self.base + int(frac_part or "0")
        return -value if negative else value

    def format(self, amount: int) -> str:
        """
        Format base units as the shortest exact decimal string.

        30500000000 -> "30.5", 100000000000 -> "100", 0 -> "0".
        """
        if amount == 0:
            return "0"

        sign = "-" if amount < 0 else ""
        int_part, frac = divmod(abs(amount), self.base)
        frac_str = str(frac).rjust(self.decimals, "0").rstrip("0") if self.decimals else ""

        if frac_str:
            return f"{sign}{int_part}.{frac_str}"
        return f"{sign}{int_part}"

    def format_fixed(self, amount: int, places: int = 2) -> str:
        """
        Format base units with exactly ``places`` fractional digits.

        Digits are padded or truncated, not rounded: 30555555555 -> "30.55".
        """
        if places < 0:
            raise ValueError("places must be >= 0")

        int_part, _, frac_part = self.format(amount).partition(".")
        if places == 0:
            return int_part
        return f"{int_part}.{(frac_part + '0' * places)[:places]}"

    def parse_raw(self, raw: str) -> int:
        """Parse an integer base-unit string as stored in the ledger; invalid input yields 0."""
        try:
            return int(str(raw).strip())
        except (TypeError, ValueError):
            return 0

    def units(self, whole: int) -> int:
        """Convert a whole number of tokens to base units."""
        return int(whole) * self.base

    @staticmethod
    def is_zero(amount: int) -> bool:
        return amount == 0

    @staticmethod
    def compare(a: int, b: int) -> int:
        """Return -1 if a < b, 0 if a == b, 1 if a > b."""
        if a < b:
            return -1
        if a > b:
            return 1
        return 0

    @staticmethod
    def add(a: int, b: int) -> int:
        return a + b

    @staticmethod
    def subtract(a: int, b: int) -> int:
        return a - b


# Default codec for the LINE token
line_codec = AmountCodec(LINE_DECIMALS)


def parse_line(text: str) -> int:
    return line_codec.parse(text)


def format_line(amount: int) -> str:
    return line_codec.format(amount)


def format_line_fixed(amount: int, places: int = 2) -> str:
    return line_codec.format_fixed(amount, places)
