"""Validation helpers shared across the ledger core and its interfaces."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from .exceptions import ValidationError

__all__ = [
    "DATE_FORMAT_HINT",
    "YEAR_MONTH_FORMAT_HINT",
    "is_numeric",
    "is_valid_date",
    "parse_amount",
    "trim",
    "validate_amount",
    "validate_date",
    "validate_limit",
    "validate_required_str",
    "validate_year_month",
]

DATE_FORMAT_HINT = "YYYY-MM-DD"
YEAR_MONTH_FORMAT_HINT = "YYYY-MM"

MIN_YEAR = 1900
MAX_YEAR = 2100

WHITESPACE = " \t\r\n"

# Plain decimal or scientific notation, ASCII digits only. Decimal() on its own
# would also take underscores, non-ASCII digits, NaN and Infinity.
NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def trim(value: str) -> str:
    """Strip leading and trailing spaces, tabs, carriage returns and newlines."""
    return value.strip(WHITESPACE)


def parse_amount(raw: object) -> Optional[Decimal]:
    """Parse ``raw`` as a decimal number, returning ``None`` when it is not one.

    The whole trimmed string must be numeric: ``"12abc"`` is rejected rather
    than read as ``12``.
    """
    if isinstance(raw, Decimal):
        return raw if raw.is_finite() else None
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        raw = str(raw)
    if not isinstance(raw, str):
        return None
    text = trim(raw)
    if not NUMBER_PATTERN.fullmatch(text):
        return None
    try:
        return Decimal(text)
    except InvalidOperation:
        return None


def is_numeric(value: str) -> bool:
    return parse_amount(value) is not None


def is_valid_date(value: str) -> bool:
    """Return True when ``value`` looks like ``YYYY-MM-DD`` within supported ranges.

    Only the ranges of each component are checked; the day is not compared
    against the length of the month, so ``2024-02-31`` is accepted.
    """
    if not isinstance(value, str) or len(value) != 10:
        return False
    if value[4] != "-" or value[7] != "-":
        return False
    for position, char in enumerate(value):
        if position in (4, 7):
            continue
        if char not in "0123456789":
            return False

    year = int(value[0:4])
    month = int(value[5:7])
    day = int(value[8:10])
    if not 1 <= month <= 12:
        return False
    if not 1 <= day <= 31:
        return False
    return MIN_YEAR <= year <= MAX_YEAR


def validate_date(value: object, field: str = "date") -> str:
    if not isinstance(value, str) or not is_valid_date(value):
        raise ValidationError(f"{field} must be a valid date in {DATE_FORMAT_HINT} format")
    return value


def validate_year_month(value: object) -> str:
    if not isinstance(value, str) or len(value) != 7 or value[4] != "-":
        raise ValidationError(f"month must use the {YEAR_MONTH_FORMAT_HINT} format")
    return value


def validate_required_str(value: object, field: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    trimmed = trim(value)
    if not trimmed:
        raise ValidationError(f"{field} cannot be empty")
    return trimmed


def validate_amount(value: object, field: str = "amount") -> Decimal:
    amount = parse_amount(value)
    if amount is None:
        raise ValidationError(f"{field} must be a numeric value")
    return amount


def validate_limit(value: object) -> Decimal:
    limit = validate_amount(value, "limit")
    if limit < 0:
        raise ValidationError("limit cannot be negative")
    return limit
