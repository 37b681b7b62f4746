"""Domain normalization helpers."""

import calendar
import re
from datetime import date
from decimal import Decimal

from src.domain.models.accounts import AccountType, Currency
from src.domain.policies.account_types import is_liability


_MONTH_KEY = re.compile(r"^(\d{4})-(\d{2})$")
_DATE_KEY = re.compile(r"^(\d{4})-(\d{2})-\d{2}$")


def normalize_month_key(value: str) -> str:
    """Normalize ``YYYY-MM`` or ``YYYY-MM-DD`` values to ``YYYY-MM``.

    Args:
        value: Raw month or date string.

    Returns:
        str: Month key; unrecognized input is returned stripped.
    """
    cleaned = value.strip()
    if _DATE_KEY.match(cleaned):
        return cleaned[:7]
    return cleaned


def is_month_key(value: str) -> bool:
    """Return True for a well-formed ``YYYY-MM`` key with month 01-12."""
    match = _MONTH_KEY.match(value or "")
    if not match:
        return False
    return 1 <= int(match.group(2)) <= 12


def month_key(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def month_start(month: str) -> date:
    """Return the first day of a ``YYYY-MM`` month."""
    year, month_number = month.split("-")
    return date(int(year), int(month_number), 1)


def last_day_of_month(month: str) -> str:
    """Return the ``YYYY-MM-DD`` last day of a ``YYYY-MM`` month."""
    start = month_start(month)
    last = calendar.monthrange(start.year, start.month)[1]
    return f"{start.year:04d}-{start.month:02d}-{last:02d}"


def add_months(month: str, count: int) -> str:
    """Shift a ``YYYY-MM`` key by ``count`` months."""
    start = month_start(month)
    index = start.year * 12 + (start.month - 1) + count
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def month_range(start: str, end: str) -> list[str]:
    """Return every ``YYYY-MM`` key from ``start`` to ``end`` inclusive."""
    months: list[str] = []
    current = start
    while current <= end:
        months.append(current)
        current = add_months(current, 1)
    return months


def last_completed_month(today: date) -> str:
    """Return the month before the one ``today`` falls in."""
    return add_months(month_key(today), -1)


def month_label(month: str) -> str:
    """Return a short chart label such as ``"Jan 2024"``."""
    start = month_start(month)
    return f"{calendar.month_abbr[start.month]} {start.year}"


def normalize_currency(value: Currency | str | None) -> Currency:
    """Return a Currency, defaulting to GBP for missing values."""
    if isinstance(value, Currency):
        return value
    if not value:
        return Currency.GBP
    return Currency(value.strip().upper())


def normalize_liability_balance(
    account_type: AccountType | str,
    balance: Decimal,
) -> Decimal:
    """Store liabilities as a positive amount owed.

    Args:
        account_type: Type of the account the balance belongs to.
        balance: Raw balance as entered or stored.

    Returns:
        Decimal: abs(balance) for liabilities, balance otherwise.
    """
    if is_liability(account_type):
        return abs(balance)
    return balance


__all__ = [
    "normalize_month_key",
    "is_month_key",
    "month_key",
    "month_start",
    "last_day_of_month",
    "add_months",
    "month_range",
    "last_completed_month",
    "month_label",
    "normalize_currency",
    "normalize_liability_balance",
]
