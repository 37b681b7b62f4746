"""Domain constants for net worth analytics."""

from decimal import Decimal

from src.domain.models.accounts import Currency


BASE_CURRENCY = Currency.GBP

ALLOCATION_TOTAL = Decimal("100")
ALLOCATION_TOLERANCE = Decimal("0.01")

MAX_PROJECTION_MONTHS = 600

# Positional lookbacks into a most-recent-first history.
VALUE_PERIOD_OFFSETS = {
    "1M": 1,
    "3M": 3,
    "6M": 6,
    "1Y": 12,
}

SAVINGS_FROM_INCOME = "Savings from Income"
INTEREST_EARNED = "Interest Earned"
CAPITAL_GAINS = "Capital Gains"

WEALTH_SOURCE_KEYS = (SAVINGS_FROM_INCOME, INTEREST_EARNED, CAPITAL_GAINS)

UNCATEGORIZED = "Uncategorized"


__all__ = [
    "BASE_CURRENCY",
    "ALLOCATION_TOTAL",
    "ALLOCATION_TOLERANCE",
    "MAX_PROJECTION_MONTHS",
    "VALUE_PERIOD_OFFSETS",
    "SAVINGS_FROM_INCOME",
    "INTEREST_EARNED",
    "CAPITAL_GAINS",
    "WEALTH_SOURCE_KEYS",
    "UNCATEGORIZED",
]
