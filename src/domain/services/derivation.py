"""Read-time derivation of cash flow and account growth.

Derived figures are recomputed from stored balances on every read. Editing
an older month therefore never leaves later months with stale growth.

The first stored month nets against a previous balance of 0, so its growth
equals its ending balance minus its cash flow. That value is not a real
growth signal and charts should treat it with care.
"""

from collections.abc import Iterable
from dataclasses import replace
from decimal import Decimal

from src.domain.models.accounts import DerivedEntry, MonthlyEntry
from src.utils.decimal_utils import ZERO, coerce_decimal


def _clean(entry: MonthlyEntry) -> MonthlyEntry:
    return replace(
        entry,
        ending_balance=coerce_decimal(entry.ending_balance),
        cash_in=coerce_decimal(entry.cash_in),
        cash_out=coerce_decimal(entry.cash_out),
        income=coerce_decimal(entry.income),
        internal_transfers_out=coerce_decimal(entry.internal_transfers_out),
        debt_payments=coerce_decimal(entry.debt_payments),
        expenditure=coerce_decimal(entry.expenditure),
    )


def derive_entry(entry: MonthlyEntry, previous_balance) -> DerivedEntry:
    """Derive cash flow and growth for one entry.

    Args:
        entry: Stored monthly entry.
        previous_balance: Ending balance of the prior stored entry, or 0.

    Returns:
        DerivedEntry: Entry with cash_flow and account_growth filled in.
    """
    cleaned = _clean(entry)
    previous = coerce_decimal(previous_balance)
    cash_flow = cleaned.cash_in - cleaned.cash_out
    net_change = cleaned.ending_balance - previous
    return DerivedEntry(
        entry=cleaned,
        previous_balance=previous,
        cash_flow=cash_flow,
        account_growth=net_change - cash_flow,
    )


def derive_entries(entries: Iterable[MonthlyEntry]) -> list[DerivedEntry]:
    """Derive every entry of one account, oldest first.

    Args:
        entries: Entries for a single account, in any order.

    Returns:
        list[DerivedEntry]: Derived entries sorted by month ascending.
    """
    ordered = sorted(entries, key=lambda entry: entry.month)
    derived: list[DerivedEntry] = []
    previous_balance: Decimal = ZERO
    for entry in ordered:
        item = derive_entry(entry, previous_balance)
        derived.append(item)
        previous_balance = item.ending_balance
    return derived


def derive_history_desc(entries: Iterable[MonthlyEntry]) -> list[DerivedEntry]:
    """Derive entries and return them most recent first."""
    return list(reversed(derive_entries(entries)))


def index_by_month(derived: Iterable[DerivedEntry]) -> dict[str, DerivedEntry]:
    return {item.month: item for item in derived}


__all__ = [
    "derive_entry",
    "derive_entries",
    "derive_history_desc",
    "index_by_month",
]
