"""Tests for read-time derivation of cash flow and growth."""

from decimal import Decimal

from src.domain.models.accounts import MonthlyEntry
from src.domain.services.derivation import (
    derive_entries,
    derive_entry,
    derive_history_desc,
    index_by_month,
)


def _entry(month: str, balance: str, cash_in: str = "0", cash_out: str = "0"):
    return MonthlyEntry(
        account_id="acc-1",
        month=month,
        ending_balance=Decimal(balance),
        cash_in=Decimal(cash_in),
        cash_out=Decimal(cash_out),
    )


def test_derive_entry_splits_change_into_cash_flow_and_growth() -> None:
    """Growth should be the balance change not explained by cash flow."""
    derived = derive_entry(_entry("2024-02", "1200", cash_in="150"), Decimal("1000"))

    assert derived.cash_flow == Decimal("150")
    assert derived.account_growth == Decimal("50")
    assert derived.previous_balance == Decimal("1000")


def test_derive_entries_sorts_and_chains_previous_balances() -> None:
    """Entries should be derived oldest first against the prior stored month."""
    derived = derive_entries(
        [
            _entry("2024-03", "1300", cash_out="20"),
            _entry("2024-01", "1000"),
            _entry("2024-02", "1200", cash_in="150"),
        ]
    )

    assert [item.month for item in derived] == ["2024-01", "2024-02", "2024-03"]
    assert derived[0].previous_balance == Decimal("0")
    assert derived[0].account_growth == Decimal("1000")
    assert derived[1].account_growth == Decimal("50")
    assert derived[2].cash_flow == Decimal("-20")
    assert derived[2].account_growth == Decimal("120")


def test_editing_an_older_month_changes_the_next_growth() -> None:
    """Later growth should follow edits to earlier balances."""
    before = derive_entries([_entry("2024-01", "1000"), _entry("2024-02", "1200")])
    after = derive_entries([_entry("2024-01", "900"), _entry("2024-02", "1200")])

    assert before[1].account_growth == Decimal("200")
    assert after[1].account_growth == Decimal("300")


def test_missing_numeric_fields_are_treated_as_zero() -> None:
    """None values stored for optional fields should not break derivation."""
    entry = MonthlyEntry(
        account_id="acc-1",
        month="2024-01",
        ending_balance=Decimal("10"),
        cash_in=None,
        cash_out=None,
    )

    derived = derive_entry(entry, None)

    assert derived.cash_flow == Decimal("0")
    assert derived.account_growth == Decimal("10")


def test_history_helpers() -> None:
    """Descending history and month index should cover every entry."""
    entries = [_entry("2024-01", "1"), _entry("2024-02", "2")]

    history = derive_history_desc(entries)
    index = index_by_month(history)

    assert [item.month for item in history] == ["2024-02", "2024-01"]
    assert set(index) == {"2024-01", "2024-02"}


def test_worked_example_growth_per_month() -> None:
    """Balances 1000, 2000 and 1800 then 1300, 2000 and 1900 grow 800 then 200."""
    derived = derive_entries(
        [
            _entry("2024-01", "1000", cash_in="2000", cash_out="1800"),
            _entry("2024-02", "1300", cash_in="2000", cash_out="1900"),
        ]
    )

    assert derived[0].cash_flow == Decimal("200")
    assert derived[0].account_growth == Decimal("800")
    assert derived[1].cash_flow == Decimal("100")
    assert derived[1].account_growth == Decimal("200")
