"""Tests for the value-change calculator."""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from src.domain.models.finance import ValuePeriod
from src.domain.services.value_change import (
    calculate_value_change,
    find_comparison_index,
)


def _history(*pairs):
    return [
        SimpleNamespace(month=month, ending_balance=Decimal(balance))
        for month, balance in pairs
    ]


def test_one_month_compares_with_previous_position() -> None:
    """1M should compare with the next entry in the history."""
    history = _history(("2024-03", "1100"), ("2024-02", "1000"), ("2024-01", "800"))

    change = calculate_value_change(history, ValuePeriod.ONE_MONTH)

    assert change.absolute_change == Decimal("100")
    assert change.percentage_change == Decimal("10")


def test_offsets_are_positional_when_months_are_missing() -> None:
    """A gap should widen the window rather than shift to calendar months."""
    history = _history(("2024-03", "1100"), ("2024-01", "1000"))

    assert find_comparison_index(history, "1M") == 1
    assert calculate_value_change(history, "1M").absolute_change == Decimal("100")


def test_missing_comparison_point_uses_zero() -> None:
    """Without a comparison entry the whole value counts as change."""
    history = _history(("2024-03", "1100"), ("2024-02", "1000"))

    change = calculate_value_change(history, ValuePeriod.ONE_YEAR)

    assert change.absolute_change == Decimal("1100")
    assert change.percentage_change == Decimal("0")


def test_ytd_compares_with_january_of_the_reference_year() -> None:
    """YTD should use the January entry of the reference year."""
    history = _history(("2024-03", "1200"), ("2024-02", "1100"), ("2024-01", "1000"))

    change = calculate_value_change(history, "ytd", today=date(2024, 3, 15))

    assert change.absolute_change == Decimal("200")
    assert change.percentage_change == Decimal("20")
    assert find_comparison_index(history, "YTD", today=date(2025, 1, 5)) is None


def test_all_compares_with_oldest_entry() -> None:
    """ALL should use the oldest entry in the history."""
    history = _history(("2024-03", "150"), ("2024-02", "120"), ("2023-01", "100"))

    change = calculate_value_change(history, ValuePeriod.ALL)

    assert change.absolute_change == Decimal("50")
    assert change.percentage_change == Decimal("50")


def test_empty_history_returns_zero_change() -> None:
    """An empty history should never raise."""
    change = calculate_value_change([], ValuePeriod.ONE_MONTH)

    assert change.absolute_change == Decimal("0")
    assert change.percentage_change == Decimal("0")
