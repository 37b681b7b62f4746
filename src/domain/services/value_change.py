"""Value change of an account over a lookback period."""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from src.domain.constants import VALUE_PERIOD_OFFSETS
from src.domain.models.finance import ValueChange, ValuePeriod
from src.utils.decimal_utils import ZERO, coerce_decimal


def _period_value(period: ValuePeriod | str) -> str:
    if isinstance(period, ValuePeriod):
        return period.value
    return str(period).strip().upper()


def find_comparison_index(
    history_desc: Sequence,
    period: ValuePeriod | str,
    today: date | None = None,
) -> int | None:
    """Return the index of the comparison entry, or None when absent.

    Offsets for 1M/3M/6M/1Y count array positions, not calendar months: a
    missing month in the history widens the window the label implies.

    Args:
        history_desc: Entries ordered most recent first.
        period: Lookback period.
        today: Reference date for YTD; defaults to today.

    Returns:
        int | None: Position of the comparison entry in ``history_desc``.
    """
    if not history_desc:
        return None
    key = _period_value(period)
    if key in VALUE_PERIOD_OFFSETS:
        offset = VALUE_PERIOD_OFFSETS[key]
        return offset if offset < len(history_desc) else None
    if key == ValuePeriod.YTD.value:
        january = f"{(today or date.today()).year}-01"
        for index, entry in enumerate(history_desc):
            if entry.month.startswith(january):
                return index
        return None
    return len(history_desc) - 1


def calculate_value_change(
    history_desc: Sequence,
    period: ValuePeriod | str,
    today: date | None = None,
) -> ValueChange:
    """Compute absolute and percentage change over a lookback period.

    Never raises: empty histories and missing comparison points fall back to
    a previous value of 0.

    Args:
        history_desc: Entries exposing ``month`` and ``ending_balance``,
            ordered most recent first.
        period: One of 1M, 3M, 6M, 1Y, YTD, ALL.
        today: Reference date for YTD; defaults to today.

    Returns:
        ValueChange: Absolute and percentage change.
    """
    if not history_desc:
        return ValueChange(absolute_change=ZERO, percentage_change=ZERO)

    current_value = coerce_decimal(history_desc[0].ending_balance)
    index = find_comparison_index(history_desc, period, today)
    previous_value = (
        coerce_decimal(history_desc[index].ending_balance)
        if index is not None
        else ZERO
    )
    absolute_change = current_value - previous_value
    percentage_change = (
        ZERO
        if previous_value == 0
        else absolute_change / previous_value * Decimal("100")
    )
    return ValueChange(
        absolute_change=absolute_change,
        percentage_change=percentage_change,
    )


__all__ = ["find_comparison_index", "calculate_value_change"]
