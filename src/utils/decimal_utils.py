"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation


ZERO = Decimal("0")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Missing, blank and non-finite inputs collapse to zero so that arithmetic
    on partially entered data never yields NaN.

    Args:
        value: Raw numeric value from SQL, forms or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return ZERO
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return ZERO
    return result if result.is_finite() else ZERO


def round_percent(value: Decimal, places: int = 1) -> Decimal:
    """Round a percentage to a fixed number of decimal places."""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


__all__ = ["ZERO", "coerce_decimal", "round_percent"]
