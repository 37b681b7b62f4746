"""Domain services package."""

from .aggregation import build_allocation, build_chart_data, filter_months
from .derivation import derive_entries, derive_entry, derive_history_desc
from .finance import compute_net_worth_summary
from .fx import CurrencyConverter, RateSource, convert
from .normalization import (
    normalize_currency,
    normalize_liability_balance,
    normalize_month_key,
)
from .projection import (
    calculate_projection,
    default_savings_allocation,
    monthly_rate,
    validate_allocation,
    validate_projection_params,
)
from .validation import validate_balance_sign, validate_entry_fields, validate_month
from .value_change import calculate_value_change
from .wealth_sources import decompose_month

__all__ = [
    "build_allocation",
    "build_chart_data",
    "filter_months",
    "derive_entries",
    "derive_entry",
    "derive_history_desc",
    "compute_net_worth_summary",
    "CurrencyConverter",
    "RateSource",
    "convert",
    "normalize_currency",
    "normalize_liability_balance",
    "normalize_month_key",
    "calculate_projection",
    "default_savings_allocation",
    "monthly_rate",
    "validate_allocation",
    "validate_projection_params",
    "validate_balance_sign",
    "validate_entry_fields",
    "validate_month",
    "calculate_value_change",
    "decompose_month",
]
