"""Domain package for business rules and core models."""

from .constants import BASE_CURRENCY
from .errors import PersistenceError, ValidationError
from .models import (
    Account,
    AccountCategory,
    AccountType,
    ChartData,
    ChartQuery,
    Currency,
    MonthlyEntry,
    NetWorthSummary,
    OperationResult,
)
from .policies import is_valid_account_name
from .services import (
    build_chart_data,
    calculate_projection,
    calculate_value_change,
    compute_net_worth_summary,
    convert,
    derive_entries,
)

__all__ = [
    "BASE_CURRENCY",
    "PersistenceError",
    "ValidationError",
    "Account",
    "AccountCategory",
    "AccountType",
    "ChartData",
    "ChartQuery",
    "Currency",
    "MonthlyEntry",
    "NetWorthSummary",
    "OperationResult",
    "is_valid_account_name",
    "build_chart_data",
    "calculate_projection",
    "calculate_value_change",
    "compute_net_worth_summary",
    "convert",
    "derive_entries",
]
