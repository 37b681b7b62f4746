"""Domain models package."""

from .accounts import (
    Account,
    AccountCategory,
    AccountType,
    Currency,
    DerivedEntry,
    EntryFields,
    MonthlyEntry,
)
from .finance import (
    AllocationSlice,
    ChartData,
    ChartPeriod,
    ChartQuery,
    ExchangeRateSnapshot,
    GroupSeriesPoint,
    NetWorthPoint,
    NetWorthSummary,
    OperationResult,
    SavingsRatePoint,
    StaleAccountsReport,
    StaleEntry,
    ValueChange,
    ValuePeriod,
    WaterfallStep,
    WealthSourceItem,
    WealthSourceMonth,
)
from .projection import (
    ProjectionParams,
    ProjectionPoint,
    ProjectionResult,
    ProjectionScenario,
)

__all__ = [
    "Account",
    "AccountCategory",
    "AccountType",
    "Currency",
    "DerivedEntry",
    "EntryFields",
    "MonthlyEntry",
    "AllocationSlice",
    "ChartData",
    "ChartPeriod",
    "ChartQuery",
    "ExchangeRateSnapshot",
    "GroupSeriesPoint",
    "NetWorthPoint",
    "NetWorthSummary",
    "OperationResult",
    "SavingsRatePoint",
    "StaleAccountsReport",
    "StaleEntry",
    "ValueChange",
    "ValuePeriod",
    "WaterfallStep",
    "WealthSourceItem",
    "WealthSourceMonth",
    "ProjectionParams",
    "ProjectionPoint",
    "ProjectionResult",
    "ProjectionScenario",
]
