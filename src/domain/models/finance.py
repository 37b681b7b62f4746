"""Domain models for financial aggregates."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum

from src.domain.models.accounts import Account, AccountType, Currency


class ValuePeriod(str, Enum):
    """Lookback periods for the value-change calculator."""

    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"
    YTD = "YTD"
    ALL = "ALL"


class ChartPeriod(str, Enum):
    """Time windows for chart series."""

    YTD = "YTD"
    ONE_YEAR = "1Y"
    ALL = "all"


@dataclass(frozen=True)
class ValueChange:
    """Change in value over a lookback period."""

    absolute_change: Decimal
    percentage_change: Decimal


@dataclass(frozen=True)
class NetWorthSummary:
    """Summary of net worth figures.

    Attributes:
        asset_total: Sum of asset balances.
        liability_total: Sum of amounts owed on liabilities.
        net_worth: Assets minus liabilities.
        currency_code: Currency all figures are expressed in.
        month: Month of the most recent entry used, if any.
        rates_pending: True when a conversion fell back to raw amounts.
        first_month: Earliest month with any entry, if any.
        first_net_worth: Net worth folded at ``first_month``.
    """

    asset_total: Decimal
    liability_total: Decimal
    net_worth: Decimal
    currency_code: str
    month: str | None = None
    rates_pending: bool = False
    first_month: str | None = None
    first_net_worth: Decimal | None = None


@dataclass(frozen=True)
class CurrencyAmount:
    """Unconverted total held in one currency."""

    currency: Currency
    amount: Decimal


@dataclass(frozen=True)
class FinancialMetrics:
    """Headline income, spending and net worth figures.

    YTD figures cover stored months of the reference year. Percentages are
    None when their baseline is zero or missing.

    Attributes:
        currency_code: Currency all converted figures are expressed in.
        latest_month: Most recent month with any entry, if any.
        net_worth: Current net worth.
        net_worth_change_ytd: Percent change since the first month of the year.
        net_worth_change_all_time: Percent change since the first month.
        income_ytd: Converted income for the year.
        income_all_time: Converted income over every month.
        expenditure_ytd: Converted expenditure for the year.
        expenditure_all_time: Converted expenditure over every month.
        savings_ytd: Income minus expenditure for the year.
        savings_all_time: Income minus expenditure over every month.
        savings_rate_ytd: Savings as a percent of income for the year.
        savings_rate_all_time: Savings as a percent of all income.
        income_breakdown_ytd: Unconverted income per currency for the year.
        income_breakdown_all_time: Unconverted income per currency.
        expenditure_breakdown_ytd: Unconverted spending per currency for the
            year.
        expenditure_breakdown_all_time: Unconverted spending per currency.
        rates_pending: True when a conversion fell back to raw amounts.
    """

    currency_code: str
    latest_month: str | None
    net_worth: Decimal
    net_worth_change_ytd: Decimal | None
    net_worth_change_all_time: Decimal | None
    income_ytd: Decimal
    income_all_time: Decimal
    expenditure_ytd: Decimal
    expenditure_all_time: Decimal
    savings_ytd: Decimal
    savings_all_time: Decimal
    savings_rate_ytd: Decimal | None
    savings_rate_all_time: Decimal | None
    income_breakdown_ytd: tuple[CurrencyAmount, ...] = ()
    income_breakdown_all_time: tuple[CurrencyAmount, ...] = ()
    expenditure_breakdown_ytd: tuple[CurrencyAmount, ...] = ()
    expenditure_breakdown_all_time: tuple[CurrencyAmount, ...] = ()
    rates_pending: bool = False


@dataclass(frozen=True)
class WealthSourceItem:
    """Single account contribution to a wealth-source bucket."""

    account_id: str
    name: str
    account_type: AccountType
    amount: Decimal
    owner: str


@dataclass(frozen=True)
class WealthSourceMonth:
    """Growth attribution for one month.

    Bucket totals are floored at 0 for savings and interest; capital gains
    keep their sign. The breakdown lists hold the unfloored per-account
    amounts for drill-down.
    """

    month: str
    label: str
    savings_from_income: Decimal
    interest_earned: Decimal
    capital_gains: Decimal
    total_income: Decimal
    savings_rate: Decimal
    breakdown: dict[str, list[WealthSourceItem]] = field(default_factory=dict)


@dataclass(frozen=True)
class NetWorthPoint:
    """Net worth for one month, split into assets and liabilities."""

    month: str
    label: str
    net_worth: Decimal
    assets: Decimal
    liabilities: Decimal


@dataclass(frozen=True)
class GroupSeriesPoint:
    """Signed balances for one month keyed by account, type or category."""

    month: str
    label: str
    values: dict[str, Decimal]


@dataclass(frozen=True)
class SavingsRatePoint:
    """Savings rate for one month."""

    month: str
    label: str
    total_income: Decimal
    savings: Decimal
    savings_rate: Decimal


@dataclass(frozen=True)
class AllocationSlice:
    """Share of a positive group total within an allocation view."""

    group: str
    amount: Decimal
    share: Decimal


@dataclass(frozen=True)
class WaterfallStep:
    """Month-over-month net worth bridge.

    starting_balance + savings_from_income + interest_earned + capital_gains
    + other == ending_balance.
    """

    month: str
    label: str
    starting_balance: Decimal
    savings_from_income: Decimal
    interest_earned: Decimal
    capital_gains: Decimal
    other: Decimal
    ending_balance: Decimal


@dataclass(frozen=True)
class ChartQuery:
    """Filters and display options for chart series.

    Empty filter collections mean "no filtering" on that dimension; an owner
    of ``"all"`` disables the owner filter.
    """

    time_period: ChartPeriod = ChartPeriod.ALL
    owner: str = "all"
    account_ids: tuple[str, ...] = ()
    account_types: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()
    target_currency: Currency = Currency.GBP
    allocation_month: str | None = None
    today: date | None = None


@dataclass(frozen=True)
class ChartData:
    """Every chart series derived for a query."""

    net_worth_data: list[NetWorthPoint]
    account_data: list[GroupSeriesPoint]
    account_type_data: list[GroupSeriesPoint]
    category_data: list[GroupSeriesPoint]
    source_data: list[WealthSourceMonth]
    assets_liabilities_data: list[NetWorthPoint]
    savings_rate_data: list[SavingsRatePoint]
    waterfall_data: list[WaterfallStep]
    type_allocation: list[AllocationSlice]
    category_allocation: list[AllocationSlice]
    accounts: list[Account]
    currency_code: str
    rates_pending: bool = False

    @classmethod
    def empty(cls, currency_code: str) -> "ChartData":
        return cls(
            net_worth_data=[],
            account_data=[],
            account_type_data=[],
            category_data=[],
            source_data=[],
            assets_liabilities_data=[],
            savings_rate_data=[],
            waterfall_data=[],
            type_allocation=[],
            category_allocation=[],
            accounts=[],
            currency_code=currency_code,
        )


@dataclass(frozen=True)
class StaleEntry:
    """Month an open account is missing an entry for."""

    account_id: str
    name: str
    account_type: AccountType
    month: str


@dataclass(frozen=True)
class StaleAccountsReport:
    """Accounts that have fallen behind on monthly entries."""

    stale_entries: list[StaleEntry]
    missing_account_count: int
    missing_month_count: int


@dataclass(frozen=True)
class ExchangeRateSnapshot:
    """GBP-based rates valid at a month end."""

    date: str
    rates: dict[Currency, Decimal]


@dataclass(frozen=True)
class OperationResult:
    """Tagged outcome of a mutating or I/O-bound operation."""

    success: bool
    error: str | None = None
    value: object | None = None


__all__ = [
    "ValuePeriod",
    "ChartPeriod",
    "ValueChange",
    "NetWorthSummary",
    "CurrencyAmount",
    "FinancialMetrics",
    "WealthSourceItem",
    "WealthSourceMonth",
    "NetWorthPoint",
    "GroupSeriesPoint",
    "SavingsRatePoint",
    "AllocationSlice",
    "WaterfallStep",
    "ChartQuery",
    "ChartData",
    "StaleEntry",
    "StaleAccountsReport",
    "ExchangeRateSnapshot",
    "OperationResult",
]
