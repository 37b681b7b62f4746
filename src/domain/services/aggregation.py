"""Chart series built by folding derived entries across accounts.

Every amount is converted into the query's target currency at the entry's
own month before it is summed. Liabilities are stored as positive amounts
owed and always subtract from net worth.
"""

from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal
from logging import Logger

from src.domain.constants import (
    CAPITAL_GAINS,
    INTEREST_EARNED,
    SAVINGS_FROM_INCOME,
    UNCATEGORIZED,
)
from src.domain.models.accounts import Account, DerivedEntry, MonthlyEntry
from src.domain.models.finance import (
    AllocationSlice,
    ChartData,
    ChartPeriod,
    ChartQuery,
    GroupSeriesPoint,
    NetWorthPoint,
    SavingsRatePoint,
    WaterfallStep,
    WealthSourceMonth,
)
from src.domain.policies.account_filters import filter_accounts
from src.domain.policies.account_types import account_label, is_liability
from src.domain.services.derivation import derive_entries, index_by_month
from src.domain.services.fx import CurrencyConverter, RateSource
from src.domain.services.normalization import (
    month_label,
    month_start,
    normalize_liability_balance,
)
from src.domain.services.wealth_sources import (
    account_contributions,
    decompose_month,
)
from src.utils.decimal_utils import ZERO


DerivedIndex = dict[str, dict[str, DerivedEntry]]


def filter_months(
    months: Iterable[str],
    period: ChartPeriod | str,
    today: date | None = None,
) -> list[str]:
    """Return the sorted months inside the chart window.

    Args:
        months: ``YYYY-MM`` months with data.
        period: YTD, 1Y or all.
        today: Reference date; defaults to today.

    Returns:
        list[str]: Months in ascending order.
    """
    ordered = sorted(set(months))
    reference = today or date.today()
    key = period.value if isinstance(period, ChartPeriod) else str(period)
    if key == ChartPeriod.YTD.value:
        prefix = f"{reference.year:04d}"
        return [month for month in ordered if month.startswith(prefix)]
    if key == ChartPeriod.ONE_YEAR.value:
        try:
            one_year_ago = reference.replace(year=reference.year - 1)
        except ValueError:
            one_year_ago = reference.replace(year=reference.year - 1, day=28)
        return [
            month for month in ordered if month_start(month) >= one_year_ago
        ]
    return ordered


def signed_balance(
    account: Account,
    derived: DerivedEntry,
    converter: CurrencyConverter,
) -> Decimal:
    """Return the converted balance as a net worth contribution."""
    balance = normalize_liability_balance(
        account.account_type, derived.ending_balance
    )
    converted = converter.to_target(balance, account.currency, derived.month)
    return -converted if is_liability(account.account_type) else converted


def _net_worth_point(
    month: str,
    accounts: Iterable[Account],
    derived_index: DerivedIndex,
    converter: CurrencyConverter,
) -> NetWorthPoint:
    assets = ZERO
    liabilities = ZERO
    for account in accounts:
        derived = derived_index[account.id].get(month)
        if derived is None:
            continue
        contribution = signed_balance(account, derived, converter)
        if is_liability(account.account_type):
            liabilities -= contribution
        else:
            assets += contribution
    return NetWorthPoint(
        month=month,
        label=month_label(month),
        net_worth=assets - liabilities,
        assets=assets,
        liabilities=liabilities,
    )


def _group_point(
    month: str,
    accounts: list[Account],
    derived_index: DerivedIndex,
    converter: CurrencyConverter,
    group_of,
) -> GroupSeriesPoint:
    values: dict[str, Decimal] = {}
    for account in accounts:
        group = group_of(account)
        values.setdefault(group, ZERO)
        derived = derived_index[account.id].get(month)
        if derived is None:
            continue
        values[group] += signed_balance(account, derived, converter)
    return GroupSeriesPoint(month=month, label=month_label(month), values=values)


def _account_point(
    month: str,
    accounts: list[Account],
    derived_index: DerivedIndex,
    converter: CurrencyConverter,
) -> GroupSeriesPoint:
    values: dict[str, Decimal] = {}
    for account in accounts:
        derived = derived_index[account.id].get(month)
        if derived is None:
            continue
        values[account_label(account)] = signed_balance(
            account, derived, converter
        )
    return GroupSeriesPoint(month=month, label=month_label(month), values=values)


def build_allocation(values: Mapping[str, Decimal]) -> list[AllocationSlice]:
    """Return positive groups with their share of the positive total.

    Args:
        values: Signed totals keyed by group.

    Returns:
        list[AllocationSlice]: Slices sorted by amount, largest first.
    """
    positive = {group: amount for group, amount in values.items() if amount > 0}
    total = sum(positive.values(), ZERO)
    if total == 0:
        return []
    slices = [
        AllocationSlice(
            group=group,
            amount=amount,
            share=amount / total * Decimal("100"),
        )
        for group, amount in positive.items()
    ]
    return sorted(slices, key=lambda item: (-item.amount, item.group))


def build_waterfall_step(
    month: str,
    previous_month: str | None,
    accounts: list[Account],
    derived_index: DerivedIndex,
    converter: CurrencyConverter,
) -> WaterfallStep:
    """Bridge net worth from the previous stored month to ``month``.

    Each account's change is split into its wealth-source contributions and
    a residual (transfers, spending, FX moves), then summed across accounts.
    """
    starting = ZERO
    ending = ZERO
    buckets = {SAVINGS_FROM_INCOME: ZERO, INTEREST_EARNED: ZERO, CAPITAL_GAINS: ZERO}
    for account in accounts:
        history = derived_index[account.id]
        current = history.get(month)
        previous = history.get(previous_month) if previous_month else None
        if previous is not None:
            starting += signed_balance(account, previous, converter)
        if current is None:
            continue
        ending += signed_balance(account, current, converter)
        for key, amount in account_contributions(
            account, current, converter
        ).items():
            buckets[key] += amount

    other = ending - starting - sum(buckets.values(), ZERO)
    return WaterfallStep(
        month=month,
        label=month_label(month),
        starting_balance=starting,
        savings_from_income=buckets[SAVINGS_FROM_INCOME],
        interest_earned=buckets[INTEREST_EARNED],
        capital_gains=buckets[CAPITAL_GAINS],
        other=other,
        ending_balance=ending,
    )


def _savings_rate_point(source: WealthSourceMonth) -> SavingsRatePoint:
    return SavingsRatePoint(
        month=source.month,
        label=source.label,
        total_income=source.total_income,
        savings=source.savings_from_income,
        savings_rate=source.savings_rate,
    )


def build_chart_data(
    accounts: Iterable[Account],
    entries_by_account: Mapping[str, Iterable[MonthlyEntry]],
    query: ChartQuery,
    rate_source: RateSource,
    logger: Logger | None = None,
) -> ChartData:
    """Build every chart series for a query.

    Args:
        accounts: All known accounts, open and closed.
        entries_by_account: Stored entries keyed by account id, any order.
        query: Filters, window and display currency.
        rate_source: Source of GBP-based monthly rates.
        logger: Optional logger for pending-rate warnings.

    Returns:
        ChartData: Series for the months inside the query window.
    """
    included = filter_accounts(accounts, query)
    converter = CurrencyConverter(rate_source, query.target_currency, logger)
    derived_index: DerivedIndex = {
        account.id: index_by_month(
            derive_entries(entries_by_account.get(account.id, ()))
        )
        for account in included
    }
    all_months = sorted(
        {month for history in derived_index.values() for month in history}
    )
    window = filter_months(all_months, query.time_period, query.today)
    previous_of = {
        month: all_months[index - 1] if index > 0 else None
        for index, month in enumerate(all_months)
    }

    net_worth_data = [
        _net_worth_point(month, included, derived_index, converter)
        for month in window
    ]
    account_data = [
        _account_point(month, included, derived_index, converter)
        for month in window
    ]
    account_type_data = [
        _group_point(
            month,
            included,
            derived_index,
            converter,
            lambda account: account.account_type.value,
        )
        for month in window
    ]
    category_data = [
        _group_point(
            month,
            included,
            derived_index,
            converter,
            lambda account: (
                account.category.value if account.category else UNCATEGORIZED
            ),
        )
        for month in window
    ]
    source_data = [
        decompose_month(
            month,
            {
                account.id: derived_index[account.id][month]
                for account in included
                if month in derived_index[account.id]
            },
            included,
            converter,
        )
        for month in window
    ]
    waterfall_data = [
        build_waterfall_step(
            month, previous_of[month], included, derived_index, converter
        )
        for month in window
    ]

    allocation_month = query.allocation_month or (window[-1] if window else None)
    type_values = next(
        (p.values for p in account_type_data if p.month == allocation_month),
        {},
    )
    category_values = next(
        (p.values for p in category_data if p.month == allocation_month),
        {},
    )

    return ChartData(
        net_worth_data=net_worth_data,
        account_data=account_data,
        account_type_data=account_type_data,
        category_data=category_data,
        source_data=source_data,
        assets_liabilities_data=list(net_worth_data),
        savings_rate_data=[_savings_rate_point(item) for item in source_data],
        waterfall_data=waterfall_data,
        type_allocation=build_allocation(type_values),
        category_allocation=build_allocation(category_values),
        accounts=included,
        currency_code=converter.target_currency.value,
        rates_pending=converter.is_pending,
    )


__all__ = [
    "filter_months",
    "signed_balance",
    "build_allocation",
    "build_waterfall_step",
    "build_chart_data",
]
