"""Domain services for net worth totals."""

from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal
from logging import Logger

from src.domain.models.accounts import Account, Currency, MonthlyEntry
from src.domain.models.finance import (
    CurrencyAmount,
    FinancialMetrics,
    NetWorthSummary,
)
from src.domain.policies.account_types import is_liability, shows_income_fields
from src.domain.services.derivation import derive_entries
from src.domain.services.fx import CurrencyConverter, RateSource
from src.domain.services.normalization import normalize_liability_balance
from src.domain.services.validation import validate_balance_sign
from src.utils.decimal_utils import ZERO, coerce_decimal, round_percent


_FLOWS = ("income", "expenditure")
_SCOPES = ("ytd", "all_time")


def _fold(
    pairs: Iterable[tuple[Account, MonthlyEntry]],
    converter: CurrencyConverter,
    logger: Logger | None,
) -> tuple[Decimal, Decimal]:
    asset_total = ZERO
    liability_total = ZERO
    for account, entry in pairs:
        balance = coerce_decimal(entry.ending_balance)
        if logger is not None:
            validate_balance_sign(account.account_type, balance, logger)
        balance = normalize_liability_balance(account.account_type, balance)
        converted = converter.to_target(balance, account.currency, entry.month)
        if is_liability(account.account_type):
            liability_total += converted
        else:
            asset_total += converted
    return asset_total, liability_total


def compute_net_worth_summary(
    accounts: Iterable[Account],
    entries_by_account: Mapping[str, Iterable[MonthlyEntry]],
    *,
    rate_source: RateSource,
    target_currency: Currency | str,
    logger: Logger | None = None,
) -> NetWorthSummary:
    """Compute current net worth from each account's latest entry.

    Closed accounts are skipped for the current figures but still count
    towards the first-month net worth, which folds every account that has an
    entry in the earliest stored month.

    Args:
        accounts: Known accounts.
        entries_by_account: Stored entries keyed by account id.
        rate_source: Source of GBP-based rates.
        target_currency: Display currency.
        logger: Logger used for warnings.

    Returns:
        NetWorthSummary: Asset, liability and net worth totals.
    """
    converter = CurrencyConverter(rate_source, target_currency, logger)
    latest: list[tuple[Account, MonthlyEntry]] = []
    first_candidates: list[tuple[Account, MonthlyEntry]] = []
    for account in accounts:
        history = derive_entries(entries_by_account.get(account.id, ()))
        if not history:
            continue
        first_candidates.append((account, history[0].entry))
        if not account.is_closed:
            latest.append((account, history[-1].entry))

    asset_total, liability_total = _fold(latest, converter, logger)
    latest_month = max((entry.month for _, entry in latest), default=None)

    first_month = min(
        (entry.month for _, entry in first_candidates), default=None
    )
    first_net_worth = None
    if first_month is not None:
        first_assets, first_liabilities = _fold(
            [pair for pair in first_candidates if pair[1].month == first_month],
            converter,
            None,
        )
        first_net_worth = first_assets - first_liabilities

    return NetWorthSummary(
        asset_total=asset_total,
        liability_total=liability_total,
        net_worth=asset_total - liability_total,
        currency_code=converter.target_currency.value,
        month=latest_month,
        rates_pending=converter.is_pending,
        first_month=first_month,
        first_net_worth=first_net_worth,
    )


def _net_worth_at(
    month: str,
    accounts: Iterable[Account],
    entries_by_account: Mapping[str, Iterable[MonthlyEntry]],
    converter: CurrencyConverter,
) -> Decimal:
    pairs = [
        (account, entry)
        for account in accounts
        for entry in entries_by_account.get(account.id, ())
        if entry.month == month
    ]
    assets, liabilities = _fold(pairs, converter, None)
    return assets - liabilities


def _percent_change(current: Decimal, baseline: Decimal | None) -> Decimal | None:
    if baseline is None or baseline == 0:
        return None
    return round_percent((current - baseline) / abs(baseline) * Decimal("100"))


def _savings_rate(savings: Decimal, income: Decimal) -> Decimal | None:
    if income <= 0:
        return None
    return round_percent(savings / income * Decimal("100"))


def _breakdown(totals: Mapping[Currency, Decimal]) -> tuple[CurrencyAmount, ...]:
    return tuple(
        CurrencyAmount(currency=currency, amount=totals[currency])
        for currency in Currency
        if totals.get(currency, ZERO) != 0
    )


def compute_financial_metrics(
    accounts: Iterable[Account],
    entries_by_account: Mapping[str, Iterable[MonthlyEntry]],
    *,
    rate_source: RateSource,
    target_currency: Currency | str,
    today: date | None = None,
    logger: Logger | None = None,
) -> FinancialMetrics:
    """Fold income, expenditure, savings and net worth change.

    Income and expenditure come from accounts that carry income fields and
    are converted at each entry's own month. The per-currency breakdowns
    keep the unconverted amounts. Year-to-date covers the stored months of
    the reference year, and its net worth baseline is the first of them.

    Args:
        accounts: Known accounts, closed ones included.
        entries_by_account: Stored entries keyed by account id.
        rate_source: Source of GBP-based rates.
        target_currency: Display currency.
        today: Reference date for the year; defaults to today.
        logger: Logger used for warnings.

    Returns:
        FinancialMetrics: Headline figures for the display currency.
    """
    accounts = list(accounts)
    summary = compute_net_worth_summary(
        accounts,
        entries_by_account,
        rate_source=rate_source,
        target_currency=target_currency,
        logger=logger,
    )
    converter = CurrencyConverter(rate_source, target_currency, logger)
    year_prefix = f"{(today or date.today()).year}-"

    converted = {
        (flow, scope): ZERO for flow in _FLOWS for scope in _SCOPES
    }
    native: dict[tuple[str, str], dict[Currency, Decimal]] = {
        key: {} for key in converted
    }
    months: set[str] = set()
    for account in accounts:
        entries = list(entries_by_account.get(account.id, ()))
        months.update(entry.month for entry in entries)
        if not shows_income_fields(account.account_type):
            continue
        for entry in entries:
            scopes = (
                _SCOPES if entry.month.startswith(year_prefix) else ("all_time",)
            )
            for flow in _FLOWS:
                amount = coerce_decimal(getattr(entry, flow))
                if amount == 0:
                    continue
                value = converter.to_target(amount, account.currency, entry.month)
                for scope in scopes:
                    converted[flow, scope] += value
                    per_currency = native[flow, scope]
                    per_currency[account.currency] = (
                        per_currency.get(account.currency, ZERO) + amount
                    )

    ytd_months = sorted(month for month in months if month.startswith(year_prefix))
    ytd_baseline = (
        _net_worth_at(ytd_months[0], accounts, entries_by_account, converter)
        if ytd_months
        else None
    )
    savings_ytd = converted["income", "ytd"] - converted["expenditure", "ytd"]
    savings_all_time = (
        converted["income", "all_time"] - converted["expenditure", "all_time"]
    )

    return FinancialMetrics(
        currency_code=converter.target_currency.value,
        latest_month=max(months, default=None),
        net_worth=summary.net_worth,
        net_worth_change_ytd=_percent_change(summary.net_worth, ytd_baseline),
        net_worth_change_all_time=_percent_change(
            summary.net_worth, summary.first_net_worth
        ),
        income_ytd=converted["income", "ytd"],
        income_all_time=converted["income", "all_time"],
        expenditure_ytd=converted["expenditure", "ytd"],
        expenditure_all_time=converted["expenditure", "all_time"],
        savings_ytd=savings_ytd,
        savings_all_time=savings_all_time,
        savings_rate_ytd=_savings_rate(savings_ytd, converted["income", "ytd"]),
        savings_rate_all_time=_savings_rate(
            savings_all_time, converted["income", "all_time"]
        ),
        income_breakdown_ytd=_breakdown(native["income", "ytd"]),
        income_breakdown_all_time=_breakdown(native["income", "all_time"]),
        expenditure_breakdown_ytd=_breakdown(native["expenditure", "ytd"]),
        expenditure_breakdown_all_time=_breakdown(
            native["expenditure", "all_time"]
        ),
        rates_pending=summary.rates_pending or converter.is_pending,
    )


__all__ = ["compute_net_worth_summary", "compute_financial_metrics"]
