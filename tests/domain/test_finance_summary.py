"""Tests for the net worth summary."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from src.domain.models.accounts import Account, AccountType, Currency, MonthlyEntry
from src.domain.models.finance import CurrencyAmount
from src.domain.services.finance import (
    compute_financial_metrics,
    compute_net_worth_summary,
)


class _NoRates:
    def get_rate(self, month, currency):
        return None


def _entry(account_id, month, balance):
    return MonthlyEntry(
        account_id=account_id, month=month, ending_balance=Decimal(balance)
    )


def test_summary_uses_latest_entry_of_open_accounts() -> None:
    """Closed accounts should drop out of current totals only."""
    accounts = [
        Account(id="cur", name="Monzo", account_type=AccountType.CURRENT),
        Account(
            id="stk", name="Broker", account_type=AccountType.STOCK, is_closed=True
        ),
        Account(id="cc", name="Amex", account_type=AccountType.CREDIT_CARD),
    ]
    entries = {
        "cur": [_entry("cur", "2024-02", "1500"), _entry("cur", "2024-01", "1000")],
        "stk": [_entry("stk", "2024-01", "5000")],
        "cc": [_entry("cc", "2024-01", "-300"), _entry("cc", "2024-02", "200")],
    }
    logger = MagicMock()

    summary = compute_net_worth_summary(
        accounts,
        entries,
        rate_source=_NoRates(),
        target_currency="GBP",
        logger=logger,
    )

    assert summary.asset_total == Decimal("1500")
    assert summary.liability_total == Decimal("200")
    assert summary.net_worth == Decimal("1300")
    assert summary.month == "2024-02"
    assert summary.first_month == "2024-01"
    assert summary.first_net_worth == Decimal("5700")
    assert summary.currency_code == "GBP"
    assert not summary.rates_pending


def test_summary_without_entries_is_zero() -> None:
    """No entries should give zero totals and no months."""
    summary = compute_net_worth_summary(
        [Account(id="cur", name="Monzo", account_type=AccountType.CURRENT)],
        {},
        rate_source=_NoRates(),
        target_currency="EUR",
    )

    assert summary.net_worth == Decimal("0")
    assert summary.month is None
    assert summary.first_net_worth is None
    assert summary.currency_code == "EUR"


def _flows(account_id, month, balance, income="0", expenditure="0"):
    return MonthlyEntry(
        account_id=account_id,
        month=month,
        ending_balance=Decimal(balance),
        income=Decimal(income),
        expenditure=Decimal(expenditure),
    )


def _metrics_fixture():
    accounts = [
        Account(id="cur", name="Monzo", account_type=AccountType.CURRENT),
        Account(
            id="eur",
            name="N26",
            account_type=AccountType.CURRENT,
            currency=Currency.EUR,
        ),
        Account(id="stk", name="Broker", account_type=AccountType.STOCK),
    ]
    entries = {
        "cur": [
            _flows("cur", "2023-12", "1000", "2000", "1500"),
            _flows("cur", "2024-01", "1200", "2000", "1800"),
            _flows("cur", "2024-02", "1500", "2000", "1700"),
        ],
        "eur": [_flows("eur", "2024-02", "100", "500", "200")],
        "stk": [
            _flows("stk", "2023-12", "3000", income="999"),
            _flows("stk", "2024-02", "3500"),
        ],
    }
    return accounts, entries


def test_financial_metrics_split_year_to_date_and_all_time() -> None:
    """Income, spending and savings should fold per scope from income accounts."""
    accounts, entries = _metrics_fixture()

    metrics = compute_financial_metrics(
        accounts,
        entries,
        rate_source=_NoRates(),
        target_currency="GBP",
        today=date(2024, 3, 15),
        logger=MagicMock(),
    )

    assert metrics.income_ytd == Decimal("4500")
    assert metrics.income_all_time == Decimal("6500")
    assert metrics.expenditure_ytd == Decimal("3700")
    assert metrics.expenditure_all_time == Decimal("5200")
    assert metrics.savings_ytd == Decimal("800")
    assert metrics.savings_all_time == Decimal("1300")
    assert metrics.savings_rate_ytd == Decimal("17.8")
    assert metrics.savings_rate_all_time == Decimal("20")
    assert metrics.latest_month == "2024-02"
    assert metrics.rates_pending


def test_financial_metrics_keep_unconverted_currency_breakdowns() -> None:
    """Breakdowns should hold native totals in currency order."""
    accounts, entries = _metrics_fixture()

    metrics = compute_financial_metrics(
        accounts,
        entries,
        rate_source=_NoRates(),
        target_currency="GBP",
        today=date(2024, 3, 15),
    )

    assert metrics.income_breakdown_ytd == (
        CurrencyAmount(Currency.GBP, Decimal("4000")),
        CurrencyAmount(Currency.EUR, Decimal("500")),
    )
    assert metrics.expenditure_breakdown_all_time == (
        CurrencyAmount(Currency.GBP, Decimal("5000")),
        CurrencyAmount(Currency.EUR, Decimal("200")),
    )


def test_financial_metrics_net_worth_change_against_baselines() -> None:
    """Changes should compare current net worth with each scope's first month."""
    accounts, entries = _metrics_fixture()

    metrics = compute_financial_metrics(
        accounts,
        entries,
        rate_source=_NoRates(),
        target_currency="GBP",
        today=date(2024, 3, 15),
    )

    assert metrics.net_worth == Decimal("5100")
    assert metrics.net_worth_change_all_time == Decimal("27.5")
    assert metrics.net_worth_change_ytd == Decimal("325")


def test_financial_metrics_without_current_year_months() -> None:
    """A year with no entries should give zero flows and no YTD change."""
    accounts, entries = _metrics_fixture()

    metrics = compute_financial_metrics(
        accounts,
        entries,
        rate_source=_NoRates(),
        target_currency="GBP",
        today=date(2025, 6, 1),
    )

    assert metrics.income_ytd == Decimal("0")
    assert metrics.savings_rate_ytd is None
    assert metrics.net_worth_change_ytd is None
    assert metrics.income_breakdown_ytd == ()
