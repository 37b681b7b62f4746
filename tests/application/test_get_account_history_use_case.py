"""Tests for the GetAccountHistoryUseCase."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.get_account_history import GetAccountHistoryUseCase
from src.domain.errors import ValidationError
from src.domain.models.accounts import Account, AccountType, Currency, MonthlyEntry


def _entry(month, balance):
    return MonthlyEntry(account_id="eur", month=month, ending_balance=Decimal(balance))


def _use_case(account, entries, rates):
    accounts = MagicMock()
    accounts.get_account.return_value = account
    entries_repository = MagicMock()
    entries_repository.get_monthly_entries.return_value = entries
    rate_source = MagicMock()
    rate_source.get_rate.side_effect = lambda month, currency: rates.get(month)
    return GetAccountHistoryUseCase(
        accounts, entries_repository, rate_source, logger=MagicMock()
    )


def test_history_in_account_currency() -> None:
    """Without a target currency balances stay in the account currency."""
    account = Account(
        id="eur", name="N26", account_type=AccountType.SAVINGS, currency=Currency.EUR
    )
    use_case = _use_case(
        account, [_entry("2024-01", "100"), _entry("2024-02", "150")], {}
    )

    history = use_case.execute("eur", period="1M", today=date(2024, 3, 1))

    assert [item.month for item in history.entries] == ["2024-02", "2024-01"]
    assert history.current_value == Decimal("150")
    assert history.value_change.absolute_change == Decimal("50")
    assert history.currency_code == "EUR"
    assert not history.rates_pending


def test_history_converted_at_each_month_rate() -> None:
    """Balances should convert at their own month-end rate."""
    account = Account(
        id="eur", name="N26", account_type=AccountType.SAVINGS, currency=Currency.EUR
    )
    use_case = _use_case(
        account,
        [_entry("2024-01", "100"), _entry("2024-02", "100")],
        {"2024-01": Decimal("1.25"), "2024-02": Decimal("0")},
    )

    history = use_case.execute("eur", target_currency="GBP")

    assert history.balances[1].ending_balance == Decimal("80")
    assert history.balances[0].ending_balance == Decimal("100")
    assert history.rates_pending


def test_unknown_account_raises() -> None:
    """Reading a missing account should raise a validation error."""
    use_case = _use_case(None, [], {})

    with pytest.raises(ValidationError):
        use_case.execute("missing")
