"""Tests for the CalculateProjectionUseCase."""

from decimal import Decimal
from unittest.mock import MagicMock

from src.application.use_cases.calculate_projection import (
    CalculateProjectionUseCase,
    build_snapshot,
)
from src.domain.models.accounts import Account, AccountType, MonthlyEntry
from src.domain.models.projection import ProjectionScenario
from src.domain.services.fx import CurrencyConverter


def _entry(account_id, month, balance):
    return MonthlyEntry(
        account_id=account_id, month=month, ending_balance=Decimal(balance)
    )


def _accounts():
    return [
        Account(id="s1", name="Broker", account_type=AccountType.STOCK),
        Account(id="s2", name="ISA", account_type=AccountType.STOCK, is_isa=True),
        Account(id="cc", name="Amex", account_type=AccountType.CREDIT_CARD),
        Account(
            id="old", name="Old", account_type=AccountType.SAVINGS, is_closed=True
        ),
    ]


def _entries():
    return {
        "s1": [_entry("s1", "2024-01", "100"), _entry("s1", "2024-02", "200")],
        "s2": [_entry("s2", "2024-01", "300")],
        "cc": [_entry("cc", "2024-02", "50")],
        "old": [_entry("old", "2024-02", "999")],
    }


def test_build_snapshot_sums_open_asset_accounts() -> None:
    """Liabilities and closed accounts should be left out."""
    converter = CurrencyConverter(MagicMock(), "GBP")

    balances, month = build_snapshot(_accounts(), _entries(), converter)

    assert balances == {AccountType.STOCK: Decimal("500")}
    assert month == "2024-02"


def _use_case():
    accounts = MagicMock()
    accounts.list_accounts.return_value = [
        account for account in _accounts() if not account.is_closed
    ]
    entries = MagicMock()
    entries.get_monthly_entries.side_effect = lambda account_id: _entries()[
        account_id
    ]
    return CalculateProjectionUseCase(
        accounts, entries, MagicMock(), logger=MagicMock()
    )


def test_execute_projects_from_snapshot() -> None:
    """A valid request should return the projection with its currency."""
    result = _use_case().execute(
        monthly_income=Decimal("1000"),
        savings_rate=Decimal("10"),
        time_period_months=12,
        growth_rates={AccountType.STOCK: Decimal("0")},
    )

    assert result.success
    projection = result.value
    assert projection.current_net_worth == Decimal("500")
    assert projection.final_net_worth == Decimal("1700")
    assert projection.currency_code == "GBP"
    assert projection.trajectory[1].month == "2024-03"


def test_execute_reports_allocation_error() -> None:
    """An allocation that does not total 100 should fail with its sum."""
    result = _use_case().execute(
        monthly_income=Decimal("1000"),
        savings_rate=Decimal("10"),
        time_period_months=12,
        growth_rates={AccountType.STOCK: Decimal("5")},
        savings_allocation={AccountType.STOCK: Decimal("97.5")},
    )

    assert not result.success
    assert "sum is 97.50%" in result.error


def test_execute_scenario_uses_saved_assumptions() -> None:
    """Scenarios should run through the same projection."""
    scenario = ProjectionScenario(
        id="s",
        name="Base",
        monthly_income=Decimal("2000"),
        savings_rate=Decimal("50"),
        time_period_months=1,
        growth_rates={AccountType.STOCK: Decimal("0")},
    )

    result = _use_case().execute_scenario(scenario)

    assert result.value.final_net_worth == Decimal("1500")
