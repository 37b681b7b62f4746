"""Use case to project net worth from the current snapshot."""

from collections.abc import Iterable, Mapping
from dataclasses import replace
from decimal import Decimal

from src.application.ports.accounts_repository import AccountsRepositoryPort
from src.application.ports.monthly_entries_repository import (
    MonthlyEntriesRepositoryPort,
)
from src.application.use_cases.entry_loading import load_entries_by_account
from src.domain.errors import ValidationError
from src.domain.models.accounts import Account, AccountType, Currency, MonthlyEntry
from src.domain.models.finance import OperationResult
from src.domain.models.projection import ProjectionParams, ProjectionScenario
from src.domain.policies.account_types import is_liability
from src.domain.services.fx import CurrencyConverter, RateSource
from src.domain.services.projection import calculate_projection
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import ZERO, coerce_decimal


def build_snapshot(
    accounts: Iterable[Account],
    entries_by_account: Mapping[str, Iterable[MonthlyEntry]],
    converter: CurrencyConverter,
) -> tuple[dict[AccountType, Decimal], str | None]:
    """Sum the latest balance of each open asset account per type.

    Liabilities and closed accounts are left out of the snapshot.

    Returns:
        tuple: Balances keyed by type and the latest month seen.
    """
    balances: dict[AccountType, Decimal] = {}
    latest_month = None
    for account in accounts:
        if account.is_closed or is_liability(account.account_type):
            continue
        entries = list(entries_by_account.get(account.id, ()))
        if not entries:
            continue
        latest = max(entries, key=lambda entry: entry.month)
        amount = converter.to_target(
            coerce_decimal(latest.ending_balance), account.currency, latest.month
        )
        balances[account.account_type] = (
            balances.get(account.account_type, ZERO) + amount
        )
        if latest_month is None or latest.month > latest_month:
            latest_month = latest.month
    return balances, latest_month


class CalculateProjectionUseCase:
    """Run a compound-growth projection from stored balances."""

    def __init__(
        self,
        accounts_repository: AccountsRepositoryPort,
        entries_repository: MonthlyEntriesRepositoryPort,
        rate_source: RateSource,
        logger=None,
        max_workers: int = 4,
    ) -> None:
        """Initialize the use case.

        Args:
            accounts_repository: Port providing accounts.
            entries_repository: Port providing monthly entries.
            rate_source: Source of GBP-based rates.
            logger: Optional logger compatible with logging.Logger-like API.
            max_workers: Concurrent entry fetches.
        """
        self._accounts_repository = accounts_repository
        self._entries_repository = entries_repository
        self._rate_source = rate_source
        self._logger = logger or get_app_logger()
        self._max_workers = max_workers

    def execute(
        self,
        monthly_income,
        savings_rate,
        time_period_months: int,
        growth_rates: Mapping[AccountType, Decimal],
        savings_allocation: Mapping[AccountType, Decimal] | None = None,
        target_currency: Currency | str = Currency.GBP,
    ) -> OperationResult:
        """Project net worth forward.

        Args:
            monthly_income: Income per month in the display currency.
            savings_rate: Percentage of income saved.
            time_period_months: Months to simulate (0-600).
            growth_rates: Annual growth percentage per account type.
            savings_allocation: Percentage of savings per type, or None for
                an even split across ``growth_rates``.
            target_currency: Display currency for the snapshot.

        Returns:
            OperationResult: ProjectionResult as ``value`` on success; the
            validation message otherwise.
        """
        accounts = self._accounts_repository.list_accounts(include_closed=False)
        entries = load_entries_by_account(
            self._entries_repository,
            [account.id for account in accounts],
            self._max_workers,
        )
        converter = CurrencyConverter(
            self._rate_source, target_currency, self._logger
        )
        balances, latest_month = build_snapshot(accounts, entries, converter)
        params = ProjectionParams(
            monthly_income=coerce_decimal(monthly_income),
            savings_rate=coerce_decimal(savings_rate),
            time_period_months=time_period_months,
            growth_rates=dict(growth_rates),
            savings_allocation=(
                dict(savings_allocation) if savings_allocation is not None else None
            ),
            current_balances=balances,
            start_month=latest_month,
        )
        try:
            result = calculate_projection(params)
        except ValidationError as exc:
            self._logger.warning(f"Projection rejected: {exc}")
            return OperationResult(success=False, error=str(exc))

        self._logger.info(
            f"Projection over {time_period_months} months: "
            f"current={result.current_net_worth}, final={result.final_net_worth}"
        )
        return OperationResult(
            success=True,
            value=replace(
                result, currency_code=converter.target_currency.value
            ),
        )

    def execute_scenario(
        self,
        scenario: ProjectionScenario,
        target_currency: Currency | str = Currency.GBP,
    ) -> OperationResult:
        """Project net worth using a saved scenario's assumptions."""
        return self.execute(
            monthly_income=scenario.monthly_income,
            savings_rate=scenario.savings_rate,
            time_period_months=scenario.time_period_months,
            growth_rates=scenario.growth_rates,
            savings_allocation=scenario.savings_allocation,
            target_currency=target_currency,
        )


__all__ = ["CalculateProjectionUseCase", "build_snapshot"]
