"""Use case to compute headline income, spending and net worth figures."""

from datetime import date

from src.application.ports.accounts_repository import AccountsRepositoryPort
from src.application.ports.monthly_entries_repository import (
    MonthlyEntriesRepositoryPort,
)
from src.application.use_cases.entry_loading import load_entries_by_account
from src.domain.models.accounts import Currency
from src.domain.models.finance import FinancialMetrics
from src.domain.services.finance import compute_financial_metrics
from src.domain.services.fx import RateSource
from src.infrastructure.logging.logger import get_app_logger


class GetFinancialMetricsUseCase:
    """Compute year-to-date and all-time metrics across every account."""

    def __init__(
        self,
        accounts_repository: AccountsRepositoryPort,
        entries_repository: MonthlyEntriesRepositoryPort,
        rate_source: RateSource,
        logger=None,
        max_workers: int = 4,
    ) -> None:
        self._accounts_repository = accounts_repository
        self._entries_repository = entries_repository
        self._rate_source = rate_source
        self._logger = logger or get_app_logger()
        self._max_workers = max_workers

    def execute(
        self,
        target_currency: Currency | str = Currency.GBP,
        today: date | None = None,
    ) -> FinancialMetrics:
        """Return the financial metrics.

        Args:
            target_currency: Display currency.
            today: Reference date for the year; defaults to today.

        Returns:
            FinancialMetrics: Income, expenditure, savings and net worth
            change for the year and for all time.
        """
        accounts = self._accounts_repository.list_accounts(include_closed=True)
        entries = load_entries_by_account(
            self._entries_repository,
            [account.id for account in accounts],
            self._max_workers,
        )
        metrics = compute_financial_metrics(
            accounts,
            entries,
            rate_source=self._rate_source,
            target_currency=target_currency,
            today=today,
            logger=self._logger,
        )
        self._logger.info(
            f"Financial metrics computed: income_ytd={metrics.income_ytd}, "
            f"expenditure_ytd={metrics.expenditure_ytd}, "
            f"latest_month={metrics.latest_month}"
        )
        return metrics


__all__ = ["GetFinancialMetricsUseCase"]
