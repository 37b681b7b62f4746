"""Use case to build every dashboard chart series."""

from src.application.ports.accounts_repository import AccountsRepositoryPort
from src.application.ports.monthly_entries_repository import (
    MonthlyEntriesRepositoryPort,
)
from src.application.use_cases.entry_loading import load_entries_by_account
from src.domain.models.finance import ChartData, ChartQuery
from src.domain.policies.account_filters import filter_accounts
from src.domain.services.aggregation import build_chart_data
from src.domain.services.fx import RateSource
from src.infrastructure.logging.logger import get_app_logger


class GetChartDataUseCase:
    """Load accounts and entries, then fold them into chart series."""

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

    def execute(self, query: ChartQuery | None = None) -> ChartData:
        """Return chart series for the query.

        Closed accounts are included so historical charts keep their data.

        Args:
            query: Filters, window and display currency.

        Returns:
            ChartData: Every chart series for the window.
        """
        query = query or ChartQuery()
        accounts = self._accounts_repository.list_accounts(include_closed=True)
        included = filter_accounts(accounts, query)
        if not included:
            self._logger.info("No accounts match the chart query")
            return ChartData.empty(query.target_currency.value)

        entries = load_entries_by_account(
            self._entries_repository,
            [account.id for account in included],
            self._max_workers,
        )
        data = build_chart_data(
            included,
            entries,
            query,
            self._rate_source,
            logger=self._logger,
        )
        self._logger.info(
            f"Built chart data for {len(included)} accounts over "
            f"{len(data.net_worth_data)} months in {data.currency_code}"
        )
        if data.rates_pending:
            self._logger.warning(
                "Chart data includes unconverted amounts; rates pending"
            )
        return data


__all__ = ["GetChartDataUseCase"]
