"""Use case to compute current net worth from the latest entries."""

from src.application.ports.accounts_repository import AccountsRepositoryPort
from src.application.ports.monthly_entries_repository import (
    MonthlyEntriesRepositoryPort,
)
from src.application.use_cases.entry_loading import load_entries_by_account
from src.domain.models.accounts import Currency
from src.domain.models.finance import NetWorthSummary
from src.domain.services.finance import compute_net_worth_summary
from src.domain.services.fx import RateSource
from src.infrastructure.logging.logger import get_app_logger


class GetNetWorthSummaryUseCase:
    """Compute net worth from each account's most recent entry."""

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
        target_currency: Currency | str = Currency.GBP,
    ) -> NetWorthSummary:
        """Return the net worth summary.

        Args:
            target_currency: Display currency.

        Returns:
            NetWorthSummary: Computed asset, liability, and net worth totals.
        """
        accounts = self._accounts_repository.list_accounts(include_closed=True)
        entries = load_entries_by_account(
            self._entries_repository,
            [account.id for account in accounts],
            self._max_workers,
        )
        summary = compute_net_worth_summary(
            accounts,
            entries,
            rate_source=self._rate_source,
            target_currency=target_currency,
            logger=self._logger,
        )
        self._logger.info(
            f"Net worth computed: assets={summary.asset_total}, "
            f"liabilities={summary.liability_total}"
        )
        return summary


__all__ = ["GetNetWorthSummaryUseCase"]
