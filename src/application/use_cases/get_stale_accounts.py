"""Use case to find open accounts that are missing recent entries."""

from datetime import date

from src.application.ports.accounts_repository import AccountsRepositoryPort
from src.application.ports.monthly_entries_repository import (
    MonthlyEntriesRepositoryPort,
)
from src.application.use_cases.entry_loading import load_entries_by_account
from src.domain.models.finance import StaleAccountsReport, StaleEntry
from src.domain.services.normalization import (
    add_months,
    last_completed_month,
    month_range,
)
from src.infrastructure.logging.logger import get_app_logger


class GetStaleAccountsUseCase:
    """List the months each open account has not been updated for."""

    def __init__(
        self,
        accounts_repository: AccountsRepositoryPort,
        entries_repository: MonthlyEntriesRepositoryPort,
        logger=None,
        max_workers: int = 4,
    ) -> None:
        self._accounts_repository = accounts_repository
        self._entries_repository = entries_repository
        self._logger = logger or get_app_logger()
        self._max_workers = max_workers

    def execute(self, today: date | None = None) -> StaleAccountsReport:
        """Return missing months up to the last completed calendar month.

        Accounts without any entry are not reported; they have no baseline
        to be stale against.

        Args:
            today: Reference date; defaults to today.

        Returns:
            StaleAccountsReport: Missing (account, month) pairs and counts.
        """
        cutoff = last_completed_month(today or date.today())
        accounts = self._accounts_repository.list_accounts(include_closed=False)
        entries = load_entries_by_account(
            self._entries_repository,
            [account.id for account in accounts],
            self._max_workers,
        )
        stale: list[StaleEntry] = []
        for account in accounts:
            months = [entry.month for entry in entries.get(account.id, [])]
            if not months:
                continue
            for month in month_range(add_months(max(months), 1), cutoff):
                stale.append(
                    StaleEntry(
                        account_id=account.id,
                        name=account.name,
                        account_type=account.account_type,
                        month=month,
                    )
                )
        report = StaleAccountsReport(
            stale_entries=stale,
            missing_account_count=len({item.account_id for item in stale}),
            missing_month_count=len({item.month for item in stale}),
        )
        if stale:
            self._logger.warning(
                f"{report.missing_account_count} accounts missing entries "
                f"across {report.missing_month_count} months"
            )
        return report


__all__ = ["GetStaleAccountsUseCase"]
