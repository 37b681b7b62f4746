"""Use case to export every monthly entry as CSV."""

import csv
from typing import TextIO

from src.application.ports.accounts_repository import AccountsRepositoryPort
from src.application.ports.monthly_entries_repository import (
    MonthlyEntriesRepositoryPort,
)
from src.domain.services.derivation import derive_entries
from src.infrastructure.logging.logger import get_app_logger


CSV_COLUMNS = (
    "month",
    "account_id",
    "account_name",
    "account_type",
    "currency",
    "owner",
    "ending_balance",
    "cash_in",
    "cash_out",
    "income",
    "internal_transfers_out",
    "debt_payments",
    "expenditure",
    "cash_flow",
    "account_growth",
)


class ExportEntriesCsvUseCase:
    """Write entries with derived figures, ordered by month then account."""

    def __init__(
        self,
        accounts_repository: AccountsRepositoryPort,
        entries_repository: MonthlyEntriesRepositoryPort,
        logger=None,
    ) -> None:
        self._accounts_repository = accounts_repository
        self._entries_repository = entries_repository
        self._logger = logger or get_app_logger()

    def execute(self, output: TextIO) -> int:
        """Write the CSV to ``output`` and return the number of data rows.

        Entries whose account no longer exists are skipped.
        """
        accounts = {
            account.id: account
            for account in self._accounts_repository.list_accounts(
                include_closed=True
            )
        }
        by_account: dict[str, list] = {}
        for entry in self._entries_repository.list_all_entries():
            by_account.setdefault(entry.account_id, []).append(entry)

        rows = []
        for account_id, entries in by_account.items():
            account = accounts.get(account_id)
            if account is None:
                self._logger.warning(
                    f"Skipping {len(entries)} entries of unknown account "
                    f"{account_id}"
                )
                continue
            for derived in derive_entries(entries):
                rows.append((account, derived))
        rows.sort(
            key=lambda pair: (
                pair[1].month,
                pair[0].display_order,
                pair[0].name.lower(),
            )
        )

        writer = csv.writer(output)
        writer.writerow(CSV_COLUMNS)
        for account, derived in rows:
            entry = derived.entry
            writer.writerow(
                (
                    entry.month,
                    account.id,
                    account.name,
                    account.account_type.value,
                    account.currency.value,
                    account.owner,
                    entry.ending_balance,
                    entry.cash_in,
                    entry.cash_out,
                    entry.income,
                    entry.internal_transfers_out,
                    entry.debt_payments,
                    entry.expenditure,
                    derived.cash_flow,
                    derived.account_growth,
                )
            )
        self._logger.info(f"Exported {len(rows)} monthly entries to CSV")
        return len(rows)


__all__ = ["ExportEntriesCsvUseCase", "CSV_COLUMNS"]
