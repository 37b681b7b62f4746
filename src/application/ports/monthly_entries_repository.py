"""Port for monthly entry storage."""

from typing import Protocol

from src.domain.models.accounts import EntryFields, MonthlyEntry


class MonthlyEntriesRepositoryPort(Protocol):
    """Port exposing monthly entries keyed by (account_id, month)."""

    def get_monthly_entries(self, account_id: str) -> list[MonthlyEntry]:
        """Return every entry of one account, oldest first."""

    def get_entry(self, account_id: str, month: str) -> MonthlyEntry | None:
        """Return the entry for the month, or None."""

    def upsert_monthly_entry(
        self,
        account_id: str,
        month: str,
        fields: EntryFields,
        create_only: bool = False,
    ) -> MonthlyEntry:
        """Insert or replace an entry.

        Raises:
            ValidationError: If ``create_only`` and the entry already exists.
        """

    def list_all_entries(self) -> list[MonthlyEntry]:
        """Return every stored entry ordered by month, then account."""


__all__ = ["MonthlyEntriesRepositoryPort"]
