"""Concurrent fan-out loading of monthly entries."""

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from src.application.ports.monthly_entries_repository import (
    MonthlyEntriesRepositoryPort,
)
from src.domain.models.accounts import MonthlyEntry


def load_entries_by_account(
    entries_repository: MonthlyEntriesRepositoryPort,
    account_ids: Iterable[str],
    max_workers: int = 4,
) -> dict[str, list[MonthlyEntry]]:
    """Fetch each account's entries in parallel and join the results.

    Args:
        entries_repository: Port providing monthly entries.
        account_ids: Accounts to load; duplicates are fetched once.
        max_workers: Upper bound on concurrent fetches.

    Returns:
        dict[str, list[MonthlyEntry]]: Entries keyed by account id.
    """
    ids = list(dict.fromkeys(account_ids))
    if not ids:
        return {}
    workers = max(1, min(max_workers, len(ids)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        results = executor.map(entries_repository.get_monthly_entries, ids)
        return dict(zip(ids, results))


__all__ = ["load_entries_by_account"]
