"""Tests for concurrent entry loading."""

from unittest.mock import MagicMock

from src.application.use_cases.entry_loading import load_entries_by_account


def test_load_entries_by_account_keys_results_by_id() -> None:
    """Each account should be fetched once and joined by id."""
    repository = MagicMock()
    repository.get_monthly_entries.side_effect = lambda account_id: [account_id]

    result = load_entries_by_account(repository, ["a", "b", "a"], max_workers=8)

    assert result == {"a": ["a"], "b": ["b"]}
    assert repository.get_monthly_entries.call_count == 2


def test_load_entries_by_account_handles_no_accounts() -> None:
    """An empty id list should not start any fetches."""
    repository = MagicMock()

    assert load_entries_by_account(repository, []) == {}
    repository.get_monthly_entries.assert_not_called()
