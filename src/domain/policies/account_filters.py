"""Account filtering rules for chart queries."""

from collections.abc import Iterable

from src.domain.models.accounts import Account
from src.domain.models.finance import ChartQuery


ALL_OWNERS = "all"


def matches_query(account: Account, query: ChartQuery) -> bool:
    """Return True when the account passes every filter in the query.

    Args:
        account: Account to evaluate.
        query: Chart query carrying owner, id, type and category filters.

    Returns:
        bool: True when the account should be aggregated.
    """
    if query.owner and query.owner != ALL_OWNERS and account.owner != query.owner:
        return False
    if query.account_ids and account.id not in query.account_ids:
        return False
    if (
        query.account_types
        and account.account_type.value not in query.account_types
    ):
        return False
    if query.categories and account.category.value not in query.categories:
        return False
    return True


def filter_accounts(
    accounts: Iterable[Account],
    query: ChartQuery,
) -> list[Account]:
    """Return the accounts matching the query, keeping input order."""
    return [account for account in accounts if matches_query(account, query)]


def is_valid_account_name(name: str) -> bool:
    """Return True when the account name is non-blank."""
    return bool(name and name.strip())


__all__ = ["ALL_OWNERS", "matches_query", "filter_accounts", "is_valid_account_name"]
