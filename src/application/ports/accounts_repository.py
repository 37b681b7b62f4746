"""Port for reading and writing tracked accounts."""

from typing import Protocol

from src.domain.models.accounts import Account


class AccountsRepositoryPort(Protocol):
    """Port exposing account storage."""

    def list_accounts(self, include_closed: bool = True) -> list[Account]:
        """Return accounts ordered by display order, then name."""

    def get_account(self, account_id: str) -> Account | None:
        """Return one account, or None when it does not exist."""

    def create_account(self, account: Account) -> Account:
        """Persist a new account and return it."""

    def update_account(self, account: Account) -> Account:
        """Persist changes to an existing account and return it."""

    def set_account_closed(self, account_id: str, is_closed: bool) -> None:
        """Soft-close or reopen an account; history is kept either way."""

    def update_display_order(self, orders: dict[str, int]) -> None:
        """Set display positions keyed by account id."""


__all__ = ["AccountsRepositoryPort"]
