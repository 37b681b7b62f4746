"""Use case for creating, editing, closing and reordering accounts."""

from dataclasses import replace
from datetime import datetime
from uuid import uuid4

from src.application.ports.accounts_repository import AccountsRepositoryPort
from src.domain.errors import PersistenceError, ValidationError
from src.domain.models.accounts import (
    Account,
    AccountCategory,
    AccountType,
    Currency,
)
from src.domain.models.finance import OperationResult
from src.domain.policies.account_filters import is_valid_account_name
from src.domain.policies.account_types import parse_account_type
from src.domain.services.normalization import normalize_currency
from src.infrastructure.logging.logger import get_app_logger


class ManageAccountsUseCase:
    """Mutate account records and report the outcome."""

    def __init__(
        self,
        accounts_repository: AccountsRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            accounts_repository: Port providing account storage.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._accounts_repository = accounts_repository
        self._logger = logger or get_app_logger()

    def create(
        self,
        name: str,
        account_type: AccountType | str,
        category: AccountCategory | str = AccountCategory.INVESTMENTS,
        currency: Currency | str = Currency.GBP,
        is_isa: bool = False,
        owner: str = "all",
    ) -> OperationResult:
        """Create a new open account placed after the existing ones."""
        try:
            self._check_name(name)
            existing = self._accounts_repository.list_accounts(
                include_closed=True
            )
            account = Account(
                id=str(uuid4()),
                name=name.strip(),
                account_type=parse_account_type(account_type),
                category=AccountCategory(category),
                currency=normalize_currency(currency),
                is_isa=is_isa,
                owner=owner or "all",
                display_order=len(existing),
            )
            created = self._accounts_repository.create_account(account)
        except ValueError as exc:
            self._logger.warning(f"Account not created: {exc}")
            return OperationResult(success=False, error=str(exc))
        except PersistenceError as exc:
            self._logger.error(f"Failed to create account: {exc}")
            return OperationResult(
                success=False,
                error="Failed to create account. Please try again.",
            )
        self._logger.info(f"Created account {created.id} ({created.name})")
        return OperationResult(success=True, value=created)

    def update(self, account: Account) -> OperationResult:
        """Persist edits to an existing account."""
        try:
            self._check_name(account.name)
            if self._accounts_repository.get_account(account.id) is None:
                raise ValidationError(
                    f"Unknown account {account.id}",
                    field="account_id",
                    value=account.id,
                )
            updated = self._accounts_repository.update_account(
                replace(account, name=account.name.strip())
            )
        except ValidationError as exc:
            self._logger.warning(f"Account not updated: {exc}")
            return OperationResult(success=False, error=str(exc))
        except PersistenceError as exc:
            self._logger.error(f"Failed to update account: {exc}")
            return OperationResult(
                success=False,
                error="Failed to update account. Please try again.",
            )
        self._logger.info(f"Updated account {updated.id}")
        return OperationResult(success=True, value=updated)

    def close(self, account_id: str) -> OperationResult:
        """Soft-close an account; its history stays in charts."""
        return self._set_closed(account_id, True)

    def reopen(self, account_id: str) -> OperationResult:
        return self._set_closed(account_id, False)

    def reorder(self, ordered_ids: list[str]) -> OperationResult:
        """Set display order from a list of account ids."""
        orders = {account_id: index for index, account_id in enumerate(ordered_ids)}
        try:
            self._accounts_repository.update_display_order(orders)
        except PersistenceError as exc:
            self._logger.error(f"Failed to reorder accounts: {exc}")
            return OperationResult(
                success=False,
                error="Failed to reorder accounts. Please try again.",
            )
        self._logger.info(f"Reordered {len(orders)} accounts")
        return OperationResult(success=True)

    def _set_closed(self, account_id: str, is_closed: bool) -> OperationResult:
        action = "close" if is_closed else "reopen"
        try:
            if self._accounts_repository.get_account(account_id) is None:
                raise ValidationError(
                    f"Unknown account {account_id}",
                    field="account_id",
                    value=account_id,
                )
            self._accounts_repository.set_account_closed(account_id, is_closed)
        except ValidationError as exc:
            self._logger.warning(f"Account not {action}d: {exc}")
            return OperationResult(success=False, error=str(exc))
        except PersistenceError as exc:
            self._logger.error(f"Failed to {action} account: {exc}")
            return OperationResult(
                success=False,
                error=f"Failed to {action} account. Please try again.",
            )
        self._logger.info(f"Account {account_id} {action}d at {datetime.now()}")
        return OperationResult(success=True)

    @staticmethod
    def _check_name(name: str) -> None:
        if not is_valid_account_name(name):
            raise ValidationError(
                "Account name must not be blank",
                field="name",
                value=name,
            )


__all__ = ["ManageAccountsUseCase"]
