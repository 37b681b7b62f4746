"""Use case to read tracked accounts for presentation layers."""

from src.application.ports.accounts_repository import AccountsRepositoryPort
from src.domain.models.accounts import Account
from src.domain.policies.account_filters import is_valid_account_name
from src.infrastructure.logging.logger import get_app_logger


class GetAccountsUseCase:
    """Fetch accounts in display order."""

    def __init__(
        self,
        accounts_repository: AccountsRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case with its required dependencies."""
        self._accounts_repository = accounts_repository
        self._logger = logger or get_app_logger()

    def execute(self, include_closed: bool = False) -> list[Account]:
        """Return accounts ordered by display order, then name.

        Args:
            include_closed: Whether soft-closed accounts are included.

        Returns:
            list[Account]: Accounts with a usable name.
        """
        accounts = self._accounts_repository.list_accounts(
            include_closed=include_closed
        )
        valid = [
            account for account in accounts if is_valid_account_name(account.name)
        ]
        skipped = len(accounts) - len(valid)
        if skipped:
            self._logger.warning(
                f"Filtered out {skipped} accounts with invalid names"
            )
        return sorted(
            valid,
            key=lambda account: (account.display_order, account.name.lower()),
        )


__all__ = ["GetAccountsUseCase"]
