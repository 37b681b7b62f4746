"""Use case to create or update a monthly entry."""

from dataclasses import replace

from src.application.ports.accounts_repository import AccountsRepositoryPort
from src.application.ports.monthly_entries_repository import (
    MonthlyEntriesRepositoryPort,
)
from src.domain.errors import PersistenceError, ValidationError
from src.domain.models.accounts import AccountType, EntryFields
from src.domain.models.finance import OperationResult
from src.domain.policies.account_types import shows_income_fields
from src.domain.services.normalization import (
    normalize_liability_balance,
    normalize_month_key,
)
from src.domain.services.validation import (
    validate_balance_sign,
    validate_entry_fields,
    validate_month,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import ZERO, coerce_decimal


def derive_expenditure(fields: EntryFields) -> EntryFields:
    """Fill a missing expenditure from cash_out net of transfers and debt.

    The derived value is floored at 0.
    """
    if fields.expenditure is not None:
        return fields
    spent = fields.cash_out - fields.internal_transfers_out - fields.debt_payments
    return replace(fields, expenditure=max(spent, ZERO))


class RecordMonthlyEntryUseCase:
    """Validate and persist one (account, month) entry."""

    def __init__(
        self,
        accounts_repository: AccountsRepositoryPort,
        entries_repository: MonthlyEntriesRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            accounts_repository: Port providing account lookups.
            entries_repository: Port providing entry storage.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._accounts_repository = accounts_repository
        self._entries_repository = entries_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        account_id: str,
        month: str,
        fields: EntryFields,
        create_only: bool = False,
    ) -> OperationResult:
        """Store an entry, returning the saved record on success.

        Args:
            account_id: Account the entry belongs to.
            month: ``YYYY-MM`` month key (``YYYY-MM-DD`` is accepted).
            fields: Balance and cash movement fields.
            create_only: Reject the write when the entry already exists.

        Returns:
            OperationResult: Saved MonthlyEntry as ``value`` on success.
        """
        try:
            month_key = normalize_month_key(month)
            validate_month(month_key)
            cleaned = self._clean(fields)
            validate_entry_fields(cleaned)
            account = self._accounts_repository.get_account(account_id)
            if account is None:
                raise ValidationError(
                    f"Unknown account {account_id}",
                    field="account_id",
                    value=account_id,
                )
            validate_balance_sign(
                account.account_type, cleaned.ending_balance, self._logger
            )
            cleaned = self._prepare(account.account_type, cleaned)
            saved = self._entries_repository.upsert_monthly_entry(
                account_id,
                month_key,
                cleaned,
                create_only=create_only,
            )
        except ValidationError as exc:
            self._logger.warning(f"Monthly entry rejected: {exc}")
            return OperationResult(success=False, error=str(exc))
        except PersistenceError as exc:
            self._logger.error(f"Failed to save monthly entry: {exc}")
            return OperationResult(
                success=False,
                error="Failed to save monthly entry. Please try again.",
            )
        self._logger.info(
            f"Saved monthly entry for {account_id} in {month_key}: "
            f"balance={saved.ending_balance}"
        )
        return OperationResult(success=True, value=saved)

    @staticmethod
    def _clean(fields: EntryFields) -> EntryFields:
        return EntryFields(
            ending_balance=coerce_decimal(fields.ending_balance),
            cash_in=coerce_decimal(fields.cash_in),
            cash_out=coerce_decimal(fields.cash_out),
            income=coerce_decimal(fields.income),
            internal_transfers_out=coerce_decimal(fields.internal_transfers_out),
            debt_payments=coerce_decimal(fields.debt_payments),
            expenditure=(
                None
                if fields.expenditure is None
                else coerce_decimal(fields.expenditure)
            ),
        )

    @staticmethod
    def _prepare(account_type: AccountType, fields: EntryFields) -> EntryFields:
        fields = replace(
            fields,
            ending_balance=normalize_liability_balance(
                account_type, fields.ending_balance
            ),
        )
        if shows_income_fields(account_type):
            return derive_expenditure(fields)
        if fields.expenditure is None:
            return replace(fields, expenditure=ZERO)
        return fields


__all__ = ["RecordMonthlyEntryUseCase", "derive_expenditure"]
