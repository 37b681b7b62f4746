"""Domain validation helpers."""

from decimal import Decimal
from logging import Logger

from src.domain.errors import ValidationError
from src.domain.models.accounts import AccountType, EntryFields
from src.domain.policies.account_types import is_liability
from src.domain.services.normalization import is_month_key


def validate_balance_sign(
    account_type: AccountType,
    balance: Decimal,
    logger: Logger,
) -> None:
    """Warn when balances violate expected sign conventions.

    Args:
        account_type: Type of the account the balance belongs to.
        balance: Raw balance amount, before liability normalization.
        logger: Logger used for warnings.
    """
    if is_liability(account_type) and balance < 0:
        logger.warning(
            f"Liability balance is negative for account_type="
            f"{account_type.value}: {balance}; storing amount owed"
        )


def validate_month(month: str) -> None:
    """Raise when the month key is not ``YYYY-MM``."""
    if not is_month_key(month):
        raise ValidationError(
            f"Month must use the YYYY-MM format, got {month!r}",
            field="month",
            value=month,
        )


def validate_entry_fields(fields: EntryFields) -> None:
    """Raise when gross cash fields are negative.

    Args:
        fields: User-supplied monthly entry fields.

    Raises:
        ValidationError: If a gross inflow/outflow field is negative.
    """
    for name in (
        "cash_in",
        "cash_out",
        "income",
        "internal_transfers_out",
        "debt_payments",
    ):
        value = getattr(fields, name)
        if value < 0:
            raise ValidationError(
                f"{name} must not be negative, got {value}",
                field=name,
                value=value,
            )
    if fields.expenditure is not None and fields.expenditure < 0:
        raise ValidationError(
            f"expenditure must not be negative, got {fields.expenditure}",
            field="expenditure",
            value=fields.expenditure,
        )


__all__ = ["validate_balance_sign", "validate_month", "validate_entry_fields"]
