"""Use case to read one account's derived history and value change."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.application.ports.accounts_repository import AccountsRepositoryPort
from src.application.ports.monthly_entries_repository import (
    MonthlyEntriesRepositoryPort,
)
from src.domain.errors import ValidationError
from src.domain.models.accounts import Account, Currency, DerivedEntry
from src.domain.models.finance import ValueChange, ValuePeriod
from src.domain.services.derivation import derive_history_desc
from src.domain.services.fx import CurrencyConverter, RateSource
from src.domain.services.normalization import normalize_liability_balance
from src.domain.services.value_change import calculate_value_change
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import ZERO


@dataclass(frozen=True)
class BalancePoint:
    """Ending balance of one month, in the display currency."""

    month: str
    ending_balance: Decimal


@dataclass(frozen=True)
class AccountHistory:
    """Derived history of one account.

    Attributes:
        account: Account the history belongs to.
        entries: Derived entries, most recent first, in account currency.
        balances: Ending balances in ``currency_code``, most recent first.
        current_value: Latest balance in ``currency_code``.
        value_change: Change over the requested period.
        currency_code: Currency of ``balances`` and ``value_change``.
        rates_pending: True when a conversion fell back to raw amounts.
    """

    account: Account
    entries: list[DerivedEntry]
    balances: list[BalancePoint]
    current_value: Decimal
    value_change: ValueChange
    currency_code: str
    rates_pending: bool = False


class GetAccountHistoryUseCase:
    """Return derived entries and the value change of one account."""

    def __init__(
        self,
        accounts_repository: AccountsRepositoryPort,
        entries_repository: MonthlyEntriesRepositoryPort,
        rate_source: RateSource,
        logger=None,
    ) -> None:
        self._accounts_repository = accounts_repository
        self._entries_repository = entries_repository
        self._rate_source = rate_source
        self._logger = logger or get_app_logger()

    def execute(
        self,
        account_id: str,
        period: ValuePeriod | str = ValuePeriod.ALL,
        target_currency: Currency | str | None = None,
        today: date | None = None,
    ) -> AccountHistory:
        """Return the account's history.

        Args:
            account_id: Account to read.
            period: Lookback period for the value change.
            target_currency: Display currency; the account currency if None.
            today: Reference date for YTD; defaults to today.

        Returns:
            AccountHistory: Derived entries and value change.

        Raises:
            ValidationError: If the account does not exist.
        """
        account = self._accounts_repository.get_account(account_id)
        if account is None:
            raise ValidationError(
                f"Unknown account {account_id}",
                field="account_id",
                value=account_id,
            )
        entries = derive_history_desc(
            self._entries_repository.get_monthly_entries(account_id)
        )
        converter = CurrencyConverter(
            self._rate_source,
            target_currency or account.currency,
            self._logger,
        )
        balances = [
            BalancePoint(
                month=item.month,
                ending_balance=converter.to_target(
                    normalize_liability_balance(
                        account.account_type, item.ending_balance
                    ),
                    account.currency,
                    item.month,
                ),
            )
            for item in entries
        ]
        value_change = calculate_value_change(balances, period, today)
        self._logger.info(
            f"Loaded {len(entries)} entries for account {account_id}"
        )
        return AccountHistory(
            account=account,
            entries=entries,
            balances=balances,
            current_value=balances[0].ending_balance if balances else ZERO,
            value_change=value_change,
            currency_code=converter.target_currency.value,
            rates_pending=converter.is_pending,
        )


__all__ = ["GetAccountHistoryUseCase", "AccountHistory", "BalancePoint"]
