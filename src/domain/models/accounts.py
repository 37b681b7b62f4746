"""Domain models for accounts and monthly entries."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class AccountType(str, Enum):
    """Closed set of account types."""

    CURRENT = "Current"
    SAVINGS = "Savings"
    INVESTMENT = "Investment"
    STOCK = "Stock"
    CRYPTO = "Crypto"
    PENSION = "Pension"
    COMMODITY = "Commodity"
    STOCK_OPTIONS = "Stock_options"
    CREDIT_CARD = "Credit_Card"
    LOAN = "Loan"
    ASSET = "Asset"


class AccountCategory(str, Enum):
    """Top-level grouping shown in allocation views."""

    CASH = "Cash"
    INVESTMENTS = "Investments"


class Currency(str, Enum):
    """Supported account and display currencies."""

    GBP = "GBP"
    EUR = "EUR"
    USD = "USD"
    AED = "AED"


@dataclass(frozen=True)
class Account:
    """Tracked account.

    Attributes:
        id: Account identifier.
        name: Display name.
        account_type: Account type driving classification.
        category: Cash or Investments grouping.
        currency: Currency the balances are recorded in.
        is_isa: Whether the account is an ISA wrapper.
        owner: Free-text owner label.
        is_closed: Soft-close flag; closed accounts keep their history.
        closed_at: When the account was closed, if it is.
        display_order: Position in account listings.
    """

    id: str
    name: str
    account_type: AccountType
    category: AccountCategory = AccountCategory.INVESTMENTS
    currency: Currency = Currency.GBP
    is_isa: bool = False
    owner: str = "all"
    is_closed: bool = False
    closed_at: datetime | None = None
    display_order: int = 0


@dataclass(frozen=True)
class MonthlyEntry:
    """Month-end snapshot of one account, keyed by (account_id, month)."""

    account_id: str
    month: str
    ending_balance: Decimal
    cash_in: Decimal = Decimal("0")
    cash_out: Decimal = Decimal("0")
    income: Decimal = Decimal("0")
    internal_transfers_out: Decimal = Decimal("0")
    debt_payments: Decimal = Decimal("0")
    expenditure: Decimal = Decimal("0")
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class DerivedEntry:
    """Monthly entry enriched with read-time derived figures.

    Attributes:
        entry: Stored entry the figures were derived from.
        previous_balance: Ending balance of the prior stored entry, or 0.
        cash_flow: cash_in minus cash_out.
        account_growth: Balance change not explained by cash flow.
    """

    entry: MonthlyEntry
    previous_balance: Decimal
    cash_flow: Decimal
    account_growth: Decimal

    @property
    def account_id(self) -> str:
        return self.entry.account_id

    @property
    def month(self) -> str:
        return self.entry.month

    @property
    def ending_balance(self) -> Decimal:
        return self.entry.ending_balance


@dataclass(frozen=True)
class EntryFields:
    """User-supplied fields for creating or updating a monthly entry."""

    ending_balance: Decimal
    cash_in: Decimal = Decimal("0")
    cash_out: Decimal = Decimal("0")
    income: Decimal = Decimal("0")
    internal_transfers_out: Decimal = Decimal("0")
    debt_payments: Decimal = Decimal("0")
    expenditure: Decimal | None = None


__all__ = [
    "AccountType",
    "AccountCategory",
    "Currency",
    "Account",
    "MonthlyEntry",
    "DerivedEntry",
    "EntryFields",
]
