"""Account-type dispatch table.

Every ``AccountType`` maps to exactly one ``AccountTypeProfile``. Adding a new
enum member without a profile fails at import time via ``ensure_exhaustive``.
"""

from dataclasses import dataclass
from enum import Enum

from src.domain.constants import CAPITAL_GAINS, INTEREST_EARNED
from src.domain.models.accounts import Account, AccountType


class AccountRole(str, Enum):
    """How an account type participates in net worth and growth."""

    CASH = "cash"
    INVESTMENT = "investment"
    PHYSICAL = "physical"
    LIABILITY = "liability"


@dataclass(frozen=True)
class AccountTypeProfile:
    """Per-type decisions used across the engine.

    Attributes:
        role: Net worth and growth role of the type.
        growth_source: Wealth-source bucket its growth feeds, or None.
        shows_income_fields: Whether income/expenditure fields apply.
        color: Hex color used by chart adapters.
    """

    role: AccountRole
    growth_source: str | None
    shows_income_fields: bool
    color: str


ACCOUNT_TYPE_PROFILES: dict[AccountType, AccountTypeProfile] = {
    AccountType.CURRENT: AccountTypeProfile(
        AccountRole.CASH, INTEREST_EARNED, True, "#3b82f6"
    ),
    AccountType.SAVINGS: AccountTypeProfile(
        AccountRole.CASH, INTEREST_EARNED, False, "#22c55e"
    ),
    AccountType.INVESTMENT: AccountTypeProfile(
        AccountRole.INVESTMENT, CAPITAL_GAINS, False, "#8b5cf6"
    ),
    AccountType.STOCK: AccountTypeProfile(
        AccountRole.INVESTMENT, CAPITAL_GAINS, False, "#6366f1"
    ),
    AccountType.CRYPTO: AccountTypeProfile(
        AccountRole.INVESTMENT, CAPITAL_GAINS, False, "#f97316"
    ),
    AccountType.PENSION: AccountTypeProfile(
        AccountRole.INVESTMENT, CAPITAL_GAINS, False, "#64748b"
    ),
    AccountType.COMMODITY: AccountTypeProfile(
        AccountRole.INVESTMENT, CAPITAL_GAINS, False, "#f59e0b"
    ),
    AccountType.STOCK_OPTIONS: AccountTypeProfile(
        AccountRole.INVESTMENT, CAPITAL_GAINS, False, "#ec4899"
    ),
    AccountType.CREDIT_CARD: AccountTypeProfile(
        AccountRole.LIABILITY, None, False, "#ef4444"
    ),
    AccountType.LOAN: AccountTypeProfile(
        AccountRole.LIABILITY, None, False, "#f43f5e"
    ),
    AccountType.ASSET: AccountTypeProfile(
        AccountRole.PHYSICAL, CAPITAL_GAINS, False, "#0ea5e9"
    ),
}


def ensure_exhaustive(
    profiles: dict[AccountType, AccountTypeProfile] = ACCOUNT_TYPE_PROFILES,
) -> None:
    """Raise when an account type has no profile.

    Args:
        profiles: Profile table to check.

    Raises:
        RuntimeError: If any AccountType member is missing.
    """
    missing = [member.value for member in AccountType if member not in profiles]
    if missing:
        raise RuntimeError(
            f"Account types missing a profile: {', '.join(missing)}"
        )


ensure_exhaustive()


def parse_account_type(value: AccountType | str) -> AccountType:
    """Return the AccountType for an enum member or its stored value."""
    if isinstance(value, AccountType):
        return value
    return AccountType(value)


def profile_for(account_type: AccountType | str) -> AccountTypeProfile:
    return ACCOUNT_TYPE_PROFILES[parse_account_type(account_type)]


def is_liability(account_type: AccountType | str) -> bool:
    return profile_for(account_type).role is AccountRole.LIABILITY


def shows_income_fields(account_type: AccountType | str) -> bool:
    """Return True when income/expenditure fields apply to the type."""
    return profile_for(account_type).shows_income_fields


def asset_types() -> tuple[AccountType, ...]:
    return tuple(
        account_type
        for account_type, profile in ACCOUNT_TYPE_PROFILES.items()
        if profile.role is not AccountRole.LIABILITY
    )


def account_label(account: Account) -> str:
    """Return a unique chart label such as ``"Vanguard (Stock ISA)"``."""
    isa = " ISA" if account.is_isa else ""
    return f"{account.name} ({account.account_type.value}{isa})"


__all__ = [
    "AccountRole",
    "AccountTypeProfile",
    "ACCOUNT_TYPE_PROFILES",
    "ensure_exhaustive",
    "parse_account_type",
    "profile_for",
    "is_liability",
    "shows_income_fields",
    "asset_types",
    "account_label",
]
