"""Domain policies package."""

from .account_filters import filter_accounts, is_valid_account_name, matches_query
from .account_types import (
    ACCOUNT_TYPE_PROFILES,
    AccountRole,
    AccountTypeProfile,
    account_label,
    ensure_exhaustive,
    is_liability,
    profile_for,
    shows_income_fields,
)

__all__ = [
    "filter_accounts",
    "is_valid_account_name",
    "matches_query",
    "ACCOUNT_TYPE_PROFILES",
    "AccountRole",
    "AccountTypeProfile",
    "account_label",
    "ensure_exhaustive",
    "is_liability",
    "profile_for",
    "shows_income_fields",
]
