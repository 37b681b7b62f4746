"""Attribution of monthly growth to wealth sources.

Each account's month is classified into at most two buckets:

* Current accounts route ``income - expenditure`` to Savings from Income.
* Cash accounts (Current, Savings) route positive growth to Interest Earned.
* Investment and physical-asset accounts route signed growth to Capital Gains.

Liabilities never contribute. Savings and interest totals are floored at 0;
capital gains keep their sign so losses remain visible.
"""

from collections.abc import Iterable, Mapping
from decimal import Decimal

from src.domain.constants import (
    CAPITAL_GAINS,
    INTEREST_EARNED,
    SAVINGS_FROM_INCOME,
    WEALTH_SOURCE_KEYS,
)
from src.domain.models.accounts import Account, DerivedEntry
from src.domain.models.finance import WealthSourceItem, WealthSourceMonth
from src.domain.policies.account_types import AccountRole, profile_for
from src.domain.services.fx import CurrencyConverter
from src.domain.services.normalization import month_label
from src.utils.decimal_utils import ZERO, round_percent


def account_contributions(
    account: Account,
    derived: DerivedEntry,
    converter: CurrencyConverter,
) -> dict[str, Decimal]:
    """Return the unfloored, converted bucket amounts for one account-month.

    Args:
        account: Account the entry belongs to.
        derived: Derived entry for the month.
        converter: Converter into the display currency.

    Returns:
        dict[str, Decimal]: Non-zero amounts keyed by wealth-source name.
    """
    profile = profile_for(account.account_type)
    if profile.role is AccountRole.LIABILITY:
        return {}

    month = derived.month
    contributions: dict[str, Decimal] = {}
    if profile.shows_income_fields:
        saved = derived.entry.income - derived.entry.expenditure
        if saved != 0:
            contributions[SAVINGS_FROM_INCOME] = converter.to_target(
                saved, account.currency, month
            )

    growth = derived.account_growth
    if profile.growth_source == INTEREST_EARNED and growth > 0:
        contributions[INTEREST_EARNED] = converter.to_target(
            growth, account.currency, month
        )
    elif profile.growth_source == CAPITAL_GAINS and growth != 0:
        contributions[CAPITAL_GAINS] = converter.to_target(
            growth, account.currency, month
        )
    return contributions


def account_income(
    account: Account,
    derived: DerivedEntry,
    converter: CurrencyConverter,
) -> Decimal:
    """Return converted income for accounts that carry income fields."""
    if not profile_for(account.account_type).shows_income_fields:
        return ZERO
    return converter.to_target(
        derived.entry.income, account.currency, derived.month
    )


def decompose_month(
    month: str,
    derived_by_account: Mapping[str, DerivedEntry],
    accounts: Iterable[Account],
    converter: CurrencyConverter,
) -> WealthSourceMonth:
    """Aggregate wealth sources across accounts for one month.

    Args:
        month: ``YYYY-MM`` month being decomposed.
        derived_by_account: Derived entry for the month keyed by account id;
            accounts without an entry are skipped.
        accounts: Accounts included in the aggregation.
        converter: Converter into the display currency.

    Returns:
        WealthSourceMonth: Floored bucket totals with per-account breakdown.
    """
    breakdown: dict[str, list[WealthSourceItem]] = {
        key: [] for key in WEALTH_SOURCE_KEYS
    }
    total_income = ZERO
    for account in accounts:
        derived = derived_by_account.get(account.id)
        if derived is None:
            continue
        total_income += account_income(account, derived, converter)
        for key, amount in account_contributions(
            account, derived, converter
        ).items():
            breakdown[key].append(
                WealthSourceItem(
                    account_id=account.id,
                    name=account.name,
                    account_type=account.account_type,
                    amount=amount,
                    owner=account.owner or "Unknown",
                )
            )

    totals = {
        key: sum((item.amount for item in items), ZERO)
        for key, items in breakdown.items()
    }
    savings = max(totals[SAVINGS_FROM_INCOME], ZERO)
    interest = max(totals[INTEREST_EARNED], ZERO)
    savings_rate = (
        round_percent(savings / total_income * Decimal("100"))
        if total_income > 0
        else ZERO
    )
    return WealthSourceMonth(
        month=month,
        label=month_label(month),
        savings_from_income=savings,
        interest_earned=interest,
        capital_gains=totals[CAPITAL_GAINS],
        total_income=total_income,
        savings_rate=savings_rate,
        breakdown=breakdown,
    )


__all__ = ["account_contributions", "account_income", "decompose_month"]
