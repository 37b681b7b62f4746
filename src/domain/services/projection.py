"""Compound-growth net worth projection."""

from collections.abc import Iterable, Mapping
from decimal import Decimal

from src.domain.constants import (
    ALLOCATION_TOLERANCE,
    ALLOCATION_TOTAL,
    MAX_PROJECTION_MONTHS,
)
from src.domain.errors import ValidationError
from src.domain.models.accounts import AccountType
from src.domain.models.projection import (
    ProjectionParams,
    ProjectionPoint,
    ProjectionResult,
)
from src.domain.policies.account_types import (
    asset_types,
    is_liability,
    parse_account_type,
)
from src.domain.services.normalization import add_months
from src.utils.decimal_utils import ZERO, coerce_decimal


_HUNDRED = Decimal("100")
_TWELVE = Decimal("12")


def monthly_rate(annual_percent) -> Decimal:
    """Convert an annual growth percentage into a compounding monthly rate.

    Args:
        annual_percent: Annual growth, e.g. ``7`` for 7%.

    Returns:
        Decimal: ``(1 + annual/100) ** (1/12) - 1``.
    """
    annual = coerce_decimal(annual_percent)
    if annual == 0:
        return ZERO
    return (Decimal("1") + annual / _HUNDRED) ** (Decimal("1") / _TWELVE) - 1


def default_savings_allocation(
    account_types: Iterable[AccountType | str],
) -> dict[AccountType, Decimal]:
    """Split 100% evenly across types using whole percentage points.

    Every type gets the integer floor of the even split; the remainder is
    handed out one point at a time in input order.
    """
    types = list(dict.fromkeys(parse_account_type(t) for t in account_types))
    if not types:
        return {}
    base, remainder = divmod(int(ALLOCATION_TOTAL), len(types))
    return {
        account_type: Decimal(base + (1 if index < remainder else 0))
        for index, account_type in enumerate(types)
    }


def validate_allocation(allocation: Mapping[AccountType | str, object]) -> None:
    """Raise when an allocation does not sum to 100 or targets a liability.

    Raises:
        ValidationError: If the allocation is invalid.
    """
    for account_type in allocation:
        if is_liability(account_type):
            raise ValidationError(
                f"Savings cannot be allocated to liability type "
                f"{parse_account_type(account_type).value}",
                field="savings_allocation",
                value=account_type,
            )
    total = sum((coerce_decimal(value) for value in allocation.values()), ZERO)
    if abs(total - ALLOCATION_TOTAL) > ALLOCATION_TOLERANCE:
        raise ValidationError(
            "Savings allocation must total 100%, "
            f"sum is {total.quantize(Decimal('0.01'))}%",
            field="savings_allocation",
            value=total,
        )


def validate_projection_params(params: ProjectionParams) -> None:
    """Check projection inputs before any simulation runs.

    Args:
        params: Projection inputs.

    Raises:
        ValidationError: If any input is out of range.
    """
    savings_rate = coerce_decimal(params.savings_rate)
    if savings_rate < 0 or savings_rate > _HUNDRED:
        raise ValidationError(
            f"Savings rate must be between 0 and 100, got {savings_rate}",
            field="savings_rate",
            value=savings_rate,
        )
    months = params.time_period_months
    if not isinstance(months, int) or months < 0 or months > MAX_PROJECTION_MONTHS:
        raise ValidationError(
            f"Time period must be between 0 and {MAX_PROJECTION_MONTHS} "
            f"months, got {months}",
            field="time_period_months",
            value=months,
        )
    income = coerce_decimal(params.monthly_income)
    if income < 0:
        raise ValidationError(
            f"Monthly income must not be negative, got {income}",
            field="monthly_income",
            value=income,
        )
    for account_type, rate in params.growth_rates.items():
        annual = coerce_decimal(rate)
        if annual <= -_HUNDRED:
            raise ValidationError(
                f"Growth rate for {parse_account_type(account_type).value} "
                f"must be above -100%, got {annual}",
                field="growth_rates",
                value=annual,
            )
    if params.savings_allocation is not None:
        validate_allocation(params.savings_allocation)


def _resolve_allocation(
    params: ProjectionParams,
    monthly_savings: Decimal,
) -> dict[AccountType, Decimal]:
    """Return the explicit allocation or an even split over asset types.

    The default split uses the asset types named in ``growth_rates`` and
    falls back to the asset types held in the snapshot.

    Raises:
        ValidationError: If savings are positive and no asset type can
            receive them.
    """
    if params.savings_allocation is not None:
        return {
            parse_account_type(account_type): coerce_decimal(share)
            for account_type, share in params.savings_allocation.items()
        }
    allowed = asset_types()
    candidates = [
        account_type
        for account_type in params.growth_rates
        if parse_account_type(account_type) in allowed
    ] or [
        account_type
        for account_type in params.current_balances
        if parse_account_type(account_type) in allowed
    ]
    if not candidates and monthly_savings > 0:
        raise ValidationError(
            "Savings allocation must total 100%, sum is 0.00%",
            field="savings_allocation",
            value=ZERO,
        )
    return default_savings_allocation(candidates)


def calculate_projection(params: ProjectionParams) -> ProjectionResult:
    """Simulate month-by-month compound growth with savings contributions.

    Each month every bucket grows at its monthly rate first and then receives
    its share of ``income * savings_rate``.

    Args:
        params: Validated or raw projection inputs.

    Returns:
        ProjectionResult: Final figures and the month-by-month trajectory,
        starting with the snapshot at index 0.

    Raises:
        ValidationError: If the inputs are out of range.
    """
    validate_projection_params(params)

    monthly_savings = (
        coerce_decimal(params.monthly_income)
        * coerce_decimal(params.savings_rate)
        / _HUNDRED
    )
    allocation = _resolve_allocation(params, monthly_savings)
    rates = {
        parse_account_type(account_type): monthly_rate(rate)
        for account_type, rate in params.growth_rates.items()
        if not is_liability(account_type)
    }
    balances: dict[AccountType, Decimal] = {
        parse_account_type(account_type): coerce_decimal(amount)
        for account_type, amount in params.current_balances.items()
    }
    for account_type in allocation:
        balances.setdefault(account_type, ZERO)

    current_net_worth = sum(balances.values(), ZERO)
    trajectory = [
        ProjectionPoint(
            month_index=0,
            month=params.start_month,
            net_worth=current_net_worth,
            balances=dict(balances),
        )
    ]

    for index in range(1, params.time_period_months + 1):
        for account_type in balances:
            grown = balances[account_type] * (1 + rates.get(account_type, ZERO))
            contribution = (
                allocation.get(account_type, ZERO) / _HUNDRED * monthly_savings
            )
            balances[account_type] = grown + contribution
        trajectory.append(
            ProjectionPoint(
                month_index=index,
                month=(
                    add_months(params.start_month, index)
                    if params.start_month
                    else None
                ),
                net_worth=sum(balances.values(), ZERO),
                balances=dict(balances),
            )
        )

    final_net_worth = trajectory[-1].net_worth
    total_growth = final_net_worth - current_net_worth
    growth_percentage = (
        ZERO
        if current_net_worth == 0
        else total_growth / abs(current_net_worth) * _HUNDRED
    )
    return ProjectionResult(
        current_net_worth=current_net_worth,
        final_net_worth=final_net_worth,
        total_growth=total_growth,
        growth_percentage=growth_percentage,
        trajectory=trajectory,
    )


__all__ = [
    "monthly_rate",
    "default_savings_allocation",
    "validate_allocation",
    "validate_projection_params",
    "calculate_projection",
]
