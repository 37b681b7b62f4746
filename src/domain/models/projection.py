"""Domain models for net worth projections."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from src.domain.models.accounts import AccountType


@dataclass(frozen=True)
class ProjectionScenario:
    """Saved set of projection assumptions.

    Attributes:
        id: Scenario identifier.
        name: Display name.
        monthly_income: Income per month in the display currency.
        savings_rate: Percentage of income saved (0-100).
        time_period_months: Number of months to simulate.
        growth_rates: Annual growth percentage per account type.
        savings_allocation: Percentage of savings per account type, or None
            to split savings evenly across the asset types.
    """

    id: str
    name: str
    monthly_income: Decimal
    savings_rate: Decimal
    time_period_months: int
    growth_rates: dict[AccountType, Decimal]
    savings_allocation: dict[AccountType, Decimal] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ProjectionParams:
    """Inputs to a single projection run."""

    monthly_income: Decimal
    savings_rate: Decimal
    time_period_months: int
    growth_rates: dict[AccountType, Decimal]
    savings_allocation: dict[AccountType, Decimal] | None = None
    current_balances: dict[AccountType, Decimal] = field(default_factory=dict)
    start_month: str | None = None


@dataclass(frozen=True)
class ProjectionPoint:
    """Projected balances at the end of a simulated month."""

    month_index: int
    month: str | None
    net_worth: Decimal
    balances: dict[AccountType, Decimal]


@dataclass(frozen=True)
class ProjectionResult:
    """Outcome of a projection run."""

    current_net_worth: Decimal
    final_net_worth: Decimal
    total_growth: Decimal
    growth_percentage: Decimal
    trajectory: list[ProjectionPoint]
    currency_code: str | None = None


__all__ = [
    "ProjectionScenario",
    "ProjectionParams",
    "ProjectionPoint",
    "ProjectionResult",
]
