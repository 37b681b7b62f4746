"""Tests for the compound-growth projection."""

from decimal import Decimal

import pytest

from src.domain.errors import ValidationError
from src.domain.models.accounts import AccountType
from src.domain.models.projection import ProjectionParams
from src.domain.services.projection import (
    calculate_projection,
    default_savings_allocation,
    monthly_rate,
    validate_allocation,
)


def _params(**overrides) -> ProjectionParams:
    values = {
        "monthly_income": Decimal("1000"),
        "savings_rate": Decimal("10"),
        "time_period_months": 1,
        "growth_rates": {AccountType.STOCK: Decimal("12")},
        "savings_allocation": {AccountType.STOCK: Decimal("100")},
        "current_balances": {AccountType.STOCK: Decimal("1000")},
    }
    values.update(overrides)
    return ProjectionParams(**values)


def test_monthly_rate_compounds_to_annual_rate() -> None:
    """Twelve monthly steps should reproduce the annual rate."""
    rate = monthly_rate(12)

    assert monthly_rate(0) == Decimal("0")
    assert abs(rate - Decimal("0.0094887929")) < Decimal("1e-9")
    assert abs((1 + rate) ** 12 - Decimal("1.12")) < Decimal("1e-20")


def test_growth_is_applied_before_contribution() -> None:
    """Each month should grow the balance then add its savings share."""
    result = calculate_projection(_params())

    expected = Decimal("1000") * (1 + monthly_rate(Decimal("12"))) + Decimal("100")
    assert result.final_net_worth == expected
    assert result.current_net_worth == Decimal("1000")
    assert result.total_growth == expected - Decimal("1000")
    assert len(result.trajectory) == 2


def test_zero_months_returns_the_snapshot() -> None:
    """A zero-length projection should only hold the starting point."""
    result = calculate_projection(_params(time_period_months=0))

    assert result.final_net_worth == result.current_net_worth
    assert result.growth_percentage == Decimal("0")
    assert [point.month_index for point in result.trajectory] == [0]


def test_trajectory_months_follow_start_month() -> None:
    """Trajectory points should be labelled from the snapshot month."""
    result = calculate_projection(
        _params(time_period_months=2, start_month="2024-12")
    )

    assert [point.month for point in result.trajectory] == [
        "2024-12",
        "2025-01",
        "2025-02",
    ]


def test_allocated_types_without_balance_get_a_bucket() -> None:
    """Savings allocated to a type with no balance should start a new bucket."""
    result = calculate_projection(
        _params(
            growth_rates={AccountType.SAVINGS: Decimal("0")},
            savings_allocation={AccountType.SAVINGS: Decimal("100")},
        )
    )

    assert result.trajectory[-1].balances[AccountType.SAVINGS] == Decimal("100")
    assert result.trajectory[-1].balances[AccountType.STOCK] == Decimal("1000")


def test_growth_percentage_uses_absolute_current_value() -> None:
    """A negative starting point should still give a positive improvement."""
    result = calculate_projection(
        _params(
            growth_rates={AccountType.CURRENT: Decimal("0")},
            savings_allocation={AccountType.CURRENT: Decimal("100")},
            current_balances={AccountType.CURRENT: Decimal("-1000")},
        )
    )

    assert result.final_net_worth == Decimal("-900")
    assert result.growth_percentage == Decimal("10")


def test_allocation_must_total_one_hundred() -> None:
    """The error should report the actual sum."""
    with pytest.raises(ValidationError, match=r"sum is 97\.50%") as exc_info:
        validate_allocation(
            {AccountType.STOCK: Decimal("50"), AccountType.SAVINGS: Decimal("47.5")}
        )

    assert exc_info.value.field == "savings_allocation"


def test_allocation_tolerates_rounding() -> None:
    """Sums within the tolerance should be accepted."""
    validate_allocation(
        {
            AccountType.STOCK: Decimal("33.33"),
            AccountType.SAVINGS: Decimal("33.33"),
            AccountType.PENSION: Decimal("33.33"),
        }
    )


def test_allocation_rejects_liabilities() -> None:
    """Savings cannot be routed to liability types."""
    with pytest.raises(ValidationError, match="Loan"):
        validate_allocation({AccountType.LOAN: Decimal("100")})


def test_default_allocation_hands_out_remainder_in_order() -> None:
    """Remainder points should go to the first types."""
    allocation = default_savings_allocation(
        [AccountType.STOCK, AccountType.SAVINGS, "Pension"]
    )

    assert allocation == {
        AccountType.STOCK: Decimal("34"),
        AccountType.SAVINGS: Decimal("33"),
        AccountType.PENSION: Decimal("33"),
    }
    assert default_savings_allocation([]) == {}


def test_missing_allocation_splits_over_growth_types() -> None:
    """Without an allocation savings should be split over growth-rate types."""
    result = calculate_projection(
        _params(
            savings_allocation=None,
            growth_rates={AccountType.STOCK: Decimal("0"), AccountType.SAVINGS: Decimal("0")},
            current_balances={},
        )
    )

    assert result.trajectory[-1].balances == {
        AccountType.STOCK: Decimal("50"),
        AccountType.SAVINGS: Decimal("50"),
    }


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"savings_rate": Decimal("101")}, "savings_rate"),
        ({"savings_rate": Decimal("-1")}, "savings_rate"),
        ({"time_period_months": 601}, "time_period_months"),
        ({"time_period_months": -1}, "time_period_months"),
        ({"monthly_income": Decimal("-5")}, "monthly_income"),
        ({"growth_rates": {AccountType.STOCK: Decimal("-100")}}, "growth_rates"),
    ],
)
def test_out_of_range_inputs_are_rejected(overrides, field) -> None:
    """Invalid inputs should raise before any simulation runs."""
    with pytest.raises(ValidationError) as exc_info:
        calculate_projection(_params(**overrides))

    assert exc_info.value.field == field


def test_default_allocation_skips_liability_types() -> None:
    """Savings should never land in Credit_Card or Loan buckets."""
    result = calculate_projection(
        _params(
            monthly_income=Decimal("1000"),
            savings_rate=Decimal("50"),
            savings_allocation=None,
            growth_rates={account_type: Decimal("0") for account_type in AccountType},
            current_balances={AccountType.SAVINGS: Decimal("1000")},
        )
    )

    final = result.trajectory[-1].balances
    assert AccountType.LOAN not in final
    assert AccountType.CREDIT_CARD not in final
    assert sum(final.values()) == Decimal("1500")
    assert result.final_net_worth == Decimal("1500")


def test_default_allocation_falls_back_to_snapshot_types() -> None:
    """Without growth rates savings should follow the held asset types."""
    result = calculate_projection(
        _params(
            monthly_income=Decimal("1000"),
            savings_rate=Decimal("50"),
            savings_allocation=None,
            growth_rates={},
            current_balances={AccountType.SAVINGS: Decimal("1000")},
        )
    )

    assert result.final_net_worth == Decimal("1500")


def test_savings_without_any_asset_type_are_rejected() -> None:
    """Positive savings with nowhere to go should fail validation."""
    with pytest.raises(ValidationError, match=r"sum is 0\.00%") as exc_info:
        calculate_projection(
            _params(
                savings_allocation=None,
                growth_rates={AccountType.LOAN: Decimal("5")},
                current_balances={},
            )
        )

    assert exc_info.value.field == "savings_allocation"


def test_zero_savings_rate_is_pure_compounding() -> None:
    """With nothing saved the balance should only compound."""
    result = calculate_projection(
        _params(savings_rate=Decimal("0"), time_period_months=12)
    )

    assert abs(result.final_net_worth - Decimal("1120")) < Decimal("1e-15")


def test_allocation_error_names_the_actual_sum() -> None:
    """An allocation totalling 95 should report 95 in the message."""
    with pytest.raises(ValidationError, match=r"95") as exc_info:
        calculate_projection(
            _params(
                savings_allocation={
                    AccountType.STOCK: Decimal("60"),
                    AccountType.SAVINGS: Decimal("35"),
                }
            )
        )

    assert exc_info.value.value == Decimal("95")
