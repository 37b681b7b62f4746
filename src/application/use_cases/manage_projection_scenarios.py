"""Use case for saved projection scenarios."""

from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

from src.application.ports.projection_scenarios_repository import (
    ProjectionScenariosRepositoryPort,
)
from src.domain.errors import PersistenceError, ValidationError
from src.domain.models.accounts import AccountType
from src.domain.models.finance import OperationResult
from src.domain.models.projection import ProjectionParams, ProjectionScenario
from src.domain.policies.account_types import parse_account_type
from src.domain.services.projection import validate_projection_params
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal


def _typed(values: Mapping | None) -> dict[AccountType, Decimal] | None:
    if values is None:
        return None
    return {
        parse_account_type(account_type): coerce_decimal(amount)
        for account_type, amount in values.items()
    }


class ManageProjectionScenariosUseCase:
    """List, save and delete projection scenarios."""

    def __init__(
        self,
        scenarios_repository: ProjectionScenariosRepositoryPort,
        logger=None,
    ) -> None:
        self._scenarios_repository = scenarios_repository
        self._logger = logger or get_app_logger()

    def list_scenarios(self) -> list[ProjectionScenario]:
        scenarios = self._scenarios_repository.list_scenarios()
        self._logger.info(f"Loaded {len(scenarios)} projection scenarios")
        return scenarios

    def create(
        self,
        name: str,
        monthly_income,
        savings_rate,
        time_period_months: int,
        growth_rates: Mapping,
        savings_allocation: Mapping | None = None,
    ) -> OperationResult:
        """Validate and store a new scenario."""
        now = datetime.now(timezone.utc)
        scenario = ProjectionScenario(
            id=str(uuid4()),
            name=(name or "").strip(),
            monthly_income=coerce_decimal(monthly_income),
            savings_rate=coerce_decimal(savings_rate),
            time_period_months=time_period_months,
            growth_rates=_typed(growth_rates) or {},
            savings_allocation=_typed(savings_allocation),
            created_at=now,
            updated_at=now,
        )
        return self._save(scenario, self._scenarios_repository.create_scenario)

    def update(self, scenario: ProjectionScenario) -> OperationResult:
        """Validate and store edits to a scenario."""
        updated = replace(
            scenario,
            name=(scenario.name or "").strip(),
            growth_rates=_typed(scenario.growth_rates) or {},
            savings_allocation=_typed(scenario.savings_allocation),
            updated_at=datetime.now(timezone.utc),
        )
        return self._save(updated, self._scenarios_repository.update_scenario)

    def delete(self, scenario_id: str) -> OperationResult:
        try:
            self._scenarios_repository.delete_scenario(scenario_id)
        except PersistenceError as exc:
            self._logger.error(f"Failed to delete scenario: {exc}")
            return OperationResult(
                success=False,
                error="Failed to delete scenario. Please try again.",
            )
        self._logger.info(f"Deleted projection scenario {scenario_id}")
        return OperationResult(success=True)

    def _save(self, scenario: ProjectionScenario, write) -> OperationResult:
        try:
            self._validate(scenario)
            saved = write(scenario)
        except ValidationError as exc:
            self._logger.warning(f"Scenario rejected: {exc}")
            return OperationResult(success=False, error=str(exc))
        except PersistenceError as exc:
            self._logger.error(f"Failed to save scenario: {exc}")
            return OperationResult(
                success=False,
                error="Failed to save scenario. Please try again.",
            )
        self._logger.info(f"Saved projection scenario {saved.id} ({saved.name})")
        return OperationResult(success=True, value=saved)

    @staticmethod
    def _validate(scenario: ProjectionScenario) -> None:
        if not scenario.name:
            raise ValidationError(
                "Scenario name must not be blank",
                field="name",
                value=scenario.name,
            )
        validate_projection_params(
            ProjectionParams(
                monthly_income=scenario.monthly_income,
                savings_rate=scenario.savings_rate,
                time_period_months=scenario.time_period_months,
                growth_rates=scenario.growth_rates,
                savings_allocation=scenario.savings_allocation,
            )
        )


__all__ = ["ManageProjectionScenariosUseCase"]
