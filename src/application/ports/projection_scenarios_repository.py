"""Port for saved projection scenarios."""

from typing import Protocol

from src.domain.models.projection import ProjectionScenario


class ProjectionScenariosRepositoryPort(Protocol):
    """Port exposing projection scenario storage."""

    def list_scenarios(self) -> list[ProjectionScenario]:
        """Return scenarios, most recently updated first."""

    def create_scenario(self, scenario: ProjectionScenario) -> ProjectionScenario:
        """Persist a new scenario and return it."""

    def update_scenario(self, scenario: ProjectionScenario) -> ProjectionScenario:
        """Persist changes to a scenario and return it."""

    def delete_scenario(self, scenario_id: str) -> None:
        """Delete a scenario by id."""


__all__ = ["ProjectionScenariosRepositoryPort"]
