"""SQLAlchemy-backed repository for projection scenarios."""

import json

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.projection_scenarios_repository import (
    ProjectionScenariosRepositoryPort,
)
from src.domain.errors import PersistenceError
from src.domain.models.accounts import AccountType
from src.domain.models.projection import ProjectionScenario
from src.infrastructure.sql_values import timestamp_from_db, timestamp_to_db
from src.utils.decimal_utils import coerce_decimal


def _dump_rates(values: dict | None) -> str | None:
    """Serialize a per-type mapping as JSON text keyed by type value."""
    if values is None:
        return None
    return json.dumps(
        {
            (key.value if isinstance(key, AccountType) else str(key)): str(value)
            for key, value in values.items()
        },
        sort_keys=True,
    )


def _load_rates(raw) -> dict | None:
    if raw is None or raw == "":
        return None
    data = json.loads(raw) if isinstance(raw, str) else raw
    return {AccountType(key): coerce_decimal(value) for key, value in data.items()}


class SqlAlchemyProjectionScenariosRepository(ProjectionScenariosRepositoryPort):
    """Repository backed by SQLAlchemy for projection scenarios."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        self._db_port = db_port

    def list_scenarios(self) -> list[ProjectionScenario]:
        query = text(
            """
            SELECT id, name, monthly_income, savings_rate, time_period_months,
                   growth_rates, savings_allocation, created_at, updated_at
            FROM projection_scenarios
            ORDER BY updated_at DESC, name
            """
        )
        try:
            engine = self._db_port.get_engine()
            with engine.connect() as conn:
                rows = conn.execute(query).all()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to list scenarios: {exc}") from exc
        return [
            ProjectionScenario(
                id=row.id,
                name=row.name,
                monthly_income=coerce_decimal(row.monthly_income),
                savings_rate=coerce_decimal(row.savings_rate),
                time_period_months=int(row.time_period_months),
                growth_rates=_load_rates(row.growth_rates) or {},
                savings_allocation=_load_rates(row.savings_allocation),
                created_at=timestamp_from_db(row.created_at),
                updated_at=timestamp_from_db(row.updated_at),
            )
            for row in rows
        ]

    def create_scenario(self, scenario: ProjectionScenario) -> ProjectionScenario:
        query = text(
            """
            INSERT INTO projection_scenarios (
                id, name, monthly_income, savings_rate, time_period_months,
                growth_rates, savings_allocation, created_at, updated_at
            )
            VALUES (
                :id, :name, :monthly_income, :savings_rate, :time_period_months,
                :growth_rates, :savings_allocation, :created_at, :updated_at
            )
            """
        )
        self._write(query, scenario, "create")
        return scenario

    def update_scenario(self, scenario: ProjectionScenario) -> ProjectionScenario:
        query = text(
            """
            UPDATE projection_scenarios
            SET name = :name,
                monthly_income = :monthly_income,
                savings_rate = :savings_rate,
                time_period_months = :time_period_months,
                growth_rates = :growth_rates,
                savings_allocation = :savings_allocation,
                updated_at = :updated_at
            WHERE id = :id
            """
        )
        self._write(query, scenario, "update")
        return scenario

    def delete_scenario(self, scenario_id: str) -> None:
        query = text("DELETE FROM projection_scenarios WHERE id = :id")
        try:
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                conn.execute(query, {"id": scenario_id})
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to delete scenario: {exc}") from exc

    def _write(self, query, scenario: ProjectionScenario, action: str) -> None:
        params = {
            "id": scenario.id,
            "name": scenario.name,
            "monthly_income": str(scenario.monthly_income),
            "savings_rate": str(scenario.savings_rate),
            "time_period_months": scenario.time_period_months,
            "growth_rates": _dump_rates(scenario.growth_rates),
            "savings_allocation": _dump_rates(scenario.savings_allocation),
            "created_at": timestamp_to_db(scenario.created_at),
            "updated_at": timestamp_to_db(scenario.updated_at),
        }
        try:
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                conn.execute(query, params)
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Failed to {action} scenario {scenario.id}: {exc}"
            ) from exc


__all__ = ["SqlAlchemyProjectionScenariosRepository"]
