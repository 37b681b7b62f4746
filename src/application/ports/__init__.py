"""Application ports package."""

from .accounts_repository import AccountsRepositoryPort
from .database import DatabaseEnginePort
from .exchange_rates import ExchangeRatesPort, RateProviderPort
from .monthly_entries_repository import MonthlyEntriesRepositoryPort
from .projection_scenarios_repository import ProjectionScenariosRepositoryPort

__all__ = [
    "AccountsRepositoryPort",
    "DatabaseEnginePort",
    "ExchangeRatesPort",
    "RateProviderPort",
    "MonthlyEntriesRepositoryPort",
    "ProjectionScenariosRepositoryPort",
]
