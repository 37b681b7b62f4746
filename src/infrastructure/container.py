"""Composition root for wiring infrastructure adapters."""

from src.application.ports.accounts_repository import AccountsRepositoryPort
from src.application.ports.database import DatabaseEnginePort
from src.application.ports.exchange_rates import ExchangeRatesPort
from src.application.ports.monthly_entries_repository import (
    MonthlyEntriesRepositoryPort,
)
from src.application.ports.projection_scenarios_repository import (
    ProjectionScenariosRepositoryPort,
)
from src.application.use_cases.backfill_exchange_rates import (
    BackfillExchangeRatesUseCase,
)
from src.application.use_cases.calculate_projection import (
    CalculateProjectionUseCase,
)
from src.application.use_cases.export_entries_csv import ExportEntriesCsvUseCase
from src.application.use_cases.get_account_history import (
    GetAccountHistoryUseCase,
)
from src.application.use_cases.get_accounts import GetAccountsUseCase
from src.application.use_cases.get_chart_data import GetChartDataUseCase
from src.application.use_cases.get_financial_metrics import (
    GetFinancialMetricsUseCase,
)
from src.application.use_cases.get_net_worth_summary import (
    GetNetWorthSummaryUseCase,
)
from src.application.use_cases.get_stale_accounts import GetStaleAccountsUseCase
from src.application.use_cases.manage_accounts import ManageAccountsUseCase
from src.application.use_cases.manage_projection_scenarios import (
    ManageProjectionScenariosUseCase,
)
from src.application.use_cases.record_monthly_entry import (
    RecordMonthlyEntryUseCase,
)
from src.infrastructure.accounts_repository import SqlAlchemyAccountsRepository
from src.infrastructure.cached_rate_source import CachedRateSource
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter, engine_for_url
from src.infrastructure.exchange_rates_repository import (
    SqlAlchemyExchangeRatesRepository,
)
from src.infrastructure.hexarate_client import HexaRateClient
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.monthly_entries_repository import (
    SqlAlchemyMonthlyEntriesRepository,
)
from src.infrastructure.projection_scenarios_repository import (
    SqlAlchemyProjectionScenariosRepository,
)
from src.infrastructure.settings import DashboardSettings


def build_database_adapter(
    settings: DashboardSettings | None = None,
) -> DatabaseEnginePort:
    """Return the database adapter instance.

    An explicit ``db_url`` in the settings gets its own engine; otherwise the
    process-wide engine from ``src.infrastructure.db`` is shared.
    """
    if settings is not None and settings.db_url:
        return SqlAlchemyDatabaseEngineAdapter(engine_for_url(settings.db_url))
    return SqlAlchemyDatabaseEngineAdapter()


def build_accounts_repository(
    db_port: DatabaseEnginePort | None = None,
) -> AccountsRepositoryPort:
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyAccountsRepository(resolved_db)


def build_entries_repository(
    db_port: DatabaseEnginePort | None = None,
) -> MonthlyEntriesRepositoryPort:
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyMonthlyEntriesRepository(resolved_db)


def build_scenarios_repository(
    db_port: DatabaseEnginePort | None = None,
) -> ProjectionScenariosRepositoryPort:
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyProjectionScenariosRepository(resolved_db)


def build_exchange_rates_repository(
    db_port: DatabaseEnginePort | None = None,
) -> ExchangeRatesPort:
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyExchangeRatesRepository(resolved_db)


def build_rate_source(
    db_port: DatabaseEnginePort | None = None,
) -> CachedRateSource:
    """Return a cached rate source over the stored month-end rates."""
    return CachedRateSource(
        build_exchange_rates_repository(db_port),
        logger=get_app_logger(),
    )


class Container:
    """Lazily wired use cases sharing one database adapter and rate cache."""

    def __init__(
        self,
        settings: DashboardSettings | None = None,
        db_port: DatabaseEnginePort | None = None,
    ) -> None:
        self.settings = settings or DashboardSettings.from_env()
        self.db_port = db_port or build_database_adapter(self.settings)
        self.logger = get_app_logger()
        self.accounts_repository = build_accounts_repository(self.db_port)
        self.entries_repository = build_entries_repository(self.db_port)
        self.scenarios_repository = build_scenarios_repository(self.db_port)
        self.rates_repository = build_exchange_rates_repository(self.db_port)
        self.rate_source = CachedRateSource(self.rates_repository, self.logger)

    def get_accounts(self) -> GetAccountsUseCase:
        return GetAccountsUseCase(self.accounts_repository, logger=self.logger)

    def manage_accounts(self) -> ManageAccountsUseCase:
        return ManageAccountsUseCase(self.accounts_repository, logger=self.logger)

    def record_monthly_entry(self) -> RecordMonthlyEntryUseCase:
        return RecordMonthlyEntryUseCase(
            self.accounts_repository,
            self.entries_repository,
            logger=self.logger,
        )

    def get_account_history(self) -> GetAccountHistoryUseCase:
        return GetAccountHistoryUseCase(
            self.accounts_repository,
            self.entries_repository,
            self.rate_source,
            logger=self.logger,
        )

    def get_chart_data(self) -> GetChartDataUseCase:
        return GetChartDataUseCase(
            self.accounts_repository,
            self.entries_repository,
            self.rate_source,
            logger=self.logger,
            max_workers=self.settings.fetch_workers,
        )

    def get_net_worth_summary(self) -> GetNetWorthSummaryUseCase:
        return GetNetWorthSummaryUseCase(
            self.accounts_repository,
            self.entries_repository,
            self.rate_source,
            logger=self.logger,
            max_workers=self.settings.fetch_workers,
        )

    def get_financial_metrics(self) -> GetFinancialMetricsUseCase:
        return GetFinancialMetricsUseCase(
            self.accounts_repository,
            self.entries_repository,
            self.rate_source,
            logger=self.logger,
            max_workers=self.settings.fetch_workers,
        )

    def calculate_projection(self) -> CalculateProjectionUseCase:
        return CalculateProjectionUseCase(
            self.accounts_repository,
            self.entries_repository,
            self.rate_source,
            logger=self.logger,
            max_workers=self.settings.fetch_workers,
        )

    def manage_projection_scenarios(self) -> ManageProjectionScenariosUseCase:
        return ManageProjectionScenariosUseCase(
            self.scenarios_repository,
            logger=self.logger,
        )

    def get_stale_accounts(self) -> GetStaleAccountsUseCase:
        return GetStaleAccountsUseCase(
            self.accounts_repository,
            self.entries_repository,
            logger=self.logger,
            max_workers=self.settings.fetch_workers,
        )

    def export_entries_csv(self) -> ExportEntriesCsvUseCase:
        return ExportEntriesCsvUseCase(
            self.accounts_repository,
            self.entries_repository,
            logger=self.logger,
        )

    def backfill_exchange_rates(self) -> BackfillExchangeRatesUseCase:
        client = HexaRateClient(
            base_url=self.settings.hexarate_url,
            timeout=self.settings.fx_request_timeout,
            logger=self.logger,
        )
        return BackfillExchangeRatesUseCase(
            self.rates_repository,
            client,
            logger=self.logger,
        )


__all__ = [
    "build_database_adapter",
    "build_accounts_repository",
    "build_entries_repository",
    "build_scenarios_repository",
    "build_exchange_rates_repository",
    "build_rate_source",
    "Container",
]
