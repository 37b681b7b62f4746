"""Application use cases package."""

from .backfill_exchange_rates import BackfillExchangeRatesUseCase, BackfillResult
from .calculate_projection import CalculateProjectionUseCase
from .export_entries_csv import ExportEntriesCsvUseCase
from .get_account_history import AccountHistory, GetAccountHistoryUseCase
from .get_accounts import GetAccountsUseCase
from .get_chart_data import GetChartDataUseCase
from .get_financial_metrics import GetFinancialMetricsUseCase
from .get_net_worth_summary import GetNetWorthSummaryUseCase
from .get_stale_accounts import GetStaleAccountsUseCase
from .manage_accounts import ManageAccountsUseCase
from .manage_projection_scenarios import ManageProjectionScenariosUseCase
from .record_monthly_entry import RecordMonthlyEntryUseCase

__all__ = [
    "BackfillExchangeRatesUseCase",
    "BackfillResult",
    "CalculateProjectionUseCase",
    "ExportEntriesCsvUseCase",
    "AccountHistory",
    "GetAccountHistoryUseCase",
    "GetAccountsUseCase",
    "GetChartDataUseCase",
    "GetFinancialMetricsUseCase",
    "GetNetWorthSummaryUseCase",
    "GetStaleAccountsUseCase",
    "ManageAccountsUseCase",
    "ManageProjectionScenariosUseCase",
    "RecordMonthlyEntryUseCase",
]
