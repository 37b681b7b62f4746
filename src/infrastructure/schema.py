"""Schema creation for the dashboard tables."""

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from src.domain.errors import PersistenceError


CREATE_ACCOUNTS_SQL = """
CREATE TABLE IF NOT EXISTS accounts (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    account_type TEXT NOT NULL,
    category TEXT NOT NULL DEFAULT 'Investments',
    currency TEXT NOT NULL DEFAULT 'GBP',
    is_isa INTEGER NOT NULL DEFAULT 0,
    owner TEXT NOT NULL DEFAULT 'all',
    is_closed INTEGER NOT NULL DEFAULT 0,
    closed_at TEXT,
    display_order INTEGER NOT NULL DEFAULT 0
)
"""

CREATE_MONTHLY_ENTRIES_SQL = """
CREATE TABLE IF NOT EXISTS monthly_entries (
    account_id TEXT NOT NULL,
    month TEXT NOT NULL,
    ending_balance TEXT NOT NULL,
    cash_in TEXT NOT NULL DEFAULT '0',
    cash_out TEXT NOT NULL DEFAULT '0',
    income TEXT NOT NULL DEFAULT '0',
    internal_transfers_out TEXT NOT NULL DEFAULT '0',
    debt_payments TEXT NOT NULL DEFAULT '0',
    expenditure TEXT NOT NULL DEFAULT '0',
    created_at TEXT,
    updated_at TEXT,
    PRIMARY KEY (account_id, month)
)
"""

CREATE_PROJECTION_SCENARIOS_SQL = """
CREATE TABLE IF NOT EXISTS projection_scenarios (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    monthly_income TEXT NOT NULL,
    savings_rate TEXT NOT NULL,
    time_period_months INTEGER NOT NULL,
    growth_rates TEXT NOT NULL,
    savings_allocation TEXT,
    created_at TEXT,
    updated_at TEXT
)
"""

CREATE_EXCHANGE_RATES_SQL = """
CREATE TABLE IF NOT EXISTS exchange_rates (
    date TEXT PRIMARY KEY,
    base_currency TEXT NOT NULL DEFAULT 'GBP',
    gbp_rate TEXT NOT NULL DEFAULT '1',
    eur_rate TEXT,
    usd_rate TEXT,
    aed_rate TEXT
)
"""

SCHEMA_STATEMENTS = (
    CREATE_ACCOUNTS_SQL,
    CREATE_MONTHLY_ENTRIES_SQL,
    CREATE_PROJECTION_SCENARIOS_SQL,
    CREATE_EXCHANGE_RATES_SQL,
)


def ensure_schema(engine: Engine) -> None:
    """Create every dashboard table that does not exist yet.

    Args:
        engine: SQLAlchemy engine for the dashboard database.

    Raises:
        PersistenceError: If a statement fails.
    """
    try:
        with engine.begin() as conn:
            for statement in SCHEMA_STATEMENTS:
                conn.exec_driver_sql(statement)
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Failed to create schema: {exc}") from exc


__all__ = ["ensure_schema", "SCHEMA_STATEMENTS"]
