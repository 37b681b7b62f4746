"""SQLAlchemy-backed store of month-end exchange rates."""

from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.exchange_rates import ExchangeRatesPort
from src.domain.errors import PersistenceError
from src.domain.models.accounts import Currency
from src.domain.models.finance import ExchangeRateSnapshot
from src.domain.services.normalization import (
    last_day_of_month,
    normalize_month_key,
)
from src.infrastructure.sql_values import decimal_to_db
from src.utils.decimal_utils import coerce_decimal


RATE_COLUMNS = {
    Currency.GBP: "gbp_rate",
    Currency.EUR: "eur_rate",
    Currency.USD: "usd_rate",
    Currency.AED: "aed_rate",
}


class SqlAlchemyExchangeRatesRepository(ExchangeRatesPort):
    """Rates keyed by the last day of each month, relative to 1 GBP."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        self._db_port = db_port

    def get_rate(self, month: str, currency: Currency) -> Decimal | None:
        """Return the stored rate for the month end, or None when missing."""
        column = RATE_COLUMNS[Currency(currency)]
        rate_date = last_day_of_month(normalize_month_key(month))
        query = text(f"SELECT {column} AS rate FROM exchange_rates WHERE date = :date")
        try:
            engine = self._db_port.get_engine()
            with engine.connect() as conn:
                row = conn.execute(query, {"date": rate_date}).first()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to read rates: {exc}") from exc
        if row is None or row.rate is None:
            return None
        return coerce_decimal(row.rate)

    def has_rates(self, date: str) -> bool:
        query = text("SELECT 1 FROM exchange_rates WHERE date = :date")
        try:
            engine = self._db_port.get_engine()
            with engine.connect() as conn:
                return conn.execute(query, {"date": date}).first() is not None
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to read rates: {exc}") from exc

    def save_rates(self, snapshot: ExchangeRateSnapshot) -> None:
        """Replace the row for the snapshot date."""
        params = {"date": snapshot.date}
        for currency, column in RATE_COLUMNS.items():
            value = snapshot.rates.get(currency)
            if currency == Currency.GBP and value is None:
                value = Decimal("1")
            params[column] = decimal_to_db(value)
        try:
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                conn.execute(
                    text("DELETE FROM exchange_rates WHERE date = :date"),
                    {"date": snapshot.date},
                )
                conn.execute(
                    text(
                        """
                        INSERT INTO exchange_rates (
                            date, base_currency, gbp_rate, eur_rate,
                            usd_rate, aed_rate
                        )
                        VALUES (
                            :date, 'GBP', :gbp_rate, :eur_rate,
                            :usd_rate, :aed_rate
                        )
                        """
                    ),
                    params,
                )
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to save rates: {exc}") from exc


__all__ = ["SqlAlchemyExchangeRatesRepository", "RATE_COLUMNS"]
