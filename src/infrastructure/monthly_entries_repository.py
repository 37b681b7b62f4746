"""SQLAlchemy-backed repository for monthly entries."""

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.monthly_entries_repository import (
    MonthlyEntriesRepositoryPort,
)
from src.domain.errors import PersistenceError, ValidationError
from src.domain.models.accounts import EntryFields, MonthlyEntry
from src.infrastructure.sql_values import (
    decimal_to_db,
    timestamp_from_db,
    timestamp_to_db,
    utc_now,
)
from src.utils.decimal_utils import coerce_decimal


SELECT_ENTRIES_SQL = """
SELECT account_id, month, ending_balance, cash_in, cash_out, income,
       internal_transfers_out, debt_payments, expenditure,
       created_at, updated_at
FROM monthly_entries
"""

INSERT_ENTRY_SQL = text(
    """
    INSERT INTO monthly_entries (
        account_id, month, ending_balance, cash_in, cash_out, income,
        internal_transfers_out, debt_payments, expenditure,
        created_at, updated_at
    )
    VALUES (
        :account_id, :month, :ending_balance, :cash_in, :cash_out, :income,
        :internal_transfers_out, :debt_payments, :expenditure,
        :created_at, :updated_at
    )
    """
)

UPSERT_ENTRY_SQL = text(
    """
    INSERT INTO monthly_entries (
        account_id, month, ending_balance, cash_in, cash_out, income,
        internal_transfers_out, debt_payments, expenditure,
        created_at, updated_at
    )
    VALUES (
        :account_id, :month, :ending_balance, :cash_in, :cash_out, :income,
        :internal_transfers_out, :debt_payments, :expenditure,
        :created_at, :updated_at
    )
    ON CONFLICT (account_id, month) DO UPDATE
    SET ending_balance = excluded.ending_balance,
        cash_in = excluded.cash_in,
        cash_out = excluded.cash_out,
        income = excluded.income,
        internal_transfers_out = excluded.internal_transfers_out,
        debt_payments = excluded.debt_payments,
        expenditure = excluded.expenditure,
        updated_at = excluded.updated_at
    """
)

CREATED_AT_SQL = text(
    "SELECT created_at FROM monthly_entries "
    "WHERE account_id = :account_id AND month = :month"
)


class SqlAlchemyMonthlyEntriesRepository(MonthlyEntriesRepositoryPort):
    """Repository backed by SQLAlchemy for monthly entries.

    Concurrent writes to the same (account_id, month) are last-write-wins.
    """

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        self._db_port = db_port

    def get_monthly_entries(self, account_id: str) -> list[MonthlyEntry]:
        """Return every entry of one account, oldest first."""
        query = text(
            SELECT_ENTRIES_SQL + " WHERE account_id = :account_id ORDER BY month"
        )
        return self._select(query, {"account_id": account_id})

    def get_entry(self, account_id: str, month: str) -> MonthlyEntry | None:
        query = text(
            SELECT_ENTRIES_SQL
            + " WHERE account_id = :account_id AND month = :month"
        )
        entries = self._select(query, {"account_id": account_id, "month": month})
        return entries[0] if entries else None

    def list_all_entries(self) -> list[MonthlyEntry]:
        query = text(SELECT_ENTRIES_SQL + " ORDER BY month, account_id")
        return self._select(query, {})

    def upsert_monthly_entry(
        self,
        account_id: str,
        month: str,
        fields: EntryFields,
        create_only: bool = False,
    ) -> MonthlyEntry:
        """Insert or replace an entry, keeping the original ``created_at``.

        Raises:
            ValidationError: If ``create_only`` and the entry already exists.
            PersistenceError: If the write fails.
        """
        now = utc_now()
        params = {
            "account_id": account_id,
            "month": month,
            "ending_balance": decimal_to_db(fields.ending_balance),
            "cash_in": decimal_to_db(fields.cash_in),
            "cash_out": decimal_to_db(fields.cash_out),
            "income": decimal_to_db(fields.income),
            "internal_transfers_out": decimal_to_db(fields.internal_transfers_out),
            "debt_payments": decimal_to_db(fields.debt_payments),
            "expenditure": decimal_to_db(coerce_decimal(fields.expenditure)),
            "created_at": timestamp_to_db(now),
            "updated_at": timestamp_to_db(now),
        }
        key = {"account_id": account_id, "month": month}
        try:
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                if create_only:
                    if conn.execute(CREATED_AT_SQL, key).first() is not None:
                        raise self._already_exists(month)
                    conn.execute(INSERT_ENTRY_SQL, params)
                    created_at = now
                else:
                    conn.execute(UPSERT_ENTRY_SQL, params)
                    stored = conn.execute(CREATED_AT_SQL, key).first()
                    created_at = timestamp_from_db(stored.created_at)
        except SQLAlchemyError as exc:
            # A concurrent create of the same month loses on the primary key.
            if create_only and isinstance(exc, IntegrityError):
                raise self._already_exists(month) from exc
            raise PersistenceError(
                f"Failed to save entry {account_id}/{month}: {exc}"
            ) from exc

        return MonthlyEntry(
            account_id=account_id,
            month=month,
            ending_balance=fields.ending_balance,
            cash_in=fields.cash_in,
            cash_out=fields.cash_out,
            income=fields.income,
            internal_transfers_out=fields.internal_transfers_out,
            debt_payments=fields.debt_payments,
            expenditure=coerce_decimal(fields.expenditure),
            created_at=created_at,
            updated_at=now,
        )

    @staticmethod
    def _already_exists(month: str) -> ValidationError:
        return ValidationError(
            f"An entry for {month} already exists",
            field="month",
            value=month,
        )

    def _select(self, query, params: dict) -> list[MonthlyEntry]:
        try:
            engine = self._db_port.get_engine()
            with engine.connect() as conn:
                rows = conn.execute(query, params).all()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to read entries: {exc}") from exc
        return [
            MonthlyEntry(
                account_id=row.account_id,
                month=row.month,
                ending_balance=coerce_decimal(row.ending_balance),
                cash_in=coerce_decimal(row.cash_in),
                cash_out=coerce_decimal(row.cash_out),
                income=coerce_decimal(row.income),
                internal_transfers_out=coerce_decimal(row.internal_transfers_out),
                debt_payments=coerce_decimal(row.debt_payments),
                expenditure=coerce_decimal(row.expenditure),
                created_at=timestamp_from_db(row.created_at),
                updated_at=timestamp_from_db(row.updated_at),
            )
            for row in rows
        ]


__all__ = ["SqlAlchemyMonthlyEntriesRepository"]
