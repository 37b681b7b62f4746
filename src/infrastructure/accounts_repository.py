"""SQLAlchemy-backed repository for tracked accounts."""

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.application.ports.accounts_repository import AccountsRepositoryPort
from src.application.ports.database import DatabaseEnginePort
from src.domain.errors import PersistenceError
from src.domain.models.accounts import (
    Account,
    AccountCategory,
    AccountType,
    Currency,
)
from src.infrastructure.sql_values import (
    timestamp_from_db,
    timestamp_to_db,
    utc_now,
)


SELECT_ACCOUNTS_SQL = """
SELECT id, name, account_type, category, currency, is_isa, owner,
       is_closed, closed_at, display_order
FROM accounts
"""

INSERT_ACCOUNT_SQL = text(
    """
    INSERT INTO accounts (
        id, name, account_type, category, currency, is_isa, owner,
        is_closed, closed_at, display_order
    )
    VALUES (
        :id, :name, :account_type, :category, :currency, :is_isa, :owner,
        :is_closed, :closed_at, :display_order
    )
    """
)

UPDATE_ACCOUNT_SQL = text(
    """
    UPDATE accounts
    SET name = :name,
        account_type = :account_type,
        category = :category,
        currency = :currency,
        is_isa = :is_isa,
        owner = :owner,
        is_closed = :is_closed,
        closed_at = :closed_at,
        display_order = :display_order
    WHERE id = :id
    """
)


class SqlAlchemyAccountsRepository(AccountsRepositoryPort):
    """Repository backed by SQLAlchemy for tracked accounts."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the dashboard engine.
        """
        self._db_port = db_port

    def list_accounts(self, include_closed: bool = True) -> list[Account]:
        """Return accounts ordered by display order, then name."""
        sql = SELECT_ACCOUNTS_SQL
        if not include_closed:
            sql += " WHERE is_closed = 0"
        sql += " ORDER BY display_order, name"
        try:
            engine = self._db_port.get_engine()
            with engine.connect() as conn:
                rows = conn.execute(text(sql)).all()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to list accounts: {exc}") from exc
        return [self._to_account(row) for row in rows]

    def get_account(self, account_id: str) -> Account | None:
        query = text(SELECT_ACCOUNTS_SQL + " WHERE id = :id")
        try:
            engine = self._db_port.get_engine()
            with engine.connect() as conn:
                row = conn.execute(query, {"id": account_id}).first()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to read account: {exc}") from exc
        return self._to_account(row) if row else None

    def create_account(self, account: Account) -> Account:
        self._write(INSERT_ACCOUNT_SQL, account, "create")
        return account

    def update_account(self, account: Account) -> Account:
        self._write(UPDATE_ACCOUNT_SQL, account, "update")
        return account

    def set_account_closed(self, account_id: str, is_closed: bool) -> None:
        """Soft-close or reopen an account, stamping ``closed_at``."""
        query = text(
            """
            UPDATE accounts
            SET is_closed = :is_closed, closed_at = :closed_at
            WHERE id = :id
            """
        )
        params = {
            "id": account_id,
            "is_closed": int(is_closed),
            "closed_at": timestamp_to_db(utc_now()) if is_closed else None,
        }
        try:
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                conn.execute(query, params)
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Failed to change account status: {exc}"
            ) from exc

    def update_display_order(self, orders: dict[str, int]) -> None:
        if not orders:
            return
        query = text("UPDATE accounts SET display_order = :position WHERE id = :id")
        params = [
            {"id": account_id, "position": position}
            for account_id, position in orders.items()
        ]
        try:
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                conn.execute(query, params)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to reorder accounts: {exc}") from exc

    def _write(self, query, account: Account, action: str) -> None:
        try:
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                conn.execute(query, self._to_params(account))
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Failed to {action} account {account.id}: {exc}"
            ) from exc

    @staticmethod
    def _to_params(account: Account) -> dict:
        return {
            "id": account.id,
            "name": account.name,
            "account_type": account.account_type.value,
            "category": account.category.value,
            "currency": account.currency.value,
            "is_isa": int(account.is_isa),
            "owner": account.owner,
            "is_closed": int(account.is_closed),
            "closed_at": timestamp_to_db(account.closed_at),
            "display_order": account.display_order,
        }

    @staticmethod
    def _to_account(row) -> Account:
        return Account(
            id=row.id,
            name=row.name,
            account_type=AccountType(row.account_type),
            category=AccountCategory(row.category),
            currency=Currency(row.currency),
            is_isa=bool(row.is_isa),
            owner=row.owner,
            is_closed=bool(row.is_closed),
            closed_at=timestamp_from_db(row.closed_at),
            display_order=row.display_order or 0,
        )


__all__ = ["SqlAlchemyAccountsRepository"]
