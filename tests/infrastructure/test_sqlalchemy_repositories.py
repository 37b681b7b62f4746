"""Tests for the SQLAlchemy repositories against in-memory SQLite."""

from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool

from src.domain.errors import PersistenceError, ValidationError
from src.domain.models.accounts import (
    Account,
    AccountCategory,
    AccountType,
    Currency,
    EntryFields,
)
from src.domain.models.finance import ExchangeRateSnapshot
from src.domain.models.projection import ProjectionScenario
from src.infrastructure.accounts_repository import SqlAlchemyAccountsRepository
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.exchange_rates_repository import (
    SqlAlchemyExchangeRatesRepository,
)
from src.infrastructure.monthly_entries_repository import (
    SqlAlchemyMonthlyEntriesRepository,
)
from src.infrastructure.projection_scenarios_repository import (
    SqlAlchemyProjectionScenariosRepository,
)
from src.infrastructure.schema import ensure_schema


@pytest.fixture
def db_port():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    ensure_schema(engine)
    yield SqlAlchemyDatabaseEngineAdapter(engine)
    engine.dispose()


def _account(account_id: str, name: str, **overrides) -> Account:
    values = {
        "id": account_id,
        "name": name,
        "account_type": AccountType.CURRENT,
    }
    values.update(overrides)
    return Account(**values)


def test_ensure_schema_is_idempotent(db_port) -> None:
    """Running the schema twice should not fail."""
    ensure_schema(db_port.get_engine())


def test_accounts_round_trip_and_ordering(db_port) -> None:
    """Accounts should be stored with their enums and listed in order."""
    repository = SqlAlchemyAccountsRepository(db_port)
    repository.create_account(
        _account(
            "b",
            "Broker",
            account_type=AccountType.STOCK,
            currency=Currency.USD,
            is_isa=True,
            owner="bob",
            display_order=1,
        )
    )
    repository.create_account(
        _account("a", "Monzo", category=AccountCategory.CASH, display_order=0)
    )

    accounts = repository.list_accounts()

    assert [account.id for account in accounts] == ["a", "b"]
    broker = repository.get_account("b")
    assert broker.account_type is AccountType.STOCK
    assert broker.currency is Currency.USD
    assert broker.is_isa is True
    assert broker.owner == "bob"
    assert repository.get_account("missing") is None


def test_accounts_close_reopen_and_reorder(db_port) -> None:
    """Closing should hide accounts from open listings and stamp the time."""
    repository = SqlAlchemyAccountsRepository(db_port)
    repository.create_account(_account("a", "Monzo"))
    repository.create_account(_account("b", "Savings", display_order=1))

    repository.set_account_closed("a", True)
    closed = repository.get_account("a")
    open_ids = [account.id for account in repository.list_accounts(False)]
    repository.set_account_closed("a", False)
    repository.update_display_order({"a": 5, "b": 0})
    repository.update_account(replace(repository.get_account("b"), name="Marcus"))

    assert closed.is_closed and closed.closed_at is not None
    assert open_ids == ["b"]
    reopened = repository.get_account("a")
    assert not reopened.is_closed and reopened.closed_at is None
    assert [account.name for account in repository.list_accounts()] == [
        "Marcus",
        "Monzo",
    ]


def test_entries_upsert_keeps_created_at(db_port) -> None:
    """Updating an entry should keep its original creation time."""
    repository = SqlAlchemyMonthlyEntriesRepository(db_port)

    first = repository.upsert_monthly_entry(
        "a", "2024-01", EntryFields(ending_balance=Decimal("100.10"))
    )
    second = repository.upsert_monthly_entry(
        "a",
        "2024-01",
        EntryFields(
            ending_balance=Decimal("200.20"),
            cash_in=Decimal("50"),
            expenditure=Decimal("5"),
        ),
    )
    stored = repository.get_entry("a", "2024-01")

    assert second.created_at == first.created_at
    assert stored.ending_balance == Decimal("200.20")
    assert stored.cash_in == Decimal("50")
    assert stored.expenditure == Decimal("5")
    assert stored.created_at == first.created_at


def test_entries_create_only_rejects_duplicates(db_port) -> None:
    """create_only should refuse to overwrite an existing month."""
    repository = SqlAlchemyMonthlyEntriesRepository(db_port)
    fields = EntryFields(ending_balance=Decimal("1"))
    repository.upsert_monthly_entry("a", "2024-01", fields)

    with pytest.raises(ValidationError):
        repository.upsert_monthly_entry("a", "2024-01", fields, create_only=True)


def _insert_competing_entry_first(engine, created_at: datetime) -> None:
    """Commit another writer's row just before the next entry insert."""
    state = {"done": False}

    @event.listens_for(engine, "before_cursor_execute")
    def _race(conn, cursor, statement, parameters, context, executemany):
        if state["done"] or not statement.lstrip().startswith(
            "INSERT INTO monthly_entries"
        ):
            return
        state["done"] = True
        cursor.connection.execute(
            "INSERT INTO monthly_entries (account_id, month, ending_balance, "
            "created_at, updated_at) VALUES (?, ?, ?, ?, ?)",
            ("a", "2024-01", "111", created_at.isoformat(), created_at.isoformat()),
        )


def test_entries_racing_first_writes_are_last_write_wins(db_port) -> None:
    """A row committed by another writer should be overwritten, not rejected."""
    engine = db_port.get_engine()
    earlier = datetime(2024, 1, 1, tzinfo=timezone.utc)
    _insert_competing_entry_first(engine, earlier)
    repository = SqlAlchemyMonthlyEntriesRepository(db_port)

    saved = repository.upsert_monthly_entry(
        "a", "2024-01", EntryFields(ending_balance=Decimal("222"))
    )
    stored = repository.get_entry("a", "2024-01")

    assert stored.ending_balance == Decimal("222")
    assert stored.created_at == earlier
    assert saved.created_at == earlier


def test_entries_racing_create_only_reports_duplicate(db_port) -> None:
    """A create-only write that loses the race should be a validation error."""
    _insert_competing_entry_first(
        db_port.get_engine(), datetime(2024, 1, 1, tzinfo=timezone.utc)
    )
    repository = SqlAlchemyMonthlyEntriesRepository(db_port)

    with pytest.raises(ValidationError, match="already exists"):
        repository.upsert_monthly_entry(
            "a",
            "2024-01",
            EntryFields(ending_balance=Decimal("222")),
            create_only=True,
        )


def test_entries_are_listed_in_month_order(db_port) -> None:
    """Per-account and full listings should be ordered by month."""
    repository = SqlAlchemyMonthlyEntriesRepository(db_port)
    for account_id, month in (("b", "2024-02"), ("a", "2024-03"), ("a", "2024-01")):
        repository.upsert_monthly_entry(
            account_id, month, EntryFields(ending_balance=Decimal("1"))
        )

    assert [entry.month for entry in repository.get_monthly_entries("a")] == [
        "2024-01",
        "2024-03",
    ]
    assert [
        (entry.month, entry.account_id) for entry in repository.list_all_entries()
    ] == [("2024-01", "a"), ("2024-02", "b"), ("2024-03", "a")]


def test_scenarios_round_trip(db_port) -> None:
    """Scenario rates should survive JSON storage keyed by type."""
    repository = SqlAlchemyProjectionScenariosRepository(db_port)
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    scenario = ProjectionScenario(
        id="s1",
        name="Base",
        monthly_income=Decimal("4000"),
        savings_rate=Decimal("25"),
        time_period_months=120,
        growth_rates={AccountType.STOCK: Decimal("7.5")},
        savings_allocation={AccountType.STOCK: Decimal("100")},
        created_at=now,
        updated_at=now,
    )

    repository.create_scenario(scenario)
    repository.update_scenario(replace(scenario, name="Updated"))
    [stored] = repository.list_scenarios()
    repository.delete_scenario("s1")

    assert stored.name == "Updated"
    assert stored.growth_rates == {AccountType.STOCK: Decimal("7.5")}
    assert stored.savings_allocation == {AccountType.STOCK: Decimal("100")}
    assert stored.created_at == now
    assert repository.list_scenarios() == []


def test_exchange_rates_keyed_by_month_end(db_port) -> None:
    """Rates should be stored per month end and replaced on save."""
    repository = SqlAlchemyExchangeRatesRepository(db_port)
    repository.save_rates(
        ExchangeRateSnapshot(
            date="2024-02-29",
            rates={Currency.EUR: Decimal("1.17"), Currency.USD: Decimal("1.26")},
        )
    )
    repository.save_rates(
        ExchangeRateSnapshot(
            date="2024-02-29",
            rates={Currency.EUR: Decimal("1.18"), Currency.USD: Decimal("1.27")},
        )
    )

    assert repository.has_rates("2024-02-29")
    assert not repository.has_rates("2024-03-31")
    assert repository.get_rate("2024-02", Currency.EUR) == Decimal("1.18")
    assert repository.get_rate("2024-02-10", "GBP") == Decimal("1")
    assert repository.get_rate("2024-02", Currency.AED) is None
    assert repository.get_rate("2024-03", Currency.EUR) is None


def test_storage_errors_are_wrapped() -> None:
    """SQLAlchemy failures should surface as PersistenceError."""
    engine = MagicMock()
    engine.connect.side_effect = OperationalError("SELECT", {}, Exception("down"))
    db_port = SqlAlchemyDatabaseEngineAdapter(engine)

    with pytest.raises(PersistenceError):
        SqlAlchemyAccountsRepository(db_port).list_accounts()
    with pytest.raises(PersistenceError):
        SqlAlchemyExchangeRatesRepository(db_port).get_rate("2024-01", Currency.EUR)
