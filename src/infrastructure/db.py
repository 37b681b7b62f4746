"""Database infrastructure for the net worth dashboard.

This module exposes concrete helpers to create and reuse the SQLAlchemy
engine connected to the dashboard database. It belongs to the infrastructure
layer because it deals with external systems (SQLite or PostgreSQL).
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from src.application.ports.database import DatabaseEnginePort
from src.utils.utils import get_project_root


DB_URL_ENV = "NETWORTH_DB_URL"


def _get_env_var(name: str, default: str | None = None) -> str:
    """Read an environment variable or raise a descriptive error.

    Args:
        name: Name of the environment variable to read.
        default: Value used when the variable is missing or empty.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the variable is missing and no default is given.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if value:
        return value
    if default is not None:
        return default
    raise RuntimeError(f"Missing environment variable: {name}")


def default_db_url() -> str:
    """Return the SQLite URL under ``<project>/data``, creating the folder."""
    data_dir = get_project_root() / "data"
    data_dir.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{data_dir / 'networth.db'}"


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine.

    SQLite keeps its default pool and allows cross-thread use for the
    concurrent entry fetches; server databases get a small pool with health
    checks.

    Args:
        db_url: Fully qualified database URL (including driver and credentials)

    Returns:
        Engine: A SQLAlchemy engine instance.
    """
    if db_url.startswith("sqlite"):
        return create_engine(
            db_url,
            connect_args={"check_same_thread": False},
            future=True,
        )
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_engine: Optional[Engine] = None


def engine_for_url(db_url: str) -> Engine:
    """Build a dedicated engine for an explicit URL, bypassing the singleton."""
    return _create_engine(db_url)


def get_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the dashboard database.

    Returns:
        Engine: Lazily initialized engine.
    """
    global _engine
    if _engine is None:
        db_url = _get_env_var(DB_URL_ENV, default=default_db_url())
        _engine = _create_engine(db_url)
    return _engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine.

    The adapter hides configuration details (environment variables, pooling)
    behind the port so application use cases can depend only on the protocol.
    An explicit engine may be injected, which tests use for in-memory SQLite.
    """

    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine

    def get_engine(self) -> Engine:
        """Get the engine for the dashboard database.

        Returns:
            Engine: SQLAlchemy engine connected to the dashboard store.
        """
        if self._engine is not None:
            return self._engine
        return get_engine()


__all__ = [
    "get_engine",
    "engine_for_url",
    "default_db_url",
    "SqlAlchemyDatabaseEngineAdapter",
]
