"""Database port for the net worth dashboard.

This module defines the application-layer protocol for accessing the
database engine. Infrastructure implementations provide concrete adapters
that satisfy it.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the dashboard database engine.

    Application use cases can depend on this protocol instead of concrete
    database drivers or configuration details.
    """

    def get_engine(self) -> Engine:
        """Get the engine for the dashboard database.

        Returns:
            Engine: SQLAlchemy engine connected to the dashboard store.
        """


__all__ = ["DatabaseEnginePort"]
