"""CLI adapter to create the dashboard tables.

This module wires the schema helper to the concrete database adapter and
provides a simple command-line entry point for preparing a new database.
"""

from src.infrastructure.container import build_database_adapter
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.schema import ensure_schema
from src.infrastructure.settings import DashboardSettings


def main() -> None:
    """Create any missing dashboard tables."""
    logger = get_app_logger()
    db_adapter = build_database_adapter(DashboardSettings.from_env())
    engine = db_adapter.get_engine()
    ensure_schema(engine)
    logger.info(f"Schema ready on {engine.url}")
    print("Dashboard tables are ready.")


if __name__ == "__main__":  # pragma: no cover
    main()
