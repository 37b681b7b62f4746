"""CLI adapter to backfill month-end exchange rates from HexaRate."""

from datetime import date
import os

from src.domain.services.normalization import (
    is_month_key,
    last_completed_month,
    month_range,
)
from src.infrastructure.container import Container
from src.infrastructure.logging.logger import get_app_logger


def _parse_month(value: str | None, logger) -> str | None:
    """Validate a ``YYYY-MM`` string.

    Args:
        value: Raw month string.
        logger: Logger used for warnings.

    Returns:
        str | None: The month, or None when missing or invalid.
    """
    if not value:
        return None
    value = value.strip()
    if not is_month_key(value):
        logger.warning(f"Invalid month '{value}'. Expected format YYYY-MM.")
        return None
    return value


def main() -> None:
    """Fetch rates for every month end between the configured bounds.

    ``BACKFILL_START_MONTH`` defaults to the earliest stored entry and
    ``BACKFILL_END_MONTH`` to the last completed calendar month.
    ``BACKFILL_FORCE=1`` refetches months that already have rates.
    """
    logger = get_app_logger()
    container = Container()

    start = _parse_month(os.getenv("BACKFILL_START_MONTH"), logger)
    end = _parse_month(os.getenv("BACKFILL_END_MONTH"), logger)
    force = os.getenv("BACKFILL_FORCE", "").strip().lower() in {"1", "true", "yes"}

    if start is None:
        entries = container.entries_repository.list_all_entries()
        if not entries:
            logger.warning("No monthly entries stored; nothing to backfill.")
            return
        start = min(entry.month for entry in entries)
    end = end or last_completed_month(date.today())

    result = container.backfill_exchange_rates().execute(
        month_range(start, end),
        force=force,
    )
    print(
        f"Backfill {start}..{end}: saved={len(result.saved)}, "
        f"skipped={len(result.skipped)}, failed={len(result.failed)}"
    )
    if result.failed:
        print("Pending months: " + ", ".join(result.failed))


if __name__ == "__main__":  # pragma: no cover
    main()
