"""Conversions between domain values and stored column values."""

from datetime import datetime, timezone
from decimal import Decimal


def decimal_to_db(value: Decimal | None) -> str | None:
    """Store Decimals as text so no precision is lost in any backend."""
    if value is None:
        return None
    return str(value)


def timestamp_to_db(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat()


def timestamp_from_db(value) -> datetime | None:
    """Parse ISO timestamps; datetimes returned by the driver pass through."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


__all__ = ["decimal_to_db", "timestamp_to_db", "timestamp_from_db", "utc_now"]
