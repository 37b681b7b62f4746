"""Tests for the cached rate source."""

from decimal import Decimal
from unittest.mock import MagicMock

from src.domain.errors import PersistenceError
from src.domain.models.accounts import Currency
from src.infrastructure.cached_rate_source import CachedRateSource


def test_hits_are_cached_per_month_and_currency():
    """Repeated lookups should hit the store once."""
    port = MagicMock()
    port.get_rate.return_value = Decimal("1.2")
    source = CachedRateSource(port, logger=MagicMock())

    assert source.get_rate("2024-01", Currency.EUR) == Decimal("1.2")
    assert source.get_rate("2024-01-31", "EUR") == Decimal("1.2")
    port.get_rate.assert_called_once_with("2024-01", Currency.EUR)

    source.clear()
    source.get_rate("2024-01", Currency.EUR)
    assert port.get_rate.call_count == 2


def test_misses_are_retried():
    """Pending months should be looked up again on the next call."""
    port = MagicMock()
    port.get_rate.side_effect = [None, Decimal("1.3")]
    source = CachedRateSource(port, logger=MagicMock())

    assert source.get_rate("2024-02", Currency.USD) is None
    assert source.get_rate("2024-02", Currency.USD) == Decimal("1.3")


def test_storage_errors_read_as_pending():
    """A failing store should report a missing rate with a warning."""
    port = MagicMock()
    port.get_rate.side_effect = PersistenceError("locked")
    logger = MagicMock()

    assert CachedRateSource(port, logger=logger).get_rate("2024-02", "AED") is None
    logger.warning.assert_called_once()
