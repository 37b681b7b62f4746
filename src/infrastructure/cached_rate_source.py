"""In-process cache in front of the stored exchange rates."""

import threading
from decimal import Decimal

from src.application.ports.exchange_rates import ExchangeRatesPort
from src.domain.errors import PersistenceError
from src.domain.models.accounts import Currency
from src.domain.services.normalization import normalize_month_key
from src.infrastructure.logging.logger import get_app_logger


class CachedRateSource:
    """Memoize rate lookups per (month, currency).

    Only hits are cached: a month whose rates are still pending is looked up
    again next time, so a later backfill is picked up without a restart.
    Storage failures are reported as a missing rate.
    """

    def __init__(self, rates_port: ExchangeRatesPort, logger=None) -> None:
        self._rates_port = rates_port
        self._logger = logger or get_app_logger()
        self._cache: dict[tuple[str, Currency], Decimal] = {}
        self._lock = threading.Lock()

    def get_rate(self, month: str, currency: Currency) -> Decimal | None:
        key = (normalize_month_key(month), Currency(currency))
        with self._lock:
            if key in self._cache:
                return self._cache[key]
        try:
            rate = self._rates_port.get_rate(*key)
        except PersistenceError as exc:
            self._logger.warning(
                f"Rate lookup failed for {key[1].value} in {key[0]}: {exc}"
            )
            return None
        if rate is not None:
            with self._lock:
                self._cache[key] = rate
        return rate

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()


__all__ = ["CachedRateSource"]
