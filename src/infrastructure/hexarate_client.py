"""HTTP client for historical rates from the HexaRate API."""

from decimal import Decimal

import requests

from src.application.ports.exchange_rates import RateProviderPort
from src.domain.errors import PersistenceError
from src.domain.models.accounts import Currency
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal


DEFAULT_HEXARATE_URL = "https://hexarate.paikama.co"


class HexaRateClient(RateProviderPort):
    """Fetch one currency pair's mid rate for a date."""

    def __init__(
        self,
        base_url: str = DEFAULT_HEXARATE_URL,
        timeout: float = 10,
        logger=None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API root, without the ``/api`` suffix.
            timeout: Request timeout in seconds.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._logger = logger or get_app_logger()

    def fetch_rate(
        self,
        base: Currency,
        target: Currency,
        date: str,
    ) -> Decimal | None:
        """Return the ``base``->``target`` mid rate on ``date``.

        Args:
            base: Base currency.
            target: Quote currency.
            date: ``YYYY-MM-DD`` date.

        Returns:
            Decimal | None: Mid rate, or None when the API has no rate.

        Raises:
            PersistenceError: If the request fails or times out.
        """
        url = (
            f"{self._base_url}/api/rates/"
            f"{Currency(base).value}/{Currency(target).value}/{date}"
        )
        try:
            response = requests.get(
                url,
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise PersistenceError(f"Rate request failed for {url}: {exc}") from exc

        if response.status_code != 200:
            self._logger.warning(
                f"HexaRate returned {response.status_code} for {url}"
            )
            return None
        try:
            payload = response.json()
        except ValueError:
            self._logger.warning(f"HexaRate returned invalid JSON for {url}")
            return None

        data = payload.get("data") if isinstance(payload, dict) else None
        raw = (data or {}).get("mid")
        if raw is None:
            self._logger.warning(f"No mid rate in HexaRate response for {url}")
            return None
        rate = coerce_decimal(raw)
        return rate if rate > 0 else None


__all__ = ["HexaRateClient", "DEFAULT_HEXARATE_URL"]
