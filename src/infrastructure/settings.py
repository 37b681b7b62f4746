"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv

from src.domain.models.accounts import Currency
from src.infrastructure.hexarate_client import DEFAULT_HEXARATE_URL
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class DashboardSettings:
    """Runtime settings for the dashboard.

    Attributes:
        db_url: SQLAlchemy URL, or None to use the default SQLite file.
        display_currency: Default display currency.
        hexarate_url: HexaRate API root.
        fx_request_timeout: HTTP timeout in seconds for rate requests.
        fetch_workers: Concurrent entry fetches per use case.
    """

    db_url: str | None = None
    display_currency: Currency = Currency.GBP
    hexarate_url: str = DEFAULT_HEXARATE_URL
    fx_request_timeout: float = 10.0
    fetch_workers: int = 4

    @classmethod
    def from_env(cls) -> "DashboardSettings":
        """Build settings from environment variables.

        Invalid values fall back to the defaults with a warning.

        Returns:
            DashboardSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        return cls(
            db_url=os.getenv("NETWORTH_DB_URL") or None,
            display_currency=cls._parse_currency(
                os.getenv("NETWORTH_DISPLAY_CURRENCY"), logger
            ),
            hexarate_url=os.getenv("HEXARATE_API_URL") or DEFAULT_HEXARATE_URL,
            fx_request_timeout=cls._parse_number(
                "FX_REQUEST_TIMEOUT", float, 10.0, logger
            ),
            fetch_workers=cls._parse_number(
                "NETWORTH_FETCH_WORKERS", int, 4, logger
            ),
        )

    @staticmethod
    def _parse_currency(raw: str | None, logger) -> Currency:
        if not raw:
            return Currency.GBP
        try:
            return Currency(raw.strip().upper())
        except ValueError:
            logger.warning(
                f"Unsupported NETWORTH_DISPLAY_CURRENCY={raw!r}; using GBP"
            )
            return Currency.GBP

    @staticmethod
    def _parse_number(name: str, kind, default, logger):
        raw = os.getenv(name)
        if not raw:
            return default
        try:
            value = kind(raw)
        except ValueError:
            logger.warning(f"Invalid {name}={raw!r}; using {default}")
            return default
        if value <= 0:
            logger.warning(f"{name} must be positive; using {default}")
            return default
        return value


__all__ = ["DashboardSettings"]
