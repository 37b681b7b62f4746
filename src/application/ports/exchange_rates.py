"""Ports for month-end exchange rates."""

from decimal import Decimal
from typing import Protocol

from src.domain.models.accounts import Currency
from src.domain.models.finance import ExchangeRateSnapshot


class ExchangeRatesPort(Protocol):
    """Port exposing stored GBP-based rates."""

    def get_rate(self, month: str, currency: Currency) -> Decimal | None:
        """Return units of ``currency`` per 1 GBP at the month end, or None."""

    def save_rates(self, snapshot: ExchangeRateSnapshot) -> None:
        """Insert or replace the rates for one month-end date."""

    def has_rates(self, date: str) -> bool:
        """Return True when rates exist for the ``YYYY-MM-DD`` date."""


class RateProviderPort(Protocol):
    """Port exposing a remote source of historical rates."""

    def fetch_rate(
        self,
        base: Currency,
        target: Currency,
        date: str,
    ) -> Decimal | None:
        """Return the ``base``->``target`` mid rate for a date, or None."""


__all__ = ["ExchangeRatesPort", "RateProviderPort"]
