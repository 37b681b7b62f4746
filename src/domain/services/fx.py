"""Currency conversion against GBP-based monthly rates.

Rates are expressed as units of a currency per 1 GBP at a month end
(``1 GBP = 1.15 EUR``). Converting goes through GBP: divide by the source
rate, then multiply by the target rate.
"""

from decimal import Decimal
from logging import Logger
from typing import Protocol

from src.domain.constants import BASE_CURRENCY
from src.domain.models.accounts import Currency
from src.domain.services.normalization import (
    normalize_currency,
    normalize_month_key,
)
from src.utils.decimal_utils import coerce_decimal


class RateSource(Protocol):
    """Anything able to return a GBP-based rate for a month."""

    def get_rate(self, month: str, currency: Currency) -> Decimal | None:
        """Return the rate for the month, or None if not yet available."""


def _lookup(
    rate_source: RateSource,
    month: str,
    currency: Currency,
) -> Decimal | None:
    if currency == BASE_CURRENCY:
        return Decimal("1")
    rate = rate_source.get_rate(month, currency)
    if rate is None:
        return None
    rate = coerce_decimal(rate)
    return rate if rate > 0 else None


def _convert_with_status(
    value: Decimal,
    source: Currency,
    target: Currency,
    month_key: str,
    rate_source: RateSource,
) -> tuple[Decimal, bool]:
    if source == target:
        return value, False
    rate_from = _lookup(rate_source, month_key, source)
    rate_to = _lookup(rate_source, month_key, target)
    if rate_from is None or rate_to is None:
        return value, True
    amount_in_base = value if source == BASE_CURRENCY else value / rate_from
    if target == BASE_CURRENCY:
        return amount_in_base, False
    return amount_in_base * rate_to, False


def convert(
    amount,
    from_currency: Currency | str,
    to_currency: Currency | str,
    month: str,
    rate_source: RateSource,
    logger: Logger | None = None,
) -> Decimal:
    """Convert an amount between currencies at a month's historical rate.

    Args:
        amount: Amount in ``from_currency``.
        from_currency: Currency the amount is expressed in.
        to_currency: Currency to convert into.
        month: ``YYYY-MM`` (or ``YYYY-MM-DD``) month of the rate to use.
        rate_source: Source of GBP-based rates.
        logger: Optional logger for pending-rate notices.

    Returns:
        Decimal: Converted amount, or the unconverted amount when a rate is
        not available yet.
    """
    source = normalize_currency(from_currency)
    target = normalize_currency(to_currency)
    month_key = normalize_month_key(month)
    converted, pending = _convert_with_status(
        coerce_decimal(amount),
        source,
        target,
        month_key,
        rate_source,
    )
    if pending and logger is not None:
        logger.debug(
            f"Rate pending for {source.value}->{target.value} "
            f"in {month_key}; returning unconverted amount"
        )
    return converted


class CurrencyConverter:
    """Convert amounts into one target currency, tracking pending rates."""

    def __init__(
        self,
        rate_source: RateSource,
        target_currency: Currency | str,
        logger: Logger | None = None,
    ) -> None:
        self._rate_source = rate_source
        self.target_currency = normalize_currency(target_currency)
        self._logger = logger
        self.is_pending = False

    def to_target(
        self,
        amount,
        currency: Currency | str,
        month: str,
    ) -> Decimal:
        """Convert ``amount`` from ``currency`` at ``month`` into the target."""
        source = normalize_currency(currency)
        month_key = normalize_month_key(month)
        converted, pending = _convert_with_status(
            coerce_decimal(amount),
            source,
            self.target_currency,
            month_key,
            self._rate_source,
        )
        if pending:
            if not self.is_pending and self._logger is not None:
                self._logger.warning(
                    f"Exchange rates pending for {month_key}; "
                    "showing unconverted amounts"
                )
            self.is_pending = True
        return converted


__all__ = ["RateSource", "convert", "CurrencyConverter"]
