"""Use case to fill missing month-end exchange rates."""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from src.application.ports.exchange_rates import (
    ExchangeRatesPort,
    RateProviderPort,
)
from src.domain.constants import BASE_CURRENCY
from src.domain.errors import PersistenceError
from src.domain.models.accounts import Currency
from src.domain.models.finance import ExchangeRateSnapshot
from src.domain.services.normalization import last_day_of_month
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class BackfillResult:
    """Result of a backfill run.

    Attributes:
        saved: Months whose rates were fetched and stored.
        skipped: Months that already had rates.
        failed: Months left pending because a rate could not be fetched.
    """

    saved: list[str]
    skipped: list[str]
    failed: list[str]


class BackfillExchangeRatesUseCase:
    """Fetch GBP-based rates for month ends that have none stored."""

    def __init__(
        self,
        rates_repository: ExchangeRatesPort,
        rate_provider: RateProviderPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            rates_repository: Port storing month-end rates.
            rate_provider: Remote source of historical rates.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._rates_repository = rates_repository
        self._rate_provider = rate_provider
        self._logger = logger or get_app_logger()

    def execute(
        self,
        months: Iterable[str],
        force: bool = False,
    ) -> BackfillResult:
        """Fetch and store rates for each month end.

        A month is only stored when every non-GBP currency returned a rate;
        otherwise it stays pending and is retried on the next run.

        Args:
            months: ``YYYY-MM`` months to backfill.
            force: Refetch months that already have rates.

        Returns:
            BackfillResult: Saved, skipped and failed months.
        """
        saved: list[str] = []
        skipped: list[str] = []
        failed: list[str] = []
        for month in sorted(set(months)):
            rate_date = last_day_of_month(month)
            if not force and self._rates_repository.has_rates(rate_date):
                skipped.append(month)
                continue
            rates = self._fetch_rates(rate_date)
            if rates is None:
                failed.append(month)
                continue
            self._rates_repository.save_rates(
                ExchangeRateSnapshot(date=rate_date, rates=rates)
            )
            saved.append(month)

        self._logger.info(
            f"Exchange rate backfill: saved={len(saved)}, "
            f"skipped={len(skipped)}, failed={len(failed)}"
        )
        return BackfillResult(saved=saved, skipped=skipped, failed=failed)

    def _fetch_rates(self, rate_date: str) -> dict[Currency, Decimal] | None:
        rates: dict[Currency, Decimal] = {}
        for currency in Currency:
            if currency == BASE_CURRENCY:
                continue
            try:
                rate = self._rate_provider.fetch_rate(
                    BASE_CURRENCY, currency, rate_date
                )
            except PersistenceError as exc:
                self._logger.warning(
                    f"Rate fetch failed for {currency.value} on {rate_date}: {exc}"
                )
                return None
            if rate is None or rate <= 0:
                self._logger.warning(
                    f"No rate for {currency.value} on {rate_date}; leaving pending"
                )
                return None
            rates[currency] = rate
        return rates


__all__ = ["BackfillExchangeRatesUseCase", "BackfillResult"]
