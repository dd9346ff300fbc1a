"""
Market Data Service Implementation

Fetches the live rate and the previous N daily rates for a currency pair.
For a pair like EUR/USD we want 1 EUR = X USD, so BASE is requested as the
source currency and QUOTE as the target.
"""

import asyncio
import logging
from datetime import date, timedelta
from typing import Optional

from fxsignal.core.config import settings
from fxsignal.schemas.market import APIStatus, MarketData, RateSnapshot
from fxsignal.services.base import ExternalAPIError, MissingRateError, RateLimitError
from fxsignal.services.market_data.client import (
    CurrencyLayerClient,
    INVALID_API_KEY,
    USAGE_LIMIT_REACHED,
)
from fxsignal.services.market_data.interface import MarketDataServiceInterface
from fxsignal.services.signals.series import split_pair

logger = logging.getLogger(__name__)

# Fewer successful days than this only logs a warning
MIN_RELIABLE_HISTORY = 3


def _current_rates_error(error: ExternalAPIError) -> ExternalAPIError:
    """Wrap a live-rate failure with a user-facing message."""
    if error.code == INVALID_API_KEY:
        message = "Invalid API key. Please check your API key configuration."
    elif error.code == USAGE_LIMIT_REACHED:
        message = (
            "Monthly API request limit reached. "
            "Please upgrade your plan or wait for next month."
        )
    else:
        message = error.message or "API call failed"

    error_class = RateLimitError if error.code == USAGE_LIMIT_REACHED else ExternalAPIError
    return error_class(
        "MarketDataService",
        f"Failed to fetch current rates: {message}",
        details=error.details,
        code=error.code,
    )


class MarketDataService(MarketDataServiceInterface):
    """
    Market Data Service.

    Live rate: direct BASE-sourced quote, falling back to a cross rate
    through USD. History: previous days fetched concurrently; failed days
    are dropped rather than failing the request.
    """

    def __init__(
        self,
        client: Optional[CurrencyLayerClient] = None,
        historical_days: Optional[int] = None,
    ):
        self.client = client or CurrencyLayerClient()
        self.historical_days = (
            historical_days if historical_days is not None else settings.historical_days
        )

    @property
    def name(self) -> str:
        return "MarketDataService"

    async def execute(self, input_data: str) -> MarketData:
        return await self.get_current_and_historical(input_data)

    async def get_current_and_historical(
        self, currency_pair: str, today: Optional[date] = None
    ) -> MarketData:
        """
        Get market data for analysis (current and historical).

        Raises:
            InvalidCurrencyPairError: pair not in BASE/QUOTE form
            ExternalAPIError: live rate unavailable from every route
            MissingRateError: provider returned no quotes at all
        """
        base, quote = split_pair(currency_pair)

        current = await self._fetch_current(currency_pair, base, quote)
        self._check_current_quote(currency_pair, current, base, quote)

        historical = await self._fetch_historical(base, quote, today or date.today())

        if not historical:
            logger.warning(
                "No historical data available. "
                "Signal will be generated with current data only."
            )
        elif len(historical) < MIN_RELIABLE_HISTORY:
            logger.warning(
                f"Only {len(historical)} days of historical data available. "
                "Signal accuracy may be reduced."
            )

        return MarketData(current=current, historical=historical)

    async def _fetch_current(self, currency_pair: str, base: str, quote: str) -> RateSnapshot:
        try:
            return await self.client.get_live_rates([quote], source=base)
        except ExternalAPIError as error:
            if base == "USD":
                raise _current_rates_error(error) from error

            logger.info(f"Trying alternative: Using USD as source for {currency_pair}")
            try:
                return await self._fetch_cross_rate(base, quote)
            except ExternalAPIError as alt_error:
                logger.debug(f"Cross rate fallback failed for {currency_pair}: {alt_error}")
                raise _current_rates_error(error) from error

    async def _fetch_cross_rate(self, base: str, quote: str) -> RateSnapshot:
        """Derive BASE/QUOTE from USD-sourced quotes of both legs."""
        usd = await self.client.get_live_rates([base, quote], source="USD")
        base_rate = usd.rate(f"USD{base}")
        quote_rate = usd.rate(f"USD{quote}")

        if not base_rate or not quote_rate:
            raise ExternalAPIError(
                self.name,
                f"Cross rate unavailable for {base}/{quote}",
                details={"available": sorted(usd.quotes)},
            )

        return RateSnapshot(
            timestamp=usd.timestamp,
            source=base,
            quotes={f"{base}{quote}": quote_rate / base_rate},
        )

    def _check_current_quote(
        self, currency_pair: str, current: RateSnapshot, base: str, quote: str
    ) -> None:
        pair_key = f"{current.source}{quote}"
        if current.rate(pair_key):
            return

        if not current.quotes:
            raise MissingRateError(
                self.name,
                f"Unable to fetch current rate for {currency_pair}. "
                "The currency pair may not be supported by your API plan.",
                details={"pair_key": pair_key},
            )

        matching_key = next(
            (key for key in current.quotes if base in key or quote in key), None
        )
        if matching_key:
            logger.warning(f"Using alternative quote key: {matching_key} instead of {pair_key}")
        else:
            logger.warning(f"Using fallback quote key: {next(iter(current.quotes))}")

    async def _fetch_historical(
        self, base: str, quote: str, today: date
    ) -> list[RateSnapshot]:
        """Previous `historical_days` days, oldest first; failed days are skipped."""
        dates = [
            (today - timedelta(days=offset)).isoformat()
            for offset in range(self.historical_days, 0, -1)
        ]

        results = await asyncio.gather(
            *(self.client.get_historical_rates(day, [quote], source=base) for day in dates),
            return_exceptions=True,
        )

        historical = []
        for day, result in zip(dates, results):
            if isinstance(result, BaseException):
                logger.warning(f"Failed to fetch historical data for {day}: {result}")
                continue
            historical.append(result)

        return historical

    async def get_api_status(self) -> APIStatus:
        return await self.client.validate_api()

    async def health_check(self) -> bool:
        """Provider is healthy when the key validates."""
        status = await self.client.validate_api()
        return status.is_valid

    async def close(self) -> None:
        await self.client.close()
