"""Market data service over a scripted CurrencyLayer client."""

from datetime import date

import pytest

from fxsignal.schemas.market import APIStatus, RateSnapshot
from fxsignal.services.base import (
    ExternalAPIError,
    InvalidCurrencyPairError,
    MissingRateError,
    RateLimitError,
)
from fxsignal.services.market_data import MarketDataService


class FakeClient:
    """Answers live/historical calls from a table; anything missing fails."""

    def __init__(self, live=None, historical=None, live_error=None):
        self.live = live or {}
        self.historical = historical or {}
        self.live_error = live_error
        self.live_calls = []
        self.historical_calls = []
        self.closed = False

    async def get_live_rates(self, currencies, source="USD"):
        self.live_calls.append((tuple(currencies), source))
        if source in self.live:
            return self.live[source]
        raise self.live_error or ExternalAPIError("CurrencyLayer", "not available")

    async def get_historical_rates(self, date, currencies, source="USD"):
        self.historical_calls.append(date)
        if date in self.historical:
            return self.historical[date]
        raise ExternalAPIError("CurrencyLayer", f"no data for {date}")

    async def validate_api(self):
        return APIStatus(is_valid=True, is_connected=True, message="ok")

    async def close(self):
        self.closed = True


TODAY = date(2024, 6, 10)


def day_snapshot(day: str, rate: float) -> RateSnapshot:
    return RateSnapshot(
        timestamp=1717000000, source="EUR", quotes={"EURUSD": rate}, date=day, historical=True
    )


@pytest.mark.asyncio
async def test_history_is_oldest_first_and_skips_failed_days():
    client = FakeClient(
        live={"EUR": RateSnapshot(timestamp=1718000000, source="EUR", quotes={"EURUSD": 1.08})},
        historical={
            "2024-06-07": day_snapshot("2024-06-07", 1.07),
            "2024-06-09": day_snapshot("2024-06-09", 1.09),
        },
    )
    service = MarketDataService(client=client, historical_days=3)

    market_data = await service.get_current_and_historical("EUR/USD", today=TODAY)

    assert client.historical_calls == ["2024-06-07", "2024-06-08", "2024-06-09"]
    assert [s.date for s in market_data.historical] == ["2024-06-07", "2024-06-09"]
    assert market_data.current.rate("EURUSD") == 1.08
    assert client.live_calls == [(("USD",), "EUR")]


@pytest.mark.asyncio
async def test_empty_history_is_allowed():
    client = FakeClient(
        live={"EUR": RateSnapshot(timestamp=1718000000, source="EUR", quotes={"EURUSD": 1.08})}
    )
    service = MarketDataService(client=client, historical_days=7)

    market_data = await service.get_current_and_historical("EUR/USD", today=TODAY)

    assert market_data.historical == []
    assert len(client.historical_calls) == 7


@pytest.mark.asyncio
async def test_cross_rate_through_usd():
    usd = RateSnapshot(
        timestamp=1718000000, source="USD", quotes={"USDEUR": 0.9, "USDJPY": 150.0}
    )
    client = FakeClient(live={"USD": usd})
    service = MarketDataService(client=client, historical_days=0)

    market_data = await service.get_current_and_historical("EUR/JPY", today=TODAY)

    assert market_data.current.source == "EUR"
    assert market_data.current.rate("EURJPY") == pytest.approx(150.0 / 0.9)
    assert client.live_calls == [(("JPY",), "EUR"), (("EUR", "JPY"), "USD")]


@pytest.mark.asyncio
async def test_failed_cross_rate_reports_original_error():
    original = ExternalAPIError("CurrencyLayer", "Access Restricted", code="105")
    client = FakeClient(live_error=original)
    service = MarketDataService(client=client, historical_days=0)

    with pytest.raises(ExternalAPIError) as exc_info:
        await service.get_current_and_historical("EUR/USD", today=TODAY)

    assert exc_info.value.message == "Failed to fetch current rates: Access Restricted"
    assert exc_info.value.code == "105"


@pytest.mark.asyncio
async def test_usage_limit_is_rate_limit_error():
    client = FakeClient(
        live_error=RateLimitError("CurrencyLayer", "limit", code="104")
    )
    service = MarketDataService(client=client, historical_days=0)

    with pytest.raises(RateLimitError) as exc_info:
        await service.get_current_and_historical("USD/JPY", today=TODAY)

    assert "Monthly API request limit reached" in exc_info.value.message
    # USD-sourced pairs have no cross-rate route
    assert client.live_calls == [(("JPY",), "USD")]


@pytest.mark.asyncio
async def test_empty_quotes_is_missing_rate():
    client = FakeClient(live={"EUR": RateSnapshot(timestamp=1718000000, source="EUR")})
    service = MarketDataService(client=client, historical_days=0)

    with pytest.raises(MissingRateError):
        await service.get_current_and_historical("EUR/USD", today=TODAY)


@pytest.mark.asyncio
async def test_invalid_pair_never_reaches_provider():
    client = FakeClient()
    service = MarketDataService(client=client, historical_days=0)

    with pytest.raises(InvalidCurrencyPairError):
        await service.get_current_and_historical("EURUSD")

    assert client.live_calls == []


@pytest.mark.asyncio
async def test_status_health_and_close():
    client = FakeClient()
    service = MarketDataService(client=client, historical_days=0)

    assert (await service.get_api_status()).is_valid is True
    assert await service.health_check() is True

    await service.close()
    assert client.closed is True
