"""
Indicator Engine Service Implementation

Builds synthetic candles from rate points and calculates the indicator set.
Pure Python/NumPy calculations.
"""

import logging
from typing import Optional, Sequence

import numpy as np

from fxsignal.core.clock import now_ms
from fxsignal.schemas.indicators import (
    Candle,
    IndicatorSet,
    MACDData,
    BollingerBandsData,
    EMAData,
    SMAData,
    StochasticData,
)
from fxsignal.services.indicators.interface import IndicatorServiceInterface
from fxsignal.services.indicators.calculations import (
    sma,
    ema,
    rsi,
    macd,
    stochastic,
    bollinger_bands,
    adx,
    synthesize_candle,
    backfill_timestamp,
)

logger = logging.getLogger(__name__)


def _candles_to_arrays(candles: Sequence[Candle]) -> tuple:
    """Convert candle list to numpy arrays."""
    highs = np.array([c.high for c in candles], dtype=float)
    lows = np.array([c.low for c in candles], dtype=float)
    closes = np.array([c.close for c in candles], dtype=float)
    return highs, lows, closes


def generate_minute_candles(
    prices: Sequence[float],
    timestamps: Sequence[Optional[int]],
    current_ms: Optional[int] = None,
) -> list[Candle]:
    """
    One synthetic candle per price.

    A missing (or zero) timestamp at index i is backfilled as
    now - (N - i) minutes.
    """
    if current_ms is None:
        current_ms = now_ms()

    count = len(prices)
    candles = []
    for i, price in enumerate(prices):
        timestamp = timestamps[i] if i < len(timestamps) else None
        if not timestamp:
            timestamp = backfill_timestamp(i, count, current_ms)

        open_, high, low, close = synthesize_candle(float(price))
        candles.append(
            Candle(open=open_, high=high, low=low, close=close, timestamp=int(timestamp))
        )

    return candles


def calculate_adx(candles: Sequence[Candle], period: int = 14) -> float:
    highs, lows, closes = _candles_to_arrays(candles)
    return adx(highs, lows, closes, period)


def calculate_stochastic(candles: Sequence[Candle], period: int = 14) -> StochasticData:
    highs, lows, closes = _candles_to_arrays(candles)
    k, d = stochastic(highs, lows, closes, period)
    return StochasticData(k=k, d=d)


def calculate_all_indicators(
    candles: Sequence[Candle], prices: Optional[Sequence[float]] = None
) -> IndicatorSet:
    """
    Calculate every indicator for one candle series.

    All close-based indicators read the candle closes; `prices` is accepted
    for callers that hold the raw series but is not needed.
    """
    closes = [c.close for c in candles]

    macd_line, signal_line, histogram = macd(closes)
    upper, middle, lower = bollinger_bands(closes)

    indicators = IndicatorSet(
        rsi=rsi(closes),
        macd=MACDData(macd=macd_line, signal=signal_line, histogram=histogram),
        bollinger_bands=BollingerBandsData(upper=upper, middle=middle, lower=lower),
        ema=EMAData(ema9=ema(closes, 9), ema21=ema(closes, 21), ema50=ema(closes, 50)),
        sma=SMAData(sma20=sma(closes, 20), sma50=sma(closes, 50)),
        adx=calculate_adx(candles),
        stochastic=calculate_stochastic(candles),
    )

    logger.debug(
        f"Indicators over {len(closes)} candles: RSI={indicators.rsi:.2f} "
        f"ADX={indicators.adx:.2f} MACD hist={histogram:.6f}"
    )
    return indicators


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Engine Service.

    Calculates technical indicators for market analysis.
    All calculations are deterministic and reproducible.
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    async def execute(self, input_data: Sequence[Candle]) -> IndicatorSet:
        """Calculate the indicator set for a candle series."""
        return calculate_all_indicators(input_data)

    def build_candles(
        self,
        prices: Sequence[float],
        timestamps: Sequence[Optional[int]],
        current_ms: Optional[int] = None,
    ) -> list[Candle]:
        return generate_minute_candles(prices, timestamps, current_ms)

    def calculate(
        self, candles: Sequence[Candle], prices: Optional[Sequence[float]] = None
    ) -> IndicatorSet:
        return calculate_all_indicators(candles, prices)

    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        return True
