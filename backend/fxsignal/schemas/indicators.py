"""
CONTRACT 2: Indicator Engine

Input: Candle series (synthesized from rate snapshots)
Output: IndicatorSet

This module performs ALL mathematical calculations.
Pure Python/NumPy - no I/O.
"""

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# INPUT: Prices and Candles
# =============================================================================


class PricePoint(BaseModel):
    """A rate value at a timestamp (ms since epoch)."""

    price: float
    timestamp: int


class Candle(BaseModel):
    """
    Single OHLC bar.

    Candles here are synthetic: open == close == price and the high/low
    are a fixed +/-0.1% around it.
    """

    model_config = ConfigDict(frozen=True)

    open: float
    high: float
    low: float
    close: float
    timestamp: int = Field(..., description="Epoch milliseconds")


# =============================================================================
# OUTPUT: Indicator Components
# =============================================================================


class MACDData(BaseModel):
    """MACD indicator values."""

    model_config = ConfigDict(frozen=True)

    macd: float = 0.0
    signal: float = 0.0
    histogram: float = 0.0


class BollingerBandsData(BaseModel):
    """Bollinger Bands values."""

    model_config = ConfigDict(frozen=True)

    upper: float
    middle: float
    lower: float


class EMAData(BaseModel):
    model_config = ConfigDict(frozen=True)

    ema9: float
    ema21: float
    ema50: float


class SMAData(BaseModel):
    model_config = ConfigDict(frozen=True)

    sma20: float
    sma50: float


class StochasticData(BaseModel):
    """Stochastic oscillator values."""

    model_config = ConfigDict(frozen=True)

    k: float = Field(default=50.0, ge=0, le=100)
    d: float = Field(default=50.0, ge=0, le=100)


# =============================================================================
# OUTPUT: IndicatorSet (Complete Response)
# =============================================================================


class IndicatorSet(BaseModel):
    """
    Snapshot of all seven indicators for one evaluation.
    Returned by: Indicator Service
    Consumed by: Signal Analyzer
    """

    model_config = ConfigDict(frozen=True)

    rsi: float = Field(..., ge=0, le=100)
    macd: MACDData
    bollinger_bands: BollingerBandsData
    ema: EMAData
    sma: SMAData
    adx: float = Field(..., ge=0, le=100)
    stochastic: StochasticData
