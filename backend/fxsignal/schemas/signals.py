"""
CONTRACT 3: Signal Synthesizer

Input: IndicatorSet + price context
Output: TradingSignal

Signals are created fresh per request and never mutated or persisted.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from fxsignal.schemas.indicators import IndicatorSet


# =============================================================================
# ENUMS
# =============================================================================


class SignalType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class TrendDirection(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    NEUTRAL = "NEUTRAL"


# =============================================================================
# CONFIRMATIONS
# =============================================================================


# Display names of the indicator confirmations, in reporting order.
INDICATOR_LABELS = {
    "rsi": "RSI",
    "macd": "MACD",
    "ema": "EMA",
    "bollinger": "Bollinger",
    "adx": "ADX",
    "stochastic": "Stochastic",
}


class ConfirmationSet(BaseModel):
    """One vote per indicator agreeing with the trend call."""

    model_config = ConfigDict(frozen=True)

    rsi: bool = False
    macd: bool = False
    bollinger: bool = False
    ema: bool = False
    adx: bool = False
    stochastic: bool = False
    trend: bool = False

    @property
    def total(self) -> int:
        return len(type(self).model_fields)

    def count(self) -> int:
        """Number of confirmations that fired (0-7)."""
        return sum(1 for name in type(self).model_fields if getattr(self, name))

    def active_indicators(self) -> list[str]:
        """Labels of the indicator confirmations that fired (trend excluded)."""
        return [label for key, label in INDICATOR_LABELS.items() if getattr(self, key)]


# =============================================================================
# OUTPUT: TradingSignal
# =============================================================================


class TradingSignal(BaseModel):
    """
    Final trading recommendation.
    Returned by: Signal Analyzer
    Consumed by: API / any rendering layer
    """

    model_config = ConfigDict(frozen=True)

    signal: SignalType
    confidence: float = Field(..., ge=0, le=100)
    current_price: float
    price_change: float
    price_change_percent: float
    trend: TrendDirection
    analysis: str
    timestamp: int = Field(..., description="Snapshot time, epoch ms")
    technical_indicators: IndicatorSet
    confirmations: ConfirmationSet
    weekend_direction: Optional[TrendDirection] = None
    next_candle_time: int = Field(..., description="Next minute boundary, epoch ms")


class BasicTradingSignal(BaseModel):
    """Signal from the moving-average/momentum analyzer."""

    model_config = ConfigDict(frozen=True)

    signal: SignalType
    confidence: float = Field(..., ge=0, le=100)
    current_price: float
    price_change: float
    price_change_percent: float
    trend: TrendDirection
    analysis: str
    timestamp: int


class CandleCountdown(BaseModel):
    """Time remaining until a candle boundary."""

    target_time: int
    minutes: int = Field(..., ge=0)
    seconds: int = Field(..., ge=0, lt=60)
    total_seconds: int = Field(..., ge=0)
    expired: bool
