"""
Indicator Engine Service

CONTRACT:
    Input:  Rate points -> synthetic candles
    Output: IndicatorSet

RESPONSIBILITIES:
    - Synthesize one-minute candles from daily/live rates
    - Calculate RSI, MACD, Bollinger Bands, EMA, SMA, ADX, Stochastic
    - Degrade to neutral defaults on short series (never raise)

PURE PYTHON - Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from fxsignal.services.indicators.interface import IndicatorServiceInterface
from fxsignal.services.indicators.service import (
    IndicatorService,
    calculate_all_indicators,
    generate_minute_candles,
)

__all__ = [
    "IndicatorServiceInterface",
    "IndicatorService",
    "calculate_all_indicators",
    "generate_minute_candles",
]
