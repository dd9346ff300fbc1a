"""
FX Signal Schema Contracts

This module defines all JSON contracts between system components.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from fxsignal.schemas.market import (
    SUPPORTED_PAIRS,
    RateSnapshot,
    MarketData,
    APIStatus,
)
from fxsignal.schemas.indicators import (
    PricePoint,
    Candle,
    MACDData,
    BollingerBandsData,
    EMAData,
    SMAData,
    StochasticData,
    IndicatorSet,
)
from fxsignal.schemas.signals import (
    SignalType,
    TrendDirection,
    ConfirmationSet,
    TradingSignal,
    BasicTradingSignal,
    CandleCountdown,
)

__all__ = [
    # Market
    "SUPPORTED_PAIRS",
    "RateSnapshot",
    "MarketData",
    "APIStatus",
    # Indicators
    "PricePoint",
    "Candle",
    "MACDData",
    "BollingerBandsData",
    "EMAData",
    "SMAData",
    "StochasticData",
    "IndicatorSet",
    # Signals
    "SignalType",
    "TrendDirection",
    "ConfirmationSet",
    "TradingSignal",
    "BasicTradingSignal",
    "CandleCountdown",
]
