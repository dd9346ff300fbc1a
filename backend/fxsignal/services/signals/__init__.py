"""
Signal Synthesizer

CONTRACT:
    Input:  Currency pair + current/historical RateSnapshots
    Output: TradingSignal

RESPONSIBILITIES:
    - Build the price series and synthetic candles
    - Determine trend from six indicator votes
    - Count indicator confirmations against the trend
    - Map confirmations into a bounded confidence score and narrative
    - Predict weekend direction

Synchronous and stateless - construct an analyzer where it is needed.
"""

from fxsignal.services.signals.analyzer import SignalAnalyzer, SignalDecision
from fxsignal.services.signals.basic import BasicSignalAnalyzer
from fxsignal.services.signals.series import (
    PriceSeries,
    build_price_series,
    resolve_pair_key,
    split_pair,
)

__all__ = [
    "SignalAnalyzer",
    "SignalDecision",
    "BasicSignalAnalyzer",
    "PriceSeries",
    "build_price_series",
    "resolve_pair_key",
    "split_pair",
]
