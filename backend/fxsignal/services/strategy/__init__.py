"""
Strategy Evaluation Service

CONTRACT:
    Input:  Currency pair + analyzer choice
    Output: TradingSignal (complete pipeline output)

RESPONSIBILITIES:
    - Orchestrate the pipeline:
        1. Market Data -> MarketData
        2. Signal Analyzer -> TradingSignal
    - Log each stage

This is the main entry point for generating trading signals.
"""

from fxsignal.services.strategy.interface import (
    StrategyServiceInterface,
    StrategyRequest,
    StrategyResult,
)
from fxsignal.services.strategy.service import StrategyService

__all__ = [
    "StrategyServiceInterface",
    "StrategyRequest",
    "StrategyResult",
    "StrategyService",
]
