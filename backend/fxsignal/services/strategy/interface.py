"""
Strategy Evaluation Service Interface

Orchestrates the complete signal pipeline.
"""

from abc import abstractmethod
from dataclasses import dataclass
from typing import Union

from fxsignal.services.base import BaseService
from fxsignal.schemas.signals import BasicTradingSignal, TradingSignal


@dataclass
class StrategyRequest:
    """Request for a trading signal."""

    currency_pair: str
    advanced: bool = True


StrategyResult = Union[TradingSignal, BasicTradingSignal]


class StrategyServiceInterface(BaseService[StrategyRequest, StrategyResult]):
    """
    Strategy Evaluation Service Contract.

    This is the MAIN ORCHESTRATOR that runs the full pipeline.

    INPUT: StrategyRequest
        - currency_pair: "BASE/QUOTE"
        - advanced: multi-indicator analyzer (True) or MA/momentum analyzer

    OUTPUT: TradingSignal (advanced) or BasicTradingSignal

    PIPELINE:
        ┌─────────────────┐
        │ StrategyRequest │
        └────────┬────────┘
                 │
                 ▼
        ┌─────────────────┐
        │ Market Data     │ → MarketData
        └────────┬────────┘
                 │
                 ▼
        ┌─────────────────┐
        │ Signal Analyzer │ → Candles → IndicatorSet → TradingSignal
        └─────────────────┘
    """

    @property
    def name(self) -> str:
        return "StrategyService"

    @abstractmethod
    async def execute(self, input_data: StrategyRequest) -> StrategyResult:
        """Run the complete signal pipeline."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check health of all dependent services."""
        pass
