"""
Strategy Evaluation Service Implementation

Orchestrates the signal pipeline:
    Market Data → Indicators → Signal Analyzer

This is the main entry point for generating trading signals.
"""

import logging
from typing import Optional

from fxsignal.services.market_data import MarketDataServiceInterface
from fxsignal.services.signals import BasicSignalAnalyzer, SignalAnalyzer
from fxsignal.services.strategy.interface import (
    StrategyRequest,
    StrategyResult,
    StrategyServiceInterface,
)

logger = logging.getLogger(__name__)


class StrategyService(StrategyServiceInterface):
    """
    Strategy Evaluation Service.

    Fetches rates once per request and hands them to an analyzer.
    Errors from either stage propagate unchanged; retry policy belongs to
    the caller.
    """

    def __init__(
        self,
        market_data: MarketDataServiceInterface,
        analyzer: Optional[SignalAnalyzer] = None,
        basic_analyzer: Optional[BasicSignalAnalyzer] = None,
    ):
        self.market_data = market_data
        self.analyzer = analyzer or SignalAnalyzer()
        self.basic_analyzer = basic_analyzer or BasicSignalAnalyzer()

    @property
    def name(self) -> str:
        return "StrategyService"

    async def execute(self, input_data: StrategyRequest) -> StrategyResult:
        """
        Run the signal pipeline.

        Pipeline:
            1. Market Data → MarketData (current + historical)
            2. Signal Analyzer → TradingSignal / BasicTradingSignal
        """
        pair = input_data.currency_pair.upper().strip()
        logger.info(f"Starting signal pipeline for {pair}")

        # =================================================================
        # STAGE 1: Market Data
        # =================================================================
        logger.info("Stage 1: Market Data")
        market_data = await self.market_data.get_current_and_historical(pair)
        logger.info(f"Stage 1 complete: Got {len(market_data.historical)} historical days")

        # =================================================================
        # STAGE 2: Analysis
        # =================================================================
        if input_data.advanced:
            logger.info("Stage 2: Advanced Analysis")
            result = self.analyzer.analyze_market(
                pair, market_data.current, market_data.historical
            )
        else:
            logger.info("Stage 2: Basic Analysis")
            result = self.basic_analyzer.analyze_market(
                pair, market_data.current, market_data.historical
            )

        logger.info(f"Pipeline complete for {pair}: {result.signal.value}")
        return result

    async def health_check(self) -> bool:
        """Check health of the rate provider."""
        try:
            return await self.market_data.health_check()
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return False
