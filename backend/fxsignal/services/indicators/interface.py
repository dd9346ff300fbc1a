"""
Indicator Engine Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod
from typing import Optional, Sequence

from fxsignal.services.base import BaseService
from fxsignal.schemas.indicators import Candle, IndicatorSet


class IndicatorServiceInterface(BaseService[Sequence[Candle], IndicatorSet]):
    """
    Indicator Engine Service Contract.

    INPUT: Sequence[Candle]
        - Ordered oldest first, one candle per rate point

    OUTPUT: IndicatorSet
        - RSI, MACD, Bollinger Bands, EMA 9/21/50, SMA 20/50, ADX, Stochastic
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    async def execute(self, input_data: Sequence[Candle]) -> IndicatorSet:
        """Calculate the indicator set for a candle series."""
        pass

    @abstractmethod
    def build_candles(
        self,
        prices: Sequence[float],
        timestamps: Sequence[Optional[int]],
        current_ms: Optional[int] = None,
    ) -> list[Candle]:
        """
        Synthesize candles from a flat price list.

        Args:
            prices: Rates ordered oldest first
            timestamps: Epoch ms per rate; missing entries are backfilled
            current_ms: Reference "now" for backfilling (defaults to clock)

        Returns:
            One candle per price
        """
        pass

    @abstractmethod
    def calculate(
        self, candles: Sequence[Candle], prices: Optional[Sequence[float]] = None
    ) -> IndicatorSet:
        """Synchronous variant of execute() for the signal pipeline."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        pass
