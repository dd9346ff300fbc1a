"""
Market Data Service Interface

Defines the contract for the rate-provider gateway.
"""

from abc import abstractmethod

from fxsignal.services.base import BaseService
from fxsignal.schemas.market import APIStatus, MarketData


class MarketDataServiceInterface(BaseService[str, MarketData]):
    """
    Market Data Service Contract.

    INPUT: str
        - currency pair as "BASE/QUOTE"

    OUTPUT: MarketData
        - current: live snapshot quoting 1 BASE in QUOTE
        - historical: daily snapshots, oldest first (may be partial or empty)
    """

    @property
    def name(self) -> str:
        return "MarketDataService"

    @abstractmethod
    async def execute(self, input_data: str) -> MarketData:
        """Fetch current and historical rates for a pair."""
        pass

    @abstractmethod
    async def get_current_and_historical(self, currency_pair: str) -> MarketData:
        """Fetch current and historical rates for a pair."""
        pass

    @abstractmethod
    async def get_api_status(self) -> APIStatus:
        """Probe the provider (key validity + connectivity)."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check connectivity to the rate provider."""
        pass
