"""
Market Data Service

CONTRACT:
    Input:  Currency pair ("BASE/QUOTE")
    Output: MarketData (current + historical RateSnapshots)

RESPONSIBILITIES:
    - Fetch live rates from CurrencyLayer (cross rate via USD as fallback)
    - Fetch previous daily rates concurrently, tolerating partial failure
    - Report provider key validity and connectivity
"""

from fxsignal.services.market_data.client import CurrencyLayerClient
from fxsignal.services.market_data.interface import MarketDataServiceInterface
from fxsignal.services.market_data.service import MarketDataService

__all__ = [
    "CurrencyLayerClient",
    "MarketDataServiceInterface",
    "MarketDataService",
]
