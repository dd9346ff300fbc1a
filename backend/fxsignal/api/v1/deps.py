"""
API Dependencies

Services are constructed once in the application lifespan and stored on
app.state; endpoints receive them through these providers.
"""

from fastapi import Request

from fxsignal.services.market_data import MarketDataServiceInterface
from fxsignal.services.strategy import StrategyServiceInterface


def get_market_data_service(request: Request) -> MarketDataServiceInterface:
    return request.app.state.market_data_service


def get_strategy_service(request: Request) -> StrategyServiceInterface:
    return request.app.state.strategy_service
