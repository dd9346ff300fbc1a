"""
Market API Endpoints

Supported pairs and rate-provider status.
"""

import logging

from fastapi import APIRouter, Depends

from fxsignal.api.v1.deps import get_market_data_service
from fxsignal.schemas.market import SUPPORTED_PAIRS, APIStatus
from fxsignal.services.market_data import MarketDataServiceInterface

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/markets", response_model=list[str])
async def list_markets():
    """Currency pairs offered for analysis."""
    return SUPPORTED_PAIRS


@router.get("/status", response_model=APIStatus)
async def get_api_status(
    market_data: MarketDataServiceInterface = Depends(get_market_data_service),
):
    """
    Check the rate provider.

    Signals are only generated when the API key is valid and the provider
    is reachable; clients poll this to show connection state.
    """
    status = await market_data.get_api_status()
    if not status.is_valid:
        logger.warning(f"Rate provider unavailable: {status.message}")
    return status
