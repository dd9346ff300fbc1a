"""
API v1 Router

All API endpoints for the frontend.
"""

from fastapi import APIRouter

from fxsignal.api.v1.endpoints import market, signals

router = APIRouter()

# Include all endpoint routers
router.include_router(market.router, tags=["Market Data"])
router.include_router(signals.router, prefix="/signals", tags=["Signals"])
