"""
FX Signal Board - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fxsignal.core.config import settings
from fxsignal.api.v1 import router as api_v1_router
from fxsignal.services.market_data import MarketDataService
from fxsignal.services.strategy import StrategyService

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    if not settings.currencylayer_api_key:
        logger.warning("CURRENCYLAYER_API_KEY not configured - signal requests will fail")

    market_data_service = MarketDataService()
    app.state.market_data_service = market_data_service
    app.state.strategy_service = StrategyService(market_data_service)

    yield

    # Shutdown
    logger.info("Shutting down...")
    await market_data_service.close()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    FX Signal Board API

    ## Architecture
    - **Market Data**: Live + daily exchange rates from CurrencyLayer
    - **Indicator Engine**: RSI, MACD, Bollinger Bands, EMA/SMA, ADX, Stochastic (NumPy)
    - **Signal Analyzer**: Trend votes, confirmations, confidence and analysis

    ## Core Principles
    - Signals are recommendations only; no orders are placed
    - Confidence is bounded (weak signals 40-55%, strong signals 60-95%)
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
# Add any additional origins from settings
if settings.allowed_origins:
    cors_origins.extend([o for o in settings.allowed_origins if o not in cors_origins])

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "FX Signal Board API",
        "docs": "/docs",
        "health": "/health",
    }
