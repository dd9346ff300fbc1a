"""
Signal API Endpoints

Main endpoints for trading signals.
"""

import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query

from fxsignal.api.v1.deps import get_strategy_service
from fxsignal.core.clock import get_countdown, next_minute_boundary
from fxsignal.schemas.signals import BasicTradingSignal, CandleCountdown, TradingSignal
from fxsignal.services.base import (
    ExternalAPIError,
    InsufficientDataError,
    InvalidCurrencyPairError,
    MissingRateError,
    RateLimitError,
)
from fxsignal.services.strategy import StrategyRequest, StrategyServiceInterface

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/countdown", response_model=CandleCountdown)
async def get_candle_countdown(
    target_time: Optional[int] = Query(
        default=None, ge=0, description="Target epoch ms (default: next minute)"
    ),
):
    """Time remaining until the next one-minute candle."""
    if target_time is None:
        target_time = next_minute_boundary()
    return get_countdown(target_time)


@router.get("/{base}/{quote}", response_model=Union[TradingSignal, BasicTradingSignal])
async def generate_signal(
    base: str,
    quote: str,
    advanced: bool = Query(default=True, description="Use the multi-indicator analyzer"),
    strategy_service: StrategyServiceInterface = Depends(get_strategy_service),
):
    """
    Generate a BUY/SELL signal for BASE/QUOTE.

    This runs the FULL pipeline:
    1. Fetch current + previous daily rates
    2. Synthesize candles and calculate indicators
    3. Derive trend, confirmations, confidence and analysis
    """
    pair = f"{base}/{quote}".upper()

    try:
        return await strategy_service.execute(
            StrategyRequest(currency_pair=pair, advanced=advanced)
        )
    except InvalidCurrencyPairError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except (MissingRateError, InsufficientDataError) as e:
        raise HTTPException(status_code=422, detail=e.message)
    except RateLimitError as e:
        logger.warning(f"Rate provider quota exhausted for {pair}: {e}")
        raise HTTPException(status_code=429, detail=e.message)
    except ExternalAPIError as e:
        logger.error(f"Signal generation failed for {pair}: {e}")
        raise HTTPException(status_code=502, detail=e.message)
