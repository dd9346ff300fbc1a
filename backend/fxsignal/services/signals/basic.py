"""
Basic Signal Analyzer

Moving-average crossover (SMA3 vs SMA7) with momentum and volatility
weighting. Lighter than the multi-indicator analyzer; useful when only a
handful of rates are available.
"""

import logging
from typing import Sequence

import numpy as np

from fxsignal.schemas.market import RateSnapshot
from fxsignal.schemas.signals import BasicTradingSignal, SignalType, TrendDirection
from fxsignal.services.indicators.calculations import clamp, mean, population_std, sma
from fxsignal.services.signals.series import build_price_series

logger = logging.getLogger(__name__)


def calculate_momentum(prices: Sequence[float]) -> float:
    """Percent change between the mean of the last 3 prices and the 3 before them."""
    if len(prices) < 2:
        return 0.0
    recent = prices[-3:]
    older = prices[-6:-3]
    if len(older) == 0:
        return 0.0
    older_avg = mean(older)
    return ((mean(recent) - older_avg) / older_avg) * 100


def calculate_volatility(prices: Sequence[float]) -> float:
    """Population std of simple returns, in percent."""
    if len(prices) < 2:
        return 0.0
    prices = np.asarray(prices, dtype=float)
    previous, following = prices[:-1], prices[1:]
    valid = previous > 0
    if not valid.any():
        return 0.0
    returns = (following[valid] - previous[valid]) / previous[valid]
    return population_std(returns) * 100


def calculate_confidence(
    trend: TrendDirection,
    momentum: float,
    volatility: float,
    price_change_percent: float,
) -> float:
    confidence = 50.0

    if trend != TrendDirection.NEUTRAL:
        confidence += 15

    confidence += min(20, abs(momentum) * 2)
    confidence += min(20, abs(price_change_percent) * 2)

    # Volatility penalty
    confidence -= min(10, volatility * 5)

    return max(30.0, min(95.0, confidence))


class BasicSignalAnalyzer:
    """Short/long moving-average analyzer."""

    def analyze_market(
        self,
        currency_pair: str,
        current: RateSnapshot,
        historical: Sequence[RateSnapshot],
    ) -> BasicTradingSignal:
        series = build_price_series(currency_pair, current, historical)
        prices = series.prices

        sma7 = sma(prices, 7)
        sma3 = sma(prices[-3:], 3)

        price_change, price_change_percent = series.price_change()

        if sma3 > sma7:
            trend = TrendDirection.UP
        elif sma3 < sma7:
            trend = TrendDirection.DOWN
        else:
            trend = TrendDirection.NEUTRAL

        momentum = calculate_momentum(prices)
        volatility = calculate_volatility(prices)
        confidence = calculate_confidence(trend, momentum, volatility, price_change_percent)

        if trend == TrendDirection.UP and momentum > 0 and price_change_percent > 0:
            signal = SignalType.BUY
            analysis = (
                f"Strong upward trend detected. Price increased by {price_change_percent:.2f}%. "
                f"Momentum is positive. Short-term MA ({sma3:.4f}) is above "
                f"long-term MA ({sma7:.4f})."
            )
        elif trend == TrendDirection.DOWN and momentum < 0 and price_change_percent < 0:
            signal = SignalType.SELL
            analysis = (
                f"Strong downward trend detected. Price decreased by "
                f"{abs(price_change_percent):.2f}%. Momentum is negative. Short-term MA "
                f"({sma3:.4f}) is below long-term MA ({sma7:.4f})."
            )
        elif trend == TrendDirection.UP:
            signal = SignalType.BUY
            analysis = (
                f"Moderate upward trend. Price change: {price_change_percent:.2f}%. "
                "Consider buying with caution."
            )
        else:
            signal = SignalType.SELL
            analysis = (
                f"Moderate downward trend. Price change: {price_change_percent:.2f}%. "
                "Consider selling with caution."
            )

        logger.info(f"{currency_pair}: basic {signal.value} @ {confidence:.0f}% (trend={trend.value})")

        return BasicTradingSignal(
            signal=signal,
            confidence=clamp(confidence),
            current_price=series.current_price,
            price_change=price_change,
            price_change_percent=price_change_percent,
            trend=trend,
            analysis=analysis,
            timestamp=current.timestamp * 1000,
        )
