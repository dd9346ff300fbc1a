"""
Advanced Signal Analyzer

Turns rate snapshots into a BUY/SELL call:
    Rates -> Candles -> IndicatorSet -> Trend -> Confirmations -> Signal

All methods are synchronous and stateless; one analyzer can serve any
number of concurrent requests.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from fxsignal.core.clock import next_minute_boundary, now_ms
from fxsignal.schemas.indicators import IndicatorSet
from fxsignal.schemas.market import RateSnapshot
from fxsignal.schemas.signals import (
    ConfirmationSet,
    SignalType,
    TradingSignal,
    TrendDirection,
)
from fxsignal.services.indicators import IndicatorService, IndicatorServiceInterface
from fxsignal.services.indicators.calculations import clamp
from fxsignal.services.signals.series import build_price_series

logger = logging.getLogger(__name__)

# Confirmation gate between the weak and strong paths
STRONG_SIGNAL_MIN_CONFIRMATIONS = 4

WEAK_BASE_CONFIDENCE = 40
WEAK_CONFIDENCE_PER_CONFIRMATION = 5

STRONG_BASE_CONFIDENCE = 50
STRONG_CONFIDENCE_PER_CONFIRMATION = 8
STRONG_CONFIDENCE_FLOOR = 60
STRONG_CONFIDENCE_CAP = 95

RSI_OVERSOLD = 30
RSI_OVERBOUGHT = 70
ADX_TRENDING = 25
ADX_STRONG = 40
ADX_WEEKEND = 30

WEEKEND_MOMENTUM_LOOKBACK = 5


@dataclass
class SignalDecision:
    """Direction, confidence and narrative for one evaluation."""

    signal: SignalType
    confidence: float
    analysis: str


def _follow_trend(trend: TrendDirection) -> SignalType:
    """UP -> BUY, DOWN -> SELL, NEUTRAL -> BUY."""
    return SignalType.SELL if trend == TrendDirection.DOWN else SignalType.BUY


class SignalAnalyzer:
    """
    Multi-indicator market analyzer.

    Combines seven indicators into a trend call, counts how many agree with
    it and maps that into a bounded confidence score with a narrative.
    """

    def __init__(self, indicator_service: Optional[IndicatorServiceInterface] = None):
        self._indicators = indicator_service or IndicatorService()

    def analyze_market(
        self,
        currency_pair: str,
        current: RateSnapshot,
        historical: Sequence[RateSnapshot],
        current_ms: Optional[int] = None,
    ) -> TradingSignal:
        """
        Analyze a currency pair from its current and historical snapshots.

        Raises:
            InvalidCurrencyPairError: pair not in BASE/QUOTE form
            MissingRateError: no usable current rate for the pair
            InsufficientDataError: fewer than 2 price points
        """
        if current_ms is None:
            current_ms = now_ms()

        series = build_price_series(currency_pair, current, historical)
        prices = series.prices
        current_price = series.current_price

        candles = self._indicators.build_candles(prices, series.timestamps, current_ms)
        indicators = self._indicators.calculate(candles, prices)

        price_change, price_change_percent = series.price_change()

        trend = self.determine_trend(indicators, prices, price_change_percent)
        confirmations = self.get_confirmations(indicators, trend, current_price)
        decision = self.generate_signal(indicators, trend, confirmations, current_price)
        weekend_direction = self.predict_weekend_direction(indicators, trend, prices)

        logger.info(
            f"{currency_pair}: {decision.signal.value} @ {decision.confidence:.0f}% "
            f"(trend={trend.value}, confirmations={confirmations.count()}/{confirmations.total}, "
            f"points={len(prices)})"
        )

        return TradingSignal(
            signal=decision.signal,
            confidence=clamp(decision.confidence),
            current_price=current_price,
            price_change=price_change,
            price_change_percent=price_change_percent,
            trend=trend,
            analysis=decision.analysis,
            timestamp=current.timestamp * 1000,
            technical_indicators=indicators,
            confirmations=confirmations,
            weekend_direction=weekend_direction,
            next_candle_time=next_minute_boundary(current_ms),
        )

    # =========================================================================
    # TREND
    # =========================================================================

    @staticmethod
    def determine_trend(
        indicators: IndicatorSet,
        prices: Sequence[float],
        price_change_percent: float,
    ) -> TrendDirection:
        """
        Six votes; a side needs a margin of two to win.

        Ties on an individual comparison vote for neither side.
        """
        current_price = prices[-1]
        comparisons = [
            (indicators.ema.ema9, indicators.ema.ema21),
            (indicators.ema.ema21, indicators.ema.ema50),
            (indicators.sma.sma20, indicators.sma.sma50),
            (indicators.macd.macd, indicators.macd.signal),
            (price_change_percent, 0.0),
            (current_price, indicators.bollinger_bands.middle),
        ]

        up_signals = sum(1 for left, right in comparisons if left > right)
        down_signals = sum(1 for left, right in comparisons if left < right)

        if up_signals > down_signals + 1:
            return TrendDirection.UP
        if down_signals > up_signals + 1:
            return TrendDirection.DOWN
        return TrendDirection.NEUTRAL

    # =========================================================================
    # CONFIRMATIONS
    # =========================================================================

    @staticmethod
    def get_confirmations(
        indicators: IndicatorSet,
        trend: TrendDirection,
        current_price: float,
    ) -> ConfirmationSet:
        """
        One vote per indicator agreeing with the trend.

        NEUTRAL is evaluated with the DOWN conditions.
        """
        rsi = indicators.rsi
        macd = indicators.macd
        bands = indicators.bollinger_bands
        ema = indicators.ema
        stoch = indicators.stochastic

        if trend == TrendDirection.UP:
            rsi_confirm = 40 < rsi < RSI_OVERBOUGHT
            macd_confirm = macd.macd > macd.signal and macd.histogram > 0
            bollinger_confirm = bands.middle < current_price < bands.upper
            ema_confirm = ema.ema9 > ema.ema21 > ema.ema50
            stochastic_confirm = stoch.k > 50 and stoch.k > stoch.d
        else:
            rsi_confirm = RSI_OVERSOLD < rsi < 60
            macd_confirm = macd.macd < macd.signal and macd.histogram < 0
            bollinger_confirm = bands.lower < current_price < bands.middle
            ema_confirm = ema.ema9 < ema.ema21 < ema.ema50
            stochastic_confirm = stoch.k < 50 and stoch.k < stoch.d

        return ConfirmationSet(
            rsi=rsi_confirm,
            macd=macd_confirm,
            bollinger=bollinger_confirm,
            ema=ema_confirm,
            adx=indicators.adx > ADX_TRENDING,
            stochastic=stochastic_confirm,
            trend=trend != TrendDirection.NEUTRAL,
        )

    # =========================================================================
    # SIGNAL + CONFIDENCE
    # =========================================================================

    def generate_signal(
        self,
        indicators: IndicatorSet,
        trend: TrendDirection,
        confirmations: ConfirmationSet,
        current_price: float,
    ) -> SignalDecision:
        """Weak path below 4 confirmations, strong path otherwise."""
        count = confirmations.count()

        if count < STRONG_SIGNAL_MIN_CONFIRMATIONS:
            return SignalDecision(
                signal=_follow_trend(trend),
                confidence=WEAK_BASE_CONFIDENCE + count * WEAK_CONFIDENCE_PER_CONFIRMATION,
                analysis=(
                    f"Weak signal. Only {count}/{confirmations.total} confirmations. "
                    f"{self.get_indicator_summary(confirmations)}"
                ),
            )

        confidence = STRONG_BASE_CONFIDENCE + count * STRONG_CONFIDENCE_PER_CONFIRMATION

        # Extreme RSI overrides the trend
        if indicators.rsi < RSI_OVERSOLD:
            signal = SignalType.BUY
            confidence += 10
        elif indicators.rsi > RSI_OVERBOUGHT:
            signal = SignalType.SELL
            confidence += 10
        else:
            signal = _follow_trend(trend)

        histogram = indicators.macd.histogram
        if (histogram > 0 and signal == SignalType.BUY) or (
            histogram < 0 and signal == SignalType.SELL
        ):
            confidence += 5

        if indicators.adx > ADX_STRONG:
            confidence += 8
        elif indicators.adx > ADX_TRENDING:
            confidence += 4

        bands = indicators.bollinger_bands
        if (signal == SignalType.BUY and current_price < bands.lower) or (
            signal == SignalType.SELL and current_price > bands.upper
        ):
            confidence += 7

        confidence = min(STRONG_CONFIDENCE_CAP, max(STRONG_CONFIDENCE_FLOOR, confidence))

        analysis = self.generate_detailed_analysis(
            indicators, confirmations, signal, confidence
        )
        return SignalDecision(signal=signal, confidence=confidence, analysis=analysis)

    # =========================================================================
    # NARRATIVE
    # =========================================================================

    @staticmethod
    def generate_detailed_analysis(
        indicators: IndicatorSet,
        confirmations: ConfirmationSet,
        signal: SignalType,
        confidence: float,
    ) -> str:
        parts = [
            f"Strong {signal.value} signal with "
            f"{confirmations.count()}/{confirmations.total} confirmations."
        ]

        if indicators.rsi < RSI_OVERSOLD:
            parts.append("RSI indicates oversold condition (strong BUY opportunity).")
        elif indicators.rsi > RSI_OVERBOUGHT:
            parts.append("RSI indicates overbought condition (strong SELL opportunity).")
        else:
            parts.append(f"RSI at {indicators.rsi:.1f} (neutral zone).")

        if indicators.macd.histogram > 0:
            parts.append("MACD shows bullish momentum.")
        else:
            parts.append("MACD shows bearish momentum.")

        if indicators.adx > ADX_STRONG:
            parts.append("Strong trend detected (ADX > 40).")
        elif indicators.adx > ADX_TRENDING:
            parts.append("Moderate trend strength (ADX > 25).")

        if confirmations.ema:
            parts.append("EMA alignment confirms trend direction.")

        if confirmations.bollinger:
            parts.append("Price position within Bollinger Bands supports signal.")

        parts.append(f"Confidence: {confidence:.0f}% based on technical analysis.")

        return " ".join(parts)

    @staticmethod
    def get_indicator_summary(confirmations: ConfirmationSet) -> str:
        active = confirmations.active_indicators()
        return f"Active indicators: {', '.join(active) or 'None'}"

    # =========================================================================
    # WEEKEND DIRECTION
    # =========================================================================

    @staticmethod
    def predict_weekend_direction(
        indicators: IndicatorSet,
        trend: TrendDirection,
        prices: Sequence[float],
    ) -> TrendDirection:
        """Trend carried into the weekend only with matching momentum and ADX > 30."""
        lookback_index = max(0, len(prices) - WEEKEND_MOMENTUM_LOOKBACK)
        momentum = prices[-1] - prices[lookback_index]
        strong_trend = indicators.adx > ADX_WEEKEND

        if trend == TrendDirection.UP and momentum > 0 and strong_trend:
            return TrendDirection.UP
        if trend == TrendDirection.DOWN and momentum < 0 and strong_trend:
            return TrendDirection.DOWN
        return TrendDirection.NEUTRAL
