"""
Technical Indicator Calculations

Pure Python/NumPy implementations of technical indicators.
All math is deterministic.

Every indicator returns the latest value as a finite float. Short input
never raises: each function degrades to a neutral default instead
(RSI 50, ADX 25, Stochastic 50/50, MACD zeros, flat Bollinger bands).
"""

from typing import Optional, Sequence

import numpy as np

from fxsignal.core.clock import MINUTE_MS

# Synthetic candle spread around the close
CANDLE_HIGH_FACTOR = 1.001
CANDLE_LOW_FACTOR = 0.999

NEUTRAL_RSI = 50.0
NEUTRAL_ADX = 25.0
NEUTRAL_STOCHASTIC = 50.0


# =============================================================================
# NUMERIC HELPERS
# =============================================================================


def _as_array(data: Sequence[float]) -> np.ndarray:
    return np.asarray(data, dtype=float)


def clamp(value: float, lower: float = 0.0, upper: float = 100.0) -> float:
    """Clamp value into [lower, upper]."""
    return float(max(lower, min(upper, value)))


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0.0 for an empty sequence."""
    values = _as_array(values)
    if len(values) == 0:
        return 0.0
    return float(np.mean(values))


def population_std(values: Sequence[float], center: Optional[float] = None) -> float:
    """Population standard deviation (ddof=0) around center (default: mean)."""
    values = _as_array(values)
    if len(values) == 0:
        return 0.0
    if center is None:
        center = mean(values)
    return float(np.sqrt(np.mean((values - center) ** 2)))


def ema_recursion(seed: float, values: Sequence[float], period: int) -> float:
    """
    Apply ema = x * a + ema * (1 - a), a = 2 / (period + 1), starting at seed.

    Written as ema + (x - ema) * a so a constant series stays exactly constant.
    """
    multiplier = 2 / (period + 1)
    result = float(seed)
    for value in values:
        result = (float(value) - result) * multiplier + result
    return result


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(data: Sequence[float], period: int) -> float:
    """Simple Moving Average of the last min(period, len) values."""
    data = _as_array(data)
    if len(data) == 0:
        return 0.0
    return mean(data[-period:])


def ema(data: Sequence[float], period: int) -> float:
    """
    Exponential Moving Average.

    Seeded with the SMA of the first `period` values, then smoothed over the
    rest. With fewer than `period` values this is the SMA of everything.
    """
    data = _as_array(data)
    if len(data) == 0:
        return 0.0
    if len(data) < period:
        return sma(data, len(data))

    seed = mean(data[:period])
    return ema_recursion(seed, data[period:], period)


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def rsi(closes: Sequence[float], period: int = 14) -> float:
    """
    Relative Strength Index.

    RSI > 70 = Overbought
    RSI < 30 = Oversold
    """
    closes = _as_array(closes)
    if len(closes) < period + 1:
        return NEUTRAL_RSI

    deltas = np.diff(closes)
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    # Simple average of the most recent window only
    avg_gain = mean(gains[-period:])
    avg_loss = mean(losses[-period:])

    if avg_loss == 0:
        return 100.0

    rs = avg_gain / avg_loss
    return clamp(100 - (100 / (1 + rs)))


def macd(
    closes: Sequence[float],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> tuple[float, float, float]:
    """
    MACD (Moving Average Convergence Divergence).

    The signal line is the EMA of the MACD value recomputed from scratch on
    every prefix of the series. The seeded EMA is not incremental, so this
    cannot be replaced with a running recurrence.

    Returns: (macd_line, signal_line, histogram)
    """
    closes = _as_array(closes)
    if len(closes) < slow_period:
        return 0.0, 0.0, 0.0

    macd_line = ema(closes, fast_period) - ema(closes, slow_period)

    macd_values = [
        ema(closes[: i + 1], fast_period) - ema(closes[: i + 1], slow_period)
        for i in range(len(closes))
    ]
    signal_line = ema(macd_values, signal_period)

    histogram = macd_line - signal_line

    return macd_line, signal_line, histogram


def stochastic(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 14,
    d_period: int = 3,
) -> tuple[float, float]:
    """
    Stochastic Oscillator.

    %D is the average of the last `d_period` %K values taken over every
    trailing window with a non-zero range.

    Returns: (k, d)
    """
    highs, lows, closes = _as_array(highs), _as_array(lows), _as_array(closes)
    if len(closes) < period:
        return NEUTRAL_STOCHASTIC, NEUTRAL_STOCHASTIC

    highest_high = np.max(highs[-period:])
    lowest_low = np.min(lows[-period:])

    if highest_high == lowest_low:
        return NEUTRAL_STOCHASTIC, NEUTRAL_STOCHASTIC

    k = ((closes[-1] - lowest_low) / (highest_high - lowest_low)) * 100

    k_values = []
    for i in range(period - 1, len(closes)):
        hh = np.max(highs[i - period + 1 : i + 1])
        ll = np.min(lows[i - period + 1 : i + 1])
        if hh != ll:
            k_values.append(((closes[i] - ll) / (hh - ll)) * 100)

    d = mean(k_values[-d_period:]) if k_values else k

    return clamp(k), clamp(d)


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def bollinger_bands(
    closes: Sequence[float], period: int = 20, std_dev: float = 2.0
) -> tuple[float, float, float]:
    """
    Bollinger Bands.

    Returns: (upper, middle, lower)
    """
    closes = _as_array(closes)
    if len(closes) < period:
        flat = sma(closes, len(closes))
        return flat, flat, flat

    middle = sma(closes, period)
    std = population_std(closes[-period:], middle)

    return middle + (std_dev * std), middle, middle - (std_dev * std)


# =============================================================================
# TREND INDICATORS
# =============================================================================


def true_range(high: float, low: float, prev_close: float) -> float:
    return max(high - low, abs(high - prev_close), abs(low - prev_close))


def adx(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 14,
) -> float:
    """
    Average Directional Index (simplified).

    Averages the last `period` TR/+DM/-DM values and returns DX directly;
    DX is not smoothed further into a Wilder ADX.
    """
    highs, lows, closes = _as_array(highs), _as_array(lows), _as_array(closes)
    if len(closes) < period + 1:
        return NEUTRAL_ADX

    tr = np.zeros(len(closes) - 1)
    plus_dm = np.zeros(len(closes) - 1)
    minus_dm = np.zeros(len(closes) - 1)

    for i in range(1, len(closes)):
        up_move = highs[i] - highs[i - 1]
        down_move = lows[i - 1] - lows[i]

        tr[i - 1] = true_range(highs[i], lows[i], closes[i - 1])
        if up_move > down_move and up_move > 0:
            plus_dm[i - 1] = up_move
        if down_move > up_move and down_move > 0:
            minus_dm[i - 1] = down_move

    avg_tr = mean(tr[-period:])
    if avg_tr == 0:
        return NEUTRAL_ADX

    plus_di = (mean(plus_dm[-period:]) / avg_tr) * 100
    minus_di = (mean(minus_dm[-period:]) / avg_tr) * 100

    # No directional movement at all
    if plus_di + minus_di == 0:
        return 0.0

    dx = abs(plus_di - minus_di) / (plus_di + minus_di) * 100
    return clamp(dx)


# =============================================================================
# CANDLE SYNTHESIS
# =============================================================================


def synthesize_candle(price: float) -> tuple[float, float, float, float]:
    """Returns: (open, high, low, close) for a single rate."""
    return price, price * CANDLE_HIGH_FACTOR, price * CANDLE_LOW_FACTOR, price


def backfill_timestamp(index: int, count: int, now_ms: int) -> int:
    """Timestamp for a price with no recorded time: one minute apart, ending at now."""
    return now_ms - (count - index) * MINUTE_MS
