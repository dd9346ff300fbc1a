"""Moving-average/momentum analyzer."""

import pytest

from fxsignal.schemas.signals import SignalType, TrendDirection
from fxsignal.services.base import InsufficientDataError, MissingRateError
from fxsignal.services.signals import BasicSignalAnalyzer
from fxsignal.services.signals.basic import (
    calculate_confidence,
    calculate_momentum,
    calculate_volatility,
)


@pytest.fixture
def analyzer():
    return BasicSignalAnalyzer()


def test_strong_upward_trend(analyzer, history_factory):
    current, historical = history_factory([1.00 + 0.01 * i for i in range(8)])

    signal = analyzer.analyze_market("EUR/USD", current, historical)

    assert signal.trend == TrendDirection.UP
    assert signal.signal == SignalType.BUY
    assert signal.analysis.startswith(
        "Strong upward trend detected. Price increased by 7.00%."
    )
    assert 80 < signal.confidence < 90
    assert signal.timestamp == current.timestamp * 1000


def test_strong_downward_trend(analyzer, history_factory):
    current, historical = history_factory([1.07 - 0.01 * i for i in range(8)])

    signal = analyzer.analyze_market("EUR/USD", current, historical)

    assert signal.trend == TrendDirection.DOWN
    assert signal.signal == SignalType.SELL
    assert signal.analysis.startswith("Strong downward trend detected.")


def test_moderate_upward_trend(analyzer, history_factory):
    # short MA above long MA, but below the oldest price
    prices = [1.10, 1.00, 1.00, 1.00, 1.00, 1.01, 1.02, 1.03]
    current, historical = history_factory(prices)

    signal = analyzer.analyze_market("EUR/USD", current, historical)

    assert signal.trend == TrendDirection.UP
    assert signal.signal == SignalType.BUY
    assert signal.analysis == (
        "Moderate upward trend. Price change: -6.36%. Consider buying with caution."
    )


def test_flat_series_falls_to_sell(analyzer, history_factory):
    current, historical = history_factory([1.25] * 8)

    signal = analyzer.analyze_market("EUR/USD", current, historical)

    assert signal.trend == TrendDirection.NEUTRAL
    assert signal.signal == SignalType.SELL
    assert signal.confidence == 50.0


def test_errors_match_advanced_analyzer(analyzer, snapshot_factory):
    with pytest.raises(MissingRateError):
        analyzer.analyze_market("EUR/USD", snapshot_factory({}), [])
    with pytest.raises(InsufficientDataError):
        analyzer.analyze_market("EUR/USD", snapshot_factory({"EURUSD": 1.08}), [])


def test_momentum():
    assert calculate_momentum([1.0]) == 0.0
    assert calculate_momentum([1.0, 1.1, 1.2]) == 0.0
    assert calculate_momentum([1, 1, 1, 2, 2, 2]) == pytest.approx(100.0)


def test_volatility():
    assert calculate_volatility([1.0]) == 0.0
    # returns +100% and -50%
    assert calculate_volatility([1.0, 2.0, 1.0]) == pytest.approx(75.0)


def test_confidence_bounds():
    assert calculate_confidence(TrendDirection.NEUTRAL, 0, 0, 0) == 50.0
    assert calculate_confidence(TrendDirection.NEUTRAL, 0, 100, 0) == 40.0
    assert calculate_confidence(TrendDirection.UP, 50, 0, 50) == 95.0
