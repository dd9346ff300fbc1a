"""Indicator math: hand-checked values and short-input defaults."""

import math

import pytest

from fxsignal.services.indicators.calculations import (
    adx,
    backfill_timestamp,
    bollinger_bands,
    clamp,
    ema,
    macd,
    mean,
    population_std,
    rsi,
    sma,
    stochastic,
    synthesize_candle,
)


class TestMovingAverages:
    def test_sma_uses_last_period_values(self):
        assert sma([1, 2, 3, 4, 5], 3) == pytest.approx(4.0)

    def test_sma_shorter_than_period_averages_everything(self):
        assert sma([2, 4], 5) == pytest.approx(3.0)

    def test_sma_empty_is_zero(self):
        assert sma([], 20) == 0.0

    def test_ema_seeded_with_first_window(self):
        # seed mean(1, 2, 3) = 2, a = 0.5: 4 -> 3, 5 -> 4
        assert ema([1, 2, 3, 4, 5], 3) == pytest.approx(4.0)

    def test_ema_shorter_than_period_equals_sma(self):
        prices = [1.10, 1.12, 1.11, 1.15, 1.20]
        assert ema(prices, 9) == sma(prices, len(prices))

    def test_ema_of_constant_series_is_exact(self, flat_prices):
        assert ema(flat_prices, 9) == 1.25
        assert ema(flat_prices, 21) == 1.25

    def test_ema_empty_is_zero(self):
        assert ema([], 9) == 0.0


class TestRSI:
    def test_short_series_is_neutral(self):
        assert rsi([1.0] * 14) == 50.0

    def test_gain_loss_ratio(self):
        # deltas alternate +2, -1: avg gain 1, avg loss 0.5, RS 2
        prices = [10.0]
        for i in range(14):
            prices.append(prices[-1] + (2 if i % 2 == 0 else -1))
        assert rsi(prices) == pytest.approx(100 - 100 / 3)

    def test_only_last_period_deltas_count(self):
        prices = [10.0]
        for i in range(14):
            prices.append(prices[-1] + (2 if i % 2 == 0 else -1))
        assert rsi([100.0] + prices) == pytest.approx(100 - 100 / 3)

    def test_no_losses_is_100(self, uptrend_prices):
        assert rsi(uptrend_prices) == 100.0

    def test_no_gains_is_0(self, downtrend_prices):
        assert rsi(downtrend_prices) == pytest.approx(0.0)

    def test_flat_series_is_100(self, flat_prices):
        assert rsi(flat_prices) == 100.0


class TestMACD:
    def test_short_series_is_zero(self):
        assert macd([1.0] * 25) == (0.0, 0.0, 0.0)

    def test_histogram_is_line_minus_signal(self, uptrend_prices):
        line, signal, histogram = macd(uptrend_prices)
        assert line == pytest.approx(ema(uptrend_prices, 12) - ema(uptrend_prices, 26))
        assert histogram == pytest.approx(line - signal)

    def test_uptrend_is_bullish(self, uptrend_prices):
        line, signal, histogram = macd(uptrend_prices)
        assert line > 0
        assert line > signal
        assert histogram > 0

    def test_signal_is_ema_of_prefix_macd_values(self, uptrend_prices):
        prefix_values = [
            ema(uptrend_prices[: i + 1], 12) - ema(uptrend_prices[: i + 1], 26)
            for i in range(len(uptrend_prices))
        ]
        _, signal, _ = macd(uptrend_prices)
        assert signal == pytest.approx(ema(prefix_values, 9))

    def test_flat_series_is_zero(self, flat_prices):
        assert macd(flat_prices) == (0.0, 0.0, 0.0)


class TestBollingerBands:
    def test_population_std_bands(self):
        closes = list(range(1, 21))
        upper, middle, lower = bollinger_bands(closes)
        std = math.sqrt(399 / 12)
        assert middle == pytest.approx(10.5)
        assert upper == pytest.approx(10.5 + 2 * std)
        assert lower == pytest.approx(10.5 - 2 * std)

    def test_short_series_collapses_to_mean(self):
        prices = [1.10, 1.12, 1.11, 1.15, 1.20]
        upper, middle, lower = bollinger_bands(prices)
        assert upper == middle == lower
        assert middle == pytest.approx(1.136)

    def test_bands_are_ordered(self, downtrend_prices):
        upper, middle, lower = bollinger_bands(downtrend_prices)
        assert lower <= middle <= upper


class TestStochastic:
    def test_k_and_d(self):
        highs = [3, 4, 5, 6]
        lows = [1, 2, 3, 4]
        closes = [2, 3, 4, 4.5]
        k, d = stochastic(highs, lows, closes, period=3)
        assert k == pytest.approx(62.5)
        # mean of the windows ending at index 2 (75) and 3 (62.5)
        assert d == pytest.approx(68.75)

    def test_zero_range_is_neutral(self):
        assert stochastic([1.0] * 20, [1.0] * 20, [1.0] * 20) == (50.0, 50.0)

    def test_short_series_is_neutral(self):
        assert stochastic([1.1] * 5, [1.0] * 5, [1.05] * 5) == (50.0, 50.0)

    def test_values_stay_in_range(self, uptrend_prices):
        highs = [p * 1.001 for p in uptrend_prices]
        lows = [p * 0.999 for p in uptrend_prices]
        k, d = stochastic(highs, lows, uptrend_prices)
        assert 0 <= k <= 100
        assert 0 <= d <= 100


class TestADX:
    def test_one_sided_movement_is_100(self):
        assert adx([10, 11, 12], [9, 10, 11], [9.5, 10.5, 11.5], period=2) == pytest.approx(100.0)

    def test_balanced_movement_is_0(self):
        assert adx([10, 11, 10.5], [9, 10, 9], [9.5, 10.5, 9.5], period=2) == pytest.approx(0.0)

    def test_zero_true_range_is_neutral(self):
        assert adx([1.0] * 20, [1.0] * 20, [1.0] * 20) == 25.0

    def test_no_directional_movement_is_0(self, flat_prices):
        highs = [p * 1.001 for p in flat_prices]
        lows = [p * 0.999 for p in flat_prices]
        assert adx(highs, lows, flat_prices) == 0.0

    def test_short_series_is_neutral(self):
        assert adx([1.1] * 14, [1.0] * 14, [1.05] * 14) == 25.0


class TestHelpers:
    def test_clamp(self):
        assert clamp(120) == 100.0
        assert clamp(-3) == 0.0
        assert clamp(42.5) == 42.5

    def test_mean_and_std_of_empty(self):
        assert mean([]) == 0.0
        assert population_std([]) == 0.0

    def test_population_std(self):
        assert population_std([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)

    def test_synthesize_candle(self):
        open_, high, low, close = synthesize_candle(2.0)
        assert open_ == close == 2.0
        assert high == pytest.approx(2.002)
        assert low == pytest.approx(1.998)

    def test_backfill_timestamp_spacing(self):
        assert backfill_timestamp(0, 3, 600_000) == 420_000
        assert backfill_timestamp(2, 3, 600_000) == 540_000
