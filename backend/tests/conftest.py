"""Shared fixtures: rate snapshots and price histories."""

from typing import Sequence

import pytest

from fxsignal.schemas.market import RateSnapshot

# 2024-06-03 12:00:00 UTC
NOW_S = 1717416000
NOW_MS = NOW_S * 1000
DAY_S = 86_400


def make_snapshot(
    quotes: dict, source: str = "EUR", timestamp: int = NOW_S, **extra
) -> RateSnapshot:
    return RateSnapshot(timestamp=timestamp, source=source, quotes=quotes, **extra)


def make_history(
    prices: Sequence[float], pair_key: str = "EURUSD", source: str = "EUR"
) -> tuple[RateSnapshot, list[RateSnapshot]]:
    """Last price becomes the live snapshot; the rest are daily closes, oldest first."""
    *history, current_price = prices
    historical = [
        make_snapshot(
            {pair_key: price},
            source=source,
            timestamp=NOW_S - (len(history) - i) * DAY_S,
            historical=True,
        )
        for i, price in enumerate(history)
    ]
    return make_snapshot({pair_key: current_price}, source=source), historical


@pytest.fixture
def snapshot_factory():
    return make_snapshot


@pytest.fixture
def history_factory():
    return make_history


@pytest.fixture
def uptrend_prices():
    return [1.0 + 0.01 * i for i in range(40)]


@pytest.fixture
def downtrend_prices():
    return [2.0 - 0.01 * i for i in range(40)]


@pytest.fixture
def flat_prices():
    # 1.25 is exact in binary, so every average of it is exactly 1.25
    return [1.25] * 30


@pytest.fixture
def now_ms():
    return NOW_MS
