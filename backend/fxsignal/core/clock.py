"""
Clock Utility

Epoch-millisecond helpers and one-minute candle boundaries.
"""

import math
import time
from typing import Optional

from fxsignal.schemas.signals import CandleCountdown

MINUTE_MS = 60_000


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


def next_minute_boundary(current_ms: Optional[int] = None) -> int:
    """Start of the next one-minute candle (ceil to the minute)."""
    if current_ms is None:
        current_ms = now_ms()
    return math.ceil(current_ms / MINUTE_MS) * MINUTE_MS


def get_countdown(target_ms: int, current_ms: Optional[int] = None) -> CandleCountdown:
    """
    Time left until target_ms.

    An expired target rolls forward to the next minute boundary so the
    countdown keeps tracking the live candle.
    """
    if current_ms is None:
        current_ms = now_ms()

    expired = target_ms <= current_ms
    target = next_minute_boundary(current_ms) if expired else target_ms

    total_seconds = max(0, (target - current_ms) // 1000)
    return CandleCountdown(
        target_time=target,
        minutes=total_seconds // 60,
        seconds=total_seconds % 60,
        total_seconds=total_seconds,
        expired=expired,
    )
