"""Minute boundaries and candle countdowns."""

from fxsignal.core.clock import get_countdown, next_minute_boundary

MINUTE = 60_000


def test_next_minute_boundary_rounds_up():
    assert next_minute_boundary(MINUTE * 10 + 1) == MINUTE * 11
    assert next_minute_boundary(MINUTE * 10 + 59_999) == MINUTE * 11


def test_exact_boundary_is_kept():
    assert next_minute_boundary(MINUTE * 10) == MINUTE * 10


def test_countdown_to_future_target():
    countdown = get_countdown(MINUTE * 12 + 5_000, current_ms=MINUTE * 10)

    assert countdown.expired is False
    assert countdown.total_seconds == 125
    assert countdown.minutes == 2
    assert countdown.seconds == 5
    assert countdown.target_time == MINUTE * 12 + 5_000


def test_expired_target_rolls_to_next_minute():
    countdown = get_countdown(MINUTE * 9, current_ms=MINUTE * 10 + 15_000)

    assert countdown.expired is True
    assert countdown.target_time == MINUTE * 11
    assert countdown.total_seconds == 45
    assert countdown.minutes == 0


def test_partial_seconds_are_floored():
    countdown = get_countdown(MINUTE * 11, current_ms=MINUTE * 10 + 500)
    assert countdown.total_seconds == 59
