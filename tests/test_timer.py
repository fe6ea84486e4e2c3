"""Behavior tests for time formatting and timestamp parsing."""

import math

import pytest

from core.lyrics import MalformedTimestamp, parse_timestamp, to_timer


def test_to_timer_formats_minutes_seconds_millis() -> None:
    """Seconds render as zero-padded mm:ss.fff."""
    assert to_timer(65.25) == "01:05.250"
    assert to_timer(0) == "00:00.000"
    assert to_timer(3.007) == "00:03.007"


def test_to_timer_truncates_millis_without_float_noise() -> None:
    """Milliseconds truncate toward zero, ignoring binary float error."""
    assert to_timer(2.3) == "00:02.300"
    assert to_timer(1.2999) == "00:01.299"


def test_to_timer_minutes_grow_past_an_hour_without_hours_field() -> None:
    """Without hours, minutes keep counting."""
    assert to_timer(3725.5) == "62:05.500"


def test_to_timer_with_hours() -> None:
    """With hours the format is hh:mm:ss."""
    assert to_timer(3725.5, with_hours=True) == "01:02:05"


@pytest.mark.parametrize("value", [None, math.nan])
def test_to_timer_renders_placeholders_for_missing_values(value) -> None:
    """Unknown times render every field as --."""
    assert to_timer(value) == "--:--.--"
    assert to_timer(value, with_hours=True) == "--:--:--"


def test_parse_timestamp_accepts_square_and_angle_brackets() -> None:
    """Both line and inline tags parse to seconds."""
    assert parse_timestamp("[01:05.25]") == pytest.approx(65.25)
    assert parse_timestamp("<00:02.5>") == pytest.approx(2.5)
    assert parse_timestamp("[00:07]") == pytest.approx(7.0)


@pytest.mark.parametrize("token", ["", "01:05.25", "[aa:05.25]", "[01:05.25>", "<1:2", None])
def test_parse_timestamp_rejects_malformed_tokens(token) -> None:
    """Malformed tokens raise MalformedTimestamp, which is also a ValueError."""
    with pytest.raises(MalformedTimestamp):
        parse_timestamp(token)
    with pytest.raises(ValueError):
        parse_timestamp(token)
