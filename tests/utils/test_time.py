"""
Tests for time-of-day utilities.

Verifies parsing, minute arithmetic and that the wall clock is only read
through an injectable callable.
"""

import pytest
from datetime import datetime, time

from pacer_app.utils.time import (
    add_minutes, as_time_of_day, current_time_of_day, format_hhmm,
    from_minutes, minutes_between, to_minutes
)


class TestAsTimeOfDay:
    """Test as_time_of_day coercion."""

    def test_passes_time_through(self):
        """A datetime.time is returned unchanged."""
        t = time(9, 30)
        assert as_time_of_day(t) is t

    def test_parses_hhmm(self):
        assert as_time_of_day("09:30") == time(9, 30)

    def test_parses_hhmmss(self):
        assert as_time_of_day(" 13:00:15 ") == time(13, 0, 15)

    @pytest.mark.parametrize("raw", ["0930", "9", "", "09:30:00:00"])
    def test_rejects_bad_shape(self, raw):
        """Strings without two or three parts are rejected."""
        with pytest.raises(ValueError):
            as_time_of_day(raw)

    def test_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            as_time_of_day("25:00")


class TestMinuteArithmetic:
    """Test conversions between times and minutes since midnight."""

    def test_to_minutes_includes_seconds(self):
        assert to_minutes(time(9, 30, 30)) == 570.5

    def test_from_minutes_round_trip(self):
        assert from_minutes(570.5) == time(9, 30, 30)

    def test_from_minutes_wraps_past_midnight(self):
        assert from_minutes(24 * 60 + 15) == time(0, 15)

    def test_minutes_between_is_signed(self):
        assert minutes_between("09:30", "10:00") == 30
        assert minutes_between("10:00", "09:30") == -30

    def test_add_minutes(self):
        assert add_minutes("09:30", 45) == time(10, 15)
        assert add_minutes(time(12, 59), 1.5) == time(13, 0, 30)


class TestFormatting:
    """Test format_hhmm output."""

    def test_whole_minutes(self):
        assert format_hhmm(time(9, 5)) == "09:05"

    def test_seconds_are_kept_when_present(self):
        assert format_hhmm("09:05:07") == "09:05:07"


class TestCurrentTimeOfDay:
    """Test the wall-clock sampler."""

    def test_uses_injected_clock(self):
        """Should read the supplied clock and drop microseconds."""
        result = current_time_of_day(lambda: datetime(2024, 5, 2, 11, 15, 42, 123456))
        assert result == time(11, 15, 42)

    def test_defaults_to_wall_clock(self):
        result = current_time_of_day()
        assert isinstance(result, time)
        assert result.microsecond == 0
