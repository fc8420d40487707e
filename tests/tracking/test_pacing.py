"""
Tests for pacing against the plan.

The pacing order splits into two 500 share rows over 09:30-10:30, so the
expected accumulated quantity is easy to read off the clock.
"""

import pytest
from datetime import time

from pacer_app.planning.builder import build_plan
from pacer_app.tracking.pacing import (
    PaceClass,
    accumulated_suggested,
    classify_pace,
    completion_pct,
    live_row_index,
    next_slice_boundary,
    pacing_delta,
    track_pacing,
)


@pytest.fixture
def pacing_plan(pacing_order):
    return build_plan(pacing_order)


class TestAccumulatedSuggested:
    """Test plan quantity due by a time of day."""

    def test_plan_shape(self, pacing_plan):
        assert [row.suggested_qty for row in pacing_plan.rows] == [500, 500]

    @pytest.mark.parametrize("now,expected", [
        ("09:00", 0),
        ("09:30", 0),
        ("09:45", 250),
        ("10:00", 500),
        ("10:15", 750),
        ("10:30", 1000),
        ("12:00", 1000),
    ])
    def test_through_the_session(self, pacing_plan, now, expected):
        assert accumulated_suggested(pacing_plan, "09:30", now) == expected

    def test_live_row_is_floored(self, pacing_plan):
        """09:31 is 1/30 into a 500 share row: 16.67 floors to 16."""
        assert accumulated_suggested(pacing_plan, time(9, 30), time(9, 31)) == 16

    def test_seconds_count(self, pacing_plan):
        assert accumulated_suggested(pacing_plan, "09:30", "09:45:30") == 258

    def test_non_decreasing(self, pacing_plan):
        minutes = [time(9 + (30 + m) // 60, (30 + m) % 60) for m in range(0, 70)]
        values = [accumulated_suggested(pacing_plan, "09:30", t) for t in minutes]
        assert values == sorted(values)

    def test_equals_continuous_planned_after_close(self, pacing_plan):
        assert accumulated_suggested(pacing_plan, "09:30", "13:00") == pacing_plan.continuous_planned


class TestClassifyPace:
    """Test AHEAD / ON_TRACK / BEHIND classification."""

    def test_within_band(self):
        assert classify_pace(-20, 500, 0.05) == PaceClass.ON_TRACK

    def test_behind_at_band(self):
        assert classify_pace(-25, 500, 0.05) == PaceClass.BEHIND

    def test_ahead_at_band(self):
        assert classify_pace(25, 500, 0.05) == PaceClass.AHEAD

    def test_nothing_due_nothing_done(self):
        assert classify_pace(0, 0) == PaceClass.ON_TRACK

    def test_nothing_due_but_executed(self):
        """Any execution before anything is due counts as ahead."""
        assert classify_pace(10, 0) == PaceClass.AHEAD

    def test_delta(self):
        assert pacing_delta(480, 500) == -20


class TestCompletionPct:

    def test_rounds_half_up(self):
        assert completion_pct(125, 1000) == 13

    def test_capped(self):
        assert completion_pct(1500, 1000) == 100

    def test_zero_order(self):
        assert completion_pct(10, 0) == 0


class TestSliceLookup:
    """Test live row and next boundary lookup."""

    def test_live_row(self, pacing_plan):
        assert live_row_index(pacing_plan, "09:45") == 0
        assert live_row_index(pacing_plan, "10:00") == 1
        assert live_row_index(pacing_plan, "10:30") is None
        assert live_row_index(pacing_plan, "09:00") is None

    def test_next_boundary(self, pacing_plan):
        assert next_slice_boundary(pacing_plan, "09:45") == time(10, 0)
        assert next_slice_boundary(pacing_plan, "10:00") == time(10, 30)
        assert next_slice_boundary(pacing_plan, "10:30") is None


class TestTrackPacing:

    def test_behind(self, pacing_order, pacing_plan):
        status = track_pacing(pacing_order.with_updates(executed_qty=200), pacing_plan, "09:45")

        assert status.now == time(9, 45)
        assert status.accumulated_suggested == 250
        assert status.executed_qty == 200
        assert status.delta == -50
        assert status.pace == PaceClass.BEHIND
        assert status.completion_pct == 20
        assert status.live_row_index == 0

    def test_on_track_at_open(self, pacing_order, pacing_plan):
        status = track_pacing(pacing_order, pacing_plan, time(9, 30))

        assert status.accumulated_suggested == 0
        assert status.pace == PaceClass.ON_TRACK

    def test_band_is_configurable(self, pacing_order, pacing_plan):
        order = pacing_order.with_updates(executed_qty=480)
        assert track_pacing(order, pacing_plan, "10:00", band_pct=0.05).pace == PaceClass.ON_TRACK
        assert track_pacing(order, pacing_plan, "10:00", band_pct=0.02).pace == PaceClass.BEHIND
