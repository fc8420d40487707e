"""Unit tests for the order and plan value types."""

import dataclasses
import pytest
from datetime import time

from pacer_app.data.models import Order, Plan, PlanDiagnostic, PlanRow, Slice


@pytest.fixture
def row() -> PlanRow:
    return PlanRow(
        slice=Slice(start=time(9, 30), end=time(10, 0), duration_minutes=30.0),
        expected_volume=4000,
        max_allowed=600,
        suggested_qty=600,
    )


class TestOrder:

    def test_is_immutable(self):
        order = Order(order_qty=100)
        with pytest.raises(dataclasses.FrozenInstanceError):
            order.order_qty = 200

    def test_with_updates_returns_new_order(self):
        order = Order(order_qty=100)
        updated = order.with_updates(executed_qty=40)

        assert order.executed_qty == 0
        assert updated.executed_qty == 40
        assert updated.remaining_qty == 60

    def test_remaining_never_negative(self):
        assert Order(order_qty=100, executed_qty=150).remaining_qty == 0


class TestPlanRow:

    def test_participation(self, row):
        assert row.participation == 0.15
        assert row.at_cap
        assert not row.is_high_impact()
        assert row.is_high_impact(0.1)

    def test_zero_volume(self, row):
        empty = dataclasses.replace(row, expected_volume=0, max_allowed=None, suggested_qty=5)

        assert empty.participation == 0.0
        assert not empty.at_cap
        assert not empty.is_high_impact()


class TestPlan:

    def test_totals(self, row):
        plan = Plan(
            rows=(row,),
            continuous_planned=600,
            auction_allowed=300,
            auction_planned=300,
            order_qty=1000,
            diagnostics=(PlanDiagnostic.DEGENERATE_VOLUME,),
        )

        assert plan.total_planned == 900
        assert plan.unplanned_qty == 100
        assert plan.session_start == time(9, 30)
        assert plan.session_end == time(10, 0)
        assert plan.has_diagnostic(PlanDiagnostic.DEGENERATE_VOLUME)
        assert not plan.has_diagnostic(PlanDiagnostic.OVERALLOCATION)

    def test_empty_plan(self):
        plan = Plan(rows=(), continuous_planned=0, auction_allowed=0, auction_planned=0)

        assert plan.session_start is None
        assert plan.unplanned_qty == 0
