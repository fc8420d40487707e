"""
End-to-end tests for the planning pipeline.

Replays a desk-sized order through a session and sweeps order shapes to check
the plan invariants that hold for every input.
"""

import itertools
import pytest
from datetime import time

from pacer_app.data.models import CapMode, Curve, ExecMode, Order, Side
from pacer_app.engine import ExecutionPlanningEngine
from pacer_app.planning.builder import build_plan
from pacer_app.tracking.advisory import AdvisoryAction, AlertLevel
from pacer_app.tracking.pacing import PaceClass, accumulated_suggested
from pacer_app.utils.time import add_minutes


@pytest.fixture
def desk_order() -> Order:
    """1.6m shares over 09:30-13:00 on a U-curve with a 15% cap."""
    return Order(
        order_qty=1600000,
        side=Side.BUY,
        exec_mode=ExecMode.TIME_SLICED,
        cap_mode=CapMode.PERCENT_OF_VOLUME,
        max_participation_pct=15.0,
        reserve_for_auction_pct=10.0,
        session_start=time(9, 30),
        session_end=time(13, 0),
        interval_minutes=30,
        curve=Curve.UCURVE,
        expected_continuous_volume=800000.0,
        expected_auction_volume=200000.0,
        order_id="desk-1",
        symbol="QNBK",
    )


class TestDeskScenario:
    """A large capped order that cannot finish in continuous trading."""

    def test_plan(self, desk_order):
        plan = build_plan(desk_order)

        assert len(plan.rows) == 7
        assert plan.continuous_target == 1440000
        assert plan.rows[0].expected_volume == 72727
        assert plan.rows[0].max_allowed == 10909
        assert all(row.at_cap for row in plan.rows)
        assert plan.continuous_planned == sum(row.max_allowed for row in plan.rows)
        assert plan.auction_allowed == 30000
        assert plan.auction_planned == 30000
        assert plan.unplanned_qty > 0

    def test_u_curve_shape(self, desk_order):
        volumes = [row.expected_volume for row in build_plan(desk_order).rows]

        assert volumes[3] == max(volumes)
        assert volumes[0] == min(volumes)
        assert volumes[0] == volumes[6]

    def test_session_replay(self, tmp_path, desk_order):
        """Re-evaluate every 15 minutes while filling exactly on plan."""
        engine = ExecutionPlanningEngine(config_dir=tmp_path)
        plan = build_plan(desk_order)

        now = time(9, 30)
        previous = -1
        while now <= time(13, 0):
            due = accumulated_suggested(plan, desk_order.session_start, now)
            order = desk_order.with_updates(executed_qty=due)
            evaluation = engine.evaluate(order, now)

            assert evaluation.pacing.delta == 0
            assert evaluation.pacing.pace == PaceClass.ON_TRACK
            assert evaluation.advice.action == AdvisoryAction.REDUCE_CLIP
            assert evaluation.pacing.accumulated_suggested >= previous

            previous = evaluation.pacing.accumulated_suggested
            now = add_minutes(now, 15)

        assert previous == plan.continuous_planned

    def test_session_ending_alert(self, tmp_path, desk_order):
        engine = ExecutionPlanningEngine(config_dir=tmp_path)
        evaluation = engine.evaluate(desk_order, "12:45")

        assert evaluation.alerts[0].level == AlertLevel.CRITICAL
        assert evaluation.next_boundary == time(13, 0)


ORDER_SIZES = [0, 1, 999, 250000, 5000000]
RESERVES = [0.0, 10.0, 100.0]
CAPS = [(CapMode.NONE, 0.0), (CapMode.PERCENT_OF_VOLUME, 15.0)]
WINDOWS = [(time(9, 30), time(13, 0), 30), (time(9, 30), time(9, 47), 5), (time(10, 0), time(10, 0), 30)]


def sweep_orders():
    for qty, reserve, (cap, pct), (start, end, step), curve, mode, defer in itertools.product(
        ORDER_SIZES, RESERVES, CAPS, WINDOWS, list(Curve), list(ExecMode), [False, True]
    ):
        yield Order(
            order_qty=qty,
            exec_mode=mode,
            cap_mode=cap,
            max_participation_pct=pct,
            reserve_for_auction_pct=reserve,
            defer_completion=defer,
            session_start=start,
            session_end=end,
            interval_minutes=step,
            curve=curve,
            current_market_volume=100000.0,
            expected_continuous_volume=900000.0,
            expected_auction_volume=150000.0,
        )


class TestPlanInvariants:
    """Properties every plan satisfies."""

    @pytest.mark.parametrize("order", list(sweep_orders()))
    def test_invariants(self, order):
        plan = build_plan(order)

        # never over-allocates
        assert plan.continuous_planned + plan.auction_planned <= order.order_qty
        assert plan.continuous_planned == sum(row.suggested_qty for row in plan.rows)
        assert plan.auction_planned <= plan.auction_allowed

        for row in plan.rows:
            assert row.suggested_qty >= 0
            if row.max_allowed is not None:
                assert row.suggested_qty <= row.max_allowed

        # rows tile the window
        assert plan.rows[0].slice.start == order.session_start
        assert plan.rows[-1].slice.end == order.session_end
        for prev, nxt in zip(plan.rows, plan.rows[1:]):
            assert prev.slice.end == nxt.slice.start

        # fully due after the close
        assert accumulated_suggested(plan, order.session_start, time(16, 0)) == plan.continuous_planned
        assert accumulated_suggested(plan, order.session_start, time(8, 0)) == 0
