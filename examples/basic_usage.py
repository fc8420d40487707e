#!/usr/bin/env python3
"""
Basic Usage Example - Execution Pacer

This script walks one order through a simulated trading session. It shows how to:
- Initialize the engine
- Normalize an order payload from the desk UI
- Re-evaluate the order on a cadence with an injected clock
- Read pacing, slippage, advice and alerts

Run: python examples/basic_usage.py
"""

from datetime import time
from typing import Dict, Any

from pacer_app.engine import ExecutionPlanningEngine, OrderEvaluation
from pacer_app.logging.config import configure_logging
from pacer_app.tracking.pacing import accumulated_suggested
from pacer_app.utils.time import add_minutes, format_hhmm, minutes_between


def create_sample_order() -> Dict[str, Any]:
    """Order payload as the desk UI sends it."""
    return {
        "id": "demo-1",
        "symbol": "QNBK",
        "orderQty": 1_600_000,
        "side": "BUY",
        "execMode": "OTD",
        "capMode": "PCT",
        "maxPart": 15,
        "reserveAuctionPct": 10,
        "deferCompletion": True,
        "sessionStart": "09:30",
        "sessionEnd": "13:00",
        "intervalMins": 30,
        "curve": "UCURVE",
        "expectedContVol": 800_000,
        "expectedAuctionVol": 200_000,
    }


def print_plan(evaluation: OrderEvaluation) -> None:
    """Print the plan rows."""
    plan = evaluation.plan
    print(f"📋 Plan for {evaluation.order.order_id}:")
    for row in plan.rows:
        print(f"  {row.slice.label}  vol {row.expected_volume:>9,}  qty {row.suggested_qty:>8,}"
              f"  ({row.participation:.1%})")
    print(f"  Continuous: {plan.continuous_planned:,}  Auction: {plan.auction_planned:,}"
          f"  Unplanned: {plan.unplanned_qty:,}")
    print()


def print_update(evaluation: OrderEvaluation) -> None:
    """Print a pacing update."""
    pacing = evaluation.pacing
    advice = evaluation.advice
    print(f"⏱️  {format_hhmm(pacing.now)}  due {pacing.accumulated_suggested:>8,}"
          f"  done {pacing.executed_qty:>8,}  [{pacing.pace.value}]"
          f"  slippage {evaluation.performance.slippage_bps:+.1f} bps")
    print(f"   Action: {advice.action.value} (impact {advice.impact_score}/10)")
    for alert in evaluation.alerts:
        print(f"   🚨 {alert.level.value}: {alert.message}")


def main():
    """Main demonstration function."""
    configure_logging(level="WARNING")

    print("🚀 Execution Pacer - Basic Usage Demo")
    print("=" * 60)

    engine = ExecutionPlanningEngine()

    evaluation = engine.evaluate_payload(create_sample_order(), "09:30")
    if evaluation is None:
        print("❌ Sample order was rejected")
        return
    print_plan(evaluation)

    # Fill a little behind plan and let the market print some volume
    order = evaluation.order
    now = time(10, 0)
    fill_ratio = 0.9
    market_price = 10.0

    while now <= order.session_end:
        due = accumulated_suggested(evaluation.plan, order.session_start, now)
        executed = int(due * fill_ratio)
        traded = 2_000 * minutes_between(order.session_start, now)

        order = order.with_updates(
            executed_qty=executed,
            executed_notional=executed * (market_price - 0.01),
            current_market_volume=traded,
            market_turnover=traded * market_price,
        )
        evaluation = engine.evaluate(order, now)
        print_update(evaluation)

        now = add_minutes(now, 30)

    print()
    print("✅ Demo complete")


if __name__ == "__main__":
    main()
