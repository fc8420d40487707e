#!/usr/bin/env python3
"""
Pacing snapshot for one or more orders.

Reads order payloads from a YAML or JSON file (a single mapping or a list),
evaluates them at the given time of day (default: now) and prints the plan
table and the pacing summary for each.

Run: python scripts/pace_snapshot.py orders.yaml --now 10:45
"""

import argparse
import sys
from pathlib import Path

import yaml

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pacer_app.engine import ExecutionPlanningEngine, OrderEvaluation
from pacer_app.logging.config import configure_logging
from pacer_app.utils.time import current_time_of_day, format_hhmm


def print_plan(evaluation: OrderEvaluation) -> None:
    """Print the plan table with the live row marked."""
    plan = evaluation.plan
    live = evaluation.pacing.live_row_index
    flagged = set(evaluation.high_impact_rows)

    print(f"  {'slice':<17} {'exp vol':>12} {'max':>10} {'qty':>10}")
    for i, row in enumerate(plan.rows):
        marker = ">" if i == live else " "
        cap = "-" if row.max_allowed is None else f"{row.max_allowed:,}"
        impact = " !" if i in flagged else ""
        print(f" {marker}{row.slice.label:<17} {row.expected_volume:>12,} {cap:>10} {row.suggested_qty:>10,}{impact}")

    print(f"  continuous planned: {plan.continuous_planned:,}")
    print(f"  auction planned:    {plan.auction_planned:,} (allowed {plan.auction_allowed:,})")
    if plan.unplanned_qty:
        print(f"  unplanned:          {plan.unplanned_qty:,}")
    for diagnostic in plan.diagnostics:
        print(f"  ⚠️  {diagnostic.value}")


def print_summary(evaluation: OrderEvaluation) -> None:
    """Print pacing, performance and advice."""
    summary = evaluation.summary()
    print(f"  due by {summary['now']}: {summary['accumulated_suggested']:,}"
          f"  executed: {summary['executed_qty']:,}  delta: {summary['delta']:+,}  [{summary['pace']}]")
    print(f"  completion: {summary['completion_pct']}%  slippage: {summary['slippage_bps']:+.2f} bps")
    print(f"  impact score: {summary['impact_score']}/10"
          f"  required rate: {summary['required_participation_rate']:.2%}")
    print(f"  action: {summary['action']}")
    if evaluation.next_boundary is not None:
        print(f"  next refresh: {format_hhmm(evaluation.next_boundary)}")
    for alert in summary["alerts"]:
        print(f"  🚨 {alert}")


def main():
    parser = argparse.ArgumentParser(description="Print a pacing snapshot for order payloads")
    parser.add_argument("orders", type=Path, help="YAML or JSON file with one order or a list of orders")
    parser.add_argument("--now", help="Time of day HH:MM[:SS] (default: wall clock)")
    parser.add_argument("--config-dir", type=Path, help="Directory holding symbols.yaml")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    configure_logging(level=args.log_level)

    with open(args.orders) as f:
        payloads = yaml.safe_load(f) or []
    if isinstance(payloads, dict):
        payloads = [payloads]

    now = args.now or current_time_of_day()
    engine = ExecutionPlanningEngine(config_dir=args.config_dir)

    exit_code = 0
    for payload in payloads:
        evaluation = engine.evaluate_payload(payload, now)
        if evaluation is None:
            label = (payload.get("id") or payload.get("order_id")) if isinstance(payload, dict) else None
            print(f"❌ Skipped invalid order: {label or payload}")
            exit_code = 1
            continue

        order = evaluation.order
        print(f"\n📊 {order.order_id or '(no id)'} {order.symbol} {order.side.value} {order.order_qty:,}"
              f" {order.exec_mode.value}")
        print_plan(evaluation)
        print_summary(evaluation)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
