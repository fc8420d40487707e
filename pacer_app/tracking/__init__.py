"""Pacing, performance and advisory calculations"""

from .advisory import (
    Advice,
    AdvisoryAction,
    Alert,
    AlertLevel,
    advise,
    collect_alerts,
    high_impact_rows,
    impact_score,
    required_participation_rate,
)
from .pacing import (
    PaceClass,
    PacingStatus,
    accumulated_suggested,
    classify_pace,
    completion_pct,
    live_row_index,
    next_slice_boundary,
    pacing_delta,
    track_pacing,
)
from .performance import (
    OrderAggregate,
    PerformanceSnapshot,
    aggregate_orders,
    evaluate_performance,
    implied_market_vwap,
    order_vwap,
    slippage_bps,
)

__all__ = [
    "Advice",
    "AdvisoryAction",
    "Alert",
    "AlertLevel",
    "advise",
    "collect_alerts",
    "high_impact_rows",
    "impact_score",
    "required_participation_rate",
    "PaceClass",
    "PacingStatus",
    "accumulated_suggested",
    "classify_pace",
    "completion_pct",
    "live_row_index",
    "next_slice_boundary",
    "pacing_delta",
    "track_pacing",
    "OrderAggregate",
    "PerformanceSnapshot",
    "aggregate_orders",
    "evaluate_performance",
    "implied_market_vwap",
    "order_vwap",
    "slippage_bps",
]
