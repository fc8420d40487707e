"""
Advisory heuristics and alerts.

Turns a plan, the pacing snapshot and the remaining forecast into an impact
score, the participation rate needed to finish, a recommended next action
and a list of operator alerts.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..config.defaults import AdvisoryParams, AlertParams
from ..data.models import CapMode, Order, Plan
from ..utils.time import TimeLike, minutes_between
from .pacing import accumulated_suggested


class AdvisoryAction(str, Enum):
    """Recommended next action, in rule priority order."""
    REDUCE_CLIP = "reduce clip size / lean on auction"
    RAISE_PARTICIPATION = "behind pace, raise participation toward required rate"
    EASE_OFF = "ease off unless liquidity is exceptional"
    HOLD_STEADY = "hold steady"


class AlertLevel(str, Enum):
    CRITICAL = "CRITICAL"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class Advice:
    """Heuristic assessment at a point in the session."""
    impact_score: int
    required_participation_rate: float
    action: AdvisoryAction
    pacing_delta: int
    accumulated_suggested: int
    remaining_qty: int

    @property
    def is_feasible(self) -> bool:
        """False when finishing would need more than all remaining volume."""
        return self.required_participation_rate <= 1.0


@dataclass(frozen=True)
class Alert:
    level: AlertLevel
    message: str


def required_participation_rate(order: Order) -> float:
    """
    Share of the remaining expected volume needed to finish the order.

    Not clamped: a value above 1 signals the order cannot complete in the
    forecast volume.
    """
    expected_remaining_volume = max(
        1.0,
        max(0.0, order.expected_continuous_volume) + max(0.0, order.expected_auction_volume),
    )
    return order.remaining_qty / expected_remaining_volume


def impact_score(rate: float) -> int:
    """Required rate scaled to 1..10, rounding half up."""
    if not math.isfinite(rate):
        return 10 if rate > 0 else 1
    return min(10, max(1, math.floor(rate * 10 + 0.5)))


def advise(order: Order, plan: Plan, now: TimeLike,
           params: Optional[AdvisoryParams] = None) -> Advice:
    """
    Recommend the next action for an order.

    Rules, first match wins: high impact score, then behind pace by the band,
    then ahead of pace by the band, otherwise hold steady.

    Args:
        order: Order with current execution state
        plan: Plan built for the order
        now: Current time of day
        params: Advisory thresholds (defaults when omitted)

    Returns:
        Advice with score, required rate and action
    """
    params = params or AdvisoryParams()

    accumulated = accumulated_suggested(plan, order.session_start, now)
    delta = max(0, order.executed_qty) - accumulated
    rate = required_participation_rate(order)
    score = impact_score(rate)
    band = params.pace_band_pct * accumulated

    if score >= params.impact_score_threshold:
        action = AdvisoryAction.REDUCE_CLIP
    elif delta < 0 and delta <= -band:
        action = AdvisoryAction.RAISE_PARTICIPATION
    elif delta > 0 and delta >= band:
        action = AdvisoryAction.EASE_OFF
    else:
        action = AdvisoryAction.HOLD_STEADY

    return Advice(
        impact_score=score,
        required_participation_rate=rate,
        action=action,
        pacing_delta=delta,
        accumulated_suggested=accumulated,
        remaining_qty=order.remaining_qty,
    )


def high_impact_rows(plan: Plan, ratio: float = 0.25) -> list[int]:
    """Indexes of rows claiming more than `ratio` of their slice volume."""
    return [i for i, row in enumerate(plan.rows) if row.is_high_impact(ratio)]


def collect_alerts(order: Order, plan: Plan, now: TimeLike,
                   params: Optional[AlertParams] = None) -> list[Alert]:
    """Operator alerts for the current state of an order, most severe first."""
    params = params or AlertParams()
    alerts = []

    if order.remaining_qty > 0 and order.order_qty > 0:
        minutes_to_end = max(0.0, minutes_between(now, order.session_end))
        if minutes_to_end <= order.interval_minutes:
            alerts.append(Alert(AlertLevel.CRITICAL, "Session ending, finalize remaining quantity"))

    if not (order.market_turnover > 0 or order.manual_market_vwap > 0):
        alerts.append(Alert(AlertLevel.WARNING, "Missing market VWAP (turnover or manual)"))

    if CapMode(order.cap_mode) == CapMode.PERCENT_OF_VOLUME and plan.rows:
        cap_hits = sum(1 for row in plan.rows if row.at_cap)
        if cap_hits >= math.ceil(len(plan.rows) * params.cap_binding_share):
            alerts.append(Alert(
                AlertLevel.WARNING,
                "Cap binding frequently, consider time-sliced mode or a higher max participation",
            ))

    if order.current_market_volume <= order.start_market_volume:
        alerts.append(Alert(AlertLevel.INFO, "Market volume not updated since start, pacing may be stale"))

    if order.order_qty > 0 and order.executed_qty >= order.order_qty:
        alerts.append(Alert(AlertLevel.INFO, "Order complete, maintain auction stance as configured"))

    return alerts
