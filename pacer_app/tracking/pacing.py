"""
Pacing against the plan.

The clock is always injected: every function takes `now` as a time of day
and nothing here reads the wall clock, so a session can be replayed
deterministically.
"""

import math
from dataclasses import dataclass
from datetime import time
from enum import Enum
from typing import Optional

from ..data.models import Order, Plan
from ..utils.time import TimeLike, as_time_of_day, to_minutes


class PaceClass(str, Enum):
    """Executed quantity relative to the plan."""
    AHEAD = "AHEAD"
    ON_TRACK = "ON_TRACK"
    BEHIND = "BEHIND"


@dataclass(frozen=True)
class PacingStatus:
    """Progress snapshot at a given time of day."""
    now: time
    accumulated_suggested: int
    executed_qty: int
    delta: int
    pace: PaceClass
    completion_pct: int
    live_row_index: Optional[int] = None


def accumulated_suggested(plan: Plan, session_start: TimeLike, now: TimeLike) -> int:
    """
    Plan quantity due by `now`.

    Rows that have ended count in full; the live row counts pro rata by
    elapsed minutes (floored); later rows are not yet due. The result is
    non-decreasing in `now` and equals continuous_planned after the session.

    Args:
        plan: Built plan
        session_start: Session start time of day
        now: Current time of day

    Returns:
        Accumulated suggested quantity
    """
    now_m = to_minutes(now)
    # nothing is due before the open (degenerate windows end before they start)
    if plan.rows and now_m < min(to_minutes(session_start), to_minutes(plan.rows[-1].slice.end)):
        return 0

    acc = 0
    for row in plan.rows:
        start_m = to_minutes(row.slice.start)
        end_m = to_minutes(row.slice.end)

        if now_m >= end_m:
            acc += row.suggested_qty
        elif start_m <= now_m < end_m:
            duration = row.slice.duration_minutes
            elapsed = min(max(now_m - start_m, 0.0), duration)
            fraction = elapsed / duration if duration > 0 else 0.0
            acc += math.floor(row.suggested_qty * fraction)
            break
        else:
            break
    return acc


def pacing_delta(executed_qty: int, accumulated: int) -> int:
    """Executed minus due; positive means ahead of plan."""
    return executed_qty - accumulated


def classify_pace(delta: int, accumulated: int, band_pct: float = 0.05) -> PaceClass:
    """
    Classify a pacing delta against a relative band.

    AHEAD when delta >= band * accumulated, BEHIND when delta <= -band *
    accumulated.

    At the open (nothing due yet) no execution is ON_TRACK and any execution
    is AHEAD. This deliberately differs from a blanket AHEAD-at-open rule and
    from treating the open as always on track; product review owns the choice.
    """
    band = band_pct * accumulated
    if delta > 0 and delta >= band:
        return PaceClass.AHEAD
    if delta < 0 and delta <= -band:
        return PaceClass.BEHIND
    return PaceClass.ON_TRACK


def completion_pct(executed_qty: int, order_qty: int) -> int:
    """Executed share of the order in whole percent, capped at 100."""
    if order_qty <= 0:
        return 0
    return min(100, math.floor(executed_qty / order_qty * 100 + 0.5))


def live_row_index(plan: Plan, now: TimeLike) -> Optional[int]:
    """Index of the row whose interval contains `now`, if any."""
    now_m = to_minutes(now)
    for i, row in enumerate(plan.rows):
        if to_minutes(row.slice.start) <= now_m < to_minutes(row.slice.end):
            return i
    return None


def next_slice_boundary(plan: Plan, now: TimeLike) -> Optional[time]:
    """
    Next row end strictly after `now`.

    Callers use this to schedule their next refresh; None once the session
    is over.
    """
    now_m = to_minutes(now)
    for row in plan.rows:
        if to_minutes(row.slice.end) > now_m:
            return row.slice.end
    return None


def track_pacing(order: Order, plan: Plan, now: TimeLike, band_pct: float = 0.05) -> PacingStatus:
    """Bundle accumulated plan, delta, pace class and completion for `now`."""
    now_t = as_time_of_day(now)
    accumulated = accumulated_suggested(plan, order.session_start, now_t)
    executed = max(0, order.executed_qty)
    delta = pacing_delta(executed, accumulated)

    return PacingStatus(
        now=now_t,
        accumulated_suggested=accumulated,
        executed_qty=executed,
        delta=delta,
        pace=classify_pace(delta, accumulated, band_pct),
        completion_pct=completion_pct(executed, order.order_qty),
        live_row_index=live_row_index(plan, now_t),
    )
