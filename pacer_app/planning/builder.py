"""
Plan builder for the two execution styles.

TIME_SLICED (OTD) walks the session schedule against the post-reserve target;
PARTICIPATION (INLINE / POV) follows forecast volume at a fixed rate. Both
apply the same participation cap and always return a well-formed plan: the
conditions listed in PlanDiagnostic are mitigated here and reported, never
raised.
"""

import math
from typing import Optional

from ..config.defaults import PlanParams
from ..data.models import (
    CapMode,
    ExecMode,
    Order,
    Plan,
    PlanDiagnostic,
    PlanRow,
    Slice,
)
from .slicer import slice_session
from .weights import weights


def _non_negative(value: float) -> float:
    """Clamp to zero; non-finite inputs count as zero."""
    if not math.isfinite(value) or value <= 0:
        return 0.0
    return float(value)


def apply_cap(cap_mode: CapMode, max_pct: float, qty: float, slice_volume: float) -> int:
    """
    Clamp a quantity to the participation cap.

    Args:
        cap_mode: NONE or PERCENT_OF_VOLUME
        max_pct: Maximum participation in percent
        qty: Uncapped quantity
        slice_volume: Expected market volume for the slice

    Returns:
        Non-negative integer quantity
    """
    if cap_mode == CapMode.NONE:
        return max(0, math.floor(qty))
    allowed = math.floor(slice_volume * max_pct / 100)
    return max(0, min(math.floor(qty), allowed))


def max_allowed(cap_mode: CapMode, max_pct: float, slice_volume: float) -> Optional[int]:
    """Cap for a slice, or None when unbounded."""
    if cap_mode == CapMode.NONE:
        return None
    return max(0, math.floor(slice_volume * max_pct / 100))


def shave_excess(
    suggested: list[int],
    auction_planned: int,
    order_qty: int,
    defer_completion: bool
) -> tuple[list[int], int, bool]:
    """
    Remove any over-allocation of continuous plus auction beyond order_qty.

    With deferred completion the excess is trimmed off the tail slices first,
    each down to zero before moving to the prior one; otherwise it comes off
    the auction leg. Whatever the tail cannot absorb also comes off the
    auction leg.

    Returns:
        (suggested quantities, auction planned, whether anything was trimmed)
    """
    excess = sum(suggested) + auction_planned - order_qty
    if excess <= 0:
        return suggested, auction_planned, False

    trimmed = list(suggested)
    if defer_completion:
        for i in range(len(trimmed) - 1, -1, -1):
            if excess <= 0:
                break
            cut = min(excess, trimmed[i])
            trimmed[i] -= cut
            excess -= cut

    if excess > 0:
        auction_planned = max(0, auction_planned - excess)

    return trimmed, auction_planned, True


def build_plan(order: Order, params: Optional[PlanParams] = None) -> Plan:
    """
    Build the execution plan for an order.

    Args:
        order: Order parameters and volume forecasts
        params: Plan builder parameters (defaults when omitted)

    Returns:
        Plan with one row per session slice
    """
    if ExecMode(order.exec_mode) == ExecMode.PARTICIPATION:
        return build_participation_plan(order, params)
    return build_time_sliced_plan(order, params)


def _session_profile(order: Order) -> tuple[list[Slice], list[float], list[int], list[PlanDiagnostic]]:
    """Slices, weights and per-slice expected volume shared by both modes."""
    slices = slice_session(order.session_start, order.session_end, order.interval_minutes)
    w = weights(order.curve, len(slices))
    continuous_volume = _non_negative(order.expected_continuous_volume)
    slice_volumes = [max(0, math.floor(wi * continuous_volume)) for wi in w]

    diagnostics = []
    if sum(s.duration_minutes for s in slices) <= 0:
        diagnostics.append(PlanDiagnostic.DEGENERATE_WINDOW)
    if CapMode(order.cap_mode) == CapMode.PERCENT_OF_VOLUME and any(v <= 0 for v in slice_volumes):
        diagnostics.append(PlanDiagnostic.DEGENERATE_VOLUME)

    return slices, w, slice_volumes, diagnostics


def _auction_allowed(order: Order, max_pct: float) -> int:
    auction_volume = _non_negative(order.expected_auction_volume)
    if CapMode(order.cap_mode) == CapMode.PERCENT_OF_VOLUME:
        return math.floor(auction_volume * max_pct / 100)
    return math.floor(auction_volume)


def _rows(order: Order, max_pct: float, slices: list[Slice],
          slice_volumes: list[int], suggested: list[int]) -> tuple[PlanRow, ...]:
    cap_mode = CapMode(order.cap_mode)
    return tuple(
        PlanRow(
            slice=sl,
            expected_volume=vol,
            max_allowed=max_allowed(cap_mode, max_pct, vol),
            suggested_qty=qty,
        )
        for sl, vol, qty in zip(slices, slice_volumes, suggested)
    )


def build_time_sliced_plan(order: Order, params: Optional[PlanParams] = None) -> Plan:
    """
    OTD schedule: slice the post-reserve target along the weight curve.

    The auction reserve is withheld before slicing. Any continuous shortfall
    caused by capping rolls into the auction leg, bounded by auction capacity.
    """
    params = params or PlanParams()
    cap_mode = CapMode(order.cap_mode)
    order_qty = int(_non_negative(order.order_qty))
    max_pct = _non_negative(order.max_participation_pct)
    reserve_pct = _non_negative(order.reserve_for_auction_pct)

    slices, w, slice_volumes, diagnostics = _session_profile(order)

    reserve_qty = min(order_qty, math.floor(order_qty * reserve_pct / 100))
    continuous_target = max(0, order_qty - reserve_qty)
    keep_back = math.ceil(continuous_target * params.keep_back_pct)

    remaining = continuous_target
    suggested_qtys = []
    for i, (wi, slice_volume) in enumerate(zip(w, slice_volumes)):
        base = min(math.floor(wi * continuous_target), remaining)
        suggested = apply_cap(cap_mode, max_pct, base, slice_volume)

        is_last = i == len(slices) - 1
        if order.defer_completion and not is_last:
            # never exhaust the continuous leg before the final slice
            if remaining - suggested <= 0:
                suggested = max(0, remaining - keep_back)

        suggested = min(suggested, remaining)
        remaining -= suggested
        suggested_qtys.append(suggested)

    continuous_planned = sum(suggested_qtys)
    auction_allowed = _auction_allowed(order, max_pct)
    auction_planned = min(
        reserve_qty + max(0, continuous_target - continuous_planned),
        auction_allowed,
    )

    return Plan(
        rows=_rows(order, max_pct, slices, slice_volumes, suggested_qtys),
        continuous_planned=continuous_planned,
        auction_allowed=auction_allowed,
        auction_planned=auction_planned,
        reserve_qty=reserve_qty,
        continuous_target=continuous_target,
        order_qty=order_qty,
        diagnostics=tuple(diagnostics),
    )


def target_participation_rate(order: Order) -> float:
    """
    POV rate: order size over expected total volume, capped at 1.

    Expected total volume is current + expected continuous + expected auction;
    an empty forecast gives a rate of 0.
    """
    expected_total = (
        _non_negative(order.current_market_volume)
        + _non_negative(order.expected_continuous_volume)
        + _non_negative(order.expected_auction_volume)
    )
    if expected_total <= 0:
        return 0.0
    return min(1.0, _non_negative(order.order_qty) / expected_total)


def build_participation_plan(order: Order, params: Optional[PlanParams] = None) -> Plan:
    """
    INLINE schedule: follow forecast volume at the target participation rate.

    No reserve is withheld; over-allocation is trimmed tail-first under
    deferred completion and off the auction leg otherwise.
    """
    cap_mode = CapMode(order.cap_mode)
    order_qty = int(_non_negative(order.order_qty))
    max_pct = _non_negative(order.max_participation_pct)
    auction_volume = _non_negative(order.expected_auction_volume)

    slices, _w, slice_volumes, diagnostics = _session_profile(order)
    pov = target_participation_rate(order)

    suggested_qtys = [
        apply_cap(cap_mode, max_pct, math.floor(vol * pov), vol)
        for vol in slice_volumes
    ]

    if cap_mode == CapMode.PERCENT_OF_VOLUME:
        auction_planned = math.floor(auction_volume * pov * max_pct / 100)
    else:
        auction_planned = math.floor(auction_volume * pov)

    suggested_qtys, auction_planned, trimmed = shave_excess(
        suggested_qtys, auction_planned, order_qty, order.defer_completion
    )
    if trimmed:
        diagnostics.append(PlanDiagnostic.OVERALLOCATION)

    return Plan(
        rows=_rows(order, max_pct, slices, slice_volumes, suggested_qtys),
        continuous_planned=sum(suggested_qtys),
        auction_allowed=_auction_allowed(order, max_pct),
        auction_planned=auction_planned,
        reserve_qty=0,
        continuous_target=order_qty,
        order_qty=order_qty,
        diagnostics=tuple(diagnostics),
    )
