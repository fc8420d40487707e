"""
Canonical data models for order planning.

Orders are immutable values: every edit produces a new Order, and every plan
is recomputed from scratch. Plans carry no identity beyond a single call.
"""

from dataclasses import dataclass, field, replace
from datetime import time
from enum import Enum
from typing import Any, Optional

from ..utils.time import format_hhmm


class Side(str, Enum):
    """Order side, determines the slippage sign convention."""
    BUY = "BUY"
    SELL = "SELL"


class ExecMode(str, Enum):
    """Execution style."""
    TIME_SLICED = "TIME_SLICED"      # OTD: fixed schedule independent of live volume
    PARTICIPATION = "PARTICIPATION"  # INLINE / POV: proportional to forecast volume


class CapMode(str, Enum):
    """Participation cap mode."""
    NONE = "NONE"
    PERCENT_OF_VOLUME = "PERCENT_OF_VOLUME"


class Curve(str, Enum):
    """Intraday weight curve."""
    EQUAL = "EQUAL"
    UCURVE = "UCURVE"


class PlanDiagnostic(str, Enum):
    """Conditions handled locally by the plan builder and reported back."""
    DEGENERATE_WINDOW = "degenerate_window"  # zero-length session
    DEGENERATE_VOLUME = "degenerate_volume"  # zero expected volume under a cap
    OVERALLOCATION = "overallocation"        # continuous + auction trimmed to order size


@dataclass(frozen=True)
class Order:
    """Order parameters and intraday inputs for one planning call."""

    order_qty: int
    side: Side = Side.BUY

    # Strategy
    exec_mode: ExecMode = ExecMode.TIME_SLICED
    cap_mode: CapMode = CapMode.NONE
    max_participation_pct: float = 0.0
    reserve_for_auction_pct: float = 0.0
    defer_completion: bool = False

    # Session timing
    session_start: time = time(9, 30)
    session_end: time = time(13, 0)
    interval_minutes: int = 30
    curve: Curve = Curve.EQUAL

    # Volumes (operator-entered forecasts and observations)
    current_market_volume: float = 0.0
    expected_continuous_volume: float = 0.0
    expected_auction_volume: float = 0.0
    start_market_volume: float = 0.0     # market volume when tracking began

    # VWAP monitor
    market_turnover: float = 0.0
    manual_market_vwap: float = 0.0

    # Executed so far
    executed_qty: int = 0
    executed_notional: float = 0.0

    # Labels
    order_id: str = ""
    symbol: str = ""

    def with_updates(self, **changes: Any) -> "Order":
        """Return a new order with the given fields replaced."""
        return replace(self, **changes)

    @property
    def remaining_qty(self) -> int:
        """Unexecuted quantity, never negative."""
        return max(0, self.order_qty - self.executed_qty)


@dataclass(frozen=True)
class Slice:
    """One session interval [start, end)."""
    start: time
    end: time
    duration_minutes: float

    @property
    def label(self) -> str:
        return f"{format_hhmm(self.start)} – {format_hhmm(self.end)}"


@dataclass(frozen=True)
class PlanRow:
    """Planned quantity for a single slice."""
    slice: Slice
    expected_volume: int
    max_allowed: Optional[int]   # None means unbounded (no cap)
    suggested_qty: int

    @property
    def participation(self) -> float:
        """Suggested quantity as a share of the slice's expected volume."""
        if self.expected_volume <= 0:
            return 0.0
        return self.suggested_qty / self.expected_volume

    @property
    def at_cap(self) -> bool:
        """True when the cap is binding for this row."""
        return self.max_allowed is not None and self.suggested_qty >= self.max_allowed

    def is_high_impact(self, threshold: float = 0.25) -> bool:
        """True when the row claims more than threshold of the slice volume."""
        return self.expected_volume > 0 and self.participation > threshold


@dataclass(frozen=True)
class Plan:
    """Execution trajectory: continuous rows plus the auction allocation."""
    rows: tuple[PlanRow, ...]
    continuous_planned: int
    auction_allowed: int
    auction_planned: int
    reserve_qty: int = 0
    continuous_target: int = 0
    order_qty: int = 0
    diagnostics: tuple[PlanDiagnostic, ...] = field(default_factory=tuple)

    @property
    def total_planned(self) -> int:
        return self.continuous_planned + self.auction_planned

    @property
    def unplanned_qty(self) -> int:
        """Quantity the plan could not place in continuous or auction."""
        return max(0, self.order_qty - self.total_planned)

    @property
    def session_start(self) -> Optional[time]:
        return self.rows[0].slice.start if self.rows else None

    @property
    def session_end(self) -> Optional[time]:
        return self.rows[-1].slice.end if self.rows else None

    def has_diagnostic(self, diagnostic: PlanDiagnostic) -> bool:
        return diagnostic in self.diagnostics
