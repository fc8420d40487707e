"""VWAP performance and slippage calculations"""

from dataclasses import dataclass
from typing import Iterable, Optional

from ..data.models import Order, Side


@dataclass(frozen=True)
class PerformanceSnapshot:
    """Order VWAP against market VWAP."""
    market_vwap: float
    order_vwap: float
    slippage_bps: float
    vwap_source: Optional[str] = None   # 'turnover', 'manual' or None

    @property
    def has_signal(self) -> bool:
        return self.market_vwap > 0 and self.order_vwap > 0


@dataclass(frozen=True)
class OrderAggregate:
    """Blotter totals across independent orders."""
    order_count: int
    qty_total: int
    executed_qty: int
    executed_notional: float

    @property
    def blended_vwap(self) -> float:
        if self.executed_qty <= 0:
            return 0.0
        return self.executed_notional / self.executed_qty

    @property
    def completion_pct(self) -> float:
        if self.qty_total <= 0:
            return 0.0
        return min(100.0, self.executed_qty / self.qty_total * 100)


def implied_market_vwap(turnover: float, traded_volume: float, manual_vwap: float) -> float:
    """
    Market VWAP from turnover, falling back to a manual override

    Turnover / volume takes priority when both are positive; otherwise the
    manual value is used, and 0 means no market VWAP is available.
    """
    if traded_volume > 0 and turnover > 0:
        return turnover / traded_volume
    return manual_vwap if manual_vwap and manual_vwap > 0 else 0.0


def order_vwap(executed_qty: int, executed_notional: float) -> float:
    """Average execution price, 0 before the first fill."""
    if executed_qty <= 0:
        return 0.0
    return executed_notional / executed_qty


def slippage_bps(side: Side, order_vwap: float, market_vwap: float) -> float:
    """
    Signed slippage in basis points

    Positive always means the order beat the market: a buy below market VWAP
    or a sell above it. Returns 0 when either VWAP is missing.
    """
    if not market_vwap or not order_vwap or market_vwap <= 0 or order_vwap <= 0:
        return 0.0
    if Side(side) == Side.BUY:
        return (market_vwap - order_vwap) / market_vwap * 10000
    return (order_vwap - market_vwap) / market_vwap * 10000


def evaluate_performance(order: Order) -> PerformanceSnapshot:
    """
    Score an order's fills against the market.

    Market volume for the implied VWAP is the volume traded since tracking
    began (current minus start volume).
    """
    traded_volume = max(0.0, order.current_market_volume - order.start_market_volume)
    market = implied_market_vwap(order.market_turnover, traded_volume, order.manual_market_vwap)

    if traded_volume > 0 and order.market_turnover > 0:
        source = "turnover"
    elif market > 0:
        source = "manual"
    else:
        source = None

    own = order_vwap(order.executed_qty, order.executed_notional)
    return PerformanceSnapshot(
        market_vwap=market,
        order_vwap=own,
        slippage_bps=slippage_bps(order.side, own, market),
        vwap_source=source,
    )


def aggregate_orders(orders: Iterable[Order]) -> OrderAggregate:
    """Sum quantities and notionals across orders."""
    count = qty_total = executed_qty = 0
    executed_notional = 0.0
    for order in orders:
        count += 1
        qty_total += max(0, order.order_qty)
        executed_qty += max(0, order.executed_qty)
        executed_notional += max(0.0, order.executed_notional)

    return OrderAggregate(
        order_count=count,
        qty_total=qty_total,
        executed_qty=executed_qty,
        executed_notional=executed_notional,
    )
