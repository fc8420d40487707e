"""
Main execution planning engine coordinator.

Orchestrates the planning pipeline for one or more orders:
Order → Plan → Pacing → Performance → Advice and Alerts.

The engine keeps no per-order state. Callers own the clock and re-invoke
evaluate() on their own cadence with a fresh `now`.
"""

from dataclasses import dataclass
from datetime import time
from pathlib import Path
from typing import Any, Iterable, Optional, Union

import structlog

from .config.defaults import DefaultConfig
from .config.loader import ConfigLoader
from .data.models import ExecMode, Order, Plan, Side
from .data.order_normalizer import OrderNormalizer
from .errors import ConfigurationError
from .logging.config import get_pacing_logger, log_pacing_decision, log_plan_built
from .planning.builder import build_plan
from .tracking.advisory import Advice, Alert, advise, collect_alerts, high_impact_rows
from .tracking.pacing import PacingStatus, next_slice_boundary, track_pacing
from .tracking.performance import (
    OrderAggregate,
    PerformanceSnapshot,
    aggregate_orders,
    evaluate_performance,
)
from .utils.time import TimeLike, as_time_of_day, format_hhmm

logger = structlog.get_logger(__name__)
pacing_logger = get_pacing_logger(__name__)


@dataclass(frozen=True)
class OrderEvaluation:
    """Everything the desk needs for one order at one point in time."""
    order: Order
    plan: Plan
    pacing: PacingStatus
    performance: PerformanceSnapshot
    advice: Advice
    alerts: tuple[Alert, ...]
    high_impact_rows: tuple[int, ...] = ()
    next_boundary: Optional[time] = None

    def summary(self) -> dict[str, Any]:
        """Flat view for display or logging."""
        return {
            "order_id": self.order.order_id,
            "symbol": self.order.symbol,
            "side": Side(self.order.side).value,
            "now": format_hhmm(self.pacing.now),
            "continuous_planned": self.plan.continuous_planned,
            "auction_planned": self.plan.auction_planned,
            "unplanned_qty": self.plan.unplanned_qty,
            "accumulated_suggested": self.pacing.accumulated_suggested,
            "executed_qty": self.pacing.executed_qty,
            "delta": self.pacing.delta,
            "pace": self.pacing.pace.value,
            "completion_pct": self.pacing.completion_pct,
            "slippage_bps": round(self.performance.slippage_bps, 2),
            "impact_score": self.advice.impact_score,
            "required_participation_rate": round(self.advice.required_participation_rate, 4),
            "action": self.advice.action.value,
            "alerts": [f"{a.level.value}: {a.message}" for a in self.alerts],
        }


@dataclass(frozen=True)
class BlotterEvaluation:
    """Evaluations for several independent orders plus their totals."""
    evaluations: tuple[OrderEvaluation, ...]
    aggregate: OrderAggregate


class ExecutionPlanningEngine:
    """
    Coordinator for planning, pacing and advisory evaluation.

    Configuration is resolved per order symbol with the loader's 3-tier
    precedence; each evaluation is a pure function of the order, the
    configuration and the supplied time of day.
    """

    def __init__(self, config_dir: Optional[Union[str, Path]] = None) -> None:
        """Initialize the execution planning engine."""
        self.logger = logger
        self.pacing_logger = pacing_logger

        self.config_loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
        self.order_normalizer = OrderNormalizer()

        self.logger.info("Execution planning engine initialized", config_dir=str(self.config_loader.config_dir))

    def resolve_config(self, symbol: str, overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """Configuration for a symbol, falling back to defaults if it is invalid."""
        try:
            return self.config_loader.load(symbol, overrides)
        except ConfigurationError as e:
            self.logger.error(
                "Configuration rejected, using defaults",
                symbol=symbol,
                error=str(e)
            )
            return self.config_loader.defaults

    def evaluate(
        self,
        order: Order,
        now: TimeLike,
        overrides: Optional[dict[str, Any]] = None
    ) -> OrderEvaluation:
        """
        Evaluate a single order at a given time of day.

        Args:
            order: Order with current execution state
            now: Current time of day supplied by the caller
            overrides: Per-order configuration overrides

        Returns:
            OrderEvaluation with plan, pacing, performance, advice and alerts
        """
        now_t = as_time_of_day(now)
        config = self.resolve_config(order.symbol, overrides)

        plan = build_plan(order, config.plan)
        log_plan_built(
            self.pacing_logger,
            order_id=order.order_id,
            exec_mode=ExecMode(order.exec_mode).value,
            continuous_planned=plan.continuous_planned,
            auction_planned=plan.auction_planned,
            order_qty=plan.order_qty,
            diagnostics=[d.value for d in plan.diagnostics],
        )

        pacing = track_pacing(order, plan, now_t, config.pacing.deviation_band_pct)
        performance = evaluate_performance(order)
        advice = advise(order, plan, now_t, config.advisory)
        alerts = collect_alerts(order, plan, now_t, config.alerts)

        log_pacing_decision(
            self.pacing_logger,
            order_id=order.order_id,
            pace=pacing.pace.value,
            action=advice.action.value,
            accumulated_suggested=pacing.accumulated_suggested,
            executed_qty=pacing.executed_qty,
            context={
                "now": format_hhmm(now_t),
                "impact_score": advice.impact_score,
                "slippage_bps": round(performance.slippage_bps, 2),
            },
        )

        return OrderEvaluation(
            order=order,
            plan=plan,
            pacing=pacing,
            performance=performance,
            advice=advice,
            alerts=tuple(alerts),
            high_impact_rows=tuple(high_impact_rows(plan, config.plan.high_impact_ratio)),
            next_boundary=next_slice_boundary(plan, now_t),
        )

    def evaluate_payload(
        self,
        payload: dict[str, Any],
        now: TimeLike,
        overrides: Optional[dict[str, Any]] = None
    ) -> Optional[OrderEvaluation]:
        """Normalize a raw order payload and evaluate it; None if it is invalid."""
        result = self.order_normalizer.normalize_order(payload)

        if not result.success:
            self.logger.error(
                "Order normalization failed",
                order_id=(payload.get("order_id") or payload.get("id")) if isinstance(payload, dict) else None,
                field=result.field_name,
                error=result.error_msg
            )
            return None

        return self.evaluate(result.order, now, overrides)

    def evaluate_many(self, orders: Iterable[Order], now: TimeLike) -> BlotterEvaluation:
        """Evaluate independent orders and aggregate their fills."""
        orders = list(orders)
        evaluations = tuple(self.evaluate(order, now) for order in orders)
        aggregate = aggregate_orders(orders)

        self.logger.info(
            "Blotter evaluated",
            order_count=aggregate.order_count,
            qty_total=aggregate.qty_total,
            executed_qty=aggregate.executed_qty,
        )

        return BlotterEvaluation(evaluations=evaluations, aggregate=aggregate)
