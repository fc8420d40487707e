"""
Order payload normalization for converting raw order data to an Order.

The UI layer sends orders as flat dictionaries, historically with camelCase
keys and short enum names (OTD / INLINE / PCT). This module maps those onto
the canonical Order value without ever raising to the caller.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..errors import DataQualityError, MalformedDataError, MissingDataError
from ..utils.time import as_time_of_day
from .models import CapMode, Curve, ExecMode, Order, Side

logger = logging.getLogger(__name__)


# canonical field -> accepted payload keys, first match wins
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "order_qty": ("order_qty", "orderQty"),
    "side": ("side",),
    "exec_mode": ("exec_mode", "execMode"),
    "cap_mode": ("cap_mode", "capMode"),
    "max_participation_pct": ("max_participation_pct", "maxParticipationPct", "maxPart"),
    "reserve_for_auction_pct": ("reserve_for_auction_pct", "reserveForAuctionPct", "reserveAuctionPct"),
    "defer_completion": ("defer_completion", "deferCompletion"),
    "session_start": ("session_start", "sessionStart"),
    "session_end": ("session_end", "sessionEnd"),
    "interval_minutes": ("interval_minutes", "intervalMinutes", "intervalMins"),
    "curve": ("curve",),
    "current_market_volume": ("current_market_volume", "currentMarketVolume", "currentVol"),
    "expected_continuous_volume": ("expected_continuous_volume", "expectedContinuousVolume", "expectedContVol"),
    "expected_auction_volume": ("expected_auction_volume", "expectedAuctionVolume", "expectedAuctionVol"),
    "start_market_volume": ("start_market_volume", "startMarketVolume", "startVol"),
    "market_turnover": ("market_turnover", "marketTurnover"),
    "manual_market_vwap": ("manual_market_vwap", "manualMarketVWAP", "marketVWAPInput"),
    "executed_qty": ("executed_qty", "executedQty", "orderExecQty"),
    "executed_notional": ("executed_notional", "executedNotional", "orderExecNotional"),
    "order_id": ("order_id", "orderId", "id"),
    "symbol": ("symbol",),
}

ENUM_ALIASES: dict[str, str] = {
    "OTD": ExecMode.TIME_SLICED.value,
    "INLINE": ExecMode.PARTICIPATION.value,
    "POV": ExecMode.PARTICIPATION.value,
    "PCT": CapMode.PERCENT_OF_VOLUME.value,
}

INT_FIELDS = ("order_qty", "executed_qty")
FLOAT_FIELDS = (
    "max_participation_pct",
    "reserve_for_auction_pct",
    "current_market_volume",
    "expected_continuous_volume",
    "expected_auction_volume",
    "start_market_volume",
    "market_turnover",
    "manual_market_vwap",
    "executed_notional",
)
ENUM_FIELDS: dict[str, Callable[[str], Any]] = {
    "side": Side,
    "exec_mode": ExecMode,
    "cap_mode": CapMode,
    "curve": Curve,
}


@dataclass
class OrderNormalizationResult:
    """Result of order normalization process."""
    # Normalized order (None if invalid)
    order: Optional[Order] = None
    # Processing metadata
    success: bool = True
    error_msg: Optional[str] = None
    field_name: Optional[str] = None

    @classmethod
    def ok(cls, order: Order) -> "OrderNormalizationResult":
        """Create successful result with the normalized order."""
        return cls(order=order, success=True)

    @classmethod
    def error(cls, error_msg: str, field_name: Optional[str] = None) -> "OrderNormalizationResult":
        """Create error result."""
        return cls(success=False, error_msg=error_msg, field_name=field_name)


class OrderNormalizer:
    """
    Order payload normalization pipeline.

    Resolves field aliases, coerces numbers, enums and times of day, and
    builds an immutable Order.
    """

    def __init__(self, config: Optional[dict[str, Any]] = None):
        """
        Initialize order normalizer with configuration.

        Args:
            config: Normalization configuration dict; `defaults` supplies
                values for fields absent from the payload
        """
        self.config = config or {}
        self.defaults: dict[str, Any] = self.config.get("defaults", {})

    def normalize_order(self, payload: dict[str, Any]) -> OrderNormalizationResult:
        """
        Normalize an order payload to an Order.

        Args:
            payload: Raw order dictionary

        Returns:
            OrderNormalizationResult with the order or error information
        """
        if not isinstance(payload, dict):
            return OrderNormalizationResult.error("Order payload must be a mapping")

        try:
            values = self._resolve_fields(payload)

            if "order_qty" not in values:
                raise MissingDataError("Missing required field: order_qty", field_name="order_qty")

            for name in INT_FIELDS:
                if name in values:
                    values[name] = self._to_int(name, values[name])

            for name in FLOAT_FIELDS:
                if name in values:
                    values[name] = self._to_float(name, values[name])

            for name, enum_type in ENUM_FIELDS.items():
                if name in values:
                    values[name] = self._to_enum(name, enum_type, values[name])

            for name in ("session_start", "session_end"):
                if name in values:
                    values[name] = self._to_time(name, values[name])

            if "interval_minutes" in values:
                values["interval_minutes"] = max(1, self._to_int("interval_minutes", values["interval_minutes"]))

            if "defer_completion" in values:
                values["defer_completion"] = self._to_bool(values["defer_completion"])

            for name in ("order_id", "symbol"):
                if name in values:
                    values[name] = str(values[name])

            return OrderNormalizationResult.ok(Order(**values))

        except DataQualityError as e:
            logger.debug("Order payload rejected: %s", e)
            return OrderNormalizationResult.error(str(e), getattr(e, "field_name", None))

    def _resolve_fields(self, payload: dict[str, Any]) -> dict[str, Any]:
        values = {}
        for name, aliases in FIELD_ALIASES.items():
            for key in aliases:
                if key in payload and payload[key] is not None:
                    values[name] = payload[key]
                    break
            else:
                if name in self.defaults:
                    values[name] = self.defaults[name]
        return values

    def _to_int(self, name: str, value: Any) -> int:
        try:
            return int(self._to_float(name, value))
        except (ValueError, TypeError, OverflowError) as e:
            raise MalformedDataError(
                f"Invalid {name}: {e}", field_name=name, raw_value=value, expected_format="integer"
            ) from e

    def _to_float(self, name: str, value: Any) -> float:
        try:
            result = float(value)
        except (ValueError, TypeError, OverflowError) as e:
            raise MalformedDataError(
                f"Invalid {name}: {e}", field_name=name, raw_value=value, expected_format="number"
            ) from e
        if not math.isfinite(result):
            raise MalformedDataError(
                f"Invalid {name}: {value!r} is not a finite number",
                field_name=name, raw_value=value, expected_format="number"
            )
        return result

    def _to_enum(self, name: str, enum_type: Callable[[str], Any], value: Any) -> Any:
        raw = value.value if hasattr(value, "value") else str(value).strip().upper()
        try:
            return enum_type(ENUM_ALIASES.get(raw, raw))
        except ValueError as e:
            raise MalformedDataError(
                f"Invalid {name}: {value!r}", field_name=name, raw_value=value
            ) from e

    def _to_time(self, name: str, value: Any) -> Any:
        try:
            return as_time_of_day(value)
        except (ValueError, TypeError) as e:
            raise MalformedDataError(
                f"Invalid {name}: {e}", field_name=name, raw_value=value, expected_format="HH:MM"
            ) from e

    @staticmethod
    def _to_bool(value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)
