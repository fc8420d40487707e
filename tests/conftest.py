"""Pytest configuration and shared fixtures."""

import pytest
from datetime import time
from typing import Dict, Any

from pacer_app.data.models import CapMode, Curve, ExecMode, Order, Side


@pytest.fixture
def otd_order() -> Order:
    """Time-sliced order over two 30 minute slices with a 10% auction reserve."""
    return Order(
        order_qty=10000,
        side=Side.BUY,
        exec_mode=ExecMode.TIME_SLICED,
        cap_mode=CapMode.NONE,
        reserve_for_auction_pct=10.0,
        session_start=time(9, 30),
        session_end=time(10, 30),
        interval_minutes=30,
        curve=Curve.EQUAL,
        expected_continuous_volume=8000.0,
        expected_auction_volume=2000.0,
        order_id="otd-001",
        symbol="TEST",
    )


@pytest.fixture
def inline_order() -> Order:
    """Participation order sized at 25% of the forecast volume."""
    return Order(
        order_qty=2500,
        side=Side.BUY,
        exec_mode=ExecMode.PARTICIPATION,
        cap_mode=CapMode.NONE,
        session_start=time(9, 30),
        session_end=time(10, 30),
        interval_minutes=30,
        expected_continuous_volume=8000.0,
        expected_auction_volume=2000.0,
        order_id="inline-001",
        symbol="TEST",
    )


@pytest.fixture
def pacing_order() -> Order:
    """Small order that splits evenly into 500 share rows."""
    return Order(
        order_qty=1000,
        session_start=time(9, 30),
        session_end=time(10, 30),
        interval_minutes=30,
        expected_continuous_volume=10000.0,
        order_id="pace-001",
    )


@pytest.fixture
def sample_order_payload() -> Dict[str, Any]:
    """Order payload as sent by the desk UI (camelCase keys, short enum names)."""
    return {
        "id": "ui-42",
        "symbol": "QNBK",
        "orderQty": "1600000",
        "side": "buy",
        "execMode": "OTD",
        "capMode": "PCT",
        "maxPart": "15",
        "reserveAuctionPct": 10,
        "deferCompletion": "true",
        "sessionStart": "09:30",
        "sessionEnd": "13:00",
        "intervalMins": 30,
        "curve": "ucurve",
        "currentVol": 0,
        "expectedContVol": 800000,
        "expectedAuctionVol": 200000,
        "orderExecQty": 0,
    }
