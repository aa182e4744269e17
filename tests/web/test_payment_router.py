"""
Tests for the payment WebSocket route.

Run with:
    pytest tests/web/test_payment_router.py -v
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock, patch

from enums.order_type import OrderType
from exceptions import InvalidSessionStateException
from web.payment_router import payment_router


@pytest.fixture
def client():
    app = FastAPI()
    app.include_router(payment_router)
    return TestClient(app)


@pytest.fixture
def session_cls():
    session = MagicMock()
    session.start = AsyncMock()
    session.close = AsyncMock()
    session.cancel = AsyncMock()
    with patch('web.payment_router.PaymentSession', return_value=session) as cls:
        yield cls


class TestPaymentSocket:

    def test_missing_order_id(self, client, session_cls):
        with client.websocket_connect("/payment/ws?type=game") as websocket:
            toast = websocket.receive_json()
            navigate = websocket.receive_json()

        assert toast == {"event": "toast", "data": {"level": "error", "message": "No order ID found"}}
        assert navigate == {"event": "navigate", "data": {"to": "/"}}
        session_cls.assert_not_called()

    @pytest.mark.parametrize("query, order_type", [
        ("order_id=ORD-1&type=game", OrderType.GAME),
        ("orderId=ORD-1&type=manual", OrderType.MANUAL),
        ("orderId=ORD-1", OrderType.TOPUP),
    ])
    def test_session_started_and_closed(self, client, session_cls, query, order_type):
        with client.websocket_connect(f"/payment/ws?{query}"):
            pass

        args = session_cls.call_args.args
        assert args[0] == "ORD-1"
        assert args[1] is order_type
        session = session_cls.return_value
        session.start.assert_awaited_once()
        session.close.assert_awaited_once()

    def test_cancel_action(self, client, session_cls):
        with client.websocket_connect("/payment/ws?orderId=ORD-1") as websocket:
            websocket.send_json({"action": "noop"})
            websocket.send_json({"action": "cancel"})

        session_cls.return_value.cancel.assert_awaited_once()

    def test_cancel_rejected_shows_toast(self, client, session_cls):
        session_cls.return_value.cancel.side_effect = InvalidSessionStateException("ORD-1", "SUCCEEDED", "PENDING")

        with client.websocket_connect("/payment/ws?orderId=ORD-1&lang=en") as websocket:
            websocket.send_json({"action": "cancel"})
            toast = websocket.receive_json()

        assert toast["event"] == "toast"
        assert toast["data"] == {"level": "error", "message": "This payment has already been resolved"}


class TestHealth:

    def test_health(self):
        with patch('app.validate_or_exit'), patch('app.create_db_and_tables', new=AsyncMock()):
            from app import app
            with TestClient(app) as client:
                response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
