"""
Unit Tests: OrderStatus and OrderType parsing

Run with:
    pytest tests/enums/test_order_enums.py -v
"""

import pytest

from enums.order_status import OrderStatus
from enums.order_type import OrderType


class TestOrderStatus:

    @pytest.mark.parametrize("raw, expected", [
        ("success", OrderStatus.SUCCESS),
        ("SUCCESS", OrderStatus.SUCCESS),
        (" Completed ", OrderStatus.COMPLETED),
        ("failed", OrderStatus.FAILED),
        ("pending", OrderStatus.PENDING),
        ("processing", OrderStatus.PENDING),
        ("", OrderStatus.PENDING),
        (None, OrderStatus.PENDING),
    ])
    def test_parse(self, raw, expected):
        assert OrderStatus.parse(raw) is expected

    def test_success_and_terminal(self):
        assert OrderStatus.SUCCESS.is_success
        assert OrderStatus.COMPLETED.is_success
        assert not OrderStatus.FAILED.is_success
        assert OrderStatus.FAILED.is_terminal
        assert not OrderStatus.PENDING.is_terminal


class TestOrderType:

    @pytest.mark.parametrize("raw, expected", [
        ("game", OrderType.GAME),
        ("Manual", OrderType.MANUAL),
        ("account", OrderType.ACCOUNT),
        ("topup", OrderType.TOPUP),
        (None, OrderType.TOPUP),
        ("subscription", OrderType.TOPUP),
    ])
    def test_parse_defaults_to_topup(self, raw, expected):
        assert OrderType.parse(raw) is expected

    @pytest.mark.parametrize("order_type, collection, destination", [
        (OrderType.GAME, "orders", "/orders"),
        (OrderType.MANUAL, "queues", "/queues"),
        (OrderType.ACCOUNT, "gameAccounts", "/accounts"),
        (OrderType.TOPUP, "topups", "/wallet"),
    ])
    def test_collection_and_destination(self, order_type, collection, destination):
        assert order_type.collection == collection
        assert order_type.destination == destination
