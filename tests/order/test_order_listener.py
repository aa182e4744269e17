"""
Unit Tests: OrderListener

Subscribes through fakeredis against an in-memory order table and checks
that every change notification yields a fresh full snapshot.

Run with:
    pytest tests/order/test_order_listener.py -v
"""

import asyncio
from contextlib import aclosing
from unittest.mock import MagicMock, AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from enums.order_status import OrderStatus
from enums.order_type import OrderType
from exceptions import SubscriptionException
from models.order import OrderDTO
from repositories.order import OrderRepository
from services.order import OrderService
from services.order_listener import OrderListener, change_channel


class TestOrderListener:

    def test_change_channel(self):
        assert change_channel("gameAccounts", "ACC-9") == "orders:gameAccounts:ACC-9"

    @pytest.mark.asyncio
    async def test_initial_snapshot_then_changes(self, test_db, redis_client):
        await OrderRepository.create(OrderDTO(id="ORD-LST-1", collection="orders", status="pending"))
        listener = OrderListener(redis=redis_client)

        async with aclosing(listener.subscribe("orders", "ORD-LST-1")) as snapshots:
            first = await asyncio.wait_for(anext(snapshots), timeout=1.0)
            assert first.status == "pending"

            await OrderService.update_status(OrderType.GAME, "ORD-LST-1", OrderStatus.SUCCESS, listener=listener)

            second = await asyncio.wait_for(anext(snapshots), timeout=1.0)
            assert second.status == "success"
            assert second.id == "ORD-LST-1"

    @pytest.mark.asyncio
    async def test_missing_document_yields_none(self, test_db, redis_client):
        listener = OrderListener(redis=redis_client)

        async with aclosing(listener.subscribe("topups", "missing")) as snapshots:
            assert await asyncio.wait_for(anext(snapshots), timeout=1.0) is None

    @pytest.mark.asyncio
    async def test_publish_counts_receivers(self, redis_client):
        listener = OrderListener(redis=redis_client)

        assert await listener.publish_change("topups", "nobody-listening") == 0

    @pytest.mark.asyncio
    async def test_redis_failure_becomes_subscription_error(self, test_db):
        pubsub = MagicMock()
        pubsub.subscribe = AsyncMock(side_effect=RedisConnectionError("connection refused"))
        pubsub.unsubscribe = AsyncMock()
        pubsub.aclose = AsyncMock()
        redis = MagicMock()
        redis.pubsub.return_value = pubsub
        listener = OrderListener(redis=redis)

        with pytest.raises(SubscriptionException):
            async with aclosing(listener.subscribe("topups", "ORD-1")) as snapshots:
                await anext(snapshots)

        pubsub.aclose.assert_awaited_once()
