"""
Realtime order document subscription.

Order documents live in the SQL store; every writer publishes on the
document's change channel after committing. A subscriber re-reads the
document on each notification, so it always sees the full current record
(never a diff), and a burst of notifications collapses into reads of the
latest state.
"""

import logging
from typing import AsyncIterator

from redis.asyncio import Redis
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from exceptions.session import SubscriptionException
from models.order import OrderDTO
from redis_instance import get_redis
from repositories.order import OrderRepository

logger = logging.getLogger(__name__)

CHANNEL_PREFIX = "orders"


def change_channel(collection: str, order_id: str) -> str:
    return f"{CHANNEL_PREFIX}:{collection}:{order_id}"


class OrderListener:
    def __init__(self, redis: Redis | None = None):
        self._redis = redis

    @property
    def redis(self) -> Redis:
        return self._redis if self._redis is not None else get_redis()

    async def subscribe(self, collection: str, order_id: str) -> AsyncIterator[OrderDTO | None]:
        """
        Yield the order document now and after every change.

        ``None`` means the document does not exist. The channel subscription
        is opened before the first read, so no change committed after that
        read can be missed.

        Raises:
            SubscriptionException: when Redis or the database fails
        """
        channel = change_channel(collection, order_id)
        pubsub = self.redis.pubsub()
        try:
            await pubsub.subscribe(channel)
            logger.info(f"[LISTENER] Subscribed to {channel}")
            yield await OrderRepository.get_by_id(collection, order_id)
            async for message in pubsub.listen():
                if message.get("type") != "message":
                    continue
                logger.debug(f"[LISTENER] Change on {channel}: {message.get('data')}")
                yield await OrderRepository.get_by_id(collection, order_id)
        except (RedisError, SQLAlchemyError, ConnectionError) as e:
            raise SubscriptionException(order_id, str(e)) from e
        finally:
            try:
                await pubsub.unsubscribe(channel)
                await pubsub.aclose()
            except RedisError as e:
                logger.warning(f"[LISTENER] Unsubscribe from {channel} failed: {e}")

    async def publish_change(self, collection: str, order_id: str, status: str | None = None) -> int:
        """
        Announce a committed change to every subscriber of the document.

        Returns:
            Number of subscribers that received the notification
        """
        channel = change_channel(collection, order_id)
        receivers = await self.redis.publish(channel, status or "changed")
        logger.debug(f"[LISTENER] Published change on {channel} to {receivers} subscriber(s)")
        return receivers
