import logging

from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from enums.order_status import OrderStatus
from enums.order_type import OrderType
from exceptions.order import OrderNotFoundException, OrderCancellationException
from models.order import OrderDTO
from repositories.order import OrderRepository
from services.order_listener import OrderListener

logger = logging.getLogger(__name__)


class OrderService:
    """
    Writes to order documents.

    Every write is followed by a change notification, so open payment
    sessions see it through their subscription like any other update.
    """

    @staticmethod
    async def get_order(order_type: OrderType, order_id: str) -> OrderDTO:
        order = await OrderRepository.get_by_id(order_type.collection, order_id)
        if order is None:
            raise OrderNotFoundException(order_id, order_type.collection)
        return order

    @staticmethod
    async def update_status(order_type: OrderType, order_id: str, status: OrderStatus,
                            listener: OrderListener | None = None) -> None:
        """Set the order status, as the payment backend does on a gateway callback."""
        updated = await OrderRepository.update_status(order_type.collection, order_id, status)
        if not updated:
            raise OrderNotFoundException(order_id, order_type.collection)
        await (listener or OrderListener()).publish_change(order_type.collection, order_id, status.value)
        logger.info(f"Order {order_type.collection}/{order_id} status set to {status.value}")

    @staticmethod
    async def mark_payment_received(order_type: OrderType, order_id: str,
                                    listener: OrderListener | None = None) -> None:
        """Admin confirmation for manual queue entries; status is left untouched."""
        updated = await OrderRepository.update_fields(order_type.collection, order_id, payment_received=True)
        if not updated:
            raise OrderNotFoundException(order_id, order_type.collection)
        await (listener or OrderListener()).publish_change(order_type.collection, order_id)
        logger.info(f"Order {order_type.collection}/{order_id} marked as payment received")

    @staticmethod
    async def cancel_order(order_type: OrderType, order_id: str,
                           listener: OrderListener | None = None) -> None:
        """
        Cancel a pending payment by writing a failed status.

        This is a blind overwrite: the gateway may have confirmed the payment
        a moment earlier. Subscribers observe the write as an ordinary failure.

        Raises:
            OrderNotFoundException: no such document
            OrderCancellationException: the write or the notification failed
        """
        try:
            cancelled = await OrderRepository.mark_cancelled(order_type.collection, order_id)
            if not cancelled:
                raise OrderNotFoundException(order_id, order_type.collection)
            await (listener or OrderListener()).publish_change(
                order_type.collection, order_id, OrderStatus.FAILED.value
            )
        except (SQLAlchemyError, RedisError) as e:
            logger.error(f"Error cancelling order {order_type.collection}/{order_id}: {e}")
            raise OrderCancellationException(order_id, str(e)) from e

        logger.info(f"Order {order_type.collection}/{order_id} cancelled by buyer")
