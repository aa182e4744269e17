"""
Order-related exceptions.
"""

from .base import TopupException


class OrderException(TopupException):
    """Base exception for order-related errors."""
    pass


class OrderNotFoundException(OrderException):
    """Raised when the order document does not exist in its collection."""

    def __init__(self, order_id: str, collection: str | None = None):
        location = f"{collection}/{order_id}" if collection else order_id
        super().__init__(
            f"Order {location} not found",
            details={'order_id': order_id, 'collection': collection}
        )
        self.order_id = order_id
        self.collection = collection


class MissingOrderIdException(OrderException):
    """Raised when a payment page is opened without an order ID."""

    def __init__(self):
        super().__init__("No order ID provided")


class OrderCancellationException(OrderException):
    """Raised when the cancel write could not be stored or announced."""

    def __init__(self, order_id: str, reason: str):
        super().__init__(
            f"Order {order_id} could not be cancelled: {reason}",
            details={'order_id': order_id, 'reason': reason}
        )
        self.order_id = order_id
        self.reason = reason
