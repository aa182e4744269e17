"""
Payment-related exceptions.
"""

from .base import TopupException


class PaymentException(TopupException):
    """Base exception for payment-related errors."""
    pass


class PaymentGatewayException(PaymentException):
    """Raised when the payment status check cannot be completed."""

    def __init__(self, order_id: str, reason: str, http_status: int | None = None):
        message = f"Payment status check failed for order {order_id}: {reason}"
        if http_status is not None:
            message = f"{message} (HTTP {http_status})"
        super().__init__(
            message,
            details={'order_id': order_id, 'reason': reason, 'http_status': http_status}
        )
        self.order_id = order_id
        self.reason = reason
        self.http_status = http_status
