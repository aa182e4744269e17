"""
Payment session exceptions.
"""

from .base import TopupException


class SessionException(TopupException):
    """Base exception for payment session errors."""
    pass


class InvalidSessionStateException(SessionException):
    """Raised when an action is not allowed in the session's current state."""

    def __init__(self, order_id: str, current_state: str, required_state: str):
        super().__init__(
            f"Payment session for order {order_id} is in state '{current_state}', required '{required_state}'",
            details={'order_id': order_id, 'current_state': current_state, 'required_state': required_state}
        )
        self.order_id = order_id
        self.current_state = current_state
        self.required_state = required_state


class SubscriptionException(SessionException):
    """Raised when the realtime order subscription breaks."""

    def __init__(self, order_id: str, reason: str):
        super().__init__(
            f"Order subscription for {order_id} failed: {reason}",
            details={'order_id': order_id, 'reason': reason}
        )
        self.order_id = order_id
        self.reason = reason
