"""
Custom exceptions for the payment status service.

Exception Hierarchy:
--------------------
TopupException (base)
├── OrderException
│   ├── OrderNotFoundException
│   ├── MissingOrderIdException
│   └── OrderCancellationException
├── PaymentException
│   └── PaymentGatewayException
└── SessionException
    ├── InvalidSessionStateException
    └── SubscriptionException

Usage:
------
Services raise specific exceptions:
    raise OrderNotFoundException(order_id="ORD-1", collection="topups")

The WebSocket route catches them and shows a toast:
    try:
        await session.cancel()
    except TopupException as e:
        await sink.send(ClientEvent.toast(ToastLevel.ERROR, handle_service_error(e)))
"""

from .base import TopupException
from .order import OrderException, OrderNotFoundException, MissingOrderIdException, OrderCancellationException
from .payment import PaymentException, PaymentGatewayException
from .session import SessionException, InvalidSessionStateException, SubscriptionException

__all__ = [
    # Base
    'TopupException',

    # Order
    'OrderException',
    'OrderNotFoundException',
    'MissingOrderIdException',
    'OrderCancellationException',

    # Payment
    'PaymentException',
    'PaymentGatewayException',

    # Session
    'SessionException',
    'InvalidSessionStateException',
    'SubscriptionException',
]
