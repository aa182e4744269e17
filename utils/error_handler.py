"""
Error Handler Utility for the payment page

Converts service exceptions into localized user-facing toast messages.

Usage in the WebSocket route:
    from utils.error_handler import handle_service_error

    try:
        await session.cancel()
    except TopupException as e:
        await sink.send(ClientEvent.toast(ToastLevel.ERROR, handle_service_error(e)))
"""

import logging
from typing import Optional

from enums.audience import Audience
from exceptions import (
    TopupException,
    OrderNotFoundException,
    MissingOrderIdException,
    OrderCancellationException,
    PaymentGatewayException,
    InvalidSessionStateException,
    SubscriptionException,
)
from utils.localizator import Localizator


def handle_service_error(exception: TopupException, audience: Audience = Audience.USER,
                         lang: Optional[str] = None) -> str:
    """
    Convert service exception to localized user-friendly error message.

    Args:
        exception: The custom exception raised by a service
        audience: Who the message is for
        lang: Optional language code

    Returns:
        Localized error message string
    """
    logging.warning(f"Service error handled: {type(exception).__name__} - {str(exception)}")

    error_mapping = {
        OrderNotFoundException: "error_order_not_found",
        MissingOrderIdException: "error_missing_order_id",
        OrderCancellationException: "error_cancel_failed",
        PaymentGatewayException: "error_payment_check_failed",
        InvalidSessionStateException: "error_payment_already_resolved",
        SubscriptionException: "error_subscription",
    }

    localization_key = error_mapping.get(type(exception))

    if not localization_key:
        logging.error(f"Unmapped exception type: {type(exception).__name__}")
        return Localizator.get_text(audience, "error_unexpected", lang=lang)

    return Localizator.get_text(audience, localization_key, lang=lang)


def handle_unexpected_error(exception: Exception, audience: Audience = Audience.USER,
                            lang: Optional[str] = None) -> str:
    """
    Handle unexpected exceptions (non-TopupException).

    Also logs the full exception for debugging.
    """
    logging.error(f"Unexpected error: {type(exception).__name__} - {str(exception)}", exc_info=True)
    return Localizator.get_text(audience, "error_unexpected", lang=lang)
