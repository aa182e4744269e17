"""
WebSocket endpoint backing the payment status page.

One connection = one mounted payment page. The page connects with

    /payment/ws?order_id=ORD-1&type=topup        (orderId is accepted too)

and receives JSON events (order, countdown, toast, navigate, state) until
it navigates away. The only message the page sends is {"action": "cancel"}.
Closing the socket tears the payment session down.
"""

import asyncio
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

import config
from enums.client_event_type import ToastLevel
from enums.order_type import OrderType
from exceptions import TopupException, MissingOrderIdException
from models.session_event import ClientEvent
from services.payment_session import PaymentSession
from utils.error_handler import handle_service_error, handle_unexpected_error

logger = logging.getLogger(__name__)

payment_router = APIRouter(prefix="/payment", tags=["payment"])

SUPPORTED_LANGUAGES = ("de", "en")


class WebSocketEventSink:
    """Delivers session events to the page as JSON text frames."""

    def __init__(self, websocket: WebSocket):
        self.websocket = websocket

    async def send(self, event: ClientEvent) -> None:
        await self.websocket.send_json(event.model_dump(mode="json"))


async def _reject_missing_order_id(sink: WebSocketEventSink, lang: str | None):
    await sink.send(ClientEvent.toast(ToastLevel.ERROR, handle_service_error(MissingOrderIdException(), lang=lang)))
    await asyncio.sleep(config.MISSING_ORDER_REDIRECT_DELAY_MS / 1000)
    await sink.send(ClientEvent.navigate("/"))
    await sink.websocket.close()


@payment_router.websocket("/ws")
async def payment_status_socket(websocket: WebSocket):
    await websocket.accept()

    params = websocket.query_params
    order_id = (params.get("order_id") or params.get("orderId") or "").strip()
    order_type = OrderType.parse(params.get("type"))
    lang = params.get("lang") if params.get("lang") in SUPPORTED_LANGUAGES else None
    sink = WebSocketEventSink(websocket)

    if not order_id:
        logger.warning("[PAYMENT] Payment page opened without an order ID")
        try:
            await _reject_missing_order_id(sink, lang)
        except WebSocketDisconnect:
            pass
        return

    session = PaymentSession(order_id, order_type, sink, lang=lang)
    await session.start()
    try:
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                logger.warning(f"[PAYMENT] Ignoring malformed message for {order_id}")
                continue

            action = message.get("action") if isinstance(message, dict) else None
            if action != "cancel":
                logger.debug(f"[PAYMENT] Ignoring unknown action {action!r} for {order_id}")
                continue

            logger.info(f"[PAYMENT] Cancel requested for {order_type.collection}/{order_id}")
            try:
                await session.cancel()
            except TopupException as e:
                await sink.send(ClientEvent.toast(ToastLevel.ERROR, handle_service_error(e, lang=lang)))
            except Exception as e:
                await sink.send(ClientEvent.toast(ToastLevel.ERROR, handle_unexpected_error(e, lang=lang)))
    except WebSocketDisconnect:
        logger.info(f"[PAYMENT] Page closed for {order_type.collection}/{order_id}")
    finally:
        await session.close()
