"""
Client for the payment backend's status check endpoint.

    POST {PAYMENT_BACKEND_URL}/payment/check-status
    {"order_id": "...", "type": "topup"}  ->  {"status": "success" | "completed" | "failed" | ...}
"""

import asyncio
import logging

import aiohttp
from pydantic import ValidationError

import config
from enums.order_type import OrderType
from exceptions.payment import PaymentGatewayException
from models.payment import CheckStatusRequestDTO, CheckStatusResponseDTO

logger = logging.getLogger(__name__)

CHECK_STATUS_PATH = "/payment/check-status"


class PaymentGatewayClient:
    def __init__(self, base_url: str | None = None, timeout_seconds: float | None = None,
                 session: aiohttp.ClientSession | None = None):
        self.base_url = (base_url if base_url is not None else config.PAYMENT_BACKEND_URL).rstrip("/")
        self.timeout = aiohttp.ClientTimeout(
            total=timeout_seconds if timeout_seconds is not None else config.PAYMENT_CHECK_TIMEOUT_SECONDS
        )
        self._session = session

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def check_status(self, order_id: str, order_type: OrderType) -> CheckStatusResponseDTO:
        """
        Ask the payment backend for the order's payment status.

        Raises:
            PaymentGatewayException: on network errors, non-2xx responses
                and bodies that are not a JSON object
        """
        if not self.base_url:
            raise PaymentGatewayException(order_id, "payment backend URL is not configured")

        payload = CheckStatusRequestDTO(order_id=order_id, type=order_type.value)
        url = f"{self.base_url}{CHECK_STATUS_PATH}"
        try:
            async with self._get_session().post(url, json=payload.model_dump()) as response:
                if response.status >= 300:
                    raise PaymentGatewayException(order_id, "unexpected response", http_status=response.status)
                body = await response.json(content_type=None)
                return CheckStatusResponseDTO.model_validate(body)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise PaymentGatewayException(order_id, str(e) or type(e).__name__) from e
        except (ValidationError, ValueError) as e:
            raise PaymentGatewayException(order_id, f"invalid response body: {e}") from e

    async def close(self):
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None


_gateway_instance = None


def get_payment_gateway() -> PaymentGatewayClient:
    """Get the shared gateway client (one aiohttp session per process)."""
    global _gateway_instance
    if _gateway_instance is None:
        _gateway_instance = PaymentGatewayClient()
    return _gateway_instance


async def close_payment_gateway():
    global _gateway_instance
    if _gateway_instance is not None:
        await _gateway_instance.close()
        _gateway_instance = None
