from typing import Any

from pydantic import BaseModel

from enums.client_event_type import ClientEventType, ToastLevel
from enums.session_state import SessionState
from models.order import OrderDTO


class ClientEvent(BaseModel):
    """One message pushed from a payment session to the payment page."""
    event: ClientEventType
    data: dict[str, Any] = {}

    @classmethod
    def order(cls, order: OrderDTO) -> "ClientEvent":
        return cls(event=ClientEventType.ORDER,
                   data=order.model_dump(mode="json", by_alias=True))

    @classmethod
    def countdown(cls, remaining_seconds: int) -> "ClientEvent":
        return cls(event=ClientEventType.COUNTDOWN,
                   data={"remainingSeconds": remaining_seconds})

    @classmethod
    def toast(cls, level: ToastLevel, message: str) -> "ClientEvent":
        return cls(event=ClientEventType.TOAST,
                   data={"level": level.value, "message": message})

    @classmethod
    def navigate(cls, route: str) -> "ClientEvent":
        return cls(event=ClientEventType.NAVIGATE, data={"to": route})

    @classmethod
    def state(cls, state: SessionState) -> "ClientEvent":
        return cls(event=ClientEventType.STATE, data={"state": state.value})
