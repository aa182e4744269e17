from pydantic import BaseModel, ConfigDict

from enums.order_status import OrderStatus


class CheckStatusRequestDTO(BaseModel):
    order_id: str
    type: str


class CheckStatusResponseDTO(BaseModel):
    """
    Body returned by the payment backend's check-status endpoint.

    Only ``status`` is interpreted; anything else the backend sends is kept
    for logging.
    """
    model_config = ConfigDict(extra="allow")

    status: str | None = None

    @property
    def order_status(self) -> OrderStatus:
        return OrderStatus.parse(self.status)
