from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy import Column, String, Float, DateTime, Boolean, Text, func, Index

from enums.order_status import OrderStatus
from enums.order_type import OrderType
from models.base import Base


class OrderDocument(Base):
    """
    One order record in one of the storefront collections.

    Game orders, manual queue entries, game account purchases and wallet
    top-ups share this shape and are told apart by ``collection``.
    """
    __tablename__ = 'order_documents'

    collection = Column(String(32), primary_key=True)   # orders | queues | gameAccounts | topups
    id = Column(String(64), primary_key=True)
    status = Column(String(32), nullable=False, default=OrderStatus.PENDING.value)
    created_at = Column(DateTime, nullable=True, default=func.now())  # UTC, set by the server
    updated_at = Column(DateTime, nullable=True, default=func.now(), onupdate=func.now())
    cost = Column(Float, nullable=True)
    amount = Column(Float, nullable=True)
    payment_received = Column(Boolean, nullable=False, default=False)  # Manual queue only

    # Payment presentation, opaque to the reconciliation flow
    intent_link = Column(Text, nullable=True)
    qr_code = Column(Text, nullable=True)

    # Informational
    game = Column(String(64), nullable=True)
    user_id = Column(String(64), nullable=True)

    __table_args__ = (
        Index('ix_order_documents_status', 'collection', 'status'),
    )


class OrderDTO(BaseModel):
    """
    Snapshot of an order document as pushed to the payment page.

    Serialized with camelCase aliases, which is what the storefront reads.
    """
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    collection: str | None = None
    status: str | None = OrderStatus.PENDING.value
    created_at: datetime | None = Field(default=None, alias="createdAt")
    cost: float | None = None
    amount: float | None = None
    payment_received: bool | None = Field(default=False, alias="paymentReceived")
    intent_link: str | None = Field(default=None, alias="intentLink")
    qr_code: str | None = Field(default=None, alias="qrCode")
    game: str | None = None
    user_id: str | None = Field(default=None, alias="userId")

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        # SQLite drops tzinfo; stored timestamps are always UTC
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def order_status(self) -> OrderStatus:
        return OrderStatus.parse(self.status)

    @property
    def created_at_ms(self) -> int | None:
        if self.created_at is None:
            return None
        return int(self.created_at.timestamp() * 1000)

    @property
    def display_amount(self) -> float | None:
        return self.cost or self.amount

    def is_paid(self, order_type: OrderType) -> bool:
        """
        Success condition for the payment page.

        Manual queue entries are confirmed by an admin flipping
        ``paymentReceived`` without necessarily touching ``status``.
        """
        if self.order_status.is_success:
            return True
        return order_type is OrderType.MANUAL and self.payment_received is True

    def is_failed(self) -> bool:
        return self.order_status is OrderStatus.FAILED
