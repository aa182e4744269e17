from enum import Enum


class OrderStatus(Enum):
    PENDING = "pending"        # Waiting for payment
    SUCCESS = "success"        # Gateway confirmed payment
    COMPLETED = "completed"    # Fulfilled after payment
    FAILED = "failed"          # Gateway rejected, or cancelled by the buyer

    @classmethod
    def parse(cls, value: str | None) -> "OrderStatus":
        """
        Parse a status string as written by the backend.

        Values are compared case-insensitively. Missing or unknown values
        read as PENDING, since only the terminal values carry meaning here.
        """
        if not value:
            return cls.PENDING
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.PENDING

    @property
    def is_success(self) -> bool:
        return self in (OrderStatus.SUCCESS, OrderStatus.COMPLETED)

    @property
    def is_terminal(self) -> bool:
        return self is not OrderStatus.PENDING
