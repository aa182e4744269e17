from enum import Enum


class OrderType(Enum):
    GAME = "game"          # Direct game top-up
    MANUAL = "manual"      # Manual queue, processed by an admin
    ACCOUNT = "account"    # Game account purchase
    TOPUP = "topup"        # Wallet top-up (default)

    @classmethod
    def parse(cls, value: str | None) -> "OrderType":
        """Unknown or missing types fall back to a wallet top-up."""
        if not value:
            return cls.TOPUP
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.TOPUP

    @property
    def collection(self) -> str:
        return _COLLECTIONS[self]

    @property
    def destination(self) -> str:
        return _DESTINATIONS[self]

    @property
    def success_message_key(self) -> str:
        return _SUCCESS_MESSAGE_KEYS[self]


_COLLECTIONS = {
    OrderType.GAME: "orders",
    OrderType.MANUAL: "queues",
    OrderType.ACCOUNT: "gameAccounts",
    OrderType.TOPUP: "topups",
}

_DESTINATIONS = {
    OrderType.GAME: "/orders",
    OrderType.MANUAL: "/queues",
    OrderType.ACCOUNT: "/accounts",
    OrderType.TOPUP: "/wallet",
}

_SUCCESS_MESSAGE_KEYS = {
    OrderType.GAME: "payment_success_game",
    OrderType.MANUAL: "payment_success_manual",
    OrderType.ACCOUNT: "payment_success_account",
    OrderType.TOPUP: "payment_success_wallet",
}
