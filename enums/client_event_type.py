from enum import Enum


class ClientEventType(str, Enum):
    ORDER = "order"
    COUNTDOWN = "countdown"
    TOAST = "toast"
    NAVIGATE = "navigate"
    STATE = "state"


class ToastLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
