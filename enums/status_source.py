from enum import Enum


class StatusSource(Enum):
    LISTENER = "listener"      # Realtime order document subscription
    POLL = "poll"              # Payment gateway check-status loop
    COUNTDOWN = "countdown"    # Local payment window timer
