from enum import Enum


class SessionState(Enum):
    PENDING = "PENDING"        # Waiting for a terminal status from any source
    SUCCEEDED = "SUCCEEDED"    # Success seen by the listener or the poll loop
    FAILED = "FAILED"          # Explicit failure (gateway or cancellation)
    EXPIRED = "EXPIRED"        # Countdown reached zero first
    NOT_FOUND = "NOT_FOUND"    # Order document does not exist

    @property
    def is_terminal(self) -> bool:
        return self is not SessionState.PENDING

    @property
    def is_failure(self) -> bool:
        return self in (SessionState.FAILED, SessionState.EXPIRED)
