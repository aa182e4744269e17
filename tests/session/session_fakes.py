"""
Fakes and helpers for payment session tests.

The listener and sink are driven by the test instead of Redis and a real
WebSocket, so every interleaving of sources can be reproduced exactly.
"""

import asyncio
from datetime import datetime, timezone

from enums.client_event_type import ClientEventType
from services.payment_session import SessionTimings


class FakeOrderListener:
    """Yields whatever the test puts into ``snapshots``; exceptions are raised."""

    def __init__(self):
        self.snapshots: asyncio.Queue = asyncio.Queue()
        self.subscriptions = 0
        self.published = []

    async def subscribe(self, collection, order_id):
        self.subscriptions += 1
        while True:
            item = await self.snapshots.get()
            if isinstance(item, Exception):
                raise item
            yield item

    async def publish_change(self, collection, order_id, status=None):
        self.published.append((collection, order_id, status))
        return 1


class RecordingSink:
    def __init__(self):
        self.events = []

    async def send(self, event):
        self.events.append(event)

    def of(self, event_type: ClientEventType) -> list[dict]:
        return [event.data for event in self.events if event.event is event_type]

    @property
    def toasts(self) -> list[str]:
        return [data["message"] for data in self.of(ClientEventType.TOAST)]

    @property
    def routes(self) -> list[str]:
        return [data["to"] for data in self.of(ClientEventType.NAVIGATE)]

    @property
    def states(self) -> list[str]:
        return [data["state"] for data in self.of(ClientEventType.STATE)]


async def wait_until(predicate, timeout: float = 2.0):
    """Yield to the loop until predicate() holds."""
    deadline = asyncio.get_running_loop().time() + timeout
    while not predicate():
        if asyncio.get_running_loop().time() > deadline:
            raise AssertionError("condition not reached in time")
        await asyncio.sleep(0.005)


def fast_timings(**overrides) -> SessionTimings:
    values = dict(
        payment_timeout=600,
        poll_initial_delay=60,   # Polling stays quiet unless a test wants it
        poll_interval=60,
        countdown_tick=0.01,
        success_redirect_delay=0.01,
        not_found_redirect_delay=0.01,
        cancel_redirect_delay=0.01,
        resubscribe_delay=0.01,
    )
    values.update(overrides)
    return SessionTimings(**values)


CREATED_AT = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


