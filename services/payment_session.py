"""
Payment status reconciliation for one open payment page.

Three producers report on the same order:
- the realtime order subscription (full document on every change)
- the gateway poll loop (check-status every few seconds)
- the countdown timer anchored on the order's createdAt

They never touch session state directly. Each pushes an observation into
one queue, and a single consumer applies observations in arrival order
through SessionStateMachine. Whichever source reports a terminal condition
first wins; later reports are no-ops, so every side effect (toast,
navigation, admin notification) fires at most once.
"""

import asyncio
import logging
import time
from contextlib import aclosing
from dataclasses import dataclass
from typing import Callable, Coroutine, Protocol

import config
from enums.audience import Audience
from enums.client_event_type import ToastLevel
from enums.order_status import OrderStatus
from enums.order_type import OrderType
from enums.session_state import SessionState
from enums.status_source import StatusSource
from exceptions.payment import PaymentGatewayException
from exceptions.session import InvalidSessionStateException, SubscriptionException
from models.order import OrderDTO
from models.session_event import ClientEvent
from services.notification import NotificationService
from services.order import OrderService
from services.order_listener import OrderListener
from services.payment_gateway import PaymentGatewayClient, get_payment_gateway
from utils.localizator import Localizator
from utils.session_state_machine import SessionStateMachine

logger = logging.getLogger(__name__)

# Admin notifications outlive the page that triggered them
_background_tasks: set[asyncio.Task] = set()


def _spawn_background(coro: Coroutine):
    task = asyncio.create_task(coro)
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)


class ClientEventSink(Protocol):
    async def send(self, event: ClientEvent) -> None: ...


@dataclass(frozen=True)
class SessionTimings:
    """All delays in seconds."""
    payment_timeout: float
    poll_initial_delay: float
    poll_interval: float
    countdown_tick: float
    success_redirect_delay: float
    not_found_redirect_delay: float
    cancel_redirect_delay: float
    resubscribe_delay: float

    @classmethod
    def from_config(cls) -> "SessionTimings":
        return cls(
            payment_timeout=config.PAYMENT_TIMEOUT_MINUTES * 60,
            poll_initial_delay=config.POLL_INITIAL_DELAY_MS / 1000,
            poll_interval=config.POLL_INTERVAL_MS / 1000,
            countdown_tick=config.COUNTDOWN_TICK_MS / 1000,
            success_redirect_delay=config.SUCCESS_REDIRECT_DELAY_MS / 1000,
            not_found_redirect_delay=config.NOT_FOUND_REDIRECT_DELAY_MS / 1000,
            cancel_redirect_delay=config.CANCEL_REDIRECT_DELAY_MS / 1000,
            resubscribe_delay=config.RESUBSCRIBE_DELAY_MS / 1000,
        )


@dataclass(frozen=True)
class OrderSnapshotObserved:
    order: OrderDTO | None   # None: document does not exist


@dataclass(frozen=True)
class GatewayStatusObserved:
    status: OrderStatus


@dataclass(frozen=True)
class CountdownTicked:
    remaining_seconds: int


@dataclass(frozen=True)
class SubscriptionFailed:
    error: SubscriptionException


@dataclass(frozen=True)
class CancelConfirmed:
    pass


class PaymentSession:
    def __init__(self, order_id: str, order_type: OrderType, sink: ClientEventSink, *,
                 listener: OrderListener | None = None,
                 gateway: PaymentGatewayClient | None = None,
                 timings: SessionTimings | None = None,
                 clock: Callable[[], float] = time.time,
                 lang: str | None = None):
        self.order_id = order_id
        self.order_type = order_type
        self.collection = order_type.collection
        self.sink = sink
        self.listener = listener or OrderListener()
        self.gateway = gateway or get_payment_gateway()
        self.timings = timings or SessionTimings.from_config()
        self.clock = clock
        self.lang = lang

        self.state = SessionState.PENDING
        self.order: OrderDTO | None = None
        self.remaining_seconds = int(self.timings.payment_timeout)
        self.countdown_started = False
        self.cancel_requested = False
        self.closed = False

        self._observations: asyncio.Queue = asyncio.Queue()
        self._tasks: dict[str, asyncio.Task] = {}
        self._navigations = 0

    @property
    def polling_active(self) -> bool:
        return self.state is SessionState.PENDING and not self.closed

    # ── Lifecycle ────────────────────────────────────────────────────

    async def start(self):
        logger.info(f"[PAYMENT] Monitoring started → {self.collection}/{self.order_id}")
        self._spawn("consumer", self._consume())
        self._spawn("listener", self._listen())
        self._spawn("poll", self._poll_loop())

    async def close(self):
        """
        Tear the session down: subscription, poll loop, countdown and any
        pending navigation. Safe to call more than once.
        """
        if self.closed:
            return
        self.closed = True
        logger.info(f"[PAYMENT] Cleaning up {self.collection}/{self.order_id}")
        tasks = list(self._tasks.values())
        self._tasks.clear()
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def cancel(self):
        """
        Buyer-initiated cancellation.

        Writes a failed status to the order document. The subscription picks
        the write up and the session fails through the ordinary failure path.
        The redirect home is scheduled only once that failure has latched.

        Raises:
            InvalidSessionStateException: the payment is already resolved
            OrderNotFoundException, OrderCancellationException: the write failed
        """
        if not self.polling_active:
            raise InvalidSessionStateException(self.order_id, self.state.value, SessionState.PENDING.value)
        await OrderService.cancel_order(self.order_type, self.order_id, listener=self.listener)
        self._publish(CancelConfirmed())

    def _spawn(self, name: str, coro: Coroutine):
        if self.closed:
            coro.close()
            return
        self._tasks[name] = asyncio.create_task(coro, name=f"payment-{name}-{self.order_id}")

    def _stop(self, *names: str):
        for name in names:
            task = self._tasks.get(name)
            if task is not None and task is not asyncio.current_task():
                task.cancel()

    def _publish(self, observation):
        if self.closed:
            return
        self._observations.put_nowait(observation)

    # ── Producers ────────────────────────────────────────────────────

    async def _listen(self):
        while not self.closed:
            try:
                async with aclosing(self.listener.subscribe(self.collection, self.order_id)) as snapshots:
                    async for order in snapshots:
                        self._publish(OrderSnapshotObserved(order))
                return
            except SubscriptionException as e:
                logger.error(f"[LISTENER] Snapshot error for {self.collection}/{self.order_id}: {e}")
                self._publish(SubscriptionFailed(e))
            await asyncio.sleep(self.timings.resubscribe_delay)

    async def _poll_loop(self):
        # The first check waits so the subscription can deliver fresh state
        delay = self.timings.poll_initial_delay
        while self.polling_active:
            await asyncio.sleep(delay)
            delay = self.timings.poll_interval
            if not self.polling_active:
                return

            try:
                response = await self.gateway.check_status(self.order_id, self.order_type)
            except PaymentGatewayException as e:
                logger.warning(f"[POLL] Failed: {e}")
                continue

            logger.info(f"[POLL] Response for {self.order_id}: {response.model_dump()}")
            if not self.polling_active:
                return
            status = response.order_status
            if status.is_terminal:
                self._publish(GatewayStatusObserved(status))
                return

    async def _countdown(self, anchor_ms: int):
        logger.info(f"[PAYMENT] Starting countdown for {self.order_id} from createdAt {anchor_ms}")
        while True:
            remaining = self.remaining_for(anchor_ms)
            self._publish(CountdownTicked(remaining))
            if remaining <= 0:
                return
            await asyncio.sleep(self.timings.countdown_tick)

    def remaining_for(self, anchor_ms: int) -> int:
        """Whole seconds left in the payment window that opened at anchor_ms."""
        elapsed_ms = self.clock() * 1000 - anchor_ms
        remaining_ms = max(0.0, self.timings.payment_timeout * 1000 - elapsed_ms)
        return int(remaining_ms // 1000)

    # ── Consumer ─────────────────────────────────────────────────────

    async def _consume(self):
        while True:
            observation = await self._observations.get()
            if self.closed:
                return
            try:
                await self._apply(observation)
            except Exception as e:
                logger.exception(f"[PAYMENT] Failed to apply {type(observation).__name__} for {self.order_id}: {e}")

    async def _apply(self, observation):
        if isinstance(observation, OrderSnapshotObserved):
            await self._on_snapshot(observation.order)
        elif isinstance(observation, GatewayStatusObserved):
            await self._on_gateway_status(observation.status)
        elif isinstance(observation, CountdownTicked):
            await self._on_tick(observation.remaining_seconds)
        elif isinstance(observation, SubscriptionFailed):
            await self._toast(ToastLevel.ERROR, "subscription_error")
        elif isinstance(observation, CancelConfirmed):
            await self._on_cancel_confirmed()

    async def _on_snapshot(self, order: OrderDTO | None):
        if self.closed:
            return
        if order is None:
            logger.warning(f"[PAYMENT] Document not found: {self.collection}/{self.order_id}")
            if await self._transition(SessionState.NOT_FOUND, StatusSource.LISTENER):
                await self._toast(ToastLevel.ERROR, "order_not_found")
                self._schedule_navigation("/", self.timings.not_found_redirect_delay)
            return

        self.order = order
        await self._emit(ClientEvent.order(order))
        logger.info(f"[LISTENER] Status → {order.order_status.value} "
                    f"(paymentReceived={order.payment_received}, createdAt={order.created_at})")

        # The deadline is anchored on the server timestamp so reconnects and
        # refreshes keep counting down from the same point
        if self.state is SessionState.PENDING and not self.countdown_started and order.created_at_ms is not None:
            self.countdown_started = True
            self._spawn("countdown", self._countdown(order.created_at_ms))

        if order.is_paid(self.order_type):
            await self._succeed(StatusSource.LISTENER)
        elif order.is_failed():
            await self._fail(StatusSource.LISTENER)

    async def _on_gateway_status(self, status: OrderStatus):
        if status.is_success:
            await self._succeed(StatusSource.POLL)
        elif status is OrderStatus.FAILED:
            await self._fail(StatusSource.POLL)

    async def _on_tick(self, remaining_seconds: int):
        if not self.polling_active:
            return
        self.remaining_seconds = remaining_seconds
        await self._emit(ClientEvent.countdown(remaining_seconds))
        if remaining_seconds <= 0 and await self._transition(SessionState.EXPIRED, StatusSource.COUNTDOWN):
            await self._toast(ToastLevel.ERROR, "payment_expired")

    async def _on_cancel_confirmed(self):
        if self.state not in (SessionState.PENDING, SessionState.FAILED):
            logger.info(f"[PAYMENT] Cancel write for {self.order_id} landed after {self.state.value}, ignoring")
            return
        self.cancel_requested = True
        await self._toast(ToastLevel.INFO, "payment_cancelled")
        # Failure already latched before the write came back
        if self.state is SessionState.FAILED:
            self._schedule_navigation("/", self.timings.cancel_redirect_delay)

    # ── Terminal handling ────────────────────────────────────────────

    async def _transition(self, target: SessionState, source: StatusSource) -> bool:
        if self.closed:
            return False
        new_state = SessionStateMachine.transition(self.order_id, self.state, target, source)
        if new_state is None:
            return False
        self.state = new_state
        self._stop("listener", "poll", "countdown")
        await self._emit(ClientEvent.state(new_state))
        return True

    async def _succeed(self, source: StatusSource):
        if not await self._transition(SessionState.SUCCEEDED, source):
            return
        logger.info(f"[PAYMENT] ✅ SUCCESS detected for {self.order_id} via {source.value}")
        await self._toast(ToastLevel.SUCCESS, self.order_type.success_message_key)
        self._schedule_navigation(self.order_type.destination, self.timings.success_redirect_delay)
        if self.order_type is OrderType.MANUAL:
            _spawn_background(self._notify_admins(self.order or OrderDTO(id=self.order_id)))

    async def _fail(self, source: StatusSource):
        if not await self._transition(SessionState.FAILED, source):
            return
        logger.info(f"[PAYMENT] ❌ FAILURE detected for {self.order_id} via {source.value}")
        await self._toast(ToastLevel.ERROR, "payment_failed")
        if self.cancel_requested:
            self._schedule_navigation("/", self.timings.cancel_redirect_delay)

    async def _notify_admins(self, order: OrderDTO):
        try:
            await NotificationService.manual_payment_received(order)
        except Exception as e:
            logger.error(f"[PAYMENT] Admin notification failed for {self.order_id}: {e}")

    # ── Side effects ─────────────────────────────────────────────────

    def _schedule_navigation(self, route: str, delay: float):
        async def navigate_later():
            await asyncio.sleep(delay)
            await self._emit(ClientEvent.navigate(route))

        self._navigations += 1
        self._spawn(f"navigation:{self._navigations}:{route}", navigate_later())

    async def _toast(self, level: ToastLevel, key: str):
        message = Localizator.get_text(Audience.USER, key, lang=self.lang)
        await self._emit(ClientEvent.toast(level, message))

    async def _emit(self, event: ClientEvent):
        if self.closed:
            return
        try:
            await self.sink.send(event)
        except Exception as e:
            logger.warning(f"[PAYMENT] Could not deliver {event.event.value} event for {self.order_id}: {e}")
