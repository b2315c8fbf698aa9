import asyncio
import contextlib
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from supabase import acreate_client

from constants import RESERVATION_CHANNEL
from schemas import ReservationChangeEvent
from services.notifications.reservations import ReservationStatusReactor

logger = logging.getLogger("order-relay")

ClientFactory = Callable[[str, str], Awaitable[Any]]


def _state_name(state: Any) -> str:
    return str(getattr(state, "value", state))


class ReservationStatusListener:
    """Bridges Supabase Realtime reservation updates to the status reactor.

    The realtime callback only enqueues payloads; a consumer task drains the
    queue so that one bad event cannot stop the subscription.
    """

    def __init__(
        self,
        reactor: ReservationStatusReactor,
        *,
        supabase_url: str,
        supabase_key: str,
        table: str = "reservations",
        schema: str = "public",
        client_factory: ClientFactory = acreate_client,
    ) -> None:
        self._reactor = reactor
        self._supabase_url = supabase_url
        self._supabase_key = supabase_key
        self._table = table
        self._schema = schema
        self._client_factory = client_factory
        self._queue: asyncio.Queue = asyncio.Queue()
        self._client: Any = None
        self._channel: Any = None
        self._task: Optional[asyncio.Task] = None
        self.subscription_state: Optional[str] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def queue(self) -> asyncio.Queue:
        return self._queue

    def enqueue(self, payload: Dict[str, Any]) -> None:
        self._queue.put_nowait(payload)

    def _on_subscribe(self, state: Any, error: Optional[Exception] = None) -> None:
        name = _state_name(state)
        self.subscription_state = name
        if name == "SUBSCRIBED":
            logger.info("Subscribed to reservation status changes")
        elif name == "CHANNEL_ERROR":
            logger.error("Error subscribing to reservation status changes: %s", error)
        else:
            logger.info("Reservation subscription status: %s", name)

    async def start(self) -> None:
        if self.is_running:
            return
        logger.info("Setting up realtime listener for %s.%s", self._schema, self._table)
        self._client = await self._client_factory(self._supabase_url, self._supabase_key)
        self._channel = self._client.channel(RESERVATION_CHANNEL)
        self._channel.on_postgres_changes(
            "UPDATE",
            schema=self._schema,
            table=self._table,
            callback=self.enqueue,
        )
        await self._channel.subscribe(self._on_subscribe)
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        if self._channel is not None:
            try:
                await self._channel.unsubscribe()
            except Exception as exc:  # pragma: no cover - transport teardown
                logger.warning("Failed to unsubscribe reservation channel: %s", exc)
            self._channel = None
        self._client = None

    async def _run(self) -> None:
        while True:
            payload = await self._queue.get()
            try:
                event = ReservationChangeEvent.from_payload(payload)
                logger.info("Reservation update detected: %s", event.id)
                await self._reactor.handle(event)
            except Exception as exc:
                logger.exception("Failed to process reservation payload: %s", exc)
            finally:
                self._queue.task_done()
