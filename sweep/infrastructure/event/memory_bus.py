import asyncio
import logging
from collections import defaultdict
from typing import Awaitable, Callable, TypeVar

from sweep.domain.shared.event import Event, EventHandler
from sweep.domain.shared.port.event_bus import EventBus

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Event)

EventHandlerFunc = Callable[[Event], Awaitable[None]]


class InMemoryEventBus(EventBus):
    """Process-local bus. Holds no durable state: events are delivered once, in memory."""

    def __init__(self) -> None:
        self._subscribers: dict[type[Event], list[EventHandlerFunc]] = defaultdict(list)

    def subscribe(self, event_type: type[E], handler: Callable[[E], Awaitable[None]]) -> None:
        self._subscribers[event_type].append(handler)  # type: ignore[arg-type]
        logger.debug(
            "Handler registered for %s (%d total)",
            event_type.__name__,
            len(self._subscribers[event_type]),
        )

    def register(self, handler: EventHandler) -> None:
        self.subscribe(handler.__event_type__, handler.handle)

    def handler_counts(self) -> dict[str, int]:
        return {t.__name__: len(hs) for t, hs in self._subscribers.items()}

    async def publish(self, event: Event) -> None:
        event_type = type(event)
        handlers = self._subscribers.get(event_type, [])

        if not handlers:
            logger.debug(f"No handlers for event {event_type.__name__}")
            return

        logger.info(f"Publishing event {event_type.__name__} to {len(handlers)} handlers")

        # concurrent execution; first handler error propagates to the caller
        await asyncio.gather(*[h(event) for h in handlers])
