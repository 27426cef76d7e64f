from abc import abstractmethod
from typing import Awaitable, Callable, Protocol, TypeVar

from sweep.domain.shared.event import Event, EventHandler

E = TypeVar("E", bound=Event)


class EventBus(Protocol):
    """In-process publish/subscribe registry.

    ``publish`` resolves once every handler subscribed to the event's class has
    completed. A failing handler fails ``publish``; nothing is retried.
    """

    @abstractmethod
    def subscribe(self, event_type: type[E], handler: Callable[[E], Awaitable[None]]) -> None:
        ...

    @abstractmethod
    def register(self, handler: EventHandler) -> None:
        ...

    @abstractmethod
    async def publish(self, event: Event) -> None:
        ...
