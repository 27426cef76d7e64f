"""Domain events and event handlers."""

from abc import abstractmethod
from datetime import UTC, datetime
from typing import (
    Any,
    ClassVar,
    Generic,
    NewType,
    TypeVar,
    dataclass_transform,
    get_args,
    get_origin,
)
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from sweep.domain.shared.service import DataclassMeta

EventId = NewType("EventId", UUID)

E = TypeVar("E", bound="Event")


def _utc_now() -> datetime:
    return datetime.now(UTC)


class Event(BaseModel):
    """Base class for domain events.

    Events are immutable records of something that already happened. Each
    concrete subclass carries a constant ``event_type`` tag; dispatch is keyed
    by the subclass itself.
    """

    model_config = ConfigDict(frozen=True)

    id: EventId
    occurred_at: datetime = Field(default_factory=_utc_now)


# --- EventHandler ---


def _extract_event_type(cls: type) -> type[Event] | None:
    """Extract the event type E from EventHandler[E] in class bases."""
    for base in getattr(cls, "__orig_bases__", []):
        origin = get_origin(base)
        origin_name = getattr(origin, "__name__", None)
        if origin is not None and origin_name == "EventHandler":
            args = get_args(base)
            if args and isinstance(args[0], type) and issubclass(args[0], Event):
                return args[0]
    return None


@dataclass_transform()
class _EventHandlerMeta(DataclassMeta):
    """Metaclass that applies @dataclass and extracts __event_type__ from EventHandler[E]."""

    def __new__(mcs, name: str, bases: tuple[type, ...], namespace: dict[str, Any]) -> type:
        cls = super().__new__(mcs, name, bases, namespace)
        if any(isinstance(b, mcs) for b in bases):
            event_type = _extract_event_type(cls)
            if event_type is not None:
                cls.__event_type__ = event_type
        return cls


class EventHandler(Generic[E], metaclass=_EventHandlerMeta):
    """Base class for in-process event handlers.

    Subclasses are automatically dataclasses with DI-injected dependencies.
    The __event_type__ is extracted from the generic parameter, so a handler
    instance can be registered on the bus without repeating its event type.

    Example:
        class EnqueueStorageCleanup(EventHandler[TweetDeleted]):
            publisher: CleanupTaskPublisher

            async def handle(self, event: TweetDeleted) -> None:
                await self.publisher.enqueue(event.storage_prefixes)
    """

    __event_type__: ClassVar[type[Event]]

    @abstractmethod
    async def handle(self, event: E) -> None: ...
