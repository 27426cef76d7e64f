"""Unit tests for domain event infrastructure.

Tests for event handler metaclass behavior.
"""

from sweep.domain.shared.event import Event, EventHandler, EventId
from sweep.domain.shared.service import Service


class DummyEvent(Event):
    """Test event for verifying metaclass behavior."""

    id: EventId
    data: str


class TestEventHandlerMetaclass:
    """Tests for EventHandler metaclass __event_type__ extraction."""

    def test_event_handler_has_event_type_set(self):
        """EventHandler subclasses should have __event_type__ extracted from generic param."""

        class MyHandler(EventHandler[DummyEvent]):
            async def handle(self, event: DummyEvent) -> None:
                pass

        assert MyHandler.__event_type__ is DummyEvent

    def test_event_handler_is_dataclass(self):
        """EventHandler subclasses should be automatically converted to dataclasses."""

        class HandlerWithDeps(EventHandler[DummyEvent]):
            some_dep: str

            async def handle(self, event: DummyEvent) -> None:
                pass

        handler = HandlerWithDeps(some_dep="test")
        assert handler.some_dep == "test"

    def test_event_type_inherited_by_subclass(self):
        class BaseHandler(EventHandler[DummyEvent]):
            async def handle(self, event: DummyEvent) -> None:
                pass

        class ChildHandler(BaseHandler):
            pass

        assert ChildHandler.__event_type__ is DummyEvent


class TestServiceMetaclass:
    def test_service_subclass_is_dataclass(self):
        class Greeter(Service):
            name: str
            punctuation: str = "!"

        greeter = Greeter(name="sweep")

        assert greeter.name == "sweep"
        assert greeter.punctuation == "!"
        assert greeter == Greeter(name="sweep")
