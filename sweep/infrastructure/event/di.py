"""Dependency injection provider for the event system."""

import logging

from dishka import provide

from sweep.domain.cleanup.handler.enqueue_storage_cleanup import EnqueueStorageCleanup
from sweep.domain.shared.port.event_bus import EventBus
from sweep.infrastructure.event.memory_bus import InMemoryEventBus
from sweep.util.di.base import Provider
from sweep.util.di.scope import Scope

logger = logging.getLogger(__name__)


class EventProvider(Provider):
    @provide(scope=Scope.APP)
    def get_event_bus(self, enqueue_storage_cleanup: EnqueueStorageCleanup) -> EventBus:
        """Build the bus with every event handler subscribed."""
        bus = InMemoryEventBus()
        bus.register(enqueue_storage_cleanup)
        logger.info("Event bus ready: %s", bus.handler_counts())
        return bus
