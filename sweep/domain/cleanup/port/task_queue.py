from abc import abstractmethod
from typing import Protocol

from sweep.domain.cleanup.model.value import DeletionTask


class TaskQueue(Protocol):
    """Durable, at-least-once queue that calls the worker back over HTTP.

    Retries, backoff and per-task timeouts belong to the queue.
    """

    @abstractmethod
    async def submit(self, task: DeletionTask) -> None:
        """Create the task on the queue. Raises on submission failure."""
        ...
