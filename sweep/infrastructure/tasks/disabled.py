import logging

from sweep.domain.cleanup.model.value import DeletionTask
from sweep.domain.cleanup.port.task_queue import TaskQueue

logger = logging.getLogger(__name__)


class DisabledTaskQueue(TaskQueue):
    """Stand-in used when the queue is not configured. Drops every task."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing

    async def submit(self, task: DeletionTask) -> None:
        logger.warning(
            "Task queue disabled (missing %s); skipping deletion of %s",
            ", ".join(self.missing),
            task.prefix,
        )
