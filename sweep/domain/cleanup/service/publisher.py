"""Schedules storage cleanup on the task queue."""

import asyncio
import logging
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

import logfire

from sweep.config import TasksConfig
from sweep.domain.cleanup.model.value import DeletionTask
from sweep.domain.cleanup.port.task_queue import TaskQueue
from sweep.domain.shared.service import Service
from sweep.domain.tweet.model.value import StoragePrefix

logger = logging.getLogger(__name__)


class CleanupTaskPublisher(Service):
    """Creates one deletion task per storage prefix.

    One task per prefix (rather than per tweet) lets the queue retry each
    prefix on its own without repeating prefixes that already succeeded.
    """

    queue: TaskQueue
    _config: TasksConfig

    async def enqueue(self, prefixes: Iterable[str]) -> None:
        """Submit a deletion task for every distinct, non-empty prefix.

        All submissions run concurrently and are awaited. If any fails, the
        first error is raised once the others have settled; tasks that were
        already created stay on the queue.
        """
        unique = [StoragePrefix(p) for p in dict.fromkeys(prefixes) if p]
        if not unique:
            logger.info("No prefixes to delete")
            return

        with logfire.span("EnqueueDeletePrefixes", count=len(unique)):
            logger.info(
                "Enqueueing %d prefix deletion tasks on %s/%s",
                len(unique),
                self._config.location,
                self._config.queue,
            )
            schedule_time = datetime.now(UTC) + timedelta(
                seconds=self._config.schedule_delay_seconds
            )
            tasks = [self._build_task(prefix, schedule_time) for prefix in unique]

            results = await asyncio.gather(
                *(self._submit(task) for task in tasks),
                return_exceptions=True,
            )

            errors = [r for r in results if isinstance(r, BaseException)]
            if errors:
                logger.error(
                    "%d of %d prefix deletion tasks could not be enqueued",
                    len(errors),
                    len(tasks),
                )
                raise errors[0]

            logger.info("All %d prefix deletion tasks enqueued", len(tasks))

    def _build_task(self, prefix: StoragePrefix, schedule_time: datetime) -> DeletionTask:
        return DeletionTask(
            prefix=prefix,
            url=self._config.handler_url,
            service_account_email=self._config.service_account_email,
            audience=self._config.token_audience,
            schedule_time=schedule_time,
        )

    async def _submit(self, task: DeletionTask) -> None:
        try:
            await self.queue.submit(task)
        except Exception:
            logger.exception("Failed to create deletion task for prefix %s", task.prefix)
            raise
        logger.debug("Deletion task created for prefix %s", task.prefix)
