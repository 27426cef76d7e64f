"""DI provider for the cleanup task queue."""

import logging
from typing import AsyncIterable

from dishka import provide
from google.cloud import tasks_v2

from sweep.config import Config
from sweep.domain.cleanup.port.task_queue import TaskQueue
from sweep.infrastructure.tasks.cloud_tasks import CloudTasksQueue
from sweep.infrastructure.tasks.disabled import DisabledTaskQueue
from sweep.util.di.base import Provider
from sweep.util.di.scope import Scope

logger = logging.getLogger(__name__)


class TasksProvider(Provider):
    @provide(scope=Scope.APP)
    async def get_task_queue(self, config: Config) -> AsyncIterable[TaskQueue]:
        tasks = config.tasks
        if not tasks.enabled:
            logger.warning(
                "Storage cleanup publisher disabled - missing settings: %s",
                ", ".join(tasks.missing),
            )
            yield DisabledTaskQueue(missing=tasks.missing)
            return

        logger.info(
            "Cloud Tasks queue configured: project=%s location=%s queue=%s handler=%s",
            tasks.project,
            tasks.location,
            tasks.queue,
            tasks.handler_url,
        )
        client = tasks_v2.CloudTasksAsyncClient()
        yield CloudTasksQueue(
            client=client,
            project=tasks.project,
            location=tasks.location,
            queue=tasks.queue,
        )
        await client.transport.close()
