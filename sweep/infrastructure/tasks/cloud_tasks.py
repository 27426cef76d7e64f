"""Cloud Tasks adapter for the TaskQueue port."""

import logging

from google.api_core.exceptions import GoogleAPICallError
from google.cloud import tasks_v2
from google.protobuf import timestamp_pb2

from sweep.domain.cleanup.model.value import DeletionTask
from sweep.domain.cleanup.port.task_queue import TaskQueue
from sweep.domain.shared.error import ExternalServiceError

logger = logging.getLogger(__name__)


class CloudTasksQueue(TaskQueue):
    """Creates HTTP tasks that POST the prefix payload to the worker.

    Each task carries an OIDC token for the configured service account, so the
    worker only ever accepts calls made by the queue.
    """

    def __init__(
        self,
        client: tasks_v2.CloudTasksAsyncClient,
        project: str,
        location: str,
        queue: str,
    ) -> None:
        self._client = client
        self.parent = client.queue_path(project, location, queue)

    async def submit(self, task: DeletionTask) -> None:
        schedule_time = timestamp_pb2.Timestamp()
        schedule_time.FromDatetime(task.schedule_time)

        request = tasks_v2.Task(
            http_request=tasks_v2.HttpRequest(
                http_method=tasks_v2.HttpMethod.POST,
                url=task.url,
                headers={"Content-Type": "application/json"},
                body=task.body,
                oidc_token=tasks_v2.OidcToken(
                    service_account_email=task.service_account_email,
                    audience=task.audience,
                ),
            ),
            schedule_time=schedule_time,
        )

        try:
            created = await self._client.create_task(parent=self.parent, task=request)
        except GoogleAPICallError as e:
            raise ExternalServiceError(
                f"Failed to create deletion task for {task.prefix}: {e}"
            ) from e

        logger.debug("Created task %s for prefix %s", created.name, task.prefix)
