"""Worker callbacks invoked by the task queue.

Mounted outside ``/api/v1``: the queue is configured with the absolute
handler URL, so these paths are part of the deployment contract.
"""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request, Response
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from sweep.config import Config
from sweep.domain.auth.util.di import bearer_token
from sweep.domain.cleanup.model.value import DeletePrefixPayload
from sweep.domain.cleanup.port.caller_verifier import TaskCallerVerifier
from sweep.domain.cleanup.service.sweeper import PrefixSweeper
from sweep.domain.shared.error import ValidationError
from sweep.domain.tweet.model.value import StoragePrefix

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/internal/tasks", tags=["Internal Tasks"], route_class=DishkaRoute)


class TasksHealthResponse(BaseModel):
    status: str
    bucket: str


@router.post("/gcs-delete-prefix", status_code=204)
async def delete_prefix(
    request: Request,
    verifier: FromDishka[TaskCallerVerifier],
    sweeper: FromDishka[PrefixSweeper],
) -> Response:
    """Delete every object under the prefix named in the body.

    Responds 204 even when nothing was found, so redelivered tasks settle.
    """
    # Authenticate before reading the body
    caller = await verifier.verify(bearer_token(request))

    body = await request.body()
    try:
        payload = DeletePrefixPayload.model_validate_json(body)
    except PydanticValidationError as e:
        logger.warning("Rejected delete-prefix task from %s: %s", caller.email, e)
        raise ValidationError(
            "Body must be JSON with a non-empty string 'prefix'", field="prefix"
        ) from e

    result = await sweeper.sweep(StoragePrefix(payload.prefix))
    if not result.complete:
        logger.warning(
            "Prefix %s left %d objects behind; acknowledging task",
            result.prefix,
            len(result.failed),
        )
    return Response(status_code=204)


@router.get("/health")
async def tasks_health(config: FromDishka[Config]) -> TasksHealthResponse:
    return TasksHealthResponse(status="ok", bucket=config.storage.bucket)
