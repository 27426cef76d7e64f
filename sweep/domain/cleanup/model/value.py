from datetime import datetime

from pydantic import Field, StrictStr

from sweep.domain.shared.model.value import ValueObject
from sweep.domain.tweet.model.value import StoragePrefix


class DeletePrefixPayload(ValueObject):
    """JSON body exchanged between the task queue and the worker endpoint."""

    prefix: StrictStr = Field(min_length=1)


class DeletionTask(ValueObject):
    """One queued request to delete every object under a single prefix."""

    prefix: StoragePrefix
    url: str  # Worker callback the queue will POST to
    service_account_email: str  # Identity the queue authenticates as
    audience: str
    schedule_time: datetime

    @property
    def body(self) -> bytes:
        return DeletePrefixPayload(prefix=self.prefix).model_dump_json().encode()


class SweepResult(ValueObject):
    """Outcome of deleting the objects under one prefix."""

    prefix: StoragePrefix
    found: int = 0
    deleted: int = 0
    already_gone: int = 0
    failed: tuple[str, ...] = ()

    @property
    def complete(self) -> bool:
        return not self.failed
