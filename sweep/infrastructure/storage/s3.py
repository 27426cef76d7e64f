"""S3-compatible object storage adapter (GCS interoperability endpoint, MinIO, AWS)."""

import asyncio
import logging

from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError

from sweep.domain.cleanup.port.object_storage import ObjectStorage
from sweep.domain.shared.error import ObjectNotFoundError, StorageUnavailableError

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = frozenset({"NoSuchKey", "NotFound", "404"})


def _is_not_found(error: ClientError) -> bool:
    code = error.response.get("Error", {}).get("Code", "")
    status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    return code in _NOT_FOUND_CODES or status == 404


class S3ObjectStorage(ObjectStorage):
    """ObjectStorage backed by a boto3 S3 client.

    boto3 is synchronous; calls run in worker threads.
    """

    def __init__(self, client: BaseClient, bucket: str) -> None:
        self._client = client
        self.bucket = bucket

    async def list_keys(self, prefix: str) -> list[str]:
        return await asyncio.to_thread(self._list_keys, prefix)

    def _list_keys(self, prefix: str) -> list[str]:
        keys: list[str] = []
        try:
            paginator = self._client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
                keys.extend(obj["Key"] for obj in page.get("Contents", []) or [])
        except (ClientError, BotoCoreError) as e:
            raise StorageUnavailableError(
                f"Failed to list objects under {prefix} in {self.bucket}: {e}"
            ) from e
        return keys

    async def delete(self, key: str) -> None:
        try:
            await asyncio.to_thread(self._client.delete_object, Bucket=self.bucket, Key=key)
        except ClientError as e:
            if _is_not_found(e):
                raise ObjectNotFoundError(key) from e
            raise StorageUnavailableError(f"Failed to delete {key}: {e}") from e
        except BotoCoreError as e:
            raise StorageUnavailableError(f"Failed to delete {key}: {e}") from e
