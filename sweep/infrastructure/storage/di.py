"""DI provider for object storage."""

from typing import Iterable

import boto3
from botocore.client import BaseClient
from botocore.config import Config as BotoConfig
from dishka import provide

from sweep.config import Config
from sweep.domain.cleanup.port.object_storage import ObjectStorage
from sweep.infrastructure.storage.s3 import S3ObjectStorage
from sweep.util.di.base import Provider
from sweep.util.di.scope import Scope


class StorageProvider(Provider):
    @provide(scope=Scope.APP)
    def get_s3_client(self, config: Config) -> Iterable[BaseClient]:
        storage = config.storage
        client = boto3.client(
            "s3",
            endpoint_url=storage.endpoint_url or None,
            aws_access_key_id=storage.access_key_id or None,
            aws_secret_access_key=storage.secret_access_key or None,
            region_name=storage.region,
            config=BotoConfig(signature_version="s3v4", s3={"addressing_style": "path"}),
        )
        yield client
        client.close()

    @provide(scope=Scope.APP)
    def get_object_storage(self, client: BaseClient, config: Config) -> ObjectStorage:
        return S3ObjectStorage(client=client, bucket=config.storage.bucket)
