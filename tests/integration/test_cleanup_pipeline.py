"""End-to-end test: deleting a tweet empties the storage prefixes of its media.

Runs the real application graph on in-memory SQLite. Only the cloud edges
(task queue, object storage, OIDC verification) are replaced by fakes; the
queued tasks are delivered to the worker endpoint by hand.
"""

from datetime import UTC, datetime

import httpx
import pytest
from dishka import from_context, make_async_container
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncEngine

from sweep.application.api.rest.app import create_app
from sweep.application.di import ConfigProvider
from sweep.config import Config, DatabaseConfig
from sweep.domain.auth.service.token import TokenService
from sweep.domain.auth.util.di import AuthProvider
from sweep.domain.cleanup.model.value import DeletionTask
from sweep.domain.cleanup.port.caller_verifier import TaskCaller, TaskCallerVerifier
from sweep.domain.cleanup.port.object_storage import ObjectStorage
from sweep.domain.cleanup.port.task_queue import TaskQueue
from sweep.domain.cleanup.util.di import CleanupProvider
from sweep.domain.shared.port.event_bus import EventBus
from sweep.domain.tweet.event.tweet_deleted import TweetDeleted
from sweep.domain.tweet.model.value import OwnerId
from sweep.domain.tweet.util.di import TweetProvider
from sweep.infrastructure.event.di import EventProvider
from sweep.infrastructure.persistence import PersistenceProvider
from sweep.infrastructure.persistence.database import init_schema
from sweep.infrastructure.persistence.tables import tweet_media_table, tweets_table
from sweep.util.di.base import Provider
from sweep.util.di.scope import Scope

P1 = "v1/public/users/u1/posts/2025/09/p/a"
P2 = "v1/public/users/u1/posts/2025/09/p/b"
MEDIA_HOST = "https://storage.googleapis.com/media"


class RecordingQueue:
    def __init__(self) -> None:
        self.tasks: list[DeletionTask] = []

    async def submit(self, task: DeletionTask) -> None:
        self.tasks.append(task)


class InMemoryStorage:
    def __init__(self, keys: list[str]) -> None:
        self.keys = set(keys)

    async def list_keys(self, prefix: str) -> list[str]:
        return sorted(k for k in self.keys if k.startswith(prefix))

    async def delete(self, key: str) -> None:
        self.keys.discard(key)


class TrustingVerifier:
    async def verify(self, token: str | None) -> TaskCaller:
        return TaskCaller(email="tasks@proj.iam.gserviceaccount.com", subject="1")


class CloudEdgeProvider(Provider):
    queue = from_context(provides=TaskQueue, scope=Scope.APP)
    storage = from_context(provides=ObjectStorage, scope=Scope.APP)
    verifier = from_context(provides=TaskCallerVerifier, scope=Scope.APP)


@pytest.mark.asyncio
async def test_deleted_tweet_media_is_swept():
    # Arrange
    config = Config(database=DatabaseConfig(url="sqlite+aiosqlite:///:memory:"))
    queue = RecordingQueue()
    storage = InMemoryStorage(
        [
            f"{P1}/original.jpeg",
            f"{P1}/thumb.jpeg",
            f"{P2}/original.mp4",
            "v1/public/users/u2/posts/2025/09/q/c/original.jpeg",
        ]
    )
    container = make_async_container(
        ConfigProvider(),
        PersistenceProvider(),
        TweetProvider(),
        CleanupProvider(),
        EventProvider(),
        AuthProvider(),
        CloudEdgeProvider(),
        context={
            Config: config,
            TaskQueue: queue,
            ObjectStorage: storage,
            TaskCallerVerifier: TrustingVerifier(),
        },
        scopes=Scope,  # type: ignore[arg-type]
    )
    engine = await container.get(AsyncEngine)
    await init_schema(engine)
    async with engine.begin() as conn:
        await conn.execute(
            insert(tweets_table).values(
                id=1, owner_id="u1", content="send", created_at=datetime.now(UTC)
            )
        )
        await conn.execute(
            insert(tweet_media_table),
            [
                {"tweet_id": 1, "media_url": f"{MEDIA_HOST}/{P1}/original.jpeg"},
                {"tweet_id": 1, "media_url": f"{MEDIA_HOST}/{P2}/original.mp4"},
            ],
        )

    published: list[TweetDeleted] = []

    async def record(event: TweetDeleted) -> None:
        published.append(event)

    (await container.get(EventBus)).subscribe(TweetDeleted, record)

    token = (await container.get(TokenService)).create_access_token(OwnerId("u1"))
    app = create_app(config=config, container=container)
    transport = httpx.ASGITransport(app=app)

    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        # Act: the user deletes the tweet
        response = await client.delete(
            "/api/v1/tweets/1", headers={"Authorization": f"Bearer {token}"}
        )

        # Assert: one event carrying both prefixes, one task per prefix, nothing deleted yet
        assert response.status_code == 204
        assert len(published) == 1
        assert published[0].tweet_id == 1
        assert published[0].storage_prefixes == {P1, P2}
        assert sorted(t.prefix for t in queue.tasks) == [P1, P2]
        assert len(storage.keys) == 4

        # Act: the queue delivers each task to the worker
        for task in queue.tasks:
            delivered = await client.post(
                "/internal/tasks/gcs-delete-prefix",
                content=task.body,
                headers={
                    "Authorization": "Bearer queue-token",
                    "Content-Type": "application/json",
                },
            )
            assert delivered.status_code == 204

    # Assert: both prefixes are empty, other users' media is untouched
    assert await storage.list_keys(P1) == []
    assert await storage.list_keys(P2) == []
    assert storage.keys == {"v1/public/users/u2/posts/2025/09/q/c/original.jpeg"}

    await container.close()
