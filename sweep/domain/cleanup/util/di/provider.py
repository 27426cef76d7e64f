from dishka import provide

from sweep.config import Config
from sweep.domain.cleanup.handler.enqueue_storage_cleanup import EnqueueStorageCleanup
from sweep.domain.cleanup.port.object_storage import ObjectStorage
from sweep.domain.cleanup.port.task_queue import TaskQueue
from sweep.domain.cleanup.service.publisher import CleanupTaskPublisher
from sweep.domain.cleanup.service.sweeper import PrefixSweeper
from sweep.util.di.base import Provider
from sweep.util.di.scope import Scope


class CleanupProvider(Provider):
    """Cleanup services are stateless and shared for the application lifetime."""

    @provide(scope=Scope.APP)
    def get_publisher(self, queue: TaskQueue, config: Config) -> CleanupTaskPublisher:
        return CleanupTaskPublisher(queue=queue, _config=config.tasks)

    @provide(scope=Scope.APP)
    def get_sweeper(self, storage: ObjectStorage) -> PrefixSweeper:
        return PrefixSweeper(storage=storage)

    @provide(scope=Scope.APP)
    def get_enqueue_storage_cleanup(
        self, publisher: CleanupTaskPublisher
    ) -> EnqueueStorageCleanup:
        return EnqueueStorageCleanup(publisher=publisher)
