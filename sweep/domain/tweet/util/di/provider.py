from dishka import provide

from sweep.config import Config
from sweep.domain.shared.port.event_bus import EventBus
from sweep.domain.tweet.port.repository import TweetRepository
from sweep.domain.tweet.service.storage_path import StoragePathService
from sweep.domain.tweet.service.tweet import TweetService
from sweep.util.di.base import Provider
from sweep.util.di.scope import Scope


class TweetProvider(Provider):
    @provide(scope=Scope.APP)
    def get_storage_path_service(self, config: Config) -> StoragePathService:
        return StoragePathService(
            host=config.storage.public_host,
            namespace=tuple(config.storage.namespace),
        )

    @provide(scope=Scope.UOW)
    def get_tweet_service(
        self, tweet_repo: TweetRepository, event_bus: EventBus
    ) -> TweetService:
        return TweetService(tweet_repo=tweet_repo, event_bus=event_bus)
