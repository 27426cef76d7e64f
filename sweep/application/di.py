from dishka import AsyncContainer, from_context, make_async_container

from sweep.config import Config
from sweep.domain.auth.util.di import AuthProvider
from sweep.domain.cleanup.util.di import CleanupProvider
from sweep.domain.tweet.util.di import TweetProvider
from sweep.infrastructure.auth import AuthInfraProvider
from sweep.infrastructure.event.di import EventProvider
from sweep.infrastructure.persistence import PersistenceProvider
from sweep.infrastructure.storage import StorageProvider
from sweep.infrastructure.tasks import TasksProvider
from sweep.util.di.base import Provider
from sweep.util.di.scope import Scope


class ConfigProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        ConfigProvider(),
        PersistenceProvider(),
        StorageProvider(),
        TasksProvider(),
        EventProvider(),
        TweetProvider(),
        CleanupProvider(),
        AuthProvider(),
        AuthInfraProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
