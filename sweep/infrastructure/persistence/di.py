from typing import AsyncIterable

from dishka import provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from sweep.config import Config
from sweep.domain.tweet.port.repository import TweetRepository
from sweep.domain.tweet.service.storage_path import StoragePathService
from sweep.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from sweep.infrastructure.persistence.repository.tweet import PostgresTweetRepository
from sweep.util.di.base import Provider
from sweep.util.di.scope import Scope


class PersistenceProvider(Provider):
    # APP-scoped factories
    @provide(scope=Scope.APP)
    async def get_engine(self, config: Config) -> AsyncIterable[AsyncEngine]:
        engine = create_db_engine(config.database)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    # UOW-scoped session (one per unit of work)
    @provide(scope=Scope.UOW)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterable[AsyncSession]:
        async with session_factory() as session:
            yield session

    # UOW-scoped repositories
    @provide(scope=Scope.UOW)
    def get_tweet_repo(
        self, session: AsyncSession, paths: StoragePathService
    ) -> TweetRepository:
        return PostgresTweetRepository(session, paths)
