import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from sweep.domain.shared.error import AuthorizationError, NotFoundError
from sweep.domain.tweet.model.value import DeletedTweet, OwnerId, StoragePrefix, TweetId
from sweep.domain.tweet.port.repository import TweetRepository
from sweep.domain.tweet.service.storage_path import StoragePathService
from sweep.infrastructure.persistence.tables import tweet_media_table, tweets_table

logger = logging.getLogger(__name__)


class PostgresTweetRepository(TweetRepository):
    """SQL implementation of TweetRepository."""

    def __init__(self, session: AsyncSession, paths: StoragePathService) -> None:
        self.session = session
        self._paths = paths

    async def delete_and_collect_prefixes(
        self, tweet_id: TweetId, owner_id: OwnerId
    ) -> DeletedTweet:
        try:
            prefixes = await self._delete(tweet_id, owner_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        return DeletedTweet(tweet_id=tweet_id, owner_id=owner_id, storage_prefixes=prefixes)

    async def _delete(self, tweet_id: TweetId, owner_id: OwnerId) -> frozenset[StoragePrefix]:
        stmt = select(tweets_table.c.owner_id).where(tweets_table.c.id == tweet_id)
        existing_owner = (await self.session.execute(stmt)).scalar_one_or_none()

        if existing_owner is None:
            raise NotFoundError(f"Tweet not found: {tweet_id}")
        if existing_owner != owner_id:
            raise AuthorizationError("You can only delete your own tweets")

        stmt = select(
            tweet_media_table.c.storage_prefix,
            tweet_media_table.c.media_url,
        ).where(tweet_media_table.c.tweet_id == tweet_id)
        rows = (await self.session.execute(stmt)).mappings().all()
        prefixes = self._collect_prefixes(tweet_id, rows)

        await self.session.execute(
            delete(tweet_media_table).where(tweet_media_table.c.tweet_id == tweet_id)
        )
        result = await self.session.execute(
            delete(tweets_table).where(
                tweets_table.c.id == tweet_id,
                tweets_table.c.owner_id == owner_id,
            )
        )
        if result.rowcount == 0:
            # Deleted concurrently between the ownership check and here
            raise NotFoundError(f"Tweet not found: {tweet_id}")

        return prefixes

    def _collect_prefixes(self, tweet_id: TweetId, rows) -> frozenset[StoragePrefix]:
        prefixes: set[StoragePrefix] = set()
        for row in rows:
            # Stored prefix wins; older rows only have the URL
            prefix = row["storage_prefix"] or self._paths.derive_prefix(row["media_url"])
            if prefix is None:
                continue
            if not self._paths.is_valid_prefix(prefix):
                logger.warning("Dropping invalid storage prefix %r of tweet %s", prefix, tweet_id)
                continue
            prefixes.add(StoragePrefix(prefix))
        return frozenset(prefixes)
