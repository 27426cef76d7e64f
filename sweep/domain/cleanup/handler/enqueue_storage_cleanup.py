"""EnqueueStorageCleanup - schedules media deletion when a tweet is deleted."""

import logging

from sweep.domain.cleanup.service.publisher import CleanupTaskPublisher
from sweep.domain.shared.event import EventHandler
from sweep.domain.tweet.event.tweet_deleted import TweetDeleted

logger = logging.getLogger(__name__)


class EnqueueStorageCleanup(EventHandler[TweetDeleted]):
    """Turns a TweetDeleted event into deletion tasks for its storage prefixes."""

    publisher: CleanupTaskPublisher

    async def handle(self, event: TweetDeleted) -> None:
        if not event.has_prefixes():
            logger.info("No storage prefixes to clean up: %s", event.summary())
            return

        try:
            await self.publisher.enqueue(event.storage_prefixes)
        except Exception:
            logger.exception(
                "Failed to schedule storage cleanup for tweet %s (owner %s, prefixes %s)",
                event.tweet_id,
                event.owner_id,
                sorted(event.storage_prefixes),
            )
            raise

        logger.info(
            "Storage cleanup scheduled for tweet %s: %d prefixes",
            event.tweet_id,
            len(event.storage_prefixes),
        )
