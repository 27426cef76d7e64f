import logging
from uuid import uuid4

from sweep.domain.shared.event import EventId
from sweep.domain.shared.port.event_bus import EventBus
from sweep.domain.shared.service import Service
from sweep.domain.tweet.event.tweet_deleted import TweetDeleted
from sweep.domain.tweet.model.value import DeletedTweet, OwnerId, TweetId
from sweep.domain.tweet.port.repository import TweetRepository

logger = logging.getLogger(__name__)


class TweetService(Service):
    tweet_repo: TweetRepository
    event_bus: EventBus

    async def delete_tweet(self, tweet_id: TweetId, owner_id: OwnerId) -> DeletedTweet:
        """Delete a tweet, then announce it so its media gets cleaned up.

        The deletion is authoritative once the repository returns. Failing to
        schedule the media cleanup is logged and does not fail the call.
        """
        deleted = await self.tweet_repo.delete_and_collect_prefixes(tweet_id, owner_id)
        logger.info(
            "Tweet %s deleted by user %s (%d storage prefixes)",
            tweet_id,
            owner_id,
            len(deleted.storage_prefixes),
        )

        event = TweetDeleted(
            id=EventId(uuid4()),
            tweet_id=deleted.tweet_id,
            owner_id=deleted.owner_id,
            storage_prefixes=deleted.storage_prefixes,
        )
        try:
            await self.event_bus.publish(event)
        except Exception:
            # The row is already gone; orphaned objects are accepted here
            logger.exception(
                "Failed to publish TweetDeleted for tweet %s (owner %s, prefixes %s)",
                tweet_id,
                owner_id,
                sorted(deleted.storage_prefixes),
            )
        return deleted
