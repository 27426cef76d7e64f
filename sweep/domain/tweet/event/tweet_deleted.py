from typing import Literal

from sweep.domain.shared.event import Event
from sweep.domain.tweet.model.value import OwnerId, StoragePrefix, TweetId


class TweetDeleted(Event):
    """Emitted after a tweet row has been deleted.

    Carries the storage prefixes of the tweet's media so their objects can be
    removed in the background. Never persisted.
    """

    event_type: Literal["TweetDeleted"] = "TweetDeleted"
    tweet_id: TweetId
    owner_id: OwnerId
    storage_prefixes: frozenset[StoragePrefix] = frozenset()

    def has_prefixes(self) -> bool:
        return len(self.storage_prefixes) > 0

    def summary(self) -> str:
        """One-line description for log output."""
        return (
            f"Tweet {self.tweet_id} deleted by user {self.owner_id} "
            f"with {len(self.storage_prefixes)} storage prefixes"
        )
