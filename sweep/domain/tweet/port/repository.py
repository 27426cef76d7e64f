from abc import abstractmethod
from typing import Protocol

from sweep.domain.tweet.model.value import DeletedTweet, OwnerId, TweetId


class TweetRepository(Protocol):
    @abstractmethod
    async def delete_and_collect_prefixes(
        self, tweet_id: TweetId, owner_id: OwnerId
    ) -> DeletedTweet:
        """Delete a tweet with its media rows and return their storage prefixes.

        The prefixes reflect the media rows as they were before deletion. Reading
        them and deleting the rows happen in one transaction, committed before
        this method returns.

        Raises:
            NotFoundError: The tweet does not exist.
            AuthorizationError: The tweet belongs to another user.
        """
        ...
