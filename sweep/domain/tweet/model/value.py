from typing import NewType

from sweep.domain.shared.model.value import ValueObject

TweetId = NewType("TweetId", int)
OwnerId = NewType("OwnerId", str)

# Hierarchical object-storage key space holding one media asset,
# e.g. v1/public/users/{user}/posts/{yyyy}/{mm}/{postUuid}/{assetUuid}
StoragePrefix = NewType("StoragePrefix", str)


class DeletedTweet(ValueObject):
    """What remains of a tweet once its rows are gone: the media to clean up."""

    tweet_id: TweetId
    owner_id: OwnerId
    storage_prefixes: frozenset[StoragePrefix] = frozenset()
