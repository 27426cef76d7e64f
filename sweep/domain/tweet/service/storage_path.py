"""Knowledge of how media URLs map onto the storage key space."""

import logging
from urllib.parse import urlsplit

from sweep.domain.shared.service import Service
from sweep.domain.tweet.model.value import StoragePrefix

logger = logging.getLogger(__name__)


class StoragePathService(Service):
    """Derives and validates storage prefixes.

    Media URLs look like ``https://{host}/{bucket}/{prefix...}/{filename}``.
    The prefix is everything between the bucket and the filename.
    """

    host: str
    namespace: tuple[str, ...] = ("v1", "public")
    min_segments: int = 4

    def derive_prefix(self, media_url: str) -> StoragePrefix | None:
        """Return the storage prefix of a media URL, or None if it has none.

        Example:
            https://storage.googleapis.com/bucket/v1/public/users/u1/posts/2025/09/p/a/original.jpeg
            -> v1/public/users/u1/posts/2025/09/p/a
        """
        if not media_url:
            return None
        try:
            parts = urlsplit(media_url)
            hostname = parts.hostname
        except ValueError:
            logger.warning("Failed to derive storage prefix from media URL: %s", media_url)
            return None

        if hostname != self.host.lower():
            return None

        segments = [s for s in parts.path.split("/") if s]
        if len(segments) < 3:
            return None

        # Drop bucket (first) and filename (last)
        return StoragePrefix("/".join(segments[1:-1]))

    def is_valid_prefix(self, prefix: str | None) -> bool:
        """Check the prefix has the expected shape and namespace."""
        if not prefix or not isinstance(prefix, str):
            return False
        segments = prefix.split("/")
        if len(segments) < self.min_segments or not all(segments):
            return False
        return tuple(segments[: len(self.namespace)]) == self.namespace
