import asyncio
import logging
from enum import Enum

import logfire

from sweep.domain.cleanup.model.value import SweepResult
from sweep.domain.cleanup.port.object_storage import ObjectStorage
from sweep.domain.shared.error import ObjectNotFoundError
from sweep.domain.shared.service import Service
from sweep.domain.tweet.model.value import StoragePrefix

logger = logging.getLogger(__name__)

# Number of keys included in log lines
_LOGGED_KEYS = 5


class _Outcome(Enum):
    DELETED = "deleted"
    ALREADY_GONE = "already_gone"
    FAILED = "failed"


class PrefixSweeper(Service):
    """Deletes every object under a prefix.

    Safe to run repeatedly and concurrently for the same prefix: an object
    that is already gone counts as deleted. One object failing does not stop
    the others.
    """

    storage: ObjectStorage

    async def sweep(self, prefix: StoragePrefix) -> SweepResult:
        with logfire.span("SweepPrefix", prefix=prefix):
            # Listing errors propagate so the queue retries the task
            keys = await self.storage.list_keys(prefix)

            if not keys:
                logger.info("No objects found for prefix %s", prefix)
                return SweepResult(prefix=prefix)

            logger.info(
                "Deleting %d objects under %s (first: %s)",
                len(keys),
                prefix,
                keys[:_LOGGED_KEYS],
            )

            outcomes = await asyncio.gather(*(self._delete(key) for key in keys))

            failed = tuple(k for k, o in zip(keys, outcomes) if o is _Outcome.FAILED)
            result = SweepResult(
                prefix=prefix,
                found=len(keys),
                deleted=sum(1 for o in outcomes if o is _Outcome.DELETED),
                already_gone=sum(1 for o in outcomes if o is _Outcome.ALREADY_GONE),
                failed=failed,
            )

            if failed:
                logger.warning(
                    "Prefix %s swept with %d failures: %s",
                    prefix,
                    len(failed),
                    list(failed[:_LOGGED_KEYS]),
                )
            else:
                logger.info(
                    "Prefix %s swept: %d deleted, %d already gone",
                    prefix,
                    result.deleted,
                    result.already_gone,
                )
            return result

    async def _delete(self, key: str) -> _Outcome:
        try:
            await self.storage.delete(key)
        except ObjectNotFoundError:
            logger.debug("Object already deleted: %s", key)
            return _Outcome.ALREADY_GONE
        except Exception as e:
            logger.warning("Failed to delete object %s: %s", key, e)
            return _Outcome.FAILED
        logger.debug("Object deleted: %s", key)
        return _Outcome.DELETED
