"""Unit tests for PrefixSweeper."""

from unittest.mock import AsyncMock

import pytest

from sweep.domain.cleanup.service.sweeper import PrefixSweeper
from sweep.domain.shared.error import ObjectNotFoundError, StorageUnavailableError
from sweep.domain.tweet.model.value import StoragePrefix

PREFIX = StoragePrefix("v1/public/users/u1/posts/2025/09/p/a")


class InMemoryStorage:
    """Object storage fake holding keys in a set."""

    def __init__(self, keys: list[str], failing: set[str] | None = None) -> None:
        self.keys = set(keys)
        self.failing = failing or set()

    async def list_keys(self, prefix: str) -> list[str]:
        return sorted(k for k in self.keys if k.startswith(prefix))

    async def delete(self, key: str) -> None:
        if key in self.failing:
            raise StorageUnavailableError(f"cannot delete {key}")
        if key not in self.keys:
            raise ObjectNotFoundError(key)
        self.keys.remove(key)


class TestPrefixSweeper:
    @pytest.mark.asyncio
    async def test_deletes_every_object_under_prefix(self):
        storage = InMemoryStorage([f"{PREFIX}/original.jpeg", f"{PREFIX}/thumb.jpeg", "other/x"])
        sweeper = PrefixSweeper(storage=storage)

        result = await sweeper.sweep(PREFIX)

        assert storage.keys == {"other/x"}
        assert result.found == 2
        assert result.deleted == 2
        assert result.complete

    @pytest.mark.asyncio
    async def test_empty_prefix_is_success(self):
        storage = InMemoryStorage([])
        sweeper = PrefixSweeper(storage=storage)

        result = await sweeper.sweep(PREFIX)

        assert result.found == 0
        assert result.complete

    @pytest.mark.asyncio
    async def test_repeated_sweep_is_idempotent(self):
        storage = InMemoryStorage([f"{PREFIX}/original.jpeg"])
        sweeper = PrefixSweeper(storage=storage)

        first = await sweeper.sweep(PREFIX)
        second = await sweeper.sweep(PREFIX)

        assert first.deleted == 1
        assert second.found == 0
        assert second.complete

    @pytest.mark.asyncio
    async def test_object_already_gone_counts_as_success(self):
        """An object deleted between listing and deletion is not a failure."""
        storage = AsyncMock()
        storage.list_keys.return_value = ["k1", "k2"]
        storage.delete.side_effect = [None, ObjectNotFoundError("k2")]
        sweeper = PrefixSweeper(storage=storage)

        result = await sweeper.sweep(PREFIX)

        assert result.deleted == 1
        assert result.already_gone == 1
        assert result.complete

    @pytest.mark.asyncio
    async def test_one_failure_does_not_stop_others(self):
        # Arrange
        keys = [f"{PREFIX}/o1", f"{PREFIX}/o2", f"{PREFIX}/o3"]
        storage = InMemoryStorage(keys, failing={f"{PREFIX}/o2"})
        sweeper = PrefixSweeper(storage=storage)

        # Act
        result = await sweeper.sweep(PREFIX)

        # Assert
        assert storage.keys == {f"{PREFIX}/o2"}
        assert result.deleted == 2
        assert result.failed == (f"{PREFIX}/o2",)
        assert not result.complete

    @pytest.mark.asyncio
    async def test_listing_failure_propagates(self):
        storage = AsyncMock()
        storage.list_keys.side_effect = StorageUnavailableError("bucket unreachable")
        sweeper = PrefixSweeper(storage=storage)

        with pytest.raises(StorageUnavailableError):
            await sweeper.sweep(PREFIX)

        storage.delete.assert_not_awaited()
