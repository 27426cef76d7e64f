from abc import abstractmethod
from typing import Protocol


class ObjectStorage(Protocol):
    @abstractmethod
    async def list_keys(self, prefix: str) -> list[str]:
        """Return every object key starting with prefix.

        Raises:
            StorageUnavailableError: The listing could not be performed.
        """
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete one object.

        Raises:
            ObjectNotFoundError: The object does not exist.
            StorageUnavailableError: Any other storage failure.
        """
        ...
