from abc import abstractmethod
from typing import Protocol

from sweep.domain.shared.model.value import ValueObject


class TaskCaller(ValueObject):
    """Verified identity of the service invoking a worker endpoint."""

    email: str
    subject: str


class TaskCallerVerifier(Protocol):
    """Trust boundary of the internal task endpoints."""

    @abstractmethod
    async def verify(self, token: str | None) -> TaskCaller:
        """Return the caller behind a bearer token.

        Raises:
            AuthenticationError: Token missing, invalid, or not the queue's identity.
        """
        ...
