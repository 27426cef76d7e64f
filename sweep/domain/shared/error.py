"""Error hierarchy for Sweep.

Error layers:
- SweepError: Base class for all Sweep errors
- DomainError: Business rule violations, validation failures (4xx responses)
- InfrastructureError: System-level failures like storage/network issues (503 responses)

These errors are mapped to HTTP responses by the global exception handler in app.py.
"""


class SweepError(Exception):
    """Base class for all Sweep errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (business logic violations - typically 4xx)
# =============================================================================


class DomainError(SweepError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class ObjectNotFoundError(NotFoundError):
    """Storage object does not exist (already deleted)."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Object not found: {key}")
        self.key = key


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class AuthenticationError(DomainError):
    """Caller could not be identified (missing or invalid credential)."""


class AuthorizationError(DomainError):
    """Caller not authorized for this operation."""


# =============================================================================
# Infrastructure Errors (system-level failures - typically 503)
# =============================================================================


class InfrastructureError(SweepError):
    """Base class for infrastructure/system errors."""


class StorageUnavailableError(InfrastructureError):
    """Storage backend (database, object store) is unavailable."""


class ExternalServiceError(InfrastructureError):
    """External service (task queue, identity provider) is unavailable or failed."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
