"""Centralized error transformation for API routes.

Maps Sweep errors (domain and infrastructure) to HTTPException responses.
"""

from typing import Any

from fastapi import HTTPException

from sweep.domain.shared.error import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    InfrastructureError,
    NotFoundError,
    SweepError,
    ValidationError,
)

DOMAIN_ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    NotFoundError: 404,
    ValidationError: 400,
    AuthenticationError: 401,
    AuthorizationError: 403,
}


def _status_for(error: DomainError) -> int:
    for error_type in type(error).__mro__:
        if error_type in DOMAIN_ERROR_STATUS_MAP:
            return DOMAIN_ERROR_STATUS_MAP[error_type]
    return 400


def map_sweep_error(error: SweepError) -> HTTPException:
    """Map a Sweep error to an HTTPException.

    Args:
        error: The Sweep error to map.

    Returns:
        HTTPException with appropriate status code and detail.
    """
    detail: dict[str, Any] = {
        "code": error.code,
        "message": error.message,
    }

    if isinstance(error, InfrastructureError):
        # Infrastructure errors → 503 Service Unavailable (the caller may retry)
        return HTTPException(status_code=503, detail=detail)

    if isinstance(error, DomainError):
        if isinstance(error, ValidationError) and error.field is not None:
            detail["field"] = error.field
        if isinstance(error, AuthenticationError):
            return HTTPException(
                status_code=401,
                detail=detail,
                headers={"WWW-Authenticate": "Bearer"},
            )
        return HTTPException(status_code=_status_for(error), detail=detail)

    # Fallback for unknown SweepError subclasses
    return HTTPException(status_code=500, detail=detail)
