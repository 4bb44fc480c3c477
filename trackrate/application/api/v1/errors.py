"""Centralized error transformation for API routes.

Maps TrackRate errors (domain and infrastructure) to HTTPException responses.
"""

from typing import Any

from fastapi import HTTPException

from trackrate.domain.shared.error import (
    AuthorizationError,
    DomainError,
    DuplicateError,
    IdentityConflictError,
    InfrastructureError,
    InvalidStateError,
    NotFoundError,
    TrackRateError,
    ValidationError,
)

DOMAIN_ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    NotFoundError: 404,
    ValidationError: 422,
    IdentityConflictError: 422,
    InvalidStateError: 409,
    DuplicateError: 409,
    AuthorizationError: 403,
}

# Authentication failures (as opposed to authorization denials)
UNAUTHENTICATED_CODES = frozenset({"MISSING_TOKEN", "INVALID_TOKEN", "TOKEN_EXPIRED"})


def map_trackrate_error(error: TrackRateError) -> HTTPException:
    """Map a TrackRate error to an HTTPException."""
    detail: dict[str, Any] = {
        "code": error.code,
        "message": error.message,
    }

    if isinstance(error, InfrastructureError):
        return HTTPException(status_code=503, detail=detail)

    if isinstance(error, DomainError):
        status_code = next(
            (status for cls, status in DOMAIN_ERROR_STATUS_MAP.items() if isinstance(error, cls)),
            400,
        )
        if isinstance(error, ValidationError) and error.field is not None:
            detail["field"] = error.field
        if isinstance(error, AuthorizationError):
            if error.reason is not None:
                detail["reason"] = error.reason
            # Distinguish 401 (unauthenticated) from 403 (unauthorized)
            if error.code in UNAUTHENTICATED_CODES:
                return HTTPException(
                    status_code=401,
                    detail=detail,
                    headers={"WWW-Authenticate": "Bearer"},
                )
        return HTTPException(status_code=status_code, detail=detail)

    # Fallback for unknown TrackRateError subclasses
    return HTTPException(status_code=500, detail=detail)
