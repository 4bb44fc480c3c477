"""Error hierarchy for TrackRate.

Error layers:
- TrackRateError: Base class for all TrackRate errors
- DomainError: Business rule violations, validation failures (4xx responses)
- InfrastructureError: System-level failures like storage issues (503 responses)

Every error carries a stable machine-readable ``code``. These errors are mapped
to HTTP responses by the global exception handler in app.py.
"""


class TrackRateError(Exception):
    """Base class for all TrackRate errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (business logic violations - typically 4xx)
# =============================================================================


class DomainError(TrackRateError):
    """Base class for domain/business errors."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        code: str = "VALIDATION_ERROR",
    ) -> None:
        super().__init__(message, code=code)
        self.field = field


class IdentityConflictError(DomainError):
    """Both or neither of user/guest identity were supplied."""

    def __init__(self, message: str = "Provide exactly one of user or guest identity") -> None:
        super().__init__(message, code="IDENTITY_CONFLICT")


class NotFoundError(DomainError):
    """Resource not found."""


class AuthorizationError(DomainError):
    """Actor not authorized for this operation."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message, code=code)
        self.reason = reason


class DuplicateError(DomainError):
    """A uniqueness rule would be violated."""


class InvalidStateError(DomainError):
    """Operation not allowed in current state."""


# =============================================================================
# Infrastructure Errors (system-level failures - typically 503)
# =============================================================================


class InfrastructureError(TrackRateError):
    """Base class for infrastructure/system errors."""


class StorageUnavailableError(InfrastructureError):
    """Storage backend is unavailable."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
