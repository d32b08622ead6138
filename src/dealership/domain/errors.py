"""Domain error classes.

Protocol-agnostic errors that represent business failures.
These errors are translated to appropriate formats (HTTP, GraphQL, gRPC) by protocol adapters.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain errors.

    Protocol-agnostic. Contains business error information that
    can be translated to HTTP, GraphQL, or gRPC formats.
    """

    # Default error code (can be used as i18n key)
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        """Create a domain error.

        Args:
            message: Human-readable error message (default locale)
            **context: Additional context for error (e.g., field names, values)
        """
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format for protocol translation."""
        return {
            "message": self.message,
            "code": self.error_code,
            **self.context,
        }


class ValidationError(DomainError):
    """Business rule validation error (invalid input).

    Examples:
        - page < 1 or limit <= 0
        - Unknown sort key or booking status
        - Malformed booking time

    Protocol mappings:
        - REST: 422 Unprocessable Entity
        - gRPC: INVALID_ARGUMENT (3)
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
        **context: Any,
    ) -> None:
        """Create a validation error.

        Args:
            message: Overall validation error message (optional if errors provided)
            errors: List of field-specific errors, each with 'field' and 'message'
                   Example: [{"field": "limit", "message": "Must be > 0"}]
            **context: Additional context
        """
        self.errors: list[dict[str, str]] | None
        if errors:
            self.errors = errors
            msg = message or "Validation failed"
        else:
            self.errors = None
            msg = message or "Validation error"

        super().__init__(msg, **context)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format."""
        if self.errors:
            return {
                "message": self.message,
                "code": self.error_code,
                "errors": self.errors,
                **self.context,
            }
        return super().to_dict()


class NotFoundError(DomainError):
    """Resource not found.

    Examples:
        - Car with ID not found
        - Test drive booking not found

    Protocol mappings:
        - REST: 404 Not Found
        - gRPC: NOT_FOUND (5)
    """

    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str | None = None, **context: Any) -> None:
        """Create a not found error.

        Args:
            resource: Type of resource (e.g., "Car", "Booking")
            identifier: Resource identifier (e.g., UUID, ID)
            **context: Additional context
        """
        if identifier:
            message = f"{resource} with identifier '{identifier}' not found"
        else:
            message = f"{resource} not found"

        super().__init__(message, resource=resource, identifier=identifier, **context)


class ConflictError(DomainError):
    """Business constraint conflict.

    Examples:
        - Test drive slot already held
        - Booking already in a terminal status
        - Car not available for test drives

    Protocol mappings:
        - REST: 409 Conflict
        - gRPC: ALREADY_EXISTS (6) or FAILED_PRECONDITION (9)
    """

    error_code: str = "CONFLICT"


class UnauthorizedError(DomainError):
    """Authentication required or failed.

    Protocol mappings:
        - REST: 401 Unauthorized
        - gRPC: UNAUTHENTICATED (16)
    """

    error_code: str = "UNAUTHORIZED"


class ForbiddenError(DomainError):
    """Authenticated but insufficient permissions.

    Protocol mappings:
        - REST: 403 Forbidden
        - gRPC: PERMISSION_DENIED (7)
    """

    error_code: str = "FORBIDDEN"


class CollaboratorError(DomainError):
    """An external collaborator (store, classifier) failed or is unreachable.

    Never masked as an empty result. Callers may retry at their discretion.

    Protocol mappings:
        - REST: 503 Service Unavailable
        - gRPC: UNAVAILABLE (14)
    """

    error_code: str = "COLLABORATOR_FAILURE"

    def __init__(self, collaborator: str, message: str | None = None, **context: Any) -> None:
        super().__init__(
            message or f"{collaborator} is unavailable",
            collaborator=collaborator,
            **context,
        )


class InternalError(DomainError):
    """Internal domain error (unexpected conditions).

    Should be logged for investigation.

    Protocol mappings:
        - REST: 500 Internal Server Error
        - gRPC: INTERNAL (13)
    """

    error_code: str = "INTERNAL_ERROR"
