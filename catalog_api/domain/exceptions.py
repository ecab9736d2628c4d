"""Domain exceptions.

All catalog-level errors raised by the query services and repositories.
The API layer maps each subclass to a status code and error code; callers
catch ``DomainError`` to handle every expected failure in one place.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions."""

    error_code = "DOMAIN_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(DomainError):
    """Raised when request input is malformed or out of range.

    Covers pagination parameters, filter values and required
    category fields. Always recoverable by resubmitting corrected input.
    """

    error_code = "VALIDATION_ERROR"


class ConflictError(DomainError):
    """Raised when a create would violate a uniqueness rule."""

    error_code = "CONFLICT"


class NotFoundError(DomainError):
    """Raised when a single resource lookup has no match."""

    error_code = "NOT_FOUND"

    def __init__(self, resource: str, key: str) -> None:
        """Initialize not found error.

        Args:
            resource: Resource type (e.g., "Product").
            key: Lookup key that had no match.
        """
        super().__init__(
            f"{resource} {key} not found",
            details={"resource": resource, "key": key},
        )


class StorageError(DomainError):
    """Raised when the underlying store fails.

    The message stays generic; the driver exception is chained as
    ``__cause__`` and logged where the failure happens.
    """

    error_code = "STORAGE_ERROR"
