"""Domain layer - catalog error taxonomy."""

from catalog_api.domain.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
    StorageError,
    ValidationError,
)

__all__ = [
    "ConflictError",
    "DomainError",
    "NotFoundError",
    "StorageError",
    "ValidationError",
]
