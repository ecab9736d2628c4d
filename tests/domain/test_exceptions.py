"""Tests for domain exceptions."""

import pytest

from catalog_api.domain.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
    StorageError,
    ValidationError,
)


@pytest.mark.parametrize(
    ("error_type", "code"),
    [
        (ValidationError, "VALIDATION_ERROR"),
        (ConflictError, "CONFLICT"),
        (StorageError, "STORAGE_ERROR"),
    ],
)
def test_error_codes(error_type: type[DomainError], code: str) -> None:
    """Each error type carries a distinct machine-readable code."""
    error = error_type("something failed", details={"field": "x"})
    assert isinstance(error, DomainError)
    assert error.error_code == code
    assert error.message == "something failed"
    assert error.details == {"field": "x"}
    assert str(error) == "something failed"


def test_details_default_to_empty() -> None:
    """Details are an empty dict when not given."""
    assert ConflictError("category already exists").details == {}


def test_not_found_message() -> None:
    """NotFoundError names the resource and key."""
    error = NotFoundError("Product", "PROD001")
    assert error.error_code == "NOT_FOUND"
    assert error.message == "Product PROD001 not found"
    assert error.details == {"resource": "Product", "key": "PROD001"}
