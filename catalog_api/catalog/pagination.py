"""Pagination parameters for catalog listings.

Parses raw ``limit``/``offset`` query values into a bounded
``Pagination`` value.
"""

import re
from dataclasses import dataclass

from catalog_api.domain.exceptions import ValidationError

DEFAULT_LIMIT = 10
MIN_LIMIT = 1
MAX_LIMIT = 100

DEFAULT_OFFSET = 0
MIN_OFFSET = 0

# Values must fit a signed 64-bit SQL integer.
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
_MAX_DIGITS = len(str(INT64_MAX))

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Pagination:
    """Validated pagination window.

    Attributes:
        limit: Maximum number of rows to return (1-100).
        offset: Number of rows to skip (>= 0).

    Raises:
        ValidationError: If either value is out of range.
    """

    limit: int = DEFAULT_LIMIT
    offset: int = DEFAULT_OFFSET

    def __post_init__(self) -> None:
        if self.limit < MIN_LIMIT:
            raise ValidationError(
                "invalid limit parameter: must be greater than 0",
                details={"field": "limit", "value": self.limit},
            )
        if self.limit > MAX_LIMIT:
            raise ValidationError(
                f"invalid limit parameter: must be less than {MAX_LIMIT}",
                details={"field": "limit", "value": self.limit},
            )
        if self.offset < MIN_OFFSET:
            raise ValidationError(
                "invalid offset parameter: must be greater than or equal to 0",
                details={"field": "offset", "value": self.offset},
            )
        if self.offset > INT64_MAX:
            raise ValidationError(
                "invalid offset parameter: must be a number",
                details={"field": "offset", "value": self.offset},
            )


def _not_a_number(name: str, raw: str) -> ValidationError:
    return ValidationError(
        f"invalid {name} parameter: must be a number",
        details={"field": name, "value": raw},
    )


def _parse_int(name: str, raw: str | None, default: int) -> int:
    if raw is None or raw == "":
        return default
    if not _INTEGER_PATTERN.fullmatch(raw):
        raise _not_a_number(name, raw)
    # Leading zeros are allowed; anything longer is out of range anyway.
    if len(raw.lstrip("+-").lstrip("0")) > _MAX_DIGITS:
        raise _not_a_number(name, raw)

    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        raise _not_a_number(name, raw)
    return value


def parse_pagination(limit: str | None = None, offset: str | None = None) -> Pagination:
    """Parse and bounds-check raw pagination input.

    Both values are parsed before any bound is checked, so a malformed
    offset is reported even when the limit is also out of range.

    Args:
        limit: Raw limit value, ``None`` or empty for the default.
        offset: Raw offset value, ``None`` or empty for the default.

    Returns:
        Validated pagination.

    Raises:
        ValidationError: If a value is not a 64-bit integer or out of range.
    """
    parsed_limit = _parse_int("limit", limit, DEFAULT_LIMIT)
    parsed_offset = _parse_int("offset", offset, DEFAULT_OFFSET)

    return Pagination(limit=parsed_limit, offset=parsed_offset)
