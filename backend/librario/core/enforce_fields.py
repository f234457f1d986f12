"""Field Enforcement — presence and format checks for request input.

Invariants:
    - Missing or empty values raise MissingFieldsError (400), never InvalidFormatError
    - Present but malformed values raise InvalidFormatError (422)
    - Pure functions: no IO, no framework imports

Design Decisions:
    - Checks live in core/ so routes stay thin and the rules are testable without HTTP
    - Presence is checked for all fields at once: one 400 lists every missing field
"""

import re
from datetime import date

from librario.core.domain_types import (
    MAX_INT_COLUMN, MAX_RATING, MIN_RATING, PUBLICATION_DATE_PATTERN,
    PageCount, Rating,
)
from librario.core.errors import InvalidFormatError, MissingFieldsError

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")


def _is_missing(value: object) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def require_fields(values: dict[str, object]) -> None:
    """Raise MissingFieldsError naming every absent or blank field."""
    missing = [name for name, value in values.items() if _is_missing(value)]
    if missing:
        raise MissingFieldsError(missing)


def parse_page_count(raw: str | int, field_name: str = "paginas") -> PageCount:
    """Parse a strictly positive integer page count that fits the column."""
    if isinstance(raw, bool):
        raise InvalidFormatError(field_name, "must be a positive integer")
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        # int() would also accept "1_000"
        if not _INTEGER_PATTERN.match(text):
            raise InvalidFormatError(field_name, "must be a positive integer")
        value = int(text)
    if value <= 0:
        raise InvalidFormatError(field_name, "must be a positive integer")
    if value > MAX_INT_COLUMN:
        raise InvalidFormatError(field_name, f"must not exceed {MAX_INT_COLUMN}")
    return PageCount(value)


def parse_publication_date(
    raw: str, field_name: str = "fecha_publicacion",
) -> date:
    """Parse a YYYY-MM-DD date that also exists on the calendar."""
    if not PUBLICATION_DATE_PATTERN.match(raw):
        raise InvalidFormatError(field_name, "expected YYYY-MM-DD")
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise InvalidFormatError(field_name, "not a calendar date")


def check_rating(value: int, field_name: str = "puntuacion") -> Rating:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidFormatError(field_name, "must be an integer")
    if not MIN_RATING <= value <= MAX_RATING:
        raise InvalidFormatError(
            field_name, f"must be between {MIN_RATING} and {MAX_RATING}",
        )
    return Rating(value)


def is_storable_id(value: int) -> bool:
    """True when value could be a primary key of an INTEGER column."""
    return 1 <= value <= MAX_INT_COLUMN


def check_row_id(value: int, field_name: str) -> int:
    """Reject body ids that no row can carry (422)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidFormatError(field_name, "must be an integer")
    if not is_storable_id(value):
        raise InvalidFormatError(
            field_name, f"must be between 1 and {MAX_INT_COLUMN}",
        )
    return value


def check_cover_extension(
    filename: str | None, allowed: list[str], field_name: str = "portada",
) -> str:
    """Return the lowercased extension of an uploaded cover, if allowed."""
    if not filename or "." not in filename:
        raise InvalidFormatError(field_name, "file has no extension")
    extension = filename.rsplit(".", 1)[1].lower()
    if extension not in allowed:
        raise InvalidFormatError(
            field_name, f"allowed formats: {', '.join(allowed)}",
        )
    return extension
