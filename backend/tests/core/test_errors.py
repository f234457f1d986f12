"""Error Hierarchy — status codes, codes and the REST envelope.

Tests:
    - Each request error carries the HTTP status the API promises
    - Store errors are tagged by cause and never carry driver text
    - to_response() always has the same envelope keys
"""

import pytest

from librario.core.errors import (
    AuthInvalidError, AuthMissingError, DatabaseConflictError,
    DatabaseConnectionError, DatabaseError, DatabaseTimeoutError,
    ErrorCategory, InvalidFormatError, LibrarioError, MissingFieldsError,
    ResourceNotFoundError, UnknownUserError, UsernameTakenError,
    WrongPasswordError,
)


@pytest.mark.parametrize("error, status, code", [
    (MissingFieldsError(["usuario"]), 400, "MISSING_FIELDS"),
    (InvalidFormatError("paginas", "must be a positive integer"), 422, "INVALID_FORMAT"),
    (AuthMissingError(), 401, "AUTH_MISSING"),
    (AuthInvalidError(), 403, "AUTH_INVALID"),
    (UnknownUserError(), 401, "UNKNOWN_USER"),
    (WrongPasswordError(), 403, "WRONG_PASSWORD"),
    (ResourceNotFoundError("Book", "999"), 404, "RESOURCE_NOT_FOUND"),
    (UsernameTakenError("ana"), 409, "USERNAME_TAKEN"),
    (DatabaseConflictError("create_review"), 409, "DATABASE_CONFLICT"),
    (DatabaseConnectionError("list_books"), 503, "DATABASE_UNAVAILABLE"),
    (DatabaseTimeoutError("find_book"), 504, "DATABASE_TIMEOUT"),
    (DatabaseError("Database driver error", "query"), 500, "DATABASE_ERROR"),
])
def test_error_status_and_code(error, status, code):
    assert isinstance(error, LibrarioError)
    assert error.http_status == status
    assert error.code == code


def test_store_errors_share_database_base():
    for err in (
        DatabaseConflictError("x"), DatabaseConnectionError("x"),
        DatabaseTimeoutError("x"),
    ):
        assert isinstance(err, DatabaseError)


def test_conflict_is_categorized_as_conflict():
    assert DatabaseConflictError("create_user").category == ErrorCategory.CONFLICT


def test_not_found_response_envelope():
    body = ResourceNotFoundError("Book", "999").to_response()
    error = body["error"]
    assert set(error) == {
        "code", "message", "category", "severity", "timestamp", "context",
    }
    assert error["message"] == "Book '999' not found"
    assert error["context"]["resource_id"] == "999"


def test_missing_fields_listed_in_context():
    body = MissingFieldsError(["titulo", "autor"]).to_response()
    assert body["error"]["context"]["fields"] == ["titulo", "autor"]
