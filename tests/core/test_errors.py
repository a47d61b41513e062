"""Error Hierarchy — tests for typed errors and their REST envelopes.

Tests cover:
    - ValidationFailedError carries fields and per-question errors
    - http status and category per error kind
    - verification errors expose their field
"""

from sefask.core.errors import (
    AuthenticationError,
    DatabaseError,
    ErrorCategory,
    ExpiredCodeError,
    QuestionErrors,
    ResourceNotFoundError,
    ValidationFailedError,
)


def test_validation_failed_envelope_with_fields():
    body = ValidationFailedError({"email": "Email is already taken."}).to_response()
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert body["error"]["fields"] == {"email": "Email is already taken."}
    assert "questions" not in body["error"]


def test_validation_failed_envelope_with_questions():
    err = ValidationFailedError(
        question_errors=[QuestionErrors(index=2, errors={"points": "Points must be at least 1"})],
    )
    body = err.to_response()
    assert err.http_status == 400
    assert body["error"]["questions"] == [
        {"index": 2, "errors": {"points": "Points must be at least 1"}},
    ]
    assert "fields" not in body["error"]


def test_not_found_is_404_without_id_in_message():
    err = ResourceNotFoundError("Assignment", "abc")
    assert err.http_status == 404
    assert err.category is ErrorCategory.RESOURCE_NOT_FOUND
    assert err.message == "Assignment not found"


def test_verification_error_envelope_names_field():
    body = ExpiredCodeError().to_response()
    assert body["error"]["code"] == "EXPIRED_CODE"
    assert "code" in body["error"]["fields"]


def test_authentication_error_is_401():
    err = AuthenticationError("Token expired.")
    assert err.http_status == 401
    assert err.to_response()["error"]["fields"] == {"auth": "Token expired."}


def test_database_error_is_critical_503():
    err = DatabaseError("User insert failed", "insert")
    assert err.http_status == 503
    assert err.operation == "insert"
