"""Credential Validation — pure field checks for signup, signin and code submission.

Invariants:
    - Presence errors for every missing field are reported together
    - Format checks (email syntax, password length) only run on present fields
    - One message per field: a later check on the same field overwrites the earlier one
    - No storage access: uniqueness and credential matching live in the shell

Design Decisions:
    - email-validator with check_deliverability=False: syntax only, no DNS IO in core
    - Emails normalized to stripped lower-case before any lookup or write
"""

from email_validator import EmailNotValidError, validate_email

from sefask.core.domain_types import MAX_NAME_LENGTH, MIN_PASSWORD_LENGTH

EMAIL_TAKEN_MESSAGE = "Email is already taken."
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password."


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_valid_email(email: str) -> bool:
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _present(value: str | None) -> bool:
    return isinstance(value, str) and bool(value.strip())


def validate_signup(
    first_name: str | None,
    last_name: str | None,
    email: str | None,
    password: str | None,
) -> dict[str, str]:
    """Validate signup fields. Returns field -> message (empty when valid)."""
    errors: dict[str, str] = {}
    if not _present(first_name):
        errors["firstName"] = "First name is required."
    if not _present(last_name):
        errors["lastName"] = "Last name is required."
    if not _present(email):
        errors["email"] = "Email is required."
    if not password:
        errors["password"] = "Password is required."

    if _present(first_name) and len(first_name.strip()) > MAX_NAME_LENGTH:
        errors["firstName"] = (
            f"First name must be at most {MAX_NAME_LENGTH} characters."
        )
    if _present(last_name) and len(last_name.strip()) > MAX_NAME_LENGTH:
        errors["lastName"] = (
            f"Last name must be at most {MAX_NAME_LENGTH} characters."
        )

    if _present(email) and not is_valid_email(email):
        errors["email"] = "Invalid email format."

    if password and len(password) < MIN_PASSWORD_LENGTH:
        errors["password"] = (
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long."
        )
    return errors


def validate_signin(email: str | None, password: str | None) -> dict[str, str]:
    """Signin only checks presence; credential matching happens against storage."""
    errors: dict[str, str] = {}
    if not _present(email):
        errors["email"] = "Email is required."
    if not password:
        errors["password"] = "Password is required."
    return errors


def validate_verification_submission(code: str | None) -> dict[str, str]:
    if not _present(code):
        return {"code": "Verification code is required."}
    return {}
