"""CredentialManager — signup and signin against the SQL user repository.

Tests cover:
    - signup stores an unverified user with a normalized email and a pending code
    - password stored as a bcrypt digest
    - duplicate email (any case) rejected as "taken", including the insert race
    - validation failures write nothing
    - signin failures share one message for unknown email and wrong password
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import InvalidRequestError

from sefask.core.errors import DuplicateRecordError, ValidationFailedError
from sefask.core.validate_credentials import (
    EMAIL_TAKEN_MESSAGE, INVALID_CREDENTIALS_MESSAGE,
)
from sefask.models.user import User
from sefask.services.credential_manager import CredentialManager
from sefask.services.user_repository import SqlUserRepository


@pytest.fixture
def manager(test_db, hasher):
    return CredentialManager(SqlUserRepository(test_db), hasher)


async def _user_count(db) -> int:
    return (await db.execute(select(func.count()).select_from(User))).scalar_one()


async def test_signup_creates_unverified_user_with_code(manager, hasher):
    before = datetime.now(timezone.utc)
    user = await manager.signup(" Ada ", "Lovelace", " Ada@X.com ", "secret1")

    assert user.email == "ada@x.com"
    assert user.first_name == "Ada"
    assert user.is_verified is False
    assert len(user.verification_code) == 6 and user.verification_code.isdigit()

    expires_at = user.verification_code_expires_at.replace(tzinfo=timezone.utc)
    assert before + timedelta(minutes=14) < expires_at <= before + timedelta(minutes=16)

    assert user.password_hash != "secret1"
    assert hasher.matches("secret1", user.password_hash)


async def test_signup_duplicate_email_rejected(manager, test_db):
    await manager.signup("Ada", "Lovelace", "ada@x.com", "secret1")
    with pytest.raises(ValidationFailedError) as exc:
        await manager.signup("Other", "Person", "ADA@x.com", "secret2")
    assert exc.value.field_errors == {"email": EMAIL_TAKEN_MESSAGE}
    assert await _user_count(test_db) == 1


async def test_signup_validation_failure_writes_nothing(manager, test_db):
    with pytest.raises(ValidationFailedError) as exc:
        await manager.signup("", "Lovelace", "not-an-email", "123")
    assert set(exc.value.field_errors) == {"firstName", "email", "password"}
    assert await _user_count(test_db) == 0


async def test_signup_insert_race_reported_as_taken(hasher):
    class _RacingRepo:
        async def find_by_email(self, email):
            return None

        async def insert(self, **fields):
            raise DuplicateRecordError("User", "email")

    manager = CredentialManager(_RacingRepo(), hasher)
    with pytest.raises(ValidationFailedError) as exc:
        await manager.signup("Ada", "Lovelace", "ada@x.com", "secret1")
    assert exc.value.field_errors == {"email": EMAIL_TAKEN_MESSAGE}


async def test_unique_index_enforced_by_repository(test_db, hasher):
    repo = SqlUserRepository(test_db)
    fields = dict(
        first_name="Ada", last_name="Lovelace", email="ada@x.com",
        password_hash=hasher.hash("secret1"),
    )
    await repo.insert(**fields)
    with pytest.raises(DuplicateRecordError):
        await repo.insert(**fields)


# ─── signin ──────────────────────────────────────────────────────

async def test_signin_success_normalizes_email(manager):
    created = await manager.signup("Ada", "Lovelace", "ada@x.com", "secret1")
    user = await manager.signin("  ADA@x.com", "secret1")
    assert user.id == created.id


async def test_signin_unverified_user_allowed(manager):
    await manager.signup("Ada", "Lovelace", "ada@x.com", "secret1")
    user = await manager.signin("ada@x.com", "secret1")
    assert user.is_verified is False


async def test_signin_failures_share_one_message(manager):
    await manager.signup("Ada", "Lovelace", "ada@x.com", "secret1")

    with pytest.raises(ValidationFailedError) as unknown:
        await manager.signin("nobody@x.com", "secret1")
    with pytest.raises(ValidationFailedError) as wrong:
        await manager.signin("ada@x.com", "wrong-password")

    assert unknown.value.field_errors == {"email": INVALID_CREDENTIALS_MESSAGE}
    assert wrong.value.field_errors == {"password": INVALID_CREDENTIALS_MESSAGE}


async def test_signin_missing_fields(manager):
    with pytest.raises(ValidationFailedError) as exc:
        await manager.signin(None, "")
    assert set(exc.value.field_errors) == {"email", "password"}


async def test_user_assignments_never_lazy_load(manager):
    user = await manager.signup("Ada", "Lovelace", "ada@x.com", "secret1")
    with pytest.raises(InvalidRequestError):
        user.assignments
