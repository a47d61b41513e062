"""AccountVerificationService — verify, resend and delivery against the SQL repository.

Tests cover:
    - verify clears code state and persists; second verify is AlreadyVerified
    - wrong and expired codes leave the account unverified
    - deliver_code downgrades provider failure to False
    - resend rotates the code, refuses verified accounts, and is silent on unknown emails
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from sefask.core import account_lifecycle
from sefask.core.errors import (
    AlreadyVerifiedError,
    ExpiredCodeError,
    InvalidCodeError,
    ResourceNotFoundError,
    ValidationFailedError,
)
from sefask.services.account_verification import AccountVerificationService
from sefask.services.credential_manager import CredentialManager
from sefask.services.user_repository import SqlUserRepository


@pytest.fixture
def users(test_db):
    return SqlUserRepository(test_db)


@pytest.fixture
def service(users, outbox):
    return AccountVerificationService(users, outbox)


@pytest.fixture
async def pending_user(users, hasher):
    return await CredentialManager(users, hasher).signup(
        "Ada", "Lovelace", "ada@x.com", "secret1",
    )


async def test_deliver_code_sends_pending_code(service, pending_user, outbox):
    assert await service.deliver_code(pending_user) is True
    assert outbox.sent == [{
        "to": "ada@x.com", "first_name": "Ada",
        "code": pending_user.verification_code,
    }]


async def test_deliver_code_failure_is_not_fatal(service, pending_user, outbox):
    outbox.fail = True
    assert await service.deliver_code(pending_user) is False
    assert pending_user.verification_code is not None


async def test_verify_success_persists(service, users, pending_user):
    code = pending_user.verification_code
    user = await service.verify(pending_user.id, f" {code} ")
    assert user.is_verified

    stored = await users.find_by_id(pending_user.id)
    assert stored.is_verified
    assert stored.verification_code is None
    assert stored.verification_code_expires_at is None


async def test_verify_twice_rejected(service, pending_user):
    code = pending_user.verification_code
    await service.verify(pending_user.id, code)
    with pytest.raises(AlreadyVerifiedError):
        await service.verify(pending_user.id, code)


async def test_verify_wrong_code(service, users, pending_user):
    wrong = "000000" if pending_user.verification_code != "000000" else "111111"
    with pytest.raises(InvalidCodeError):
        await service.verify(pending_user.id, wrong)
    assert not (await users.find_by_id(pending_user.id)).is_verified


async def test_verify_expired_code(service, users, pending_user):
    pending_user.verification_code_expires_at = (
        datetime.now(timezone.utc) - timedelta(minutes=1)
    )
    await users.save(pending_user)
    with pytest.raises(ExpiredCodeError):
        await service.verify(pending_user.id, pending_user.verification_code)


async def test_verify_blank_code(service, pending_user):
    with pytest.raises(ValidationFailedError) as exc:
        await service.verify(pending_user.id, "  ")
    assert set(exc.value.field_errors) == {"code"}


async def test_verify_unknown_user(service):
    with pytest.raises(ResourceNotFoundError):
        await service.verify(uuid4(), "123456")


# ─── resend ──────────────────────────────────────────────────────

async def test_resend_rotates_code_and_expiry(service, users, pending_user, outbox, monkeypatch):
    old_code = pending_user.verification_code
    monkeypatch.setattr(
        account_lifecycle, "generate_code",
        lambda: "999999" if old_code != "999999" else "888888",
    )

    assert await service.resend("ADA@x.com") is True

    stored = await users.find_by_id(pending_user.id)
    assert stored.verification_code != old_code
    assert outbox.last_code("ada@x.com") == stored.verification_code


async def test_resend_makes_old_code_useless(service, pending_user, monkeypatch):
    old_code = pending_user.verification_code
    new_code = "999999" if old_code != "999999" else "888888"
    monkeypatch.setattr(account_lifecycle, "generate_code", lambda: new_code)

    await service.resend("ada@x.com")
    with pytest.raises(InvalidCodeError):
        await service.verify(pending_user.id, old_code)
    assert (await service.verify(pending_user.id, new_code)).is_verified


async def test_resend_unknown_email_is_silent(service, outbox):
    assert await service.resend("nobody@x.com") is False
    assert outbox.sent == []


async def test_resend_verified_account_refused(service, pending_user, outbox):
    await service.verify(pending_user.id, pending_user.verification_code)
    with pytest.raises(AlreadyVerifiedError):
        await service.resend("ada@x.com")
    assert outbox.sent == []


async def test_resend_requires_email(service):
    with pytest.raises(ValidationFailedError):
        await service.resend(None)


async def test_resend_delivery_failure_keeps_new_code(service, users, pending_user, outbox):
    outbox.fail = True
    assert await service.resend("ada@x.com") is False
    stored = await users.find_by_id(pending_user.id)
    assert stored.verification_code is not None


async def test_verified_account_refused_before_code_is_inspected(service, pending_user):
    await service.verify(pending_user.id, pending_user.verification_code)
    for code in ("", None, "123456"):
        with pytest.raises(AlreadyVerifiedError):
            await service.verify(pending_user.id, code)
