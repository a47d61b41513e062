"""Account Lifecycle — tests for the verification state machine.

Tests cover:
    - code format (6 ASCII digits) and 15-minute expiry
    - issuing overwrites a pending code
    - verify check order: already verified > missing > mismatch > expiry
    - successful verify clears code and expiry; second verify is AlreadyVerified
    - expiry boundary (now == expires_at is expired)
    - regenerate refused once verified
    - naive stored datetimes treated as UTC
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import pytest

from sefask.core import account_lifecycle
from sefask.core.domain_types import VERIFICATION_CODE_TTL, VerificationStatus
from sefask.core.errors import (
    AccountVerificationError,
    AlreadyVerifiedError,
    ExpiredCodeError,
    InvalidCodeError,
    MissingCodeError,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@dataclass
class _User:
    is_verified: bool = False
    verification_code: str | None = None
    verification_code_expires_at: datetime | None = None


def _pending(code="123456", expires_at=NOW + VERIFICATION_CODE_TTL):
    return _User(verification_code=code, verification_code_expires_at=expires_at)


def test_generate_code_is_six_digits():
    for _ in range(200):
        assert re.fullmatch(r"\d{6}", account_lifecycle.generate_code())


def test_generate_code_zero_pads(monkeypatch):
    monkeypatch.setattr(account_lifecycle.secrets, "randbelow", lambda n: 42)
    assert account_lifecycle.generate_code() == "000042"


def test_issue_sets_code_and_fifteen_minute_expiry():
    user = _User()
    code = account_lifecycle.issue_verification_code(user, now=NOW)
    assert user.verification_code == code
    assert user.verification_code_expires_at == NOW + timedelta(minutes=15)
    assert not user.is_verified


def test_issue_overwrites_pending_code(monkeypatch):
    codes = iter([111111, 222222])
    monkeypatch.setattr(account_lifecycle.secrets, "randbelow", lambda n: next(codes))
    user = _User()
    account_lifecycle.issue_verification_code(user, now=NOW)
    later = NOW + timedelta(minutes=5)
    account_lifecycle.issue_verification_code(user, now=later)
    assert user.verification_code == "222222"
    assert user.verification_code_expires_at == later + VERIFICATION_CODE_TTL


def test_new_pending_code_respects_ttl():
    code, expires_at = account_lifecycle.new_pending_code(NOW, timedelta(minutes=2))
    assert len(code) == 6
    assert expires_at == NOW + timedelta(minutes=2)


# ─── verify ──────────────────────────────────────────────────────

def test_verify_success_clears_code():
    user = _pending()
    result = account_lifecycle.verify(user, "123456", now=NOW)
    assert result is user
    assert user.is_verified
    assert user.verification_code is None
    assert user.verification_code_expires_at is None
    assert account_lifecycle.status_of(user) is VerificationStatus.VERIFIED


def test_verify_twice_is_already_verified():
    user = _pending()
    account_lifecycle.verify(user, "123456", now=NOW)
    with pytest.raises(AlreadyVerifiedError):
        account_lifecycle.verify(user, "123456", now=NOW)


def test_already_verified_checked_before_missing_code():
    user = _User(is_verified=True)
    with pytest.raises(AlreadyVerifiedError):
        account_lifecycle.verify(user, "000000", now=NOW)


def test_missing_code():
    with pytest.raises(MissingCodeError) as exc:
        account_lifecycle.verify(_User(), "123456", now=NOW)
    assert exc.value.field == "code"


def test_mismatch_checked_before_expiry():
    user = _pending(expires_at=NOW - timedelta(minutes=1))
    with pytest.raises(InvalidCodeError):
        account_lifecycle.verify(user, "654321", now=NOW)


def test_expired_code_rejected_even_if_matching():
    user = _pending(expires_at=NOW - timedelta(seconds=1))
    with pytest.raises(ExpiredCodeError):
        account_lifecycle.verify(user, "123456", now=NOW)
    assert not user.is_verified
    assert user.verification_code == "123456"


def test_expiry_boundary_is_expired():
    user = _pending(expires_at=NOW)
    with pytest.raises(ExpiredCodeError):
        account_lifecycle.verify(user, "123456", now=NOW)


def test_naive_expiry_read_as_utc():
    user = _pending(expires_at=(NOW + timedelta(minutes=1)).replace(tzinfo=None))
    account_lifecycle.verify(user, "123456", now=NOW)
    assert user.is_verified


def test_verification_errors_share_base():
    for error in (AlreadyVerifiedError, MissingCodeError, InvalidCodeError, ExpiredCodeError):
        assert issubclass(error, AccountVerificationError)


# ─── regenerate ──────────────────────────────────────────────────

def test_regenerate_refused_when_verified():
    with pytest.raises(AlreadyVerifiedError):
        account_lifecycle.regenerate_code(_User(is_verified=True), now=NOW)


def test_regenerate_issues_new_code_for_unverified():
    user = _pending(expires_at=NOW - timedelta(hours=1))
    code = account_lifecycle.regenerate_code(user, now=NOW)
    assert user.verification_code == code
    assert user.verification_code_expires_at == NOW + VERIFICATION_CODE_TTL
    assert account_lifecycle.status_of(user) is VerificationStatus.UNVERIFIED
