"""Account Lifecycle — verification state machine and code issuance.

Invariants:
    - States: Unverified -> Verified. Verified is terminal (no unverify transition)
    - A verified account never holds a code or an expiry
    - verify() checks in a fixed order: already verified, missing code, mismatch, expiry
    - Issuing a code overwrites any pending one; it never sends email

Design Decisions:
    - Operates on the VerifiableUser Protocol, not the ORM model: core stays free of db/
    - secrets.randbelow for codes: uniform over 000000-999999 and not predictable
    - `now` injectable on every transition so expiry is testable without clock mocks
    - Stored naive datetimes are read as UTC (SQLite drops tzinfo on round-trip)
"""

import hmac
import secrets
from datetime import datetime, timedelta, timezone
from typing import Protocol, TypeVar

from sefask.core.domain_types import (
    VERIFICATION_CODE_LENGTH,
    VERIFICATION_CODE_TTL,
    VerificationStatus,
)
from sefask.core.errors import (
    AlreadyVerifiedError,
    ExpiredCodeError,
    InvalidCodeError,
    MissingCodeError,
)


class VerifiableUser(Protocol):
    """Structural contract for anything carrying verification state."""
    is_verified: bool
    verification_code: str | None
    verification_code_expires_at: datetime | None


U = TypeVar("U", bound=VerifiableUser)


def _utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _now(now: datetime | None) -> datetime:
    return _utc(now) if now is not None else datetime.now(timezone.utc)


def status_of(user: VerifiableUser) -> VerificationStatus:
    if user.is_verified:
        return VerificationStatus.VERIFIED
    return VerificationStatus.UNVERIFIED


def generate_code() -> str:
    """Six random digits, zero-padded."""
    return str(secrets.randbelow(10 ** VERIFICATION_CODE_LENGTH)).zfill(
        VERIFICATION_CODE_LENGTH,
    )


def new_pending_code(
    now: datetime | None = None, ttl: timedelta = VERIFICATION_CODE_TTL,
) -> tuple[str, datetime]:
    """A fresh (code, expires_at) pair, for accounts that do not exist yet."""
    return generate_code(), _now(now) + ttl


def issue_verification_code(
    user: VerifiableUser,
    now: datetime | None = None,
    ttl: timedelta = VERIFICATION_CODE_TTL,
) -> str:
    """Store a fresh code and expiry on the user. Returns the code for delivery."""
    code, expires_at = new_pending_code(now, ttl)
    user.verification_code = code
    user.verification_code_expires_at = expires_at
    return code


def verify(user: U, submitted_code: str, now: datetime | None = None) -> U:
    """Apply a verification attempt. Raises the first failing check."""
    if user.is_verified:
        raise AlreadyVerifiedError()
    if not user.verification_code:
        raise MissingCodeError()
    if not hmac.compare_digest(
        submitted_code.encode("utf-8"), user.verification_code.encode("utf-8"),
    ):
        raise InvalidCodeError()
    expires_at = user.verification_code_expires_at
    if expires_at is None or _now(now) >= _utc(expires_at):
        raise ExpiredCodeError()

    user.is_verified = True
    user.verification_code = None
    user.verification_code_expires_at = None
    return user


def regenerate_code(
    user: VerifiableUser,
    now: datetime | None = None,
    ttl: timedelta = VERIFICATION_CODE_TTL,
) -> str:
    """Reissue a code for an unverified user."""
    if user.is_verified:
        raise AlreadyVerifiedError()
    return issue_verification_code(user, now=now, ttl=ttl)
