"""Credential Manager — signup and signin orchestration.

Invariants:
    - Field validation runs before any storage access; a ValidationFailedError
      means nothing was written
    - Email uniqueness: pre-checked, and a unique-index race at insert time maps
      to the same "taken" error
    - New users are unverified and hold a freshly issued code
    - Signin failures use one message for unknown email and wrong password

Design Decisions:
    - Collaborators injected (repository + hasher): no module-level clients
    - The created user carries its code; this service never sends email
      (AccountVerificationService.deliver_code does)
"""

import logging
from datetime import timedelta

from sefask.core import account_lifecycle
from sefask.core.domain_types import VERIFICATION_CODE_TTL
from sefask.core.errors import DuplicateRecordError, ValidationFailedError
from sefask.core.repository_protocols import (
    PasswordHasher, UserLike, UserRepository,
)
from sefask.core.validate_credentials import (
    EMAIL_TAKEN_MESSAGE,
    INVALID_CREDENTIALS_MESSAGE,
    normalize_email,
    validate_signin,
    validate_signup,
)

logger = logging.getLogger(__name__)


class CredentialManager:
    """Signup/signin entry points."""

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        code_ttl: timedelta = VERIFICATION_CODE_TTL,
    ):
        self.users = users
        self.hasher = hasher
        self.code_ttl = code_ttl

    async def signup(
        self,
        first_name: str | None,
        last_name: str | None,
        email: str | None,
        password: str | None,
    ) -> UserLike:
        errors = validate_signup(first_name, last_name, email, password)
        if errors:
            raise ValidationFailedError(errors)

        normalized = normalize_email(email)
        if await self.users.find_by_email(normalized):
            raise ValidationFailedError({"email": EMAIL_TAKEN_MESSAGE})

        code, expires_at = account_lifecycle.new_pending_code(ttl=self.code_ttl)
        try:
            user = await self.users.insert(
                first_name=first_name.strip(),
                last_name=last_name.strip(),
                email=normalized,
                password_hash=self.hasher.hash(password),
                is_verified=False,
                verification_code=code,
                verification_code_expires_at=expires_at,
            )
        except DuplicateRecordError:
            logger.info("Concurrent signup lost the unique-email race")
            raise ValidationFailedError({"email": EMAIL_TAKEN_MESSAGE})

        logger.info("User signed up", extra={"user_id": user.id})
        return user

    async def signin(self, email: str | None, password: str | None) -> UserLike:
        errors = validate_signin(email, password)
        if errors:
            raise ValidationFailedError(errors)

        user = await self.users.find_by_email(normalize_email(email))
        if user is None:
            raise ValidationFailedError({"email": INVALID_CREDENTIALS_MESSAGE})
        if not self.hasher.matches(password, user.password_hash):
            raise ValidationFailedError({"password": INVALID_CREDENTIALS_MESSAGE})

        logger.info("User signed in", extra={"user_id": user.id})
        return user
