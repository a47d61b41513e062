"""Account Verification — verify, resend and deliver-code orchestration.

Invariants:
    - Code state is committed before any email is attempted
    - EmailDeliveryError is logged and downgraded to False; it never unwinds a
      stored code or a created account
    - resend() for an unknown email returns False with no distinguishing error
    - verify() refuses an already-verified account before inspecting the submitted code
    - Verification transitions delegate to core/account_lifecycle.py

Design Decisions:
    - Separate from CredentialManager: signup must succeed even when the email
      provider is down, so delivery is a second, non-fatal step
"""

import logging
from datetime import timedelta

from sefask.core import account_lifecycle
from sefask.core.domain_types import VERIFICATION_CODE_TTL, UserId
from sefask.core.errors import (
    AlreadyVerifiedError,
    EmailDeliveryError,
    ResourceNotFoundError,
    ValidationFailedError,
)
from sefask.core.repository_protocols import (
    EmailSender, UserLike, UserRepository,
)
from sefask.core.validate_credentials import (
    normalize_email, validate_verification_submission,
)

logger = logging.getLogger(__name__)


class AccountVerificationService:
    """Email verification entry points."""

    def __init__(
        self,
        users: UserRepository,
        email_sender: EmailSender,
        code_ttl: timedelta = VERIFICATION_CODE_TTL,
    ):
        self.users = users
        self.email_sender = email_sender
        self.code_ttl = code_ttl

    async def deliver_code(self, user: UserLike) -> bool:
        """Send the user's pending code. Returns False if nothing was delivered."""
        if user.is_verified or not user.verification_code:
            return False
        try:
            await self.email_sender.send_verification_code(
                user.email, user.first_name, user.verification_code,
            )
        except EmailDeliveryError as e:
            logger.warning(
                f"Verification email not delivered: {e.message}",
                extra={"user_id": user.id, "error_code": e.code},
            )
            return False
        return True

    async def verify(self, user_id: UserId, code: str | None) -> UserLike:
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise ResourceNotFoundError("User", str(user_id))
        # terminal state answers before any check on the submission
        if user.is_verified:
            raise AlreadyVerifiedError()

        errors = validate_verification_submission(code)
        if errors:
            raise ValidationFailedError(errors)

        account_lifecycle.verify(user, code.strip())
        user = await self.users.save(user)
        logger.info("Email verified", extra={"user_id": user.id})
        return user

    async def resend(self, email: str | None) -> bool:
        if not email or not email.strip():
            raise ValidationFailedError({"email": "Email is required."})

        user = await self.users.find_by_email(normalize_email(email))
        if user is None:
            logger.info("Resend requested for unknown email")
            return False

        account_lifecycle.regenerate_code(user, ttl=self.code_ttl)
        user = await self.users.save(user)
        logger.info("Verification code regenerated", extra={"user_id": user.id})
        return await self.deliver_code(user)
