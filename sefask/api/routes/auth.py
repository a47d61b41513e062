"""Auth Routes — signup, signin, signout, email verification and profile.

Invariants:
    - Session token travels only in an httpOnly cookie, never in a response body
    - Verification codes never appear in responses
    - signup returns 201 even when the verification email could not be sent
      (emailSent reports delivery)
    - resend-verification answers identically whether or not the email is registered

Design Decisions:
    - Routes are thin: parsing + cookie handling, everything else delegated to services
"""

import logging

from fastapi import APIRouter, Response, status

from sefask.api.dependencies import (
    AccountVerificationDep,
    CredentialManagerDep,
    CurrentUserDep,
    OptionalUserDep,
    TokenIssuerDep,
)
from sefask.config import get_settings
from sefask.core import account_lifecycle
from sefask.core.repository_protocols import UserLike
from sefask.schemas.auth import (
    ResendVerificationRequest,
    SigninRequest,
    SignupRequest,
    UserProfile,
    VerifyEmailRequest,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])

RESEND_MESSAGE = (
    "If an unverified account exists for this email, a new code has been sent."
)


def _identity(user: UserLike) -> dict:
    return {
        "user": str(user.id),
        "email": user.email,
        "isVerified": user.is_verified,
    }


def _set_auth_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        max_age=settings.jwt_expire_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.auth_cookie_secure,
        samesite="lax",
    )


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignupRequest,
    credentials: CredentialManagerDep,
    verification: AccountVerificationDep,
):
    """Create an unverified account and send its verification code."""
    user = await credentials.signup(
        body.first_name, body.last_name, body.email, body.password,
    )
    email_sent = await verification.deliver_code(user)
    return {**_identity(user), "emailSent": email_sent}


@router.post("/signin")
async def signin(
    body: SigninRequest,
    response: Response,
    credentials: CredentialManagerDep,
    tokens: TokenIssuerDep,
):
    """Check credentials and start a cookie session."""
    user = await credentials.signin(body.email, body.password)
    _set_auth_cookie(response, tokens.issue(user.id))
    return _identity(user)


@router.post("/signout")
async def signout(response: Response):
    response.delete_cookie(get_settings().auth_cookie_name)
    return {"message": "Signed out successfully"}


@router.post("/verify-email")
async def verify_email(
    body: VerifyEmailRequest,
    current_user: CurrentUserDep,
    verification: AccountVerificationDep,
):
    """Submit the emailed code for the signed-in account."""
    user = await verification.verify(current_user.id, body.code)
    return _identity(user)


@router.post("/resend-verification")
async def resend_verification(
    body: ResendVerificationRequest,
    current_user: OptionalUserDep,
    verification: AccountVerificationDep,
):
    """Issue a new code to the signed-in account, or to the email in the body."""
    email = current_user.email if current_user else body.email
    await verification.resend(email)
    return {"message": RESEND_MESSAGE}


@router.get("/me", response_model=UserProfile)
async def me(current_user: CurrentUserDep):
    profile = UserProfile.model_validate(current_user)
    profile.verification_status = account_lifecycle.status_of(current_user)
    return profile
