"""Dependency Injection — wires settings, adapters and services into FastAPI routes.

Invariants:
    - Services are request-scoped (one AsyncSession each); adapters are process-wide
    - get_current_user is the only place the auth cookie is read
    - Tests override get_db and get_email_sender via app.dependency_overrides

Design Decisions:
    - lru_cache'd adapter factories: built once from settings, replaceable in tests
    - Annotated aliases keep route signatures short
"""

from datetime import timedelta
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from sefask.config import Settings, get_settings
from sefask.core.errors import AuthenticationError
from sefask.core.repository_protocols import (
    EmailSender, PasswordHasher, TokenIssuer, UserLike,
)
from sefask.infrastructure.database import get_db
from sefask.infrastructure.email_client import ResendEmailSender
from sefask.infrastructure.password_hasher import BcryptPasswordHasher
from sefask.infrastructure.token_issuer import JWTTokenIssuer
from sefask.services.account_verification import AccountVerificationService
from sefask.services.assignment_authoring import AssignmentAuthoringService
from sefask.services.assignment_repository import SqlAssignmentRepository
from sefask.services.credential_manager import CredentialManager
from sefask.services.user_repository import SqlUserRepository


def _code_ttl(settings: Settings) -> timedelta:
    return timedelta(minutes=settings.verification_code_ttl_minutes)


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher(rounds=get_settings().bcrypt_rounds)


@lru_cache
def get_token_issuer() -> TokenIssuer:
    settings = get_settings()
    return JWTTokenIssuer(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_in=timedelta(days=settings.jwt_expire_days),
    )


@lru_cache
def get_email_sender() -> EmailSender:
    settings = get_settings()
    return ResendEmailSender(
        api_key=settings.resend_api_key,
        from_email=settings.from_email,
        base_url=settings.resend_base_url,
        timeout_seconds=settings.email_timeout_seconds,
        code_ttl=_code_ttl(settings),
    )


def get_credential_manager(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> CredentialManager:
    return CredentialManager(
        SqlUserRepository(db), hasher, code_ttl=_code_ttl(get_settings()),
    )


def get_account_verification(
    db: AsyncSession = Depends(get_db),
    email_sender: EmailSender = Depends(get_email_sender),
) -> AccountVerificationService:
    return AccountVerificationService(
        SqlUserRepository(db), email_sender,
        code_ttl=_code_ttl(get_settings()),
    )


def get_assignment_authoring(
    db: AsyncSession = Depends(get_db),
) -> AssignmentAuthoringService:
    return AssignmentAuthoringService(SqlAssignmentRepository(db))


async def _resolve_user(
    token: str, db: AsyncSession, tokens: TokenIssuer,
) -> UserLike:
    user = await SqlUserRepository(db).find_by_id(tokens.decode(token))
    if user is None:
        raise AuthenticationError("Invalid token. User not found.")
    return user


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> UserLike:
    """Require a valid session cookie."""
    token = request.cookies.get(get_settings().auth_cookie_name)
    if not token:
        raise AuthenticationError("Access denied. No token provided.")
    return await _resolve_user(token, db, tokens)


async def get_optional_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> UserLike | None:
    """Session cookie if present and valid, else None."""
    token = request.cookies.get(get_settings().auth_cookie_name)
    if not token:
        return None
    try:
        return await _resolve_user(token, db, tokens)
    except AuthenticationError:
        return None


CredentialManagerDep = Annotated[CredentialManager, Depends(get_credential_manager)]
AccountVerificationDep = Annotated[
    AccountVerificationService, Depends(get_account_verification),
]
AssignmentAuthoringDep = Annotated[
    AssignmentAuthoringService, Depends(get_assignment_authoring),
]
TokenIssuerDep = Annotated[TokenIssuer, Depends(get_token_issuer)]
CurrentUserDep = Annotated[UserLike, Depends(get_current_user)]
OptionalUserDep = Annotated[UserLike | None, Depends(get_optional_user)]
