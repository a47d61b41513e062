"""Auth Schemas — signup/signin/verification request bodies and the user profile.

Invariants:
    - Request fields are optional at the schema level: missing fields surface as
      field errors from core/validate_credentials.py, not as Pydantic 422s
    - UserProfile never exposes password_hash or verification_code
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from sefask.core.domain_types import VerificationStatus


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )


class SignupRequest(_CamelModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    password: str | None = None


class SigninRequest(_CamelModel):
    email: str | None = None
    password: str | None = None


class VerifyEmailRequest(_CamelModel):
    code: str | None = None


class ResendVerificationRequest(_CamelModel):
    email: str | None = None


class UserProfile(_CamelModel):
    """Public-facing user data."""
    id: UUID
    first_name: str
    last_name: str
    email: str
    is_verified: bool
    created_at: datetime
    verification_status: VerificationStatus | None = None
