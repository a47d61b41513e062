"""User ORM — persists account identity, password digest and verification state.

Invariants:
    - id is UUID primary key
    - email is unique and stored normalized (stripped, lower-cased)
    - is_verified True implies verification_code and verification_code_expires_at are NULL
    - password_hash is a bcrypt digest, never plaintext

Design Decisions:
    - Verification code lives on the user row (one pending code per account)
      rather than a separate table: resend overwrites, verify clears
    - updated_at refreshed by SQLAlchemy onupdate on every save
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from sefask.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Account aggregate — owns assignments."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(100), nullable=False)
    is_verified: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    verification_code: Mapped[str | None] = mapped_column(
        String(6), nullable=True,
    )
    verification_code_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    assignments: Mapped[list["Assignment"]] = relationship(
        "Assignment", back_populates="author",
        cascade="all, delete-orphan", lazy="raise",
    )
