"""User Repository — SQLAlchemy implementation of core UserRepository.

Invariants:
    - Email lookups use the normalized (lower-cased) form
    - insert() commits; a unique-index violation becomes DuplicateRecordError
    - Other SQLAlchemy failures become DatabaseError with the failing operation name

Design Decisions:
    - Commit per write: every operation is a single-row unit of work, no
      multi-statement transactions needed
"""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sefask.core.domain_types import UserId
from sefask.core.errors import DatabaseError, DuplicateRecordError
from sefask.models.user import User

logger = logging.getLogger(__name__)


class SqlUserRepository:
    """User persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_email(self, email: str) -> User | None:
        try:
            result = await self.db.execute(
                select(User).where(User.email == email),
            )
        except SQLAlchemyError as e:
            logger.error(f"User lookup by email failed: {e}", extra={"operation": "select"})
            raise DatabaseError("User lookup failed", "select")
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: UserId) -> User | None:
        try:
            return await self.db.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error(f"User lookup by id failed: {e}", extra={"operation": "select"})
            raise DatabaseError("User lookup failed", "select")

    async def insert(self, **fields: Any) -> User:
        user = User(**fields)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateRecordError("User", "email")
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"User insert failed: {e}", extra={"operation": "insert"})
            raise DatabaseError("User insert failed", "insert")
        await self.db.refresh(user)
        return user

    async def save(self, user: User) -> User:
        self.db.add(user)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"User update failed: {e}",
                extra={"operation": "update", "user_id": user.id},
            )
            raise DatabaseError("User update failed", "update")
        await self.db.refresh(user)
        return user
