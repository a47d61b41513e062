"""Assignment Repository — SQLAlchemy implementation of core AssignmentRepository.

Invariants:
    - Every read and delete filters by author_id: another author's assignment
      behaves exactly like a missing one
    - find_by_author orders newest first
    - delete_by_id_and_author returns False (not an error) when nothing matched

Design Decisions:
    - Single DELETE ... WHERE id AND author_id statement: no read-then-delete race
"""

import logging
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sefask.core.domain_types import AssignmentId, UserId
from sefask.core.errors import DatabaseError
from sefask.models.assignment import Assignment

logger = logging.getLogger(__name__)


class SqlAssignmentRepository:
    """Assignment persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_author(self, author_id: UserId) -> list[Assignment]:
        try:
            result = await self.db.execute(
                select(Assignment)
                .where(Assignment.author_id == author_id)
                .order_by(Assignment.created_at.desc()),
            )
        except SQLAlchemyError as e:
            logger.error(f"Assignment listing failed: {e}", extra={"user_id": author_id})
            raise DatabaseError("Assignment listing failed", "select")
        return list(result.scalars().all())

    async def find_by_id_and_author(
        self, assignment_id: AssignmentId, author_id: UserId,
    ) -> Assignment | None:
        try:
            result = await self.db.execute(
                select(Assignment)
                .where(Assignment.id == assignment_id)
                .where(Assignment.author_id == author_id),
            )
        except SQLAlchemyError as e:
            logger.error(
                f"Assignment lookup failed: {e}",
                extra={"assignment_id": assignment_id},
            )
            raise DatabaseError("Assignment lookup failed", "select")
        return result.scalar_one_or_none()

    async def insert(self, **fields: Any) -> Assignment:
        assignment = Assignment(**fields)
        self.db.add(assignment)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Assignment insert failed: {e}", extra={"operation": "insert"})
            raise DatabaseError("Assignment insert failed", "insert")
        await self.db.refresh(assignment)
        return assignment

    async def delete_by_id_and_author(
        self, assignment_id: AssignmentId, author_id: UserId,
    ) -> bool:
        try:
            result = await self.db.execute(
                delete(Assignment)
                .where(Assignment.id == assignment_id)
                .where(Assignment.author_id == author_id),
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Assignment delete failed: {e}",
                extra={"assignment_id": assignment_id},
            )
            raise DatabaseError("Assignment delete failed", "delete")
        return result.rowcount > 0
