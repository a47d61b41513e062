"""Assignment Authoring — create/list/get/delete scoped to the owning author.

Invariants:
    - create() validates before writing; a ValidationFailedError means no row exists
    - start_time/end_time persisted only for live assignments
    - get/delete on a missing or foreign assignment raise the same ResourceNotFoundError
    - list() never returns question bodies

Design Decisions:
    - Questions parsed into core/questions.py variants before persistence, so the
      stored documents are normalized (stripped text, "true"/"false" answers, int indices)
    - Projections built here as plain dicts with the client-facing camelCase keys
"""

import logging
from datetime import datetime
from typing import Any, Mapping

from sefask.core.domain_types import (
    AssignmentId, UserId,
)
from sefask.core.errors import ResourceNotFoundError, ValidationFailedError
from sefask.core.questions import parse_question, total_points
from sefask.core.repository_protocols import (
    AssignmentLike, AssignmentRepository,
)
from sefask.core.validate_assignment import (
    as_integer, is_live, parse_datetime, validate_assignment,
)

logger = logging.getLogger(__name__)


def _iso(moment: datetime | None) -> str | None:
    return moment.isoformat() if moment else None


def summarize(assignment: AssignmentLike) -> dict:
    """Creation summary: id, title, type, questionCount, totalPoints."""
    return {
        "id": str(assignment.id),
        "title": assignment.title,
        "type": assignment.type,
        "questionCount": assignment.question_count,
        "totalPoints": assignment.total_points,
    }


def list_item(assignment: AssignmentLike) -> dict:
    """Listing projection — schedule and counters, no question bodies."""
    return {
        **summarize(assignment),
        "startTime": _iso(assignment.start_time),
        "endTime": _iso(assignment.end_time),
        "isActive": assignment.is_active,
        "createdAt": _iso(assignment.created_at),
    }


def detail(assignment: AssignmentLike) -> dict:
    """Full document, including questions."""
    return {
        **list_item(assignment),
        "description": assignment.description,
        "duration": assignment.duration,
        "deadline": _iso(assignment.deadline),
        "questions": assignment.questions,
        "author": str(assignment.author_id),
        "updatedAt": _iso(assignment.updated_at),
    }


class AssignmentAuthoringService:
    """Assignment entry points; every call carries the acting author's id."""

    def __init__(self, assignments: AssignmentRepository):
        self.assignments = assignments

    async def create(self, author_id: UserId, payload: Mapping[str, Any]) -> dict:
        validation = validate_assignment(payload)
        if not validation.ok:
            raise ValidationFailedError(
                validation.field_errors, validation.question_errors,
                message=(
                    "Invalid assignment data" if validation.field_errors
                    else "Invalid questions data"
                ),
            )

        questions = [parse_question(q) for q in payload["questions"]]
        live = is_live(payload)
        duration = payload.get("duration")
        assignment = await self.assignments.insert(
            author_id=author_id,
            title=payload["title"].strip(),
            description=payload["description"].strip(),
            type=payload["type"].strip(),
            start_time=parse_datetime(payload.get("startTime")) if live else None,
            end_time=parse_datetime(payload.get("endTime")) if live else None,
            duration=as_integer(duration) if duration is not None else None,
            deadline=parse_datetime(payload.get("deadline")),
            questions=[q.to_document() for q in questions],
            question_count=len(questions),
            total_points=total_points(questions),
        )
        logger.info(
            "Assignment created",
            extra={"user_id": author_id, "assignment_id": assignment.id},
        )
        return summarize(assignment)

    async def list(self, author_id: UserId) -> list[dict]:
        return [list_item(a) for a in await self.assignments.find_by_author(author_id)]

    async def get(self, author_id: UserId, assignment_id: AssignmentId) -> dict:
        assignment = await self.assignments.find_by_id_and_author(
            assignment_id, author_id,
        )
        if assignment is None:
            raise ResourceNotFoundError("Assignment", str(assignment_id))
        return detail(assignment)

    async def delete(self, author_id: UserId, assignment_id: AssignmentId) -> None:
        deleted = await self.assignments.delete_by_id_and_author(
            assignment_id, author_id,
        )
        if not deleted:
            raise ResourceNotFoundError("Assignment", str(assignment_id))
        logger.info(
            "Assignment deleted",
            extra={"user_id": author_id, "assignment_id": assignment_id},
        )
