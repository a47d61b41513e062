"""Assignment Routes — authoring endpoints, all scoped to the signed-in author.

Invariants:
    - Every endpoint requires a session cookie (CurrentUserDep)
    - A foreign or missing assignment id yields the same 404
    - Malformed ids are rejected by FastAPI's UUID parsing before reaching services
"""

import logging
from uuid import UUID

from fastapi import APIRouter, status

from sefask.api.dependencies import AssignmentAuthoringDep, CurrentUserDep
from sefask.schemas.assignment import AssignmentCreate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/assignments", tags=["assignments"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_assignment(
    body: AssignmentCreate,
    current_user: CurrentUserDep,
    authoring: AssignmentAuthoringDep,
):
    summary = await authoring.create(current_user.id, body.to_payload())
    return {
        "success": True,
        "message": "Assignment created successfully",
        "data": summary,
    }


@router.get("")
async def list_assignments(
    current_user: CurrentUserDep, authoring: AssignmentAuthoringDep,
):
    """Author's assignments, newest first, without question bodies."""
    return {"success": True, "data": await authoring.list(current_user.id)}


@router.get("/{assignment_id}")
async def get_assignment(
    assignment_id: UUID,
    current_user: CurrentUserDep,
    authoring: AssignmentAuthoringDep,
):
    return {
        "success": True,
        "data": await authoring.get(current_user.id, assignment_id),
    }


@router.delete("/{assignment_id}")
async def delete_assignment(
    assignment_id: UUID,
    current_user: CurrentUserDep,
    authoring: AssignmentAuthoringDep,
):
    await authoring.delete(current_user.id, assignment_id)
    return {"success": True, "message": "Assignment deleted successfully"}
