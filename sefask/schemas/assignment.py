"""Assignment Schemas — create-assignment request body.

Invariants:
    - Every field is typed Any: shape and type errors are reported by
      core/validate_assignment.py with field-level messages
    - to_payload() yields the camelCase mapping the core validator reads

Design Decisions:
    - Loose boundary schema over a discriminated union: a malformed question must
      produce {index, errors} entries, not a generic Pydantic failure
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AssignmentCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Any = None
    description: Any = None
    type: Any = None
    start_time: Any = Field(None, alias="startTime")
    end_time: Any = Field(None, alias="endTime")
    duration: Any = None
    deadline: Any = None
    questions: Any = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
