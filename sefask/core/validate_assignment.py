"""Assignment & Question Validation — pure rules that gate assignment creation.

Invariants:
    - Rules are applied independently: every violation is collected, nothing short-circuits
    - validate_question returns field -> message; empty dict means the question is valid
    - Multiple-choice answer index is range-checked against len(options), 0 when options are invalid
    - Options are non-empty strings; anything else is an options error, never coerced
    - Lengths and integers stay within the column bounds in domain_types.py, so
      oversized input is a field error and never a storage fault
    - Live assignments need both startTime and endTime, and endTime strictly after startTime
    - Only failing questions are reported, in index order

Design Decisions:
    - Operates on the raw camelCase payload: the client-facing field names are the error keys
    - Datetimes without tzinfo are read as UTC so naive and aware inputs compare safely
    - Integral floats (2.0) accepted as integers: JSON numbers do not distinguish them
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping

from sefask.core.domain_types import (
    LIVE_ASSIGNMENT_TYPE,
    MAX_ASSIGNMENT_TYPE_LENGTH,
    MAX_STORED_INTEGER,
    MAX_TITLE_LENGTH,
    MIN_MULTIPLE_CHOICE_OPTIONS,
    MIN_QUESTION_POINTS,
    TRUE_FALSE_ANSWERS,
    QuestionKind,
)
from sefask.core.errors import QuestionErrors

_QUESTION_KINDS = frozenset(k.value for k in QuestionKind)
_REQUIRED_FIELDS = (
    ("title", "Title is required"),
    ("description", "Description is required"),
    ("type", "Type is required"),
)
_MAX_LENGTHS = (
    ("title", MAX_TITLE_LENGTH, "Title"),
    ("type", MAX_ASSIGNMENT_TYPE_LENGTH, "Type"),
)


@dataclass
class AssignmentValidation:
    """Outcome of validate_assignment — assignment-level and per-question errors."""
    field_errors: dict[str, str] = field(default_factory=dict)
    question_errors: list[QuestionErrors] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.field_errors and not self.question_errors


# ─── Scalar helpers ──────────────────────────────────────────────

def as_integer(value: Any) -> int | None:
    """Return value as int if it is integral (bools excluded), else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def parse_datetime(value: Any) -> datetime | None:
    """Parse an ISO-8601 string (or pass through a datetime) as aware UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_live(payload: Mapping[str, Any]) -> bool:
    kind = payload.get("type")
    return isinstance(kind, str) and kind.strip() == LIVE_ASSIGNMENT_TYPE


def _sum_points(questions: list) -> int:
    return sum(as_integer(q.get("points")) for q in questions)


def _is_option(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


# ─── Questions ───────────────────────────────────────────────────

def validate_question(question: Any) -> dict[str, str]:
    """Validate one question payload. Returns field -> message for each violation."""
    q: Mapping[str, Any] = question if isinstance(question, Mapping) else {}
    errors: dict[str, str] = {}
    kind = q.get("type")

    if not isinstance(kind, str) or kind not in _QUESTION_KINDS:
        errors["type"] = "Invalid question type"

    text = q.get("text")
    if not isinstance(text, str) or not text.strip():
        errors["text"] = "Question text is required"

    points = as_integer(q.get("points"))
    if points is None or points < MIN_QUESTION_POINTS:
        errors["points"] = "Points must be at least 1"
    elif points > MAX_STORED_INTEGER:
        errors["points"] = f"Points must be at most {MAX_STORED_INTEGER}"

    answer = q.get("correctAnswer")

    if kind == QuestionKind.MULTIPLE_CHOICE.value:
        options = q.get("options")
        valid_options = (
            isinstance(options, list)
            and len(options) >= MIN_MULTIPLE_CHOICE_OPTIONS
        )
        if not valid_options:
            errors["options"] = (
                "Multiple choice questions must have at least 2 options"
            )
        elif not all(_is_option(o) for o in options):
            errors["options"] = "Each option must be a non-empty string"
        option_count = len(options) if isinstance(options, list) else 0
        index = as_integer(answer)
        if index is None or not 0 <= index < option_count:
            errors["correctAnswer"] = (
                "Invalid correct answer index for multiple choice"
            )

    elif kind == QuestionKind.TRUE_FALSE.value:
        if not isinstance(answer, str) or answer not in TRUE_FALSE_ANSWERS:
            errors["correctAnswer"] = (
                "True/False questions must have true or false as answer"
            )

    elif kind == QuestionKind.SHORT_ANSWER.value:
        if not isinstance(answer, str) or not answer:
            errors["correctAnswer"] = (
                "Short answer questions must have a string answer"
            )

    return errors


# ─── Assignment ──────────────────────────────────────────────────

def validate_assignment(payload: Mapping[str, Any]) -> AssignmentValidation:
    """Validate a create-assignment payload. Collects every error before returning."""
    result = AssignmentValidation()
    errors = result.field_errors

    for name, message in _REQUIRED_FIELDS:
        value = payload.get(name)
        if not isinstance(value, str) or not value.strip():
            errors[name] = message

    for name, limit, label in _MAX_LENGTHS:
        value = payload.get(name)
        if isinstance(value, str) and len(value.strip()) > limit:
            errors[name] = f"{label} must be at most {limit} characters"

    questions = payload.get("questions")
    if not isinstance(questions, list):
        errors["questions"] = "Questions array is required"

    _validate_schedule(payload, errors)
    _validate_optional_fields(payload, errors)

    if isinstance(questions, list):
        for index, question in enumerate(questions):
            question_errors = validate_question(question)
            if question_errors:
                result.question_errors.append(
                    QuestionErrors(index=index, errors=question_errors),
                )
        if not result.question_errors and _sum_points(questions) > MAX_STORED_INTEGER:
            errors["questions"] = (
                f"Total points must be at most {MAX_STORED_INTEGER}"
            )
    return result


def _validate_schedule(payload: Mapping[str, Any], errors: dict[str, str]) -> None:
    """Live assignments: both bounds required and end strictly after start."""
    if not is_live(payload):
        return

    raw_start, raw_end = payload.get("startTime"), payload.get("endTime")
    if not _is_present(raw_start):
        errors["startTime"] = "Start time is required for live assignments"
    if not _is_present(raw_end):
        errors["endTime"] = "End time is required for live assignments"
    if not (_is_present(raw_start) and _is_present(raw_end)):
        return

    start, end = parse_datetime(raw_start), parse_datetime(raw_end)
    if start is None:
        errors["startTime"] = "Start time must be a valid ISO-8601 datetime"
    if end is None:
        errors["endTime"] = "End time must be a valid ISO-8601 datetime"
    if start is not None and end is not None and end <= start:
        errors["endTime"] = "End time must be after start time"


def _validate_optional_fields(
    payload: Mapping[str, Any], errors: dict[str, str],
) -> None:
    deadline = payload.get("deadline")
    if _is_present(deadline) and parse_datetime(deadline) is None:
        errors["deadline"] = "Deadline must be a valid ISO-8601 datetime"

    duration = payload.get("duration")
    if duration is not None:
        minutes = as_integer(duration)
        if minutes is None or minutes < 1:
            errors["duration"] = "Duration must be a positive number of minutes"
        elif minutes > MAX_STORED_INTEGER:
            errors["duration"] = (
                f"Duration must be at most {MAX_STORED_INTEGER} minutes"
            )
