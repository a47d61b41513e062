"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, AssignmentId wrap UUIDs — never use bare UUID in domain logic
    - QuestionKind enumerates the only three accepted question types
    - Verification codes are exactly VERIFICATION_CODE_LENGTH ASCII digits

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - Assignment type stays a free string; only LIVE_ASSIGNMENT_TYPE carries extra rules
"""

from datetime import timedelta
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
AssignmentId = NewType("AssignmentId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class QuestionKind(str, Enum):
    """Accepted question types — values match the wire format."""
    MULTIPLE_CHOICE = "multiple-choice"
    TRUE_FALSE = "true-false"
    SHORT_ANSWER = "short-answer"


class VerificationStatus(str, Enum):
    """Account verification states. VERIFIED is terminal."""
    UNVERIFIED = "unverified"
    VERIFIED = "verified"


# ─── Constants ───────────────────────────────────────────────────

LIVE_ASSIGNMENT_TYPE = "live"
TRUE_FALSE_ANSWERS: frozenset[str] = frozenset({"true", "false"})
MIN_MULTIPLE_CHOICE_OPTIONS = 2
MIN_QUESTION_POINTS = 1
MIN_PASSWORD_LENGTH = 6
VERIFICATION_CODE_LENGTH = 6
VERIFICATION_CODE_TTL = timedelta(minutes=15)

# Column bounds: inputs beyond these are field errors, never storage faults
MAX_NAME_LENGTH = 100
MAX_TITLE_LENGTH = 300
MAX_ASSIGNMENT_TYPE_LENGTH = 50
MAX_STORED_INTEGER = 2_147_483_647
