"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async for storage and email (implementations do IO); hashing and tokens are
      CPU-bound and stay sync
    - Repositories raise DatabaseError / DuplicateRecordError (core/errors.py),
      never driver exceptions
"""

from datetime import datetime
from typing import Any, Protocol
from uuid import UUID

from sefask.core.domain_types import AssignmentId, UserId


class UserLike(Protocol):
    """Structural contract for User objects passed between services and routes."""
    id: UUID
    first_name: str
    last_name: str
    email: str
    password_hash: str
    is_verified: bool
    verification_code: str | None
    verification_code_expires_at: datetime | None


class AssignmentLike(Protocol):
    """Structural contract for persisted assignments."""
    id: UUID
    title: str
    description: str
    type: str
    start_time: datetime | None
    end_time: datetime | None
    duration: int | None
    deadline: datetime | None
    questions: list[dict[str, Any]]
    question_count: int
    total_points: int
    author_id: UUID
    is_active: bool
    created_at: datetime
    updated_at: datetime


class UserRepository(Protocol):
    """Contract for user persistence — implemented by shell."""
    async def find_by_email(self, email: str) -> UserLike | None: ...
    async def find_by_id(self, user_id: UserId) -> UserLike | None: ...
    async def insert(self, **fields: Any) -> UserLike: ...
    async def save(self, user: UserLike) -> UserLike: ...


class AssignmentRepository(Protocol):
    """Contract for assignment persistence — every lookup is scoped to the author."""
    async def find_by_author(self, author_id: UserId) -> list[AssignmentLike]: ...
    async def find_by_id_and_author(
        self, assignment_id: AssignmentId, author_id: UserId,
    ) -> AssignmentLike | None: ...
    async def insert(self, **fields: Any) -> AssignmentLike: ...
    async def delete_by_id_and_author(
        self, assignment_id: AssignmentId, author_id: UserId,
    ) -> bool: ...


class PasswordHasher(Protocol):
    """Contract for one-way password digests."""
    def hash(self, plaintext: str) -> str: ...
    def matches(self, plaintext: str, digest: str) -> bool: ...


class EmailSender(Protocol):
    """Contract for outbound verification email. Raises EmailDeliveryError on failure."""
    async def send_verification_code(
        self, to_email: str, first_name: str, code: str,
    ) -> None: ...


class TokenIssuer(Protocol):
    """Contract for opaque session tokens. decode raises AuthenticationError."""
    def issue(self, user_id: UserId) -> str: ...
    def decode(self, token: str) -> UserId: ...
