"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Storage accessed only through the UserRepository protocol
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - Synchronous methods: the store is in-process and never blocks on IO
"""

from typing import Protocol

from users_api.core.domain_types import UserId
from users_api.core.results import Result
from users_api.core.user_record import UserRecord


class UserRepository(Protocol):
    """Contract for user storage — implemented by shell."""

    def find_by_id(self, user_id: UserId) -> UserRecord | None:
        """Current record or None. No side effects."""
        ...

    def insert(self, record: UserRecord) -> Result[UserRecord]:
        """Store record, assigning a fresh id when record.id is empty.

        Err(DuplicateIdentityError) when a supplied id is already taken.
        """
        ...

    def upsert_by_id(self, record: UserRecord) -> Result[tuple[UserRecord, bool]]:
        """Overwrite the record with record.id, or insert it under that id.

        Ok value is (stored_record, was_inserted).
        """
        ...

    def delete(self, user_id: UserId) -> None:
        """Remove record if present. Unknown ids are a no-op."""
        ...

    def list_page(
        self, page_number: int, page_size: int,
    ) -> tuple[list[UserRecord], int]:
        """Records of one page in insertion order, plus the full collection size."""
        ...
