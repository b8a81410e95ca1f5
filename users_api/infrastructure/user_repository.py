"""In-Memory User Repository — process-local store behind a single lock.

Invariants:
    - Every operation (reads included) holds _lock: no torn reads, no lost updates
    - _users preserves insertion order; overwriting a key keeps its position
    - Ids are unique; a fresh uuid4 is assigned when a record arrives without one
    - Only insert can fail (DuplicateIdentityError), and only as an Err value

Design Decisions:
    - dict keyed by UserId: O(1) lookup/overwrite/delete, ordered iteration for paging
    - One threading.Lock: contention is low and every critical section is O(1)
      apart from the page slice
    - Constructed and owned by the application lifespan, injected into handlers;
      no module-level instance
"""

import logging
import threading
from itertools import islice
from uuid import uuid4

from users_api.core.domain_types import UserId
from users_api.core.errors import DuplicateIdentityError
from users_api.core.results import Ok, Err, Result
from users_api.core.user_record import UserRecord

logger = logging.getLogger(__name__)


class InMemoryUserRepository:
    """UserRepository implementation backed by an ordered dict."""

    def __init__(self) -> None:
        self._users: dict[UserId, UserRecord] = {}
        self._lock = threading.Lock()

    def find_by_id(self, user_id: UserId) -> UserRecord | None:
        with self._lock:
            return self._users.get(user_id)

    def insert(self, record: UserRecord) -> Result[UserRecord]:
        with self._lock:
            if not record.has_identity:
                record = record.with_id(self._fresh_id())
            elif record.id in self._users:
                return Err(DuplicateIdentityError(str(record.id)))
            self._users[record.id] = record
        logger.debug(f"Inserted user {record.id}", extra={"user_id": str(record.id)})
        return Ok(record)

    def upsert_by_id(self, record: UserRecord) -> Result[tuple[UserRecord, bool]]:
        with self._lock:
            was_inserted = record.id not in self._users
            self._users[record.id] = record
        logger.debug(
            f"Upserted user {record.id} (inserted={was_inserted})",
            extra={"user_id": str(record.id)},
        )
        return Ok((record, was_inserted))

    def delete(self, user_id: UserId) -> None:
        with self._lock:
            self._users.pop(user_id, None)

    def list_page(
        self, page_number: int, page_size: int,
    ) -> tuple[list[UserRecord], int]:
        offset = (page_number - 1) * page_size
        with self._lock:
            total_count = len(self._users)
            if offset < 0 or page_size < 1 or offset >= total_count:
                return [], total_count
            items = list(islice(self._users.values(), offset, offset + page_size))
        return items, total_count

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    def _fresh_id(self) -> UserId:
        """Caller holds _lock."""
        user_id = UserId(uuid4())
        while user_id in self._users:
            user_id = UserId(uuid4())
        return user_id
