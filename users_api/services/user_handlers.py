"""User Resource Handlers — get, create, replace, patch, delete and list.

Invariants:
    - Every call returns a HandlerOutcome; expected failures are never raised
    - Replace on an unknown id inserts under that exact id (201); Patch on an
      unknown id is 404 and never creates
    - Replace builds the record fresh from the payload: omitted names become ""
    - A rejected patch leaves the stored record untouched
    - DuplicateIdentityError from the repository collapses to 204 (logged)
    - Paging inputs are clamped (page >= 1, 1 <= size <= 20), never rejected

Design Decisions:
    - Repository injected per instance: no module-level store, tests pass fakes
    - Link construction injected into list_users: URL shape belongs to the router
"""

import logging
from dataclasses import dataclass
from typing import Any

from fastapi import status

from users_api.core.domain_types import UserId, parse_user_id
from users_api.core.errors import (
    ErrorContext,
    MalformedRequestError,
    ResourceNotFoundError,
    UsersApiError,
    ValidationFailedError,
)
from users_api.core.mapping import (
    record_from_creation,
    record_from_update,
    to_output,
    to_update_document,
)
from users_api.core.pagination import (
    LinkBuilder,
    PaginationMetadata,
    build_pagination,
    clamp_page_number,
    clamp_page_size,
)
from users_api.core.patching import apply_patch
from users_api.core.repository_protocols import UserRepository
from users_api.core.results import Err
from users_api.core.user_record import UserRecord
from users_api.core.validation import (
    validate_creation,
    validate_patched,
    validate_update,
)

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "User"


@dataclass
class HandlerOutcome:
    """What the router should send back."""
    status_code: int
    body: Any = None
    created_id: UserId | None = None
    pagination: PaginationMetadata | None = None
    error: UsersApiError | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


def _failure(error: UsersApiError) -> HandlerOutcome:
    return HandlerOutcome(status_code=error.http_status, error=error)


def _not_found(raw_id: str) -> HandlerOutcome:
    return _failure(ResourceNotFoundError(RESOURCE_TYPE, raw_id))


def _created(user_id: UserId) -> HandlerOutcome:
    return HandlerOutcome(
        status_code=status.HTTP_201_CREATED, body=user_id, created_id=user_id,
    )


def _no_content() -> HandlerOutcome:
    return HandlerOutcome(status_code=status.HTTP_204_NO_CONTENT)


class UserHandlers:
    """Resource handlers bound to one repository."""

    def __init__(self, repository: UserRepository):
        self._repository = repository

    def get_by_id(self, raw_id: str) -> HandlerOutcome:
        user_id = parse_user_id(raw_id)
        if user_id is None:
            return _not_found(raw_id)
        record = self._repository.find_by_id(user_id)
        if record is None:
            return _not_found(raw_id)
        return HandlerOutcome(status_code=status.HTTP_200_OK, body=to_output(record))

    def create(self, payload: Any | None) -> HandlerOutcome:
        if payload is None:
            return _failure(MalformedRequestError("Request body is required"))

        validation = validate_creation(payload)
        if not validation.ok:
            return _failure(ValidationFailedError(validation.errors))

        result = self._repository.insert(record_from_creation(validation.value))
        if isinstance(result, Err):
            return self._collapse_duplicate(result)
        user_id = result.value.id
        logger.info(f"Created user {user_id}", extra={"user_id": str(user_id)})
        return _created(user_id)

    def replace(self, raw_id: str, payload: Any | None) -> HandlerOutcome:
        user_id = parse_user_id(raw_id)
        if user_id is None or payload is None:
            return _failure(MalformedRequestError(
                "A valid user id and a request body are required",
                ErrorContext(user_id=raw_id),
            ))

        validation = validate_update(payload)
        if not validation.ok:
            return _failure(ValidationFailedError(
                validation.errors, ErrorContext(user_id=raw_id),
            ))

        return self._store(record_from_update(user_id, validation.value))

    def patch(
        self, raw_id: str, operations: list[dict[str, Any]] | None,
    ) -> HandlerOutcome:
        if operations is None:
            return _failure(MalformedRequestError("Patch document is required"))
        user_id = parse_user_id(raw_id)
        if user_id is None:
            return _not_found(raw_id)
        current = self._repository.find_by_id(user_id)
        if current is None:
            return _not_found(raw_id)

        patched = apply_patch(to_update_document(current), operations)
        if not patched.ok:
            return _failure(ValidationFailedError(
                patched.errors, ErrorContext(user_id=raw_id),
            ))
        validation = validate_patched(patched.value)
        if not validation.ok:
            return _failure(ValidationFailedError(
                validation.errors, ErrorContext(user_id=raw_id),
            ))

        return self._store(record_from_update(user_id, validation.value))

    def delete(self, raw_id: str) -> HandlerOutcome:
        user_id = parse_user_id(raw_id)
        if user_id is None or self._repository.find_by_id(user_id) is None:
            return _not_found(raw_id)
        self._repository.delete(user_id)
        logger.info(f"Deleted user {user_id}", extra={"user_id": str(user_id)})
        return _no_content()

    def list_users(
        self, page_number: int, page_size: int, link_for: LinkBuilder,
    ) -> HandlerOutcome:
        page_number = clamp_page_number(page_number)
        page_size = clamp_page_size(page_size)
        records, total_count = self._repository.list_page(page_number, page_size)
        logger.debug(
            f"Listed {len(records)} of {total_count} users",
            extra={"page_number": page_number, "page_size": page_size},
        )
        return HandlerOutcome(
            status_code=status.HTTP_200_OK,
            body=[to_output(r) for r in records],
            pagination=build_pagination(
                page_number, page_size, total_count, link_for,
            ),
        )

    def _store(self, record: UserRecord) -> HandlerOutcome:
        """Upsert and translate was_inserted into 201 vs 204."""
        result = self._repository.upsert_by_id(record)
        if isinstance(result, Err):
            return self._collapse_duplicate(result)
        stored, was_inserted = result.value
        logger.info(
            f"{'Inserted' if was_inserted else 'Updated'} user {stored.id}",
            extra={"user_id": str(stored.id)},
        )
        if was_inserted:
            return _created(stored.id)
        return _no_content()

    def _collapse_duplicate(self, result: Err) -> HandlerOutcome:
        # Externally a duplicate identity reads as a successful no-op write.
        logger.warning(
            f"Unexpected repository conflict: {result.error.message}",
            extra={
                "error_code": result.error.code,
                "user_id": result.error.context.user_id,
            },
        )
        return _no_content()
