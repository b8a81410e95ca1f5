"""Representation Mapping — explicit conversions between wire shapes and UserRecord.

Invariants:
    - Creation and update conversions build a fresh record (no field carried over)
    - record_from_update keeps the caller's id exactly; only insert assigns ids
    - to_update_document emits camelCase members, ready for JSON Patch paths
"""

from typing import Any

from users_api.core.domain_types import UserId
from users_api.core.user_record import UserRecord
from users_api.schemas.user import UserCreate, UserUpdate, UserOut


def record_from_creation(dto: UserCreate) -> UserRecord:
    return UserRecord(
        login=dto.login or "",
        first_name=dto.first_name,
        last_name=dto.last_name,
    )


def record_from_update(user_id: UserId, dto: UserUpdate) -> UserRecord:
    return UserRecord(
        id=user_id,
        login=dto.login,
        first_name=dto.first_name,
        last_name=dto.last_name,
    )


def to_output(record: UserRecord) -> UserOut:
    return UserOut(id=record.id, login=record.login, full_name=record.full_name)


def to_update_document(record: UserRecord) -> dict[str, Any]:
    """Materialize the patchable view of a stored record."""
    return {
        "login": record.login,
        "firstName": record.first_name,
        "lastName": record.last_name,
    }
