"""Validation Pipeline — pure checks run before any payload reaches the repository.

Invariants:
    - Every check returns a fresh ValidationResult (no shared error accumulator)
    - Structural validation runs first; the login rule runs only on a well-formed payload
    - Login is checked on the creation path only and must consist entirely of
      ASCII letters/digits (fullmatch: a trailing newline is rejected)
    - Patched documents must pass the same structural check as Replace and
      may not carry members outside the update representation

Design Decisions:
    - Structural checks delegate to the pydantic schemas: one definition of shape
    - ValidationResult carries value OR errors so callers branch on .ok, never on exceptions
"""

import re
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from users_api.core.errors import FieldError
from users_api.schemas.user import UserCreate, UserUpdate, UPDATE_FIELDS

T = TypeVar("T")

LOGIN_PATTERN = re.compile(r"[A-Za-z0-9]+")


@dataclass
class ValidationResult(Generic[T]):
    """Outcome of one validation call — value on success, field errors otherwise."""
    value: T | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def field_errors_from(exc: ValidationError) -> list[FieldError]:
    """Flatten pydantic errors into field/message pairs."""
    return [
        FieldError(
            field=".".join(str(loc) for loc in e["loc"]) or "body",
            message=e["msg"],
            type=e["type"],
        )
        for e in exc.errors()
    ]


def check_login(login: str | None) -> list[FieldError]:
    """Domain rule: login present and letters/digits only."""
    if not login or not LOGIN_PATTERN.fullmatch(login):
        return [FieldError("login", "Invalid login format", "invalid_login")]
    return []


def _validate_structure(model: type[BaseModel], payload: Any) -> ValidationResult:
    try:
        return ValidationResult(value=model.model_validate(payload))
    except ValidationError as exc:
        return ValidationResult(errors=field_errors_from(exc))


def validate_creation(payload: Any) -> ValidationResult[UserCreate]:
    """Structural check, then the login rule."""
    result = _validate_structure(UserCreate, payload)
    if not result.ok:
        return result
    login_errors = check_login(result.value.login)
    if login_errors:
        return ValidationResult(errors=login_errors)
    return result


def validate_update(payload: Any) -> ValidationResult[UserUpdate]:
    """Structural check only — replace payloads may repeat accepted values."""
    return _validate_structure(UserUpdate, payload)


def validate_patched(document: Any) -> ValidationResult[UserUpdate]:
    """Structural check of a document produced by applying a patch."""
    if isinstance(document, dict):
        unknown = sorted(set(document) - UPDATE_FIELDS)
        if unknown:
            return ValidationResult(errors=[
                FieldError(name, "Unknown member in update representation", "extra_forbidden")
                for name in unknown
            ])
    return validate_update(document)
