"""Tagged Results — explicit success/failure values for repository writes.

Invariants:
    - A write returns exactly one of Ok or Err, never raises for expected conflicts
    - Err always wraps a UsersApiError so callers can log or render it directly

Design Decisions:
    - Plain generic dataclasses over a third-party Result type: two variants,
      isinstance checks at the call site are enough
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from users_api.core.errors import UsersApiError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: UsersApiError


Result = Union[Ok[T], Err]
