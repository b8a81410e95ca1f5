"""User Record — the stored representation of a user.

Invariants:
    - id is immutable once the record is stored
    - full_name is derived ("{last_name} {first_name}"), never stored

Design Decisions:
    - Frozen dataclass: repository hands out snapshots, callers cannot mutate
      stored state behind the lock
"""

from dataclasses import dataclass, replace

from users_api.core.domain_types import UserId, EMPTY_USER_ID


@dataclass(frozen=True)
class UserRecord:
    """Stored user — identity plus login and name parts."""

    id: UserId = EMPTY_USER_ID
    login: str = ""
    first_name: str = ""
    last_name: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.last_name} {self.first_name}"

    @property
    def has_identity(self) -> bool:
        return self.id != EMPTY_USER_ID

    def with_id(self, user_id: UserId) -> "UserRecord":
        return replace(self, id=user_id)
