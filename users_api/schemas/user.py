"""User Schemas — creation, update and output representations.

Invariants:
    - UserCreate.first_name / last_name default to "John" / "Doe" when absent
    - UserCreate.login is structurally optional: absence is reported by the login rule
    - UserUpdate.login is required and non-empty; missing names become ""
    - UserOut never exposes first/last name separately, only fullName

Design Decisions:
    - alias_generator=to_camel + populate_by_name: accepts wire names, keeps
      snake_case attributes for Python callers
    - Plain str fields: pydantic v2 rejects numbers/bools for str without coercion,
      which is exactly the structural check we want
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from users_api.core.domain_types import DEFAULT_FIRST_NAME, DEFAULT_LAST_NAME


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserCreate(_CamelModel):
    """Creation payload — placeholders fill in missing names."""
    login: str | None = None
    first_name: str = DEFAULT_FIRST_NAME
    last_name: str = DEFAULT_LAST_NAME


class UserUpdate(_CamelModel):
    """Replace payload and the document JSON Patch operates on."""
    login: str = Field(min_length=1)
    first_name: str = ""
    last_name: str = ""


UPDATE_FIELDS: frozenset[str] = frozenset(
    field.alias or name for name, field in UserUpdate.model_fields.items()
)


class UserOut(_CamelModel):
    """Read representation."""
    id: UUID
    login: str
    full_name: str
