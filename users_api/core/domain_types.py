"""Domain Types — identity and value types shared across the codebase.

Invariants:
    - UserId wraps a 128-bit UUID — never use bare strings for identity in domain logic
    - EMPTY_USER_ID (the nil UUID) means "not yet assigned"
    - Page bounds are the single source of truth for list clamping

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
"""

from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)

EMPTY_USER_ID = UserId(UUID(int=0))


def parse_user_id(raw: str) -> UserId | None:
    """Parse textual identifier. Returns None when it is not a UUID."""
    try:
        return UserId(UUID(raw.strip()))
    except (ValueError, AttributeError):
        return None


# ─── Value Defaults ──────────────────────────────────────────────

DEFAULT_FIRST_NAME = "John"
DEFAULT_LAST_NAME = "Doe"


# ─── Paging Bounds ───────────────────────────────────────────────

DEFAULT_PAGE_NUMBER = 1
DEFAULT_PAGE_SIZE = 10
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 20
