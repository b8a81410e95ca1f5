"""Pagination Link Builder — page metadata and adjacent-page links for listings.

Invariants:
    - total_pages = ceil(total_count / page_size); 0 for an empty collection
    - previous_link present iff page_number > 1
    - next_link present iff page_number < total_pages
    - Paging inputs are clamped, never rejected; unparsable values fall back to defaults

Design Decisions:
    - Links produced by an injected link_for(page_number, page_size) callable:
      URL construction stays in the transport layer, the rules stay here
    - Header keys keep the established X-Pagination wire names
      (previousPageLink / nextPageLink)
"""

import json
from dataclasses import dataclass
from typing import Callable

from users_api.core.domain_types import (
    DEFAULT_PAGE_NUMBER, MIN_PAGE_SIZE, MAX_PAGE_SIZE,
)

LinkBuilder = Callable[[int, int], str]


@dataclass(frozen=True)
class PaginationMetadata:
    """Sidecar description of one listing page."""
    previous_link: str | None
    next_link: str | None
    total_count: int
    page_size: int
    current_page: int
    total_pages: int

    def to_header_value(self) -> str:
        return json.dumps({
            "previousPageLink": self.previous_link,
            "nextPageLink": self.next_link,
            "totalCount": self.total_count,
            "pageSize": self.page_size,
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
        })


def parse_page_value(raw: str | None, default: int) -> int:
    """Integer query value, or default when absent or unparsable."""
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def clamp_page_number(page_number: int) -> int:
    return max(page_number, DEFAULT_PAGE_NUMBER)


def clamp_page_size(page_size: int) -> int:
    return min(max(page_size, MIN_PAGE_SIZE), MAX_PAGE_SIZE)


def count_pages(total_count: int, page_size: int) -> int:
    return -(-total_count // page_size)


def build_pagination(
    page_number: int, page_size: int, total_count: int, link_for: LinkBuilder,
) -> PaginationMetadata:
    """Derive metadata and links for an already-clamped page request."""
    total_pages = count_pages(total_count, page_size)
    previous_link = (
        link_for(page_number - 1, page_size) if page_number > 1 else None
    )
    next_link = (
        link_for(page_number + 1, page_size) if page_number < total_pages else None
    )
    return PaginationMetadata(
        previous_link=previous_link,
        next_link=next_link,
        total_count=total_count,
        page_size=page_size,
        current_page=page_number,
        total_pages=total_pages,
    )
