"""User Routes — HTTP surface for the user resource under /api/users.

Invariants:
    - Every route delegates to UserHandlers and only renders the outcome
    - 201 responses carry Location → get_user_by_id and echo the id as body
    - List responses carry pagination metadata in X-Pagination, not in the body
    - HEAD /{id} answers status and content type only

Design Decisions:
    - Bodies bound as plain dict/list (Body(None)): a missing body reaches the
      handler as None (400), shape checks stay in the validation pipeline (422)
    - user_id bound as str: each operation decides how an unparsable id is reported
    - Paging query values bound as str: unparsable values fall back to defaults
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request, status
from fastapi.responses import Response

from users_api.api.dependencies import get_media_type, get_user_handlers
from users_api.api.error_handlers import error_response
from users_api.api.negotiation import render
from users_api.core.domain_types import DEFAULT_PAGE_NUMBER, DEFAULT_PAGE_SIZE
from users_api.core.pagination import parse_page_value
from users_api.services.user_handlers import HandlerOutcome, UserHandlers

router = APIRouter(prefix="/api/users", tags=["users"])

PAGINATION_HEADER = "X-Pagination"
ALLOWED_COLLECTION_METHODS = "POST, GET, OPTIONS"


def _render_outcome(
    outcome: HandlerOutcome, request: Request, media_type: str,
    xml_root: str = "user",
) -> Response:
    """Translate a handler outcome into an HTTP response."""
    if outcome.is_error:
        return error_response(outcome.error)
    if outcome.status_code == status.HTTP_204_NO_CONTENT:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    if outcome.created_id is not None:
        location = request.url_for("get_user_by_id", user_id=str(outcome.created_id))
        return render(
            outcome.body, media_type, status.HTTP_201_CREATED,
            headers={"Location": str(location)}, xml_root="id",
        )
    headers = None
    if outcome.pagination is not None:
        headers = {PAGINATION_HEADER: outcome.pagination.to_header_value()}
    return render(
        outcome.body, media_type, outcome.status_code,
        headers=headers, xml_root=xml_root,
    )


@router.api_route("/{user_id}", methods=["GET", "HEAD"], name="get_user_by_id")
async def get_user_by_id(
    user_id: str,
    request: Request,
    media_type: str = Depends(get_media_type),
    handlers: UserHandlers = Depends(get_user_handlers),
):
    """Get one user."""
    outcome = handlers.get_by_id(user_id)
    if request.method == "HEAD" and not outcome.is_error:
        return Response(
            status_code=status.HTTP_200_OK,
            headers={"Content-Type": "application/json; charset=utf-8"},
        )
    return _render_outcome(outcome, request, media_type)


@router.post("", name="create_user")
async def create_user(
    request: Request,
    payload: dict[str, Any] | None = Body(None),
    media_type: str = Depends(get_media_type),
    handlers: UserHandlers = Depends(get_user_handlers),
):
    """Create a user; responds with the new id."""
    return _render_outcome(handlers.create(payload), request, media_type)


@router.put("/{user_id}", name="replace_user")
async def replace_user(
    user_id: str,
    request: Request,
    payload: dict[str, Any] | None = Body(None),
    media_type: str = Depends(get_media_type),
    handlers: UserHandlers = Depends(get_user_handlers),
):
    """Replace a user, creating it under user_id when unknown."""
    return _render_outcome(handlers.replace(user_id, payload), request, media_type)


@router.patch("/{user_id}", name="patch_user")
async def patch_user(
    user_id: str,
    request: Request,
    operations: list[dict[str, Any]] | None = Body(None),
    media_type: str = Depends(get_media_type),
    handlers: UserHandlers = Depends(get_user_handlers),
):
    """Apply a JSON Patch document to an existing user."""
    return _render_outcome(handlers.patch(user_id, operations), request, media_type)


@router.delete("/{user_id}", name="delete_user")
async def delete_user(
    user_id: str,
    request: Request,
    media_type: str = Depends(get_media_type),
    handlers: UserHandlers = Depends(get_user_handlers),
):
    """Delete a user."""
    return _render_outcome(handlers.delete(user_id), request, media_type)


@router.get("", name="list_users")
async def list_users(
    request: Request,
    page_number: str | None = Query(None, alias="pageNumber"),
    page_size: str | None = Query(None, alias="pageSize"),
    media_type: str = Depends(get_media_type),
    handlers: UserHandlers = Depends(get_user_handlers),
):
    """List users page by page."""

    def link_for(number: int, size: int) -> str:
        return str(
            request.url_for("list_users").include_query_params(
                pageNumber=number, pageSize=size,
            ),
        )

    outcome = handlers.list_users(
        parse_page_value(page_number, DEFAULT_PAGE_NUMBER),
        parse_page_value(page_size, DEFAULT_PAGE_SIZE),
        link_for,
    )
    return _render_outcome(outcome, request, media_type, xml_root="users")


@router.options("", name="users_options")
async def users_options():
    """Advertise the methods the collection supports."""
    return Response(
        status_code=status.HTTP_200_OK,
        headers={"Allow": ALLOWED_COLLECTION_METHODS},
    )
