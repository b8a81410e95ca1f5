"""Dependency Providers — repository, handlers and negotiated media type per request.

Invariants:
    - The repository comes from app.state, set by the lifespan; never a module global
    - Tests override get_user_repository to inject a fresh store per test
"""

from fastapi import Depends, Request

from users_api.api.negotiation import negotiate
from users_api.core.repository_protocols import UserRepository
from users_api.services.user_handlers import UserHandlers


def get_user_repository(request: Request) -> UserRepository:
    """FastAPI dependency for the application-owned repository."""
    repository = getattr(request.app.state, "user_repository", None)
    if repository is None:
        raise RuntimeError("User repository not initialized")
    return repository


def get_user_handlers(
    repository: UserRepository = Depends(get_user_repository),
) -> UserHandlers:
    return UserHandlers(repository)


def get_media_type(request: Request) -> str:
    """Pick JSON or XML from the Accept header; raises NotAcceptableError."""
    return negotiate(request.headers.get("accept"))
