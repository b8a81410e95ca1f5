"""Users API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UsersApiError → structured JSON responses
    - The user repository is constructed and owned by the lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Repository on app.state: one explicit instance per app, injected through
      api.dependencies, replaceable in tests
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from users_api.api.error_handlers import register_error_handlers
from users_api.api.routes import health, users
from users_api.config import get_settings
from users_api.infrastructure.observability import setup_logging
from users_api.infrastructure.user_repository import InMemoryUserRepository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.user_repository = InMemoryUserRepository()
    logger.info(f"{settings.service_name} started")
    yield
    logger.info(
        f"{settings.service_name} shutting down "
        f"({len(app.state.user_repository)} users discarded)",
    )


settings = get_settings()
app = FastAPI(
    title="Users API", version=settings.service_version, lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(users.router)

register_error_handlers(app)
