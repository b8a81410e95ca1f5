"""API test fixtures — fresh repository + FastAPI test client.

Invariants:
    - Every test gets its own InMemoryUserRepository
    - get_user_repository dependency overridden to return that repository

Design Decisions:
    - httpx AsyncClient over ASGITransport: lifespan is not run, so the
      override is the only repository the routes ever see
"""

import pytest
from httpx import ASGITransport, AsyncClient

from users_api.api.dependencies import get_user_repository
from users_api.infrastructure.user_repository import InMemoryUserRepository
from users_api.main import app


@pytest.fixture
def repository():
    return InMemoryUserRepository()


@pytest.fixture
async def client(repository):
    """FastAPI test client with the repository dependency overridden."""
    app.dependency_overrides[get_user_repository] = lambda: repository

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def created_user_id(client):
    """Create a user through the API and return its id."""
    res = await client.post(
        "/api/users",
        json={"login": "johndoe375", "firstName": "John", "lastName": "Doe"},
    )
    assert res.status_code == 201
    return res.json()
