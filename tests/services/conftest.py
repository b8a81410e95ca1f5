"""Service test fixtures — handlers over a fresh in-memory repository."""

import pytest

from users_api.infrastructure.user_repository import InMemoryUserRepository
from users_api.services.user_handlers import UserHandlers


@pytest.fixture
def repository():
    return InMemoryUserRepository()


@pytest.fixture
def handlers(repository):
    return UserHandlers(repository)


@pytest.fixture
def link_for():
    return lambda number, size: f"http://test/api/users?pageNumber={number}&pageSize={size}"
