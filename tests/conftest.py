from unittest.mock import AsyncMock

import pytest

from helpers.catalog import MockCatalog
from reading_quiz.service import QuizSessionService
from reading_quiz.store import MemorySessionStore


@pytest.fixture
def catalog():
    """Fresh 15-place catalog for each test."""
    return MockCatalog()


@pytest.fixture
def store():
    return MemorySessionStore(ttl_seconds=600, max_entries=100)


@pytest.fixture
def service(catalog, store):
    return QuizSessionService(catalog, store)


@pytest.fixture
def mock_db():
    """AsyncMock standing in for AsyncSession; flush/commit are no-ops."""
    return AsyncMock()
