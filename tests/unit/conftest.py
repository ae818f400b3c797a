"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.session import SessionContext
from domain.entities.user import UserSnapshot


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.users = AsyncMock()
        self.updates = AsyncMock()
        self.committed = False
        self.commit_count = 0
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True
        self.commit_count += 1

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, exc_type: Any, *args: Any) -> None:
        if exc_type:
            await self.rollback()


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def snapshot(user_id: UUID) -> UserSnapshot:
    """Stored profile of the acting user."""
    return UserSnapshot(
        id=user_id,
        first_name="Anna",
        last_name="Lee",
        username="annalee",
        about="",
    )


@pytest.fixture
def session(user_id: UUID) -> SessionContext:
    """The session issuing the request."""
    return SessionContext(user_id=user_id, session_key="origin-key")
