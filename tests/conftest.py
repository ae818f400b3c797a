"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from uuid import UUID, uuid4

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base, UserModel
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

# Test database URL (SQLite in memory, one shared connection)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed test user ID for consistency
TEST_USER_ID = uuid4()

ORIGIN_SESSION_KEY = "session-origin"
OTHER_SESSION_KEY = "session-other"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """UoW factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
async def seeded_user(session_factory: async_sessionmaker[AsyncSession]) -> UUID:
    """Insert the test user ("Anna Lee", @annalee) and return its ID."""
    async with session_factory() as session:
        session.add(
            UserModel(
                id=TEST_USER_ID,
                phone="+15550100",
                username="annalee",
                first_name="Anna",
                last_name="Lee",
                about="",
            )
        )
        await session.commit()
    return TEST_USER_ID


@pytest.fixture
def origin_user() -> TokenUser:
    """The session that issues profile updates."""
    return TokenUser(id=TEST_USER_ID, session_key=ORIGIN_SESSION_KEY, phone="+15550100")


@pytest.fixture
def other_device_user() -> TokenUser:
    """A second session of the same account."""
    return TokenUser(id=TEST_USER_ID, session_key=OTHER_SESSION_KEY, phone="+15550100")


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def auth_headers(auth_provider: JWTAuthProvider, origin_user: TokenUser) -> dict[str, str]:
    """Authorization headers for the origin session."""
    return {"Authorization": f"Bearer {auth_provider.create_token(origin_user)}"}


@pytest.fixture
def other_device_headers(
    auth_provider: JWTAuthProvider, other_device_user: TokenUser
) -> dict[str, str]:
    """Authorization headers for the account's other session."""
    return {"Authorization": f"Bearer {auth_provider.create_token(other_device_user)}"}


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth, no database overrides)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def api_client(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    auth_provider: JWTAuthProvider,
    seeded_user: UUID,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client wired to the in-memory database.

    This client:
    - Uses an in-memory SQLite database with the test user seeded
    - Validates bearer tokens with the test auth provider
    - Overrides the service factories to use the test UoW
    """
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import get_profile_service, get_update_service
    from domain.services.profile_service import ProfileService
    from domain.services.update_service import UpdateService
    from main import create_app

    app = create_app()
    update_service = UpdateService(uow_factory)
    profile_service = ProfileService(uow_factory, update_service=update_service)

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_update_service] = lambda: update_service
    app.dependency_overrides[get_profile_service] = lambda: profile_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
