"""
Shared test fixtures for Portfolio API tests.

Schema-per-test database sessions, HTTP clients and user fixtures.
Tests that use the database need TEST_DATABASE_URL to point at a
reachable PostgreSQL; they error out otherwise.
"""

import os

# Cheap hashing and a non-development environment for the whole test run;
# must be set before settings are first loaded.
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "test")

from collections.abc import AsyncGenerator  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from portfolio.auth.jwt import create_access_token  # noqa: E402
from portfolio.auth.password import hash_password  # noqa: E402
from portfolio.config import settings  # noqa: E402
from portfolio.database import Base, get_db  # noqa: E402
from portfolio.main import app  # noqa: E402
from portfolio.middleware.rate_limit import reset_limiter  # noqa: E402

# Import models so they're registered with Base.metadata before table creation
from portfolio.models.profile import Profile  # noqa: E402
from portfolio.models.user import User  # noqa: E402
from portfolio.services.profiles import blank_profile_values  # noqa: E402

TEST_DATABASE_URL = settings.test_database_url

# NullPool: every test gets its own connections on its own event loop
test_engine = create_async_engine(
    TEST_DATABASE_URL,
    poolclass=NullPool,
    echo=False,
)

TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


# --- Rate Limiter Reset Fixture ---


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Start every test with empty register/login rate-limit windows."""
    reset_limiter()
    yield


# --- Database Fixtures ---


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Session on a freshly created schema; the schema is dropped afterwards."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def session_factory(db_session: AsyncSession) -> async_sessionmaker[AsyncSession]:
    """
    Maker for extra sessions on the same test schema.

    Each session has its own connection, so work in separate sessions
    runs in separate transactions, as concurrent requests would.
    """
    return TestSessionLocal


@pytest_asyncio.fixture(scope="function")
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Client against the app with get_db bound to the test session."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        follow_redirects=True,
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def app_client() -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for endpoints that never touch the database."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# --- Authentication Helper Fixtures ---


@pytest.fixture
def auth_headers():
    """Factory fixture for creating bearer Authorization headers."""

    def _auth_headers(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def valid_registration_data() -> dict[str, str]:
    """Registration body that passes every check."""
    return {
        "name": "New User",
        "email": "newuser@example.com",
        "password": "secret1",
    }


# --- User Fixtures ---


async def _create_user(
    db_session: AsyncSession,
    name: str,
    email: str,
    password: str | None,
    *,
    with_profile: bool = True,
) -> dict[str, Any]:
    """Helper to create a user (and by default their blank profile)."""
    user = User(
        name=name,
        email=email.lower(),
        password_hash=hash_password(password) if password else None,
    )
    db_session.add(user)
    await db_session.flush()

    if with_profile:
        db_session.add(Profile(**blank_profile_values(user.id, user.name, user.email)))

    await db_session.commit()

    return {
        "user_id": str(user.id),
        "name": user.name,
        "email": user.email,
        "password": password,
        "token": create_access_token(str(user.id)),
    }


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> dict[str, Any]:
    """
    Create a standard test user with a blank profile.

    Returns dict with user data and an access token.
    """
    return await _create_user(
        db_session,
        name="Test User",
        email="test@example.com",
        password="TestPassword1",
    )


@pytest_asyncio.fixture
async def second_user(db_session: AsyncSession) -> dict[str, Any]:
    """Create a second user for testing ownership scenarios."""
    return await _create_user(
        db_session,
        name="Second User",
        email="second@example.com",
        password="SecondPassword1",
    )


@pytest_asyncio.fixture
async def user_without_profile(db_session: AsyncSession) -> dict[str, Any]:
    """A user whose profile row was never created."""
    return await _create_user(
        db_session,
        name="No Profile",
        email="noprofile@example.com",
        password="NoProfile1",
        with_profile=False,
    )


@pytest_asyncio.fixture
async def provider_user(db_session: AsyncSession) -> dict[str, Any]:
    """A user created through an external identity provider (no password)."""
    return await _create_user(
        db_session,
        name="Provider User",
        email="provider@example.com",
        password=None,
    )


# --- Utility Fixtures ---


@pytest.fixture
def frozen_time():
    """freezegun's freeze_time, for token expiry tests."""
    from freezegun import freeze_time

    return freeze_time
