"""Shared test configuration and fixtures.

Each test gets a fresh in-memory SQLite database (via aiosqlite) and a
transaction that is rolled back afterwards. The object store is replaced by
an in-memory fake, so no network access is needed.
"""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")

from collections.abc import AsyncGenerator  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.database import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.room import Room  # noqa: E402
from app.models.user import Role, User  # noqa: E402
from app.services.storage import get_storage  # noqa: E402
from factories import FakeStorage, bearer, create_room, create_user  # noqa: E402

# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory database with every table."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session wrapped in a transaction that always rolls back."""
    async with test_engine.connect() as connection:
        transaction = await connection.begin()
        session = AsyncSession(bind=connection, expire_on_commit=False)

        try:
            yield session
        finally:
            await session.close()
            await transaction.rollback()


@pytest_asyncio.fixture
async def fake_storage() -> FakeStorage:
    return FakeStorage()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession, fake_storage: FakeStorage) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to the test session and fake storage."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: fake_storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Convenience fixtures: users, auth headers, rooms
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    return await create_user(db_session, Role.USER)


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await create_user(db_session, Role.ADMIN)


@pytest_asyncio.fixture
async def auth_headers(test_user: User) -> dict[str, str]:
    """Authorization headers for a USER-role account."""
    return bearer(test_user)


@pytest_asyncio.fixture
async def admin_headers(admin_user: User) -> dict[str, str]:
    """Authorization headers for an ADMIN-role account."""
    return bearer(admin_user)


@pytest_asyncio.fixture
async def test_room(db_session: AsyncSession) -> Room:
    return await create_room(db_session)
