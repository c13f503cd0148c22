"""Shared test configuration and fixtures.

Every test gets a fresh in-memory SQLite database (aiosqlite) and a session
wrapped in an outer transaction that rolls back after the test. The driver
is switched to explicit BEGIN so SAVEPOINTs (``begin_nested``) work.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

import stayhub.models  # noqa: F401  (registers every table on Base.metadata)
from stayhub.auth.security import create_token_pair
from stayhub.config import settings
from stayhub.database import Base, get_db, register_sqlite_functions
from stayhub.main import app
from stayhub.models.user import ROLE_OWNER, ROLE_USER, User
from tests.factories import make_user


@pytest.fixture(autouse=True)
def _no_network_geocoding(monkeypatch: pytest.MonkeyPatch) -> None:
    """Property creation must never reach the real geocoder from tests."""
    monkeypatch.setattr(settings, "geocoding_enabled", False)


# ---------------------------------------------------------------------------
# Per-test engine and transactional session
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory database with the full schema, one per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        register_sqlite_functions(dbapi_connection, connection_record)

    @event.listens_for(engine.sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
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
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to use the test DB session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Convenience fixtures: authenticated guest and owner
# ---------------------------------------------------------------------------


def _headers_for(user: User) -> dict[str, str]:
    tokens = create_token_pair(str(user.id), user.role)
    return {"Authorization": f"Bearer {tokens['access_token']}"}


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """A guest account (``role="user"``)."""
    return await make_user(db_session, role=ROLE_USER, name="Test Guest")


@pytest_asyncio.fixture
async def auth_headers(test_user: User) -> dict[str, str]:
    return _headers_for(test_user)


@pytest_asyncio.fixture
async def test_owner(db_session: AsyncSession) -> User:
    """A property owner account."""
    return await make_user(db_session, role=ROLE_OWNER, name="Test Owner")


@pytest_asyncio.fixture
async def owner_headers(test_owner: User) -> dict[str, str]:
    return _headers_for(test_owner)
