"""
Stockroom Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.

Fixture Hierarchy:
    Function-scoped:
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── make_result:     factory for mock query Results
    ├── db_engine:       real schema on a temporary SQLite file
    ├── admin_user:      admin row inserted through the ORM
    ├── regular_user:    non-admin row
    └── test_client:     HTTPX AsyncClient bound to the FastAPI app
"""

import os
import tempfile

# Must run before any stockroom import: settings and the engine are built
# at import time from these variables.
_test_dir = tempfile.mkdtemp(prefix="stockroom_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_dir}/test.db"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from stockroom.database import Base, async_session_factory, engine, utcnow  # noqa: E402
from stockroom.models.category import Category  # noqa: E402,F401
from stockroom.models.product import Product  # noqa: E402,F401
from stockroom.models.user import User  # noqa: E402
from stockroom.security import hash_password  # noqa: E402

ADMIN_PASSWORD = "admin-secret"
USER_PASSWORD = "user-secret"


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_user(mock_db_session):
            mock_db_session.execute.return_value = make_result(user)
            await user_service.get_user(mock_db_session, user_id)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def make_result():
    """Builds mock Results whose scalar accessors return the given value."""
    def _make(value):
        result = MagicMock()
        result.scalar_one_or_none.return_value = value
        result.scalar.return_value = value
        result.first.return_value = value
        result.scalars.return_value.all.return_value = value if isinstance(value, list) else []
        return result
    return _make


@pytest_asyncio.fixture
async def db_engine():
    """Creates every table before the test and drops them afterwards."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    # Pooled aiosqlite connections must not outlive the test's event loop
    await engine.dispose()


async def _insert_user(email: str, name: str, password: str, role: str) -> User:
    async with async_session_factory() as session:
        now = utcnow()
        user = User(
            email=email,
            name=name,
            password=hash_password(password),
            role=role,
            created_at=now,
            updated_at=now,
        )
        session.add(user)
        await session.flush()
        user.last_op_id = user.id
        await session.commit()
        return user


@pytest_asyncio.fixture
async def admin_user(db_engine):
    return await _insert_user("admin@example.com", "admin", ADMIN_PASSWORD, "admin")


@pytest_asyncio.fixture
async def regular_user(db_engine):
    return await _insert_user("clerk@example.com", "clerk", USER_PASSWORD, "user")


@pytest_asyncio.fixture
async def test_client(db_engine):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from stockroom.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
