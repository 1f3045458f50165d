"""
Wedding Invitations Backend — Test Configuration (conftest.py)
================================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment variables are set before anything under `app` is
       imported, so the module-level settings and engine pick them up.

Fixture Hierarchy (all function-scoped):
    ├── db_engine:        fresh SQLite file in tmp_path with all tables created
    ├── test_client:      HTTPX AsyncClient bound to the app, sessions from db_engine
    ├── register_user:    helper that registers an account and returns its token
    ├── mock_gateway:     AsyncMock DataGateway for service-level tests
    └── invitation_payload: a valid create-invitation body
"""

import os
import tempfile

# Before any app import: settings and the module-level engine read these
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="wedding_test_"), "app.db")
)
os.environ["JWT_SECRET"] = "test-secret-that-is-long-enough"
os.environ["QR_SIGNING_SECRET"] = ""
os.environ["API_DOMAIN"] = "https://wedding.test"
os.environ["ENABLE_DEBUG_ROUTES"] = "true"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Any, AsyncGenerator, Awaitable, Callable, Dict  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.database import create_all_tables, get_db_session  # noqa: E402
from app.main import app  # noqa: E402
from app.services.gateway import DataGateway  # noqa: E402


@pytest_asyncio.fixture
async def db_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """A throwaway SQLite database per test, schema created from the models."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await create_all_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(db_engine):
    """
    HTTPX AsyncClient talking to the app in-process.

    `get_db_session` is overridden so every request gets a session on the
    per-test database, with the same commit/rollback behaviour as production.
    """
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def register_user(test_client) -> Callable[..., Awaitable[Dict[str, Any]]]:
    """
    Register an account through the API.

    Returns the `data` of the register response plus ready-made
    Authorization headers under "headers".
    """

    async def _register(email: str = "couple@example.com", password: str = "s3cret-pass",
                        name: str = "John & Jane") -> Dict[str, Any]:
        response = await test_client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "name": name},
        )
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        data["headers"] = {"Authorization": f"Bearer {data['token']}"}
        return data

    return _register


@pytest.fixture
def invitation_payload() -> Dict[str, Any]:
    return {
        "groom_name": "John Smith",
        "bride_name": "Jane Doe",
        "ceremony_date": "2024-12-25",
        "ceremony_time": "10:00",
        "location": "Gedung Serbaguna, Jakarta",
        "description": "Akad and reception",
        "max_guests": 150,
    }


@pytest.fixture
def mock_gateway():
    """
    AsyncMock standing in for DataGateway in service unit tests.

    spec_set keeps tests honest: calling a method the gateway does not
    have fails instead of silently returning a mock.
    """
    return AsyncMock(spec_set=DataGateway)
