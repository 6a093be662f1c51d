"""Pytest configuration and shared fixtures.

The application reads its settings at import time, so the test
environment is exported here before anything from ``ski_scheduler`` is
imported. Tests run against a throwaway SQLite file through aiosqlite.
"""

import asyncio
import os
import tempfile
from collections.abc import AsyncGenerator, Callable, Generator

import pytest

# =============================================================================
# Environment
# =============================================================================

_TEST_DIR = tempfile.mkdtemp(prefix="ski_scheduler_tests_")

os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TEST_DIR, 'ski_scheduler_test.db')}"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SMTP_HOST"] = ""
os.environ.pop("STATIC_DIR", None)

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from ski_scheduler.adapters.outbound.persistence.database import (  # noqa: E402
    AsyncSessionLocal,
    create_tables,
    drop_tables,
)
from ski_scheduler.adapters.outbound.security.token_blacklist import TokenBlacklist  # noqa: E402


async def _reset_schema() -> None:
    await drop_tables()
    await create_tables()


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a session on freshly created tables."""
    await _reset_schema()
    session = AsyncSessionLocal()
    try:
        yield session
    finally:
        await session.close()
        await drop_tables()


@pytest.fixture
def blacklist() -> TokenBlacklist:
    """Provide an empty token blacklist that is not sweeping."""
    return TokenBlacklist()


# =============================================================================
# HTTP Fixtures
# =============================================================================


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Provide a client for the application with its lifespan running."""
    from ski_scheduler.main import app

    asyncio.run(_reset_schema())
    with TestClient(app) as test_client:
        yield test_client
    asyncio.run(drop_tables())


@pytest.fixture
def login_as(client: TestClient) -> Callable[..., str]:
    """Register a user through the API and return a fresh session token."""

    def _login(username: str, password: str = "secret-pass", admin: bool = False) -> str:
        response = client.post(
            "/api/register",
            json={"username": username, "password": password, "admin": admin},
        )
        assert response.status_code == 201, response.text

        response = client.post("/api/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return response.json()["token"]

    return _login
