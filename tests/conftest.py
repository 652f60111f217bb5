"""Pytest configuration.

Environment variables are set before any application import so the
module-level settings and ``app`` objects load test values:

- Distinct 32+ character JWT secrets
- bcrypt cost 4 (fast hashing)
- Reaper disabled (tests call it explicitly)

Fixtures:
    test_settings: Settings pointing at a per-test SQLite file
    database: Database with tables created (integration tests)
    app / client: Application with lifespan running (API tests)
"""

import inspect
import os

os.environ["ENVIRONMENT"] = "testing"
os.environ["JWT_SECRET_KEY"] = "test-access-secret-0123456789abcdef0123456789"
os.environ["JWT_REFRESH_SECRET_KEY"] = "test-refresh-secret-0123456789abcdef012345678"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SESSION_REAPER_INTERVAL_SECONDS"] = "0"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

from collections.abc import AsyncGenerator, Generator  # noqa: E402
from pathlib import Path  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from storefront_auth.core.config import Settings  # noqa: E402
from storefront_auth.infrastructure.persistence.database import Database  # noqa: E402
from storefront_auth.main import create_app  # noqa: E402


def _sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings for one test, backed by a throwaway SQLite file."""
    return Settings(  # type: ignore[call-arg]  # secrets come from env
        database_url=_sqlite_url(tmp_path / "test.db"),
        session_reaper_interval_seconds=0,
    )


@pytest_asyncio.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database, None]:
    """Database with all tables created, disposed after the test."""
    db = Database(_sqlite_url(tmp_path / "integration.db"))
    await db.create_all()
    yield db
    await db.close()


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    return create_app(test_settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """TestClient with the lifespan running (tables created on startup)."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real database"
    )
    config.addinivalue_line("markers", "api: API tests through the application")


# Test execution configuration
def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions."""
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)
