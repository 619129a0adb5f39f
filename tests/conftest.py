"""Shared pytest fixtures for unit and integration tests."""

import os
import pytest

# Load .env so DATABASE_URL is available for the requires_db check
from dotenv import load_dotenv

load_dotenv()

# The in-process scheduler must not fire while tests run
os.environ.setdefault("SCHEDULER_ENABLED", "false")

from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from app.main import app  # noqa: E402
from app.config import settings  # noqa: E402
from app.database import Base, database_url, connect_args  # noqa: E402
from app.services.reference_service import set_billing_defaults  # noqa: E402

# Skip database-backed tests unless a database is configured explicitly
requires_db = pytest.mark.skipif(
    not os.getenv("DATABASE_URL"),
    reason="DATABASE_URL must be set",
)


def _get_api_base() -> str:
    """API base URL. In CI (TEST_USE_LIVE_SERVER=true), hit the running server."""
    if os.getenv("TEST_USE_LIVE_SERVER", "").lower() == "true":
        base = os.getenv("LIVE_SERVER_URL", "http://localhost:8080")
        return f"{base}{settings.API_V1_PREFIX}"
    return f"http://test{settings.API_V1_PREFIX}"


@pytest.fixture
def api_base() -> str:
    """Base URL for API requests."""
    return _get_api_base()


@pytest.fixture
async def async_client(api_base: str):
    """Async HTTP client against the app (or a live server in CI)."""
    use_live = os.getenv("TEST_USE_LIVE_SERVER", "").lower() == "true"
    if use_live:
        client = AsyncClient(base_url=api_base, timeout=30.0)
    else:
        transport = ASGITransport(app=app)
        client = AsyncClient(transport=transport, base_url=api_base, timeout=30.0)
    yield client
    await client.aclose()


@pytest.fixture(autouse=True)
def reset_billing_defaults():
    """Billing defaults are cached per process; start every test clean."""
    set_billing_defaults(None)
    yield
    set_billing_defaults(None)


@pytest.fixture
async def db_session():
    """
    Session on a throwaway engine bound to this test's event loop.
    Tables are created if missing; rows are left for the test to clean up.
    """
    from app import models  # noqa: F401

    engine = create_async_engine(database_url, connect_args=connect_args, poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()
