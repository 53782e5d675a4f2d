"""Pytest configuration for async testing.

This configuration ensures:
1. Async tests run under pytest-asyncio (auto mode, see pyproject.toml)
2. Every integration test gets its own SQLite file database
3. Plans are seeded before a test touches the store
4. Engine collaborators (clock, audit, email) are observable test doubles
"""

from collections.abc import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.persistence.database import Database
from src.infrastructure.persistence.seeds import seed_subscription_plans
from tests.utils.engine import Engine, EngineDoubles


@pytest.fixture
def doubles() -> EngineDoubles:
    """Fresh clock, audit sink, email recorder and password hasher."""
    return EngineDoubles()


@pytest_asyncio.fixture
async def database(tmp_path) -> AsyncGenerator[Database, None]:
    """File-backed SQLite database with tables created and plans seeded.

    A file (not ``:memory:``) so that concurrent sessions share one store.
    """
    db = Database(database_url=f"sqlite+aiosqlite:///{tmp_path / 'engine.db'}")
    await db.create_all()
    async with db.get_session() as session:
        await seed_subscription_plans(session)
    yield db
    await db.close()


@pytest_asyncio.fixture
async def session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """One session for sequential tests."""
    async with database.get_session() as session:
        yield session


@pytest.fixture
def make_engine(doubles: EngineDoubles) -> Callable[[AsyncSession], Engine]:
    """Build an Engine over a session; all engines share the test doubles."""

    def _make(session: AsyncSession) -> Engine:
        return Engine(session, doubles)

    return _make


@pytest.fixture
def engine(session: AsyncSession, make_engine) -> Engine:
    """Engine over the shared test session."""
    return make_engine(session)


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real database"
    )
    config.addinivalue_line("markers", "smoke: End-to-end smoke tests")
