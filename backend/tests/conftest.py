"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - The seed row is only present when a test asks for `seeded`
    - get_db dependency overridden to use the test database

Design Decisions:
    - SQLite in-memory with StaticPool: all sessions share one connection,
      no external dependency
"""

import logging
import os

# Point settings at SQLite before the application module is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from pizzastore.db.base import Base  # noqa: E402
from pizzastore.infrastructure.database import get_db, seed_database  # noqa: E402
from pizzastore.infrastructure.pizza_store import SqlPizzaStore  # noqa: E402
from pizzastore.main import app  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def seeded(test_session_factory):
    """Insert the Pepperoni seed row."""
    async with test_session_factory() as session:
        await seed_database(session)


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def store_logger():
    return logging.getLogger("tests.pizzastore.store")


@pytest.fixture
async def empty_store(test_db, store_logger):
    return SqlPizzaStore(test_db, store_logger)


@pytest.fixture
async def store(seeded, test_db, store_logger):
    return SqlPizzaStore(test_db, store_logger)


@pytest.fixture
async def client(test_session_factory, seeded):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
