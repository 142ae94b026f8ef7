"""
Database fixtures for persistence tests.

- ``sqlite_engine`` / ``db_session``: in-memory SQLite via aiosqlite, fresh
  schema per test. Fast, used by the default test run.
- ``postgres_container`` / ``postgres_engine``: Testcontainers PostgreSQL
  for behaviour SQLite cannot show (row locks). Only used by tests marked
  ``integration``.

Usage:
    async def test_something(db_session):
        repo = AccountRepositorySQLAlchemy(db_session)
        await repo.save(account)
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

# Import models to register them with Base.metadata
import revenue.infrastructure.persistence.sqlalchemy.models  # noqa: F401
from revenue.infrastructure.persistence.sqlalchemy.models.base import Base

SQLITE_MEMORY_URL = "sqlite+aiosqlite:///:memory:"

# Use same Postgres major version as production
POSTGRES_IMAGE = "postgres:16-alpine"


@pytest_asyncio.fixture(scope="function")
async def sqlite_engine():
    """
    In-memory SQLite engine with the full schema.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        SQLITE_MEMORY_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(sqlite_engine):
    """Provide a session on a fresh in-memory database."""
    session_maker = async_sessionmaker(
        sqlite_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture(scope="session")
def postgres_container():
    """
    Start a PostgreSQL container for the test session.

    The import is local so that runs without Docker never touch it.
    """
    from testcontainers.postgres import PostgresContainer

    with PostgresContainer(POSTGRES_IMAGE) as postgres:
        yield postgres


@pytest_asyncio.fixture(scope="function")
async def postgres_engine(postgres_container):
    """Async engine on the container with a clean schema per test."""
    connection_url = postgres_container.get_connection_url()
    # Testcontainers may return postgresql+psycopg2:// or postgresql://
    async_url = connection_url.replace(
        "postgresql+psycopg2://",
        "postgresql+asyncpg://",
    )
    async_url = async_url.replace("postgresql://", "postgresql+asyncpg://")

    engine = create_async_engine(async_url, echo=False, poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()
