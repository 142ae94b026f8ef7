"""Pytest fixtures for API integration tests.

Runs the real application stack against a throwaway SQLite file so the
tests need no external services.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

# Import models to register them with Base.metadata
import revenue.infrastructure.persistence.sqlalchemy.models  # noqa: F401
from revenue.infrastructure.persistence.sqlalchemy.models.base import Base
from revenue.presentation.api.app import API_V1_PREFIX, create_app
from revenue.presentation.api.dependencies import get_db_session
from revenue_config.settings import Settings


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def api_settings(tmp_path) -> Settings:
    """Test API settings with debug enabled."""
    return Settings(
        _env_file=None,
        database_url_override=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}",
        api_host="127.0.0.1",
        api_port=8000,
        api_debug=True,
        api_cors_origins="http://localhost:3000",
    )


@pytest.fixture
def api_engine(api_settings):
    """File-backed SQLite engine; NullPool keeps connections off the test loop."""
    engine = create_async_engine(api_settings.database_url, poolclass=NullPool)
    yield engine
    _run(engine.dispose())


def _run(coro) -> None:
    """Run a coroutine in a fresh event loop to avoid TestClient's loop."""
    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(coro)
    finally:
        loop.close()


def _setup_test_database(engine) -> None:
    async def _setup():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)

    _run(_setup())


@pytest.fixture
def test_client(api_settings, api_engine):
    """Create a test client bound to the test database.

    The lifespan is not entered; the schema is created up front instead.
    """
    _setup_test_database(api_engine)

    app = create_app(settings=api_settings)

    test_session_maker = async_sessionmaker(
        api_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Override the database session dependency
    async def override_get_db_session():
        async with test_session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session

    yield TestClient(app)


@pytest.fixture
def create_account(test_client, api_v1_prefix):
    """Create an account through the API and return its JSON body."""

    def _create(name: str, parent_id: str | None = None, **fields) -> dict:
        slug = name.lower().replace(" ", "-")
        payload = {
            "name": name,
            "primary_contact_email": f"billing@{slug}.acme-billing.io",
            "parent_id": parent_id,
            **fields,
        }
        response = test_client.post(f"{api_v1_prefix}/accounts", json=payload)
        assert response.status_code == 201, (
            f"Create failed: {response.status_code} - {response.text}"
        )
        return response.json()

    return _create


@pytest.fixture
def basic_tree(create_account) -> tuple[dict, dict, dict]:
    """R <- C1 <- G1."""
    r = create_account("R")
    c1 = create_account("C1", parent_id=r["id"])
    g1 = create_account("G1", parent_id=c1["id"])
    return r, c1, g1
