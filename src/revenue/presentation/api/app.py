"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

API Versioning:
    All API endpoints are versioned under /api/v1/ prefix.
    The health check endpoint remains unversioned at /health.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

from revenue.infrastructure.persistence.sqlalchemy.init_db import create_tables
from revenue.presentation.api.dependencies import get_engine
from revenue.presentation.api.exception_handlers import (
    setup_exception_handlers,
)
from revenue.presentation.api.routers import accounts_router
from revenue.presentation.api.schemas.common import HealthResponse
from revenue_config.settings import Settings, get_settings


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    """Configure application logging.

    - Console output with timestamps and module names
    - Configurable log level for revenue modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    settings = get_settings()
    log_level_str = settings.log_level.upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    logging.getLogger("revenue").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

# API version info
API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

# OpenAPI tags metadata for documentation
OPENAPI_TAGS = [
    {
        "name": "Accounts",
        "description": """Billing accounts and their parent/child hierarchy.

**Hierarchy rules:**
- Every account has at most one parent; accounts without a parent are roots
- An account can never be its own ancestor (cycles are rejected)
- Traversals reach at most 5 levels; deeper accounts are omitted silently
- Deleted accounts are hidden from every traversal, their children stay
""",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
]


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting Revenue API v%s...", API_VERSION)
    engine = get_engine()
    await _init_database_schema(engine)
    yield

    # Shutdown - dispose the shared engine and its connection pool
    logger.info("Shutting down Revenue API...")
    await engine.dispose()
    logger.info("Database connections closed")


async def _init_database_schema(engine: AsyncEngine) -> None:
    """Initialize database schema (if not existent) and verify connectivity."""
    try:
        await create_tables(engine)
    except ConnectionRefusedError:
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints."""
    v1_router = APIRouter()
    v1_router.include_router(accounts_router, prefix="/accounts", tags=["Accounts"])
    return v1_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.

    Returns
    -------
    Configured FastAPI application instance.
    """
    # Configure logging on first app creation (not on module import)
    _configure_logging()

    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=f"{settings.app_name} API",
        description=(
            "Account hierarchy core of a **B2B billing** backend: "
            "parent/child accounts, cycle-safe reparenting and bounded traversal."
        ),
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register domain exception handlers for consistent error responses
    setup_exception_handlers(app)

    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    # Health check endpoint (unversioned - always accessible)
    @app.get("/health", tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers and monitoring."""
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            api_versions=["v1"],
        )

    return app


# Application instance for uvicorn
app = create_app()
