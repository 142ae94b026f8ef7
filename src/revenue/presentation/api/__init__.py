"""REST API presentation layer for Revenue.

This package provides a FastAPI-based REST API over the account hierarchy.

Structure:
    api/
    ├── app.py          # FastAPI application factory
    ├── config.py       # API configuration
    ├── dependencies.py # Dependency injection
    ├── routers/        # API route handlers
    └── schemas/        # Pydantic request/response schemas
"""

from revenue.presentation.api.app import create_app

__all__ = ["create_app"]
