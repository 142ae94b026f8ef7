"""SQLAlchemy repository implementations organized by bounded context."""

from revenue.infrastructure.persistence.sqlalchemy.repositories.accounts import (
    AccountRepositorySQLAlchemy,
)
from revenue.infrastructure.persistence.sqlalchemy.repositories.factory import (
    SQLAlchemyRepositoryFactory,
)

__all__ = [
    "AccountRepositorySQLAlchemy",
    "SQLAlchemyRepositoryFactory",
]
