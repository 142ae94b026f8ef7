"""SQLAlchemy models for persistence layer."""

from revenue.infrastructure.persistence.sqlalchemy.models.accounts import (
    AccountModel,
)
from revenue.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)

__all__ = [
    "AccountModel",
    "Base",
    "TimestampMixin",
]
