"""Account SQLAlchemy repositories."""

from revenue.infrastructure.persistence.sqlalchemy.repositories.accounts.account_repository import (  # NOQA: E501
    AccountRepositorySQLAlchemy,
)

__all__ = ["AccountRepositorySQLAlchemy"]
