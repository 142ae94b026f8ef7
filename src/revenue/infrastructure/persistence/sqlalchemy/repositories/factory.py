"""SQLAlchemy repository factory for request-scoped repositories."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from revenue.infrastructure.persistence.sqlalchemy.repositories.accounts import (
    AccountRepositorySQLAlchemy,
)


class SQLAlchemyRepositoryFactory:
    """SQLAlchemy implementation of the RepositoryFactory Protocol."""

    def __init__(self, session: AsyncSession):
        self._session = session

        # Cached instances (created on demand)
        self._account_repo: AccountRepositorySQLAlchemy | None = None

    @property
    def session(self) -> AsyncSession:
        return self._session

    def account_repository(self) -> AccountRepositorySQLAlchemy:
        if self._account_repo is None:
            self._account_repo = AccountRepositorySQLAlchemy(self._session)
        return self._account_repo
