"""List accounts query - page through live accounts for display."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from revenue.domain.accounts.entities import Account, AccountStatus
from revenue.domain.accounts.exceptions import InvalidAccountStatusError
from revenue.domain.accounts.repositories import AccountRepository

if TYPE_CHECKING:
    from revenue.application.factories import RepositoryFactory

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass
class AccountPage:
    """One page of accounts plus the total number of matches."""

    accounts: list[Account]
    total: int
    offset: int
    limit: int

    @property
    def has_more(self) -> bool:
        return self.offset + len(self.accounts) < self.total


class ListAccountsQuery:
    """Query to list non-deleted accounts, newest first."""

    def __init__(self, account_repository: AccountRepository):
        self._account_repo = account_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> ListAccountsQuery:
        return cls(account_repository=factory.account_repository())

    async def execute(
        self,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
        status: Optional[str] = None,
    ) -> AccountPage:
        offset = max(0, offset)
        limit = max(1, min(limit, MAX_PAGE_SIZE))
        status_filter = self._parse_status(status) if status else None

        accounts, total = await self._account_repo.find_page(
            offset=offset,
            limit=limit,
            status=status_filter,
        )
        return AccountPage(accounts=accounts, total=total, offset=offset, limit=limit)

    @staticmethod
    def _parse_status(value: str) -> AccountStatus:
        try:
            return AccountStatus(value.lower())
        except ValueError as e:
            raise InvalidAccountStatusError(
                value,
                [s.value for s in AccountStatus],
            ) from e
