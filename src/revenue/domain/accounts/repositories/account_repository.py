"""Account repository interface.

Defines the contract for Account persistence. Lookups by id return
soft-deleted accounts as well; callers decide how to treat tombstones.
Child lookups exclude tombstones unless asked otherwise.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from revenue.domain.accounts.entities import Account, AccountStatus


class AccountRepository(ABC):
    """Repository interface for Account entities."""

    @abstractmethod
    async def save(self, account: Account) -> None:
        """Create or update an account."""

    @abstractmethod
    async def find_by_id(
        self,
        account_id: UUID,
        for_update: bool = False,
    ) -> Optional[Account]:
        """Find account by ID, tombstoned or not.

        ``for_update`` locks the row until the surrounding transaction ends,
        where the backend supports row locks.
        """

    @abstractmethod
    async def find_children(
        self,
        parent_id: UUID,
        exclude_deleted: bool = True,
    ) -> list[Account]:
        """Find direct children of an account, ordered by name."""

    @abstractmethod
    async def find_by_primary_contact_email(self, email: str) -> Optional[Account]:
        """Find account by primary contact email."""

    @abstractmethod
    async def find_page(
        self,
        offset: int,
        limit: int,
        status: Optional[AccountStatus] = None,
    ) -> tuple[list[Account], int]:
        """Return a page of live accounts (newest first) and the total count."""
