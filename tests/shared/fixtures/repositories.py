"""
In-memory AccountRepository for unit tests.

Stores copies of the saved entities so that a test only sees what was
actually saved, the same as with a database. Row locks are recorded
instead of taken.
"""

from copy import copy
from typing import Optional
from uuid import UUID

from revenue.domain.accounts.entities import Account, AccountStatus
from revenue.domain.accounts.exceptions import AccountAlreadyExistsError
from revenue.domain.accounts.repositories import AccountRepository


class InMemoryAccountRepository(AccountRepository):
    """Dictionary-backed repository with call recording."""

    def __init__(self):
        self.accounts: dict[UUID, Account] = {}
        self.locked_ids: list[UUID] = []
        self.find_children_calls: list[UUID] = []
        self.save_count = 0

    def put(self, *accounts: Account) -> None:
        """Store accounts directly, bypassing uniqueness checks."""
        for account in accounts:
            self.accounts[account.id] = copy(account)

    async def save(self, account: Account) -> None:
        for other in self.accounts.values():
            if (
                other.id != account.id
                and other.primary_contact_email == account.primary_contact_email
            ):
                raise AccountAlreadyExistsError(account.primary_contact_email)
        self.accounts[account.id] = copy(account)
        self.save_count += 1

    async def find_by_id(
        self,
        account_id: UUID,
        for_update: bool = False,
    ) -> Optional[Account]:
        if for_update:
            self.locked_ids.append(account_id)
        account = self.accounts.get(account_id)
        return copy(account) if account is not None else None

    async def find_children(
        self,
        parent_id: UUID,
        exclude_deleted: bool = True,
    ) -> list[Account]:
        self.find_children_calls.append(parent_id)
        children = [
            copy(acc)
            for acc in self.accounts.values()
            if acc.parent_id == parent_id and not (exclude_deleted and acc.is_deleted)
        ]
        return sorted(children, key=lambda a: (a.name, str(a.id)))

    async def find_by_primary_contact_email(self, email: str) -> Optional[Account]:
        normalized = email.strip().lower()
        for account in self.accounts.values():
            if account.primary_contact_email == normalized:
                return copy(account)
        return None

    async def find_page(
        self,
        offset: int,
        limit: int,
        status: Optional[AccountStatus] = None,
    ) -> tuple[list[Account], int]:
        live = [
            acc
            for acc in self.accounts.values()
            if not acc.is_deleted and (status is None or acc.status == status)
        ]
        live.sort(key=lambda a: (a.created_at, str(a.id)), reverse=True)
        return [copy(a) for a in live[offset : offset + limit]], len(live)
