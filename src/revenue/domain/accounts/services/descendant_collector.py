"""Downward, flattened traversal of an account's subtree."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from revenue.domain.accounts.hierarchy_policy import (
    MAX_HIERARCHY_DEPTH,
    bounded_depth,
    sibling_sort_key,
)
from revenue.domain.accounts.repositories import AccountRepository
from revenue.domain.accounts.value_objects import AccountAtDepth

if TYPE_CHECKING:
    from revenue.application.factories import RepositoryFactory


class DescendantCollector:
    """Flatten the live subtree below an account, depth by depth."""

    def __init__(self, account_repo: AccountRepository):
        self._account_repo = account_repo

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> DescendantCollector:
        return cls(account_repo=factory.account_repository())

    async def get_descendants(
        self,
        account_id: UUID,
        max_depth: int = MAX_HIERARCHY_DEPTH,
    ) -> list[AccountAtDepth]:
        """Return descendants sorted by depth, then name.

        Children of the deepest allowed level are never fetched. There is
        no cycle check; the depth bound alone keeps cyclic data finite.
        """
        limit = bounded_depth(max_depth)
        collected: list[AccountAtDepth] = []
        frontier = [account_id]

        for depth in range(1, limit + 1):
            next_frontier: list[UUID] = []
            for parent_id in frontier:
                children = await self._account_repo.find_children(
                    parent_id,
                    exclude_deleted=True,
                )
                for child in children:
                    collected.append(AccountAtDepth(account=child, depth=depth))
                    next_frontier.append(child.id)
            if not next_frontier:
                break
            frontier = next_frontier

        collected.sort(key=lambda e: (e.depth, *sibling_sort_key(e.account)))
        return collected
