"""Nested tree construction below an account."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from revenue.domain.accounts.hierarchy_policy import (
    MAX_HIERARCHY_DEPTH,
    bounded_depth,
    sibling_sort_key,
)
from revenue.domain.accounts.repositories import AccountRepository
from revenue.domain.accounts.value_objects import HierarchyNode

if TYPE_CHECKING:
    from revenue.application.factories import RepositoryFactory


class TreeBuilder:
    """Build a depth-bounded HierarchyNode tree rooted at an account.

    Uses an explicit queue instead of recursion. Each subtree is read-only
    and independent of its siblings, so the visiting order does not affect
    the result; children are attached in name order.
    """

    def __init__(self, account_repo: AccountRepository):
        self._account_repo = account_repo

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> TreeBuilder:
        return cls(account_repo=factory.account_repository())

    async def build_tree(
        self,
        root_id: UUID,
        max_depth: int = MAX_HIERARCHY_DEPTH,
    ) -> Optional[HierarchyNode]:
        root = await self._account_repo.find_by_id(root_id)
        if root is None:
            return None

        limit = bounded_depth(max_depth)
        root_node = HierarchyNode(account=root, depth=0)
        pending: deque[HierarchyNode] = deque([root_node])

        while pending:
            node = pending.popleft()
            if node.depth >= limit:
                # truncated: leaf at the bound
                continue
            children = await self._account_repo.find_children(
                node.account.id,
                exclude_deleted=True,
            )
            for child in sorted(children, key=sibling_sort_key):
                child_node = HierarchyNode(account=child, depth=node.depth + 1)
                node.children.append(child_node)
                pending.append(child_node)

        return root_node
