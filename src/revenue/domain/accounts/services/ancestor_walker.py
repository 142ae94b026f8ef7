"""Upward traversal of the parent chain."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from revenue.domain.accounts.entities import Account
from revenue.domain.accounts.hierarchy_policy import (
    MAX_HIERARCHY_DEPTH,
    bounded_depth,
)
from revenue.domain.accounts.repositories import AccountRepository

if TYPE_CHECKING:
    from revenue.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)


class AncestorWalker:
    """Collect the live ancestors of an account, root first."""

    def __init__(self, account_repo: AccountRepository):
        self._account_repo = account_repo

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> AncestorWalker:
        return cls(account_repo=factory.account_repository())

    async def get_ancestors(
        self,
        account_id: UUID,
        max_depth: int = MAX_HIERARCHY_DEPTH,
    ) -> list[Account]:
        """Return ancestors ordered root -> immediate parent.

        The chain ends quietly at a root, at a missing parent, at a
        tombstoned parent, or after ``max_depth`` hops. A tombstoned parent
        is logged as a dangling link; everything above it is not reported.
        """
        account = await self._account_repo.find_by_id(account_id)
        if account is None:
            return []

        hops = bounded_depth(max_depth)
        collected: list[Account] = []
        current = account

        for _ in range(hops):
            if current.parent_id is None:
                break
            parent = await self._account_repo.find_by_id(current.parent_id)
            if parent is None or parent.is_deleted:
                logger.warning(
                    "Ancestor walk from %s stopped at %s parent %s of %s",
                    account_id,
                    "missing" if parent is None else "deleted",
                    current.parent_id,
                    current.id,
                )
                break
            collected.append(parent)
            current = parent

        collected.reverse()
        return collected
