"""Cycle detection for parent assignments."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from revenue.domain.accounts.exceptions import (
    CircularHierarchyError,
    ParentAccountNotFoundError,
    SelfParentError,
)
from revenue.domain.accounts.repositories import AccountRepository

if TYPE_CHECKING:
    from revenue.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)


class CycleGuard:
    """Check that giving an account a new parent keeps the forest acyclic."""

    def __init__(self, account_repo: AccountRepository):
        self._account_repo = account_repo

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> CycleGuard:
        return cls(account_repo=factory.account_repository())

    async def validate(
        self,
        account_id: UUID,
        proposed_parent_id: UUID,
        lock: bool = False,
    ) -> None:
        """Walk the proposed parent's chain up to its root.

        The walk is not depth-capped: a cycle has to be found wherever it
        sits. Tombstoned nodes are walked through like live ones.

        Raises
        ------
        SelfParentError
            The account is proposed as its own parent.
        ParentAccountNotFoundError
            A node on the chain does not exist.
        CircularHierarchyError
            The chain reaches the account itself (or loops on its own).
        """
        if proposed_parent_id == account_id:
            raise SelfParentError(account_id)

        visited: set[UUID] = {account_id}
        current_id: Optional[UUID] = proposed_parent_id

        while current_id is not None:
            current = await self._account_repo.find_by_id(current_id, for_update=lock)
            if current is None:
                raise ParentAccountNotFoundError(current_id)
            if current.id in visited:
                logger.info(
                    "Rejected parent %s for account %s: cycle through %s",
                    proposed_parent_id,
                    account_id,
                    current.id,
                )
                raise CircularHierarchyError(account_id, proposed_parent_id)
            visited.add(current.id)
            current_id = current.parent_id
