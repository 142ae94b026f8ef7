"""Create, update, remove and traverse accounts in the hierarchy."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from revenue.domain.accounts.entities import Account, AccountStatus, AccountType
from revenue.domain.accounts.exceptions import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    InvalidAccountStatusError,
    InvalidAccountTypeError,
    InvalidCurrencyError,
    ParentAccountNotFoundError,
    SelfParentError,
)
from revenue.domain.accounts.hierarchy_policy import (
    MAX_HIERARCHY_DEPTH,
    sibling_sort_key,
)
from revenue.domain.accounts.repositories import AccountRepository
from revenue.domain.accounts.services import (
    AncestorWalker,
    CycleGuard,
    DescendantCollector,
    TreeBuilder,
)
from revenue.domain.accounts.value_objects import (
    SUPPORTED_CURRENCIES,
    AccountAtDepth,
    Currency,
    HierarchyNode,
)
from revenue.domain.shared.exceptions import ValidationError

if TYPE_CHECKING:
    from revenue.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)

# Statuses an update may set; inactive is reached through remove() only.
UPDATABLE_STATUSES = (AccountStatus.ACTIVE, AccountStatus.SUSPENDED)


class ParentAction(str, Enum):
    """Action to take on the account's parent relationship."""

    KEEP = "keep"
    SET = "set"
    REMOVE = "remove"


@dataclass(frozen=True)
class AccountCreateInput:
    """Fields accepted when creating an account."""

    name: str
    primary_contact_email: str
    account_type: str = AccountType.ENTERPRISE.value
    currency: str = "USD"


@dataclass(frozen=True)
class AccountPatch:
    """Partial update; ``None`` fields are left unchanged."""

    name: Optional[str] = None
    primary_contact_email: Optional[str] = None
    account_type: Optional[str] = None
    currency: Optional[str] = None
    status: Optional[str] = None
    parent_action: ParentAction = ParentAction.KEEP
    parent_id: Optional[UUID] = None

    @property
    def changes_parent(self) -> bool:
        return self.parent_action != ParentAction.KEEP


class AccountHierarchyService:
    """Orchestrate account writes and hierarchy reads.

    Writes that set a parent are validated before anything is saved. When
    the parent changes on update, the account row and the validated parent
    chain are read with row locks so the check and the write commit in the
    same transaction.

    Every read confirms the queried account exists and is not soft-deleted.
    """

    def __init__(  # NOQA: PLR0913
        self,
        account_repository: AccountRepository,
        cycle_guard: CycleGuard,
        ancestor_walker: AncestorWalker,
        descendant_collector: DescendantCollector,
        tree_builder: TreeBuilder,
    ):
        self._account_repo = account_repository
        self._cycle_guard = cycle_guard
        self._ancestor_walker = ancestor_walker
        self._descendant_collector = descendant_collector
        self._tree_builder = tree_builder

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> AccountHierarchyService:
        return cls(
            account_repository=factory.account_repository(),
            cycle_guard=CycleGuard.from_factory(factory),
            ancestor_walker=AncestorWalker.from_factory(factory),
            descendant_collector=DescendantCollector.from_factory(factory),
            tree_builder=TreeBuilder.from_factory(factory),
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(
        self,
        data: AccountCreateInput,
        parent_id: Optional[UUID] = None,
    ) -> Account:
        """Create an account, optionally below an existing live parent.

        A new account cannot be anyone's ancestor yet, so no cycle check
        is needed.
        """
        account_type = self._parse_account_type(data.account_type)
        currency = self._parse_currency(data.currency)

        account = Account(
            name=data.name,
            primary_contact_email=data.primary_contact_email,
            account_type=account_type,
            currency=currency,
        )
        await self._ensure_email_available(account.primary_contact_email)

        if parent_id is not None:
            parent = await self._get_live_parent(parent_id)
            account.set_parent(parent)

        await self._account_repo.save(account)
        logger.info(
            "Account created: %s (ID: %s, parent: %s)",
            account.name,
            account.id,
            account.parent_id,
        )
        return account

    async def update(self, account_id: UUID, patch: AccountPatch) -> Account:
        """Apply a patch once every check has passed."""
        account = await self._get_live_account(account_id, for_update=True)

        account_type = (
            self._parse_account_type(patch.account_type)
            if patch.account_type is not None
            else None
        )
        currency = (
            self._parse_currency(patch.currency) if patch.currency is not None else None
        )
        status = self._parse_status(patch.status) if patch.status is not None else None

        if patch.primary_contact_email is not None:
            await self._ensure_email_available(
                patch.primary_contact_email,
                owner_id=account.id,
            )

        new_parent: Optional[Account] = None
        if patch.parent_action == ParentAction.SET:
            new_parent = await self._validate_new_parent(account, patch.parent_id)

        if patch.name is not None:
            account.rename(patch.name)
        if patch.primary_contact_email is not None:
            account.change_primary_contact_email(patch.primary_contact_email)
        if account_type is not None:
            account.change_account_type(account_type)
        if currency is not None:
            account.change_currency(currency)
        if status is not None:
            self._apply_status(account, status)
        previous_parent_id = account.parent_id
        if new_parent is not None:
            account.set_parent(new_parent)
        elif patch.parent_action == ParentAction.REMOVE:
            account.remove_parent()

        await self._account_repo.save(account)

        if patch.changes_parent and previous_parent_id != account.parent_id:
            logger.info(
                "Account %s reparented: %s -> %s",
                account.id,
                previous_parent_id,
                account.parent_id,
            )
        return account

    async def remove(self, account_id: UUID) -> None:
        """Soft-delete an account. Children keep their parent reference."""
        account = await self._get_live_account(account_id, for_update=True)
        account.mark_deleted()
        await self._account_repo.save(account)
        logger.info("Account soft-deleted: %s (ID: %s)", account.name, account.id)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_account(self, account_id: UUID) -> Account:
        return await self._get_live_account(account_id)

    async def get_hierarchy(
        self,
        account_id: UUID,
        max_depth: int = MAX_HIERARCHY_DEPTH,
    ) -> HierarchyNode:
        await self._get_live_account(account_id)
        tree = await self._tree_builder.build_tree(account_id, max_depth)
        if tree is None:
            raise AccountNotFoundError(account_id=account_id)
        return tree

    async def get_children(self, account_id: UUID) -> list[Account]:
        await self._get_live_account(account_id)
        children = await self._account_repo.find_children(
            account_id,
            exclude_deleted=True,
        )
        return sorted(children, key=sibling_sort_key)

    async def get_ancestors(
        self,
        account_id: UUID,
        max_depth: int = MAX_HIERARCHY_DEPTH,
    ) -> list[Account]:
        await self._get_live_account(account_id)
        return await self._ancestor_walker.get_ancestors(account_id, max_depth)

    async def get_descendants(
        self,
        account_id: UUID,
        max_depth: int = MAX_HIERARCHY_DEPTH,
    ) -> list[AccountAtDepth]:
        await self._get_live_account(account_id)
        return await self._descendant_collector.get_descendants(account_id, max_depth)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _get_live_account(
        self,
        account_id: UUID,
        for_update: bool = False,
    ) -> Account:
        account = await self._account_repo.find_by_id(account_id, for_update=for_update)
        if account is None or account.is_deleted:
            raise AccountNotFoundError(account_id=account_id)
        return account

    async def _get_live_parent(
        self,
        parent_id: UUID,
        for_update: bool = False,
    ) -> Account:
        parent = await self._account_repo.find_by_id(parent_id, for_update=for_update)
        if parent is None or parent.is_deleted:
            raise ParentAccountNotFoundError(parent_id)
        return parent

    async def _validate_new_parent(
        self,
        account: Account,
        parent_id: Optional[UUID],
    ) -> Account:
        if parent_id is None:
            msg = "parent_id is required when parent_action is 'set'"
            raise ValidationError(msg)

        parent = await self._get_live_parent(parent_id, for_update=True)
        if parent.id == account.id:
            raise SelfParentError(account.id)
        await self._cycle_guard.validate(account.id, parent.id, lock=True)
        return parent

    async def _ensure_email_available(
        self,
        email: str,
        owner_id: Optional[UUID] = None,
    ) -> None:
        normalized = email.strip().lower()
        existing = await self._account_repo.find_by_primary_contact_email(normalized)
        if existing is not None and existing.id != owner_id:
            raise AccountAlreadyExistsError(normalized)

    @staticmethod
    def _apply_status(account: Account, status: AccountStatus) -> None:
        if status == account.status:
            return
        if status == AccountStatus.SUSPENDED:
            account.suspend()
        else:
            account.activate()

    @staticmethod
    def _parse_account_type(value: str) -> AccountType:
        try:
            return AccountType(value.lower())
        except ValueError as e:
            valid_types = [t.value for t in AccountType]
            raise InvalidAccountTypeError(value, valid_types) from e

    @staticmethod
    def _parse_currency(value: str) -> Currency:
        try:
            return Currency(value.upper())
        except ValueError as e:
            raise InvalidCurrencyError(value, sorted(SUPPORTED_CURRENCIES)) from e

    @staticmethod
    def _parse_status(value: str) -> AccountStatus:
        valid = [s.value for s in UPDATABLE_STATUSES]
        try:
            status = AccountStatus(value.lower())
        except ValueError as e:
            raise InvalidAccountStatusError(value, valid) from e
        if status not in UPDATABLE_STATUSES:
            raise InvalidAccountStatusError(value, valid)
        return status
