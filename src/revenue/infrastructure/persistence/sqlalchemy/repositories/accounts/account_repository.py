"""SQLAlchemy implementation of AccountRepository."""

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from revenue.domain.accounts.entities import Account, AccountStatus, AccountType
from revenue.domain.accounts.exceptions import AccountAlreadyExistsError
from revenue.domain.accounts.repositories import AccountRepository
from revenue.domain.accounts.value_objects import Currency
from revenue.domain.shared.exceptions import ConcurrencyError
from revenue.domain.shared.time import ensure_tz_aware
from revenue.infrastructure.persistence.sqlalchemy.models import AccountModel

logger = logging.getLogger(__name__)


class AccountRepositorySQLAlchemy(AccountRepository):
    """SQLAlchemy implementation of the account repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, account: Account) -> None:
        model = await self._find_model_by_id(account.id)

        if model:
            logger.debug("Updating existing account: %s", account.name)
            self._update_model_from_domain(model, account)
        else:
            logger.debug("Creating new account: %s", account.name)
            model = self._create_model_from_domain(account)
            self._session.add(model)

        try:
            await self._session.flush()
        except IntegrityError as exc:
            # Keep session usable after a failed flush
            await self._session.rollback()

            msg = str(getattr(exc, "orig", exc))
            # Duplicate primary contact email (SQLite and PostgreSQL wording)
            if (
                "accounts.primary_contact_email" in msg
                or "uq_accounts_primary_contact_email" in msg
            ):
                raise AccountAlreadyExistsError(account.primary_contact_email) from exc

            error_msg = f"Failed to save account due to database constraint: {msg}"
            raise ValueError(error_msg) from exc

        logger.debug("Account saved: %s (ID: %s)", account.name, account.id)

    async def find_by_id(
        self,
        account_id: UUID,
        for_update: bool = False,
    ) -> Optional[Account]:
        model = await self._find_model_by_id(account_id, for_update=for_update)

        if not model:
            return None

        return self._map_to_domain(model)

    async def find_children(
        self,
        parent_id: UUID,
        exclude_deleted: bool = True,
    ) -> list[Account]:
        stmt = select(AccountModel).where(AccountModel.parent_account_id == parent_id)
        if exclude_deleted:
            stmt = stmt.where(AccountModel.deleted_at.is_(None))
        stmt = stmt.order_by(AccountModel.name, AccountModel.id)

        result = await self._session.execute(stmt)
        models = result.scalars().all()
        return [self._map_to_domain(model) for model in models]

    async def find_by_primary_contact_email(self, email: str) -> Optional[Account]:
        stmt = select(AccountModel).where(
            AccountModel.primary_contact_email == email.strip().lower(),
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def find_page(
        self,
        offset: int,
        limit: int,
        status: Optional[AccountStatus] = None,
    ) -> tuple[list[Account], int]:
        conditions = [AccountModel.deleted_at.is_(None)]
        if status is not None:
            conditions.append(AccountModel.status == status.value)

        count_stmt = select(func.count()).select_from(AccountModel).where(*conditions)
        total = (await self._session.execute(count_stmt)).scalar_one()

        stmt = (
            select(AccountModel)
            .where(*conditions)
            .order_by(AccountModel.created_at.desc(), AccountModel.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._map_to_domain(model) for model in models], total

    async def _find_model_by_id(
        self,
        account_id: UUID,
        for_update: bool = False,
    ) -> Optional[AccountModel]:
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        if not for_update:
            result = await self._session.execute(stmt)
            return result.scalar_one_or_none()

        # SQLite ignores the clause; PostgreSQL holds the row lock
        stmt = stmt.with_for_update()
        try:
            result = await self._session.execute(stmt)
        except DBAPIError as exc:
            if "deadlock detected" not in str(exc.orig):
                raise
            logger.warning("Deadlock while locking account %s", account_id)
            raise ConcurrencyError(details={"account_id": str(account_id)}) from exc
        return result.scalar_one_or_none()

    def _create_model_from_domain(self, account: Account) -> AccountModel:
        return AccountModel(
            id=account.id,
            parent_account_id=account.parent_id,
            name=account.name,
            account_type=account.account_type.value,
            primary_contact_email=account.primary_contact_email,
            currency=account.currency.code,
            status=account.status.value,
            deleted_at=account.deleted_at,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )

    def _update_model_from_domain(
        self,
        model: AccountModel,
        account: Account,
    ) -> None:
        model.parent_account_id = account.parent_id
        model.name = account.name
        model.account_type = account.account_type.value
        model.primary_contact_email = account.primary_contact_email
        model.currency = account.currency.code
        model.status = account.status.value
        model.deleted_at = account.deleted_at
        model.updated_at = account.updated_at

    def _map_to_domain(self, model: AccountModel) -> Account:
        return Account.reconstitute(
            id=model.id,
            name=model.name,
            primary_contact_email=model.primary_contact_email,
            account_type=AccountType(model.account_type),
            currency=Currency(model.currency),
            status=AccountStatus(model.status),
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
            parent_id=model.parent_account_id,
            deleted_at=(
                ensure_tz_aware(model.deleted_at) if model.deleted_at else None
            ),
        )
