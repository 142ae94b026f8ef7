"""
Concurrent reparenting against PostgreSQL.

Two transactions try to make X and Y each other's parent at the same
time. Row locks on the account and its new parent chain serialize them,
so at most one of the moves is committed and the stored forest stays
acyclic.
"""

import asyncio

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from revenue.application.services import (
    AccountHierarchyService,
    AccountPatch,
    ParentAction,
)
from revenue.domain.accounts.exceptions import CircularHierarchyError
from revenue.domain.shared.exceptions import ConcurrencyError
from revenue.infrastructure.persistence.sqlalchemy.repositories import (
    AccountRepositorySQLAlchemy,
    SQLAlchemyRepositoryFactory,
)
from tests.shared.fixtures.factories import TestAccountFactory

pytestmark = pytest.mark.integration


@pytest.fixture
def session_maker(postgres_engine):
    return async_sessionmaker(
        postgres_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def _seed(session_maker, *accounts) -> None:
    async with session_maker() as session:
        repo = AccountRepositorySQLAlchemy(session)
        for account in accounts:
            await repo.save(account)
        await session.commit()


async def _reparent(session_maker, account_id, parent_id):
    """Move one account in its own transaction; return the error, if any."""
    async with session_maker() as session:
        service = AccountHierarchyService.from_factory(
            SQLAlchemyRepositoryFactory(session),
        )
        try:
            await service.update(
                account_id,
                AccountPatch(parent_action=ParentAction.SET, parent_id=parent_id),
            )
            await session.commit()
        except (CircularHierarchyError, ConcurrencyError) as exc:
            await session.rollback()
            return exc
    return None


class TestConcurrentReparenting:
    @pytest.mark.asyncio
    async def test_crossing_moves_never_both_commit(self, session_maker):
        root = TestAccountFactory.account("Root")
        x = TestAccountFactory.account("X", parent=root)
        y = TestAccountFactory.account("Y", parent=root)
        await _seed(session_maker, root, x, y)

        results = await asyncio.gather(
            _reparent(session_maker, x.id, y.id),
            _reparent(session_maker, y.id, x.id),
        )

        failures = [r for r in results if r is not None]
        assert len(failures) == 1

        async with session_maker() as session:
            repo = AccountRepositorySQLAlchemy(session)
            stored_x = await repo.find_by_id(x.id)
            stored_y = await repo.find_by_id(y.id)
        assert not (stored_x.parent_id == y.id and stored_y.parent_id == x.id)

    @pytest.mark.asyncio
    async def test_sequential_cycle_is_rejected(self, session_maker):
        root = TestAccountFactory.account("Root")
        child = TestAccountFactory.account("Child", parent=root)
        grandchild = TestAccountFactory.account("Grandchild", parent=child)
        await _seed(session_maker, root, child, grandchild)

        error = await _reparent(session_maker, root.id, grandchild.id)

        assert isinstance(error, CircularHierarchyError)
        async with session_maker() as session:
            stored_root = await AccountRepositorySQLAlchemy(session).find_by_id(
                root.id,
            )
        assert stored_root.parent_id is None
