"""Tests for CycleGuard."""

from uuid import uuid4

import pytest

from revenue.domain.accounts.exceptions import (
    CircularHierarchyError,
    ParentAccountNotFoundError,
    SelfParentError,
)
from revenue.domain.accounts.services import CycleGuard
from tests.shared.fixtures.factories import TestAccountFactory
from tests.shared.fixtures.repositories import InMemoryAccountRepository


@pytest.fixture
def repo():
    return InMemoryAccountRepository()


@pytest.fixture
def guard(repo):
    return CycleGuard(repo)


class TestCycleGuard:
    """CycleGuard walks the proposed parent's chain to its root."""

    @pytest.mark.asyncio
    async def test_unrelated_parent_is_accepted(self, guard, repo):
        # Arrange
        group = TestAccountFactory.acme_group()
        other = TestAccountFactory.account("Globex")
        repo.put(*group.values(), other)

        # Act & Assert - should not raise
        await guard.validate(group["holding"].id, other.id)

    @pytest.mark.asyncio
    async def test_self_parent_rejected_before_any_lookup(self, guard, repo):
        account_id = uuid4()

        with pytest.raises(SelfParentError):
            await guard.validate(account_id, account_id)

        assert repo.locked_ids == []

    @pytest.mark.asyncio
    async def test_direct_cycle_rejected(self, guard, repo):
        """A -> B exists; making B's parent A would close a loop."""
        a = TestAccountFactory.account("A")
        b = TestAccountFactory.account("B", parent=a)
        repo.put(a, b)

        with pytest.raises(CircularHierarchyError):
            await guard.validate(a.id, b.id)

    @pytest.mark.asyncio
    async def test_cycle_through_grandchild_rejected(self, guard, repo):
        """Scenario: reparenting the holding under its own grandchild."""
        group = TestAccountFactory.acme_group()
        repo.put(*group.values())

        with pytest.raises(CircularHierarchyError) as exc_info:
            await guard.validate(group["holding"].id, group["germany"].id)

        assert exc_info.value.details == {
            "account_id": str(group["holding"].id),
            "parent_id": str(group["germany"].id),
        }

    @pytest.mark.asyncio
    async def test_cycle_deeper_than_traversal_bound_still_found(self, guard, repo):
        """The walk has no depth cap: a ten-level chain is checked fully."""
        chain = TestAccountFactory.chain(10)
        repo.put(*chain)

        with pytest.raises(CircularHierarchyError):
            await guard.validate(chain[0].id, chain[-1].id)

    @pytest.mark.asyncio
    async def test_missing_proposed_parent(self, guard, repo):
        account = TestAccountFactory.account("A")
        repo.put(account)
        missing = uuid4()

        with pytest.raises(ParentAccountNotFoundError) as exc_info:
            await guard.validate(account.id, missing)

        assert exc_info.value.details["account_id"] == str(missing)

    @pytest.mark.asyncio
    async def test_missing_node_higher_on_chain(self, guard, repo):
        """A dangling parent reference anywhere on the chain is reported."""
        dangling = TestAccountFactory.account("Orphan", parent_id=uuid4())
        account = TestAccountFactory.account("A")
        repo.put(dangling, account)

        with pytest.raises(ParentAccountNotFoundError):
            await guard.validate(account.id, dangling.id)

    @pytest.mark.asyncio
    async def test_walks_through_tombstoned_nodes(self, guard, repo):
        """A deleted node on the chain does not hide a cycle above it."""
        a = TestAccountFactory.account("A")
        deleted_mid = TestAccountFactory.account("Deleted", parent=a, deleted=True)
        c = TestAccountFactory.account("C", parent=deleted_mid)
        repo.put(a, deleted_mid, c)

        with pytest.raises(CircularHierarchyError):
            await guard.validate(a.id, c.id)

    @pytest.mark.asyncio
    async def test_pre_existing_loop_terminates(self, guard, repo):
        """Corrupt data looping above the proposed parent still terminates."""
        x = TestAccountFactory.account("X")
        y = TestAccountFactory.account("Y", parent=x)
        x_looped = TestAccountFactory.account("X", parent_id=y.id)
        outsider = TestAccountFactory.account("Outsider")
        repo.put(x_looped, y, outsider)

        with pytest.raises(CircularHierarchyError):
            await guard.validate(outsider.id, x.id)

    @pytest.mark.asyncio
    async def test_lock_reads_chain_for_update(self, guard, repo):
        chain = TestAccountFactory.chain(3)
        newcomer = TestAccountFactory.account("Newcomer")
        repo.put(*chain, newcomer)

        await guard.validate(newcomer.id, chain[-1].id, lock=True)

        assert repo.locked_ids == [chain[2].id, chain[1].id, chain[0].id]

    @pytest.mark.asyncio
    async def test_validation_does_not_mutate(self, guard, repo):
        group = TestAccountFactory.acme_group()
        repo.put(*group.values())
        before = {a.id: a.parent_id for a in repo.accounts.values()}

        with pytest.raises(CircularHierarchyError):
            await guard.validate(group["holding"].id, group["germany"].id)

        assert {a.id: a.parent_id for a in repo.accounts.values()} == before
        assert repo.save_count == 0
