"""Value objects produced by hierarchy traversals."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from revenue.domain.accounts.entities import Account


@dataclass(frozen=True)
class AccountAtDepth:
    """An account together with its hop distance from the queried account."""

    account: Account
    depth: int


@dataclass
class HierarchyNode:
    """A node of an account tree; children share the same shape."""

    account: Account
    depth: int
    children: list[HierarchyNode] = field(default_factory=list)

    def iter_accounts(self) -> Iterator[Account]:
        """Yield the accounts of this subtree, pre-order."""
        stack: list[HierarchyNode] = [self]
        while stack:
            node = stack.pop()
            yield node.account
            stack.extend(reversed(node.children))

    def size(self) -> int:
        return sum(1 for _ in self.iter_accounts())
