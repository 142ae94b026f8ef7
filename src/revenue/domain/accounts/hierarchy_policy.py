"""Fixed traversal policy for the account hierarchy."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from revenue.domain.accounts.entities import Account

# Hops from the queried account that any traversal may cover.
MAX_HIERARCHY_DEPTH = 5


def bounded_depth(max_depth: int = MAX_HIERARCHY_DEPTH) -> int:
    """Return the effective depth bound for a traversal.

    Callers may narrow the bound, never widen it past MAX_HIERARCHY_DEPTH.
    """
    return max(0, min(max_depth, MAX_HIERARCHY_DEPTH))


def sibling_sort_key(account: Account) -> tuple[str, str]:
    """Order siblings by name, then id; every traversal uses this key."""
    return (account.name, str(account.id))
