"""Domain services for the account hierarchy."""

from revenue.domain.accounts.services.ancestor_walker import AncestorWalker
from revenue.domain.accounts.services.cycle_guard import CycleGuard
from revenue.domain.accounts.services.descendant_collector import (
    DescendantCollector,
)
from revenue.domain.accounts.services.tree_builder import TreeBuilder

__all__ = [
    "AncestorWalker",
    "CycleGuard",
    "DescendantCollector",
    "TreeBuilder",
]
