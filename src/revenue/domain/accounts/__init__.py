"""Accounts domain layer exports."""

# Entities
from revenue.domain.accounts.entities.account import Account
from revenue.domain.accounts.entities.account_status import AccountStatus
from revenue.domain.accounts.entities.account_type import AccountType

# Policy
from revenue.domain.accounts.hierarchy_policy import (
    MAX_HIERARCHY_DEPTH,
    bounded_depth,
)

# Repository Interfaces
from revenue.domain.accounts.repositories.account_repository import (
    AccountRepository,
)

# Domain Services
from revenue.domain.accounts.services import (
    AncestorWalker,
    CycleGuard,
    DescendantCollector,
    TreeBuilder,
)

# Value Objects
from revenue.domain.accounts.value_objects import (
    AccountAtDepth,
    Currency,
    HierarchyNode,
)

__all__ = [
    # Entities
    "Account",
    "AccountStatus",
    "AccountType",
    # Policy
    "MAX_HIERARCHY_DEPTH",
    "bounded_depth",
    # Repository Interfaces
    "AccountRepository",
    # Domain Services
    "AncestorWalker",
    "CycleGuard",
    "DescendantCollector",
    "TreeBuilder",
    # Value Objects
    "AccountAtDepth",
    "Currency",
    "HierarchyNode",
]
