"""Value objects for the accounts domain."""

from revenue.domain.accounts.value_objects.currency import (
    DEFAULT_CURRENCY,
    SUPPORTED_CURRENCIES,
    Currency,
)
from revenue.domain.accounts.value_objects.hierarchy import (
    AccountAtDepth,
    HierarchyNode,
)

__all__ = [
    "AccountAtDepth",
    "Currency",
    "DEFAULT_CURRENCY",
    "HierarchyNode",
    "SUPPORTED_CURRENCIES",
]
