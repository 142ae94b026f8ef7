"""Application services."""

from revenue.application.services.account_hierarchy_service import (
    AccountCreateInput,
    AccountHierarchyService,
    AccountPatch,
    ParentAction,
)

__all__ = [
    "AccountCreateInput",
    "AccountHierarchyService",
    "AccountPatch",
    "ParentAction",
]
