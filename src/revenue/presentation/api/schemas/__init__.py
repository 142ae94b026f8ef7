"""Pydantic schemas for API request/response models."""

from revenue.presentation.api.schemas.accounts import (
    AccountCreateRequest,
    AccountListResponse,
    AccountResponse,
    AccountUpdateRequest,
    AncestorResponse,
    DescendantResponse,
    HierarchyNodeResponse,
)
from revenue.presentation.api.schemas.common import ErrorResponse, HealthResponse

__all__ = [
    "AccountCreateRequest",
    "AccountListResponse",
    "AccountResponse",
    "AccountUpdateRequest",
    "AncestorResponse",
    "DescendantResponse",
    "ErrorResponse",
    "HealthResponse",
    "HierarchyNodeResponse",
]
