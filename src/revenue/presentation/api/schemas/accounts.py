"""Account schemas for API request/response models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

# Import ParentAction from application layer (business logic owns the enum)
from revenue.application.services import ParentAction
from revenue.domain.accounts.entities import Account
from revenue.domain.accounts.value_objects import HierarchyNode


class AccountCreateRequest(BaseModel):
    """Request schema for creating an account."""

    name: str = Field(..., min_length=1, max_length=255, description="Account name")
    primary_contact_email: EmailStr = Field(
        ...,
        description="Primary contact email (unique across accounts)",
    )
    account_type: str = Field(
        default="enterprise",
        description="Account type: enterprise, smb, startup",
    )
    currency: str = Field(default="USD", description="Currency code (default: USD)")
    parent_id: Optional[UUID] = Field(
        None,
        description="Parent account ID to create this as a subsidiary",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Acme Europe GmbH",
                "primary_contact_email": "billing@acme.eu",
                "account_type": "enterprise",
                "currency": "EUR",
                "parent_id": "550e8400-e29b-41d4-a716-446655440000",
            },
        },
    }


class AccountUpdateRequest(BaseModel):
    """Request schema for updating an account."""

    name: Optional[str] = Field(
        None,
        min_length=1,
        max_length=255,
        description="New account name",
    )
    primary_contact_email: Optional[EmailStr] = Field(
        None,
        description="New primary contact email",
    )
    account_type: Optional[str] = Field(None, description="New account type")
    currency: Optional[str] = Field(None, description="New billing currency")
    status: Optional[str] = Field(
        None,
        description="New status: active or suspended (use DELETE to deactivate)",
    )
    parent_id: Optional[UUID] = Field(
        None,
        description="Parent account ID (required when parent_action is 'set')",
    )
    parent_action: ParentAction = Field(
        default=ParentAction.KEEP,
        description=(
            "Action for parent relationship: "
            "'keep' = don't change (default), "
            "'set' = set parent to parent_id, "
            "'remove' = make a root account"
        ),
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "summary": "Rename only (keep parent unchanged)",
                    "value": {"name": "Acme Holdings"},
                },
                {
                    "summary": "Move under another account",
                    "value": {
                        "parent_action": "set",
                        "parent_id": "550e8400-e29b-41d4-a716-446655440000",
                    },
                },
                {
                    "summary": "Make a root account",
                    "value": {"parent_action": "remove"},
                },
            ],
        },
    }


class AccountResponse(BaseModel):
    """Response schema for account data."""

    id: UUID = Field(..., description="Account unique identifier")
    name: str = Field(..., description="Account name")
    account_type: str = Field(..., description="Account type: enterprise, smb, startup")
    primary_contact_email: str = Field(..., description="Primary contact email")
    currency: str = Field(..., description="ISO 4217 currency code (e.g., 'USD')")
    status: str = Field(..., description="Status: active, suspended, inactive")
    parent_id: Optional[UUID] = Field(
        None,
        description="Parent account ID (null for a root account)",
    )
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last modification timestamp")

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "name": "Acme Holdings",
                "account_type": "enterprise",
                "primary_contact_email": "finance@acme.com",
                "currency": "USD",
                "status": "active",
                "parent_id": None,
                "created_at": "2024-12-01T09:00:00Z",
                "updated_at": "2024-12-01T09:00:00Z",
            },
        },
    }

    @classmethod
    def from_entity(cls, account: Account) -> AccountResponse:
        return cls(
            id=account.id,
            name=account.name,
            account_type=account.account_type.value,
            primary_contact_email=account.primary_contact_email,
            currency=account.currency.code,
            status=account.status.value,
            parent_id=account.parent_id,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )


class AccountListResponse(BaseModel):
    """Response schema for a page of accounts."""

    accounts: list[AccountResponse] = Field(..., description="Accounts on this page")
    total: int = Field(..., description="Total number of matching accounts")
    offset: int = Field(..., description="Offset of the first returned account")
    limit: int = Field(..., description="Page size used")


class AncestorResponse(AccountResponse):
    """Ancestor entry, root first."""

    distance: int = Field(
        ...,
        ge=1,
        description="Hops from the queried account (1 = immediate parent)",
    )


class DescendantResponse(AccountResponse):
    """Descendant entry, ordered by depth then name."""

    depth: int = Field(
        ...,
        ge=1,
        description="Hops below the queried account (1 = direct child)",
    )


class HierarchyNodeResponse(BaseModel):
    """Node of an account tree; children are nested recursively."""

    id: UUID = Field(..., description="Account unique identifier")
    name: str = Field(..., description="Account name")
    account_type: str = Field(..., description="Account type")
    status: str = Field(..., description="Account status")
    depth: int = Field(..., ge=0, description="Depth below the tree root (root = 0)")
    children: list[HierarchyNodeResponse] = Field(
        default_factory=list,
        description="Live children ordered by name; empty at the depth bound",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "name": "Acme Holdings",
                "account_type": "enterprise",
                "status": "active",
                "depth": 0,
                "children": [
                    {
                        "id": "660e8400-e29b-41d4-a716-446655440001",
                        "name": "Acme Europe",
                        "account_type": "enterprise",
                        "status": "active",
                        "depth": 1,
                        "children": [],
                    },
                ],
            },
        },
    }

    @classmethod
    def from_node(cls, node: HierarchyNode) -> HierarchyNodeResponse:
        # Depth is bounded, so recursion here stays shallow
        return cls(
            id=node.account.id,
            name=node.account.name,
            account_type=node.account.account_type.value,
            status=node.account.status.value,
            depth=node.depth,
            children=[cls.from_node(child) for child in node.children],
        )
