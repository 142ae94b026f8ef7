"""Accounts router for account and hierarchy endpoints."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from revenue.application.queries import ListAccountsQuery
from revenue.application.services import (
    AccountCreateInput,
    AccountHierarchyService,
    AccountPatch,
)
from revenue.domain.accounts.hierarchy_policy import MAX_HIERARCHY_DEPTH
from revenue.presentation.api.dependencies import RepoFactory
from revenue.presentation.api.schemas.accounts import (
    AccountCreateRequest,
    AccountListResponse,
    AccountResponse,
    AccountUpdateRequest,
    AncestorResponse,
    DescendantResponse,
    HierarchyNodeResponse,
)
from revenue.presentation.api.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter()

# Type aliases for query parameters using Annotated
MaxDepth = Annotated[
    int,
    Query(
        ge=0,
        le=MAX_HIERARCHY_DEPTH,
        description=f"Maximum hops to traverse (0-{MAX_HIERARCHY_DEPTH})",
    ),
]
PageOffset = Annotated[int, Query(ge=0, description="Number of accounts to skip")]
PageLimit = Annotated[int, Query(ge=1, le=100, description="Page size")]
StatusFilter = Annotated[
    str | None,
    Query(alias="status", description="Filter by status: active, suspended"),
]

NOT_FOUND_RESPONSE = {"model": ErrorResponse, "description": "Account not found"}


@router.get(
    "",
    summary="List accounts",
    responses={
        200: {"description": "Page of accounts, newest first"},
    },
)
async def list_accounts(
    factory: RepoFactory,
    offset: PageOffset = 0,
    limit: PageLimit = 20,
    status_filter: StatusFilter = None,
) -> AccountListResponse:
    """List accounts that have not been deleted."""
    query = ListAccountsQuery.from_factory(factory)
    page = await query.execute(offset=offset, limit=limit, status=status_filter)

    return AccountListResponse(
        accounts=[AccountResponse.from_entity(acc) for acc in page.accounts],
        total=page.total,
        offset=page.offset,
        limit=page.limit,
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create account",
    responses={
        201: {"description": "Account created"},
        400: {"model": ErrorResponse, "description": "Invalid input"},
        404: {"model": ErrorResponse, "description": "Parent account not found"},
        409: {"model": ErrorResponse, "description": "Email already in use"},
    },
)
async def create_account(
    request: AccountCreateRequest,
    factory: RepoFactory,
) -> AccountResponse:
    """
    Create a new account, optionally below an existing parent.

    Account types: enterprise, smb, startup
    """
    service = AccountHierarchyService.from_factory(factory)

    try:
        account = await service.create(
            AccountCreateInput(
                name=request.name,
                primary_contact_email=request.primary_contact_email,
                account_type=request.account_type,
                currency=request.currency,
            ),
            parent_id=request.parent_id,
        )
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        # Let the global exception handler process domain exceptions
        raise

    return AccountResponse.from_entity(account)


@router.get(
    "/{account_id}",
    summary="Get account",
    responses={404: NOT_FOUND_RESPONSE},
)
async def get_account(
    account_id: UUID,
    factory: RepoFactory,
) -> AccountResponse:
    """Get a specific account by ID."""
    service = AccountHierarchyService.from_factory(factory)
    account = await service.get_account(account_id)
    return AccountResponse.from_entity(account)


@router.patch(
    "/{account_id}",
    summary="Update account",
    responses={
        200: {"description": "Account updated"},
        400: {"model": ErrorResponse, "description": "Invalid change or cycle"},
        404: {"model": ErrorResponse, "description": "Account or parent not found"},
        409: {"model": ErrorResponse, "description": "Email already in use"},
    },
)
async def update_account(
    account_id: UUID,
    request: AccountUpdateRequest,
    factory: RepoFactory,
) -> AccountResponse:
    """Update account fields and/or its parent.

    Use parent_action to control the parent relationship:
    - 'keep' (default): Don't change parent
    - 'set': Set parent to parent_id (requires parent_id)
    - 'remove': Remove parent, make a root account
    """
    service = AccountHierarchyService.from_factory(factory)
    patch = AccountPatch(
        name=request.name,
        primary_contact_email=request.primary_contact_email,
        account_type=request.account_type,
        currency=request.currency,
        status=request.status,
        parent_action=request.parent_action,
        parent_id=request.parent_id,
    )

    try:
        account = await service.update(account_id, patch)
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise

    logger.info("Account updated: %s", account.id)
    return AccountResponse.from_entity(account)


@router.delete(
    "/{account_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete account",
    responses={
        204: {"description": "Account soft-deleted"},
        404: NOT_FOUND_RESPONSE,
    },
)
async def delete_account(
    account_id: UUID,
    factory: RepoFactory,
) -> None:
    """
    Soft-delete an account.

    The account is marked inactive and hidden from traversals. Child
    accounts keep their parent reference and stay live.
    """
    service = AccountHierarchyService.from_factory(factory)

    try:
        await service.remove(account_id)
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise


@router.get(
    "/{account_id}/hierarchy",
    summary="Get account tree",
    responses={404: NOT_FOUND_RESPONSE},
)
async def get_hierarchy(
    account_id: UUID,
    factory: RepoFactory,
    max_depth: MaxDepth = MAX_HIERARCHY_DEPTH,
) -> HierarchyNodeResponse:
    """Return the account and its live descendants as a nested tree."""
    service = AccountHierarchyService.from_factory(factory)
    tree = await service.get_hierarchy(account_id, max_depth=max_depth)
    return HierarchyNodeResponse.from_node(tree)


@router.get(
    "/{account_id}/children",
    summary="List direct children",
    responses={404: NOT_FOUND_RESPONSE},
)
async def get_children(
    account_id: UUID,
    factory: RepoFactory,
) -> list[AccountResponse]:
    """Return the live direct children of an account, ordered by name."""
    service = AccountHierarchyService.from_factory(factory)
    children = await service.get_children(account_id)
    return [AccountResponse.from_entity(child) for child in children]


@router.get(
    "/{account_id}/ancestors",
    summary="List ancestors",
    responses={404: NOT_FOUND_RESPONSE},
)
async def get_ancestors(
    account_id: UUID,
    factory: RepoFactory,
    max_depth: MaxDepth = MAX_HIERARCHY_DEPTH,
) -> list[AncestorResponse]:
    """Return ancestors ordered from the root down to the immediate parent."""
    service = AccountHierarchyService.from_factory(factory)
    ancestors = await service.get_ancestors(account_id, max_depth=max_depth)

    count = len(ancestors)
    return [
        AncestorResponse(
            **AccountResponse.from_entity(ancestor).model_dump(),
            distance=count - index,
        )
        for index, ancestor in enumerate(ancestors)
    ]


@router.get(
    "/{account_id}/descendants",
    summary="List descendants",
    responses={404: NOT_FOUND_RESPONSE},
)
async def get_descendants(
    account_id: UUID,
    factory: RepoFactory,
    max_depth: MaxDepth = MAX_HIERARCHY_DEPTH,
) -> list[DescendantResponse]:
    """Return live descendants ordered by depth, then name."""
    service = AccountHierarchyService.from_factory(factory)
    descendants = await service.get_descendants(account_id, max_depth=max_depth)

    return [
        DescendantResponse(
            **AccountResponse.from_entity(entry.account).model_dump(),
            depth=entry.depth,
        )
        for entry in descendants
    ]
