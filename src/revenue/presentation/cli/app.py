"""Revenue CLI application using Typer.

Command-line utilities for the Revenue backend: database setup and
read-only inspection of the account hierarchy.
"""

import asyncio
from typing import Awaitable, Callable, TypeVar
from uuid import UUID

import typer
from rich.console import Console
from rich.table import Table
from rich.tree import Tree
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from revenue.application.services import AccountHierarchyService
from revenue.domain.accounts.hierarchy_policy import MAX_HIERARCHY_DEPTH
from revenue.domain.accounts.value_objects import HierarchyNode
from revenue.domain.shared.exceptions import DomainException
from revenue.infrastructure.persistence.sqlalchemy.init_db import (
    create_tables,
    describe_database_url,
    drop_tables,
)
from revenue.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyRepositoryFactory,
)
from revenue_config.settings import get_settings

T = TypeVar("T")

app = typer.Typer(
    name="revenue",
    help="Revenue - B2B billing account hierarchy CLI",
    no_args_is_help=True,
)
console = Console()

db_app = typer.Typer(
    name="db",
    help="Database schema utilities",
    no_args_is_help=True,
)
app.add_typer(db_app)

accounts_app = typer.Typer(
    name="accounts",
    help="Inspect the account hierarchy",
    no_args_is_help=True,
)
app.add_typer(accounts_app)


async def _with_service(action: Callable[[AccountHierarchyService], Awaitable[T]]) -> T:
    """Run a read against a short-lived engine and session."""
    engine = create_async_engine(get_settings().database_url, echo=False)
    session_maker = async_sessionmaker(engine, class_=AsyncSession)
    try:
        async with session_maker() as session:
            factory = SQLAlchemyRepositoryFactory(session)
            return await action(AccountHierarchyService.from_factory(factory))
    finally:
        await engine.dispose()


def _run_read(action: Callable[[AccountHierarchyService], Awaitable[T]]) -> T:
    try:
        return asyncio.run(_with_service(action))
    except DomainException as e:
        console.print(f"[red]{e.message}[/red] [dim]({e.code.value})[/dim]")
        raise typer.Exit(code=1) from e


def _render_tree(root: HierarchyNode) -> Tree:
    def label(node: HierarchyNode) -> str:
        account = node.account
        return (
            f"[bold]{account.name}[/bold] "
            f"[dim]{account.account_type.value} · {account.status.value} · "
            f"{account.id}[/dim]"
        )

    tree = Tree(label(root))
    stack: list[tuple[HierarchyNode, Tree]] = [(root, tree)]
    while stack:
        node, branch = stack.pop()
        for child in node.children:
            stack.append((child, branch.add(label(child))))
    return tree


@db_app.command("init")
def db_init() -> None:
    """Create missing database tables (idempotent)."""
    console.print(f"Database: {describe_database_url(get_settings().database_url)}")
    asyncio.run(create_tables())
    console.print("[green]Database schema is up to date.[/green]")


@db_app.command("drop")
def db_drop(
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Skip the confirmation prompt",
    ),
) -> None:
    """Drop all database tables (deletes all data)."""
    console.print(f"Database: {describe_database_url(get_settings().database_url)}")
    if not force:
        typer.confirm("This will DELETE ALL DATA in the database. Continue?", abort=True)
    asyncio.run(drop_tables())
    console.print("[yellow]Database tables dropped.[/yellow]")


@accounts_app.command("tree")
def show_tree(
    account_id: UUID = typer.Argument(..., help="Root account ID"),
    max_depth: int = typer.Option(
        MAX_HIERARCHY_DEPTH,
        "--max-depth",
        "-d",
        min=0,
        max=MAX_HIERARCHY_DEPTH,
        help="Maximum levels below the root",
    ),
) -> None:
    """Print the account and its live descendants as a tree."""
    root = _run_read(lambda service: service.get_hierarchy(account_id, max_depth))
    console.print(_render_tree(root))


@accounts_app.command("ancestors")
def show_ancestors(
    account_id: UUID = typer.Argument(..., help="Account ID"),
) -> None:
    """Print the ancestor chain of an account, root first."""
    ancestors = _run_read(lambda service: service.get_ancestors(account_id))

    if not ancestors:
        console.print("[dim]No ancestors: the account is a root.[/dim]")
        return

    table = Table(title="Ancestors (root first)")
    table.add_column("Distance", justify="right")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("ID", style="dim")
    for index, account in enumerate(ancestors):
        table.add_row(
            str(len(ancestors) - index),
            account.name,
            account.account_type.value,
            str(account.id),
        )
    console.print(table)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
