"""Shared pytest fixtures for all test modules."""

from tests.shared.fixtures.database import (
    db_session,
    postgres_container,
    postgres_engine,
    sqlite_engine,
)
from tests.shared.fixtures.factories import TestAccountFactory
from tests.shared.fixtures.repositories import InMemoryAccountRepository

__all__ = [
    "InMemoryAccountRepository",
    "TestAccountFactory",
    "db_session",
    "postgres_container",
    "postgres_engine",
    "sqlite_engine",
]
