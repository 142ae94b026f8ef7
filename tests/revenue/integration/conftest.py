"""Shared fixtures for integration tests.

PostgreSQL fixtures start a Testcontainers database and are only used by
tests marked ``integration``.
"""

from tests.shared.fixtures.database import postgres_container, postgres_engine

# Make fixtures available to tests in this directory
__all__ = ["postgres_container", "postgres_engine"]
