"""
Pytest fixtures for infrastructure persistence tests.

Each test gets a fresh in-memory SQLite schema; see
``tests.shared.fixtures.database``.
"""

from tests.shared.fixtures.database import db_session, sqlite_engine

# Make fixtures available
__all__ = ["db_session", "sqlite_engine"]
