"""Repository interfaces for the accounts domain."""

from revenue.domain.accounts.repositories.account_repository import AccountRepository

__all__ = ["AccountRepository"]
