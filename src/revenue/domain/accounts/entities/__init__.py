"""Domain entities for the accounts bounded context."""

from revenue.domain.accounts.entities.account import Account
from revenue.domain.accounts.entities.account_status import AccountStatus
from revenue.domain.accounts.entities.account_type import AccountType

__all__ = ["Account", "AccountStatus", "AccountType"]
