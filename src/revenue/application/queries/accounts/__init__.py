"""Account queries - read operations on the account list."""

from revenue.application.queries.accounts.list_accounts_query import (
    AccountPage,
    ListAccountsQuery,
)

__all__ = [
    "AccountPage",
    "ListAccountsQuery",
]
