"""Query layer. Read-only operations for retrieving data."""

from revenue.application.queries.accounts import AccountPage, ListAccountsQuery

__all__ = [
    "AccountPage",
    "ListAccountsQuery",
]
