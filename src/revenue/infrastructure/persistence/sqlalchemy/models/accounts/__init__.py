"""Account models."""

from revenue.infrastructure.persistence.sqlalchemy.models.accounts.account_model import (  # NOQA: E501
    AccountModel,
)

__all__ = ["AccountModel"]
