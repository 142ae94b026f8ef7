"""SQLAlchemy model for billing accounts."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from revenue.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class AccountModel(Base, TimestampMixin):
    """Database model for billing accounts.

    ``parent_account_id`` references another row of the same table. Rows
    are never hard-deleted, so the reference stays valid after a parent is
    tombstoned.
    """

    __tablename__ = "accounts"

    __table_args__ = (
        Index("ix_accounts_parent_account_id", "parent_account_id"),
        Index("ix_accounts_deleted_at", "deleted_at"),
        Index("ix_accounts_created_at", "created_at"),
        UniqueConstraint(
            "primary_contact_email",
            name="uq_accounts_primary_contact_email",
        ),
    )

    # Primary key (UUID from domain)
    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)

    # Hierarchy
    parent_account_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid,
        ForeignKey("accounts.id"),
        nullable=True,
    )

    # Account identification
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    account_type: Mapped[str] = mapped_column(String(50), nullable=False)
    primary_contact_email: Mapped[str] = mapped_column(String(320), nullable=False)

    # Billing properties
    currency: Mapped[str] = mapped_column(String(3), default="USD", nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        default="active",
        nullable=False,
        index=True,
    )

    # Soft deletion
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return (
            f"<AccountModel(id={self.id}, name={self.name}, "
            f"parent={self.parent_account_id})>"
        )
