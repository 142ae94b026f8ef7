"""Account entity."""

import re
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from revenue.domain.accounts.entities.account_status import AccountStatus
from revenue.domain.accounts.entities.account_type import AccountType
from revenue.domain.accounts.exceptions import InactiveAccountError, SelfParentError
from revenue.domain.accounts.value_objects.currency import Currency
from revenue.domain.shared.exceptions import ValidationError
from revenue.domain.shared.time import utc_now

# user@domain.tld, lower-case after normalization
EMAIL_PATTERN = re.compile(r"^[a-z0-9._%+-]+@[a-z0-9-]+(\.[a-z0-9-]+)*\.[a-z]{2,}$")


class Account:
    """
    A billable business entity and a node in the account hierarchy.

    Hierarchy:
    - ``parent_id`` is a plain id used for lookups, never an object reference
    - ``None`` parent marks a root (e.g. a holding company)
    - Cycle detection needs the repository and lives in the CycleGuard
      domain service

    Soft deletion:
    - ``deleted_at`` marks a tombstone; tombstoned accounts are inactive
      and stay in storage, children keep pointing at them
    """

    def __init__(  # NOQA: PLR0913
        self,
        name: str,
        primary_contact_email: str,
        account_type: AccountType = AccountType.ENTERPRISE,
        currency: Optional[Currency] = None,
        id: Optional[UUID] = None,
        parent_id: Optional[UUID] = None,
        status: AccountStatus = AccountStatus.ACTIVE,
        deleted_at: Optional[datetime] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        """
        Initialize a new account.

        Parameters
        ----------
        name
            Display label (e.g. "Acme Holdings")
        primary_contact_email
            Primary contact, unique across accounts
        account_type
            Commercial segment (enterprise, smb, startup)
        currency
            Billing currency (defaults to USD)
        id
            Account ID (generated if not provided, used for reconstitution)
        parent_id
            Parent account ID, ``None`` for a root
        status
            Lifecycle status (defaults to active)
        deleted_at
            Tombstone timestamp, ``None`` for live accounts
        created_at
            Creation timestamp (defaults to now, used for reconstitution)
        updated_at
            Last modification timestamp (defaults to created_at)
        """
        self._name = self._validated_name(name)
        self._primary_contact_email = self._validated_email(primary_contact_email)
        self._account_type = account_type
        self._currency = currency or Currency.default()
        self._id = id if id is not None else uuid4()
        self._parent_id = parent_id
        self._status = status
        self._deleted_at = deleted_at
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or self._created_at

    @classmethod
    def reconstitute(  # NOQA: PLR0913
        cls,
        id: UUID,
        name: str,
        primary_contact_email: str,
        account_type: AccountType,
        currency: Currency,
        status: AccountStatus,
        created_at: datetime,
        updated_at: Optional[datetime] = None,
        parent_id: Optional[UUID] = None,
        deleted_at: Optional[datetime] = None,
    ) -> "Account":
        return cls(
            id=id,
            name=name,
            primary_contact_email=primary_contact_email,
            account_type=account_type,
            currency=currency,
            status=status,
            created_at=created_at,
            updated_at=updated_at,
            parent_id=parent_id,
            deleted_at=deleted_at,
        )

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def primary_contact_email(self) -> str:
        return self._primary_contact_email

    @property
    def account_type(self) -> AccountType:
        return self._account_type

    @property
    def currency(self) -> Currency:
        return self._currency

    @property
    def parent_id(self) -> Optional[UUID]:
        return self._parent_id

    @property
    def status(self) -> AccountStatus:
        return self._status

    @property
    def deleted_at(self) -> Optional[datetime]:
        return self._deleted_at

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def is_deleted(self) -> bool:
        return self._deleted_at is not None

    def is_root(self) -> bool:
        return self._parent_id is None

    def set_parent(self, parent_account: "Account") -> None:
        """Point this account at a new parent.

        Only the self-reference is checked here. Existence, tombstones and
        cycles require the repository and are handled by the service layer.
        """
        if parent_account.id == self._id:
            raise SelfParentError(self._id)
        self._parent_id = parent_account.id
        self._touch()

    def remove_parent(self) -> None:
        self._parent_id = None
        self._touch()

    def rename(self, new_name: str) -> None:
        self._name = self._validated_name(new_name)
        self._touch()

    def change_primary_contact_email(self, email: str) -> None:
        self._primary_contact_email = self._validated_email(email)
        self._touch()

    def change_account_type(self, account_type: AccountType) -> None:
        self._account_type = account_type
        self._touch()

    def change_currency(self, currency: Currency) -> None:
        self._currency = currency
        self._touch()

    def suspend(self) -> None:
        self._ensure_not_terminal()
        self._status = AccountStatus.SUSPENDED
        self._touch()

    def activate(self) -> None:
        self._ensure_not_terminal()
        self._status = AccountStatus.ACTIVE
        self._touch()

    def mark_deleted(self, at: Optional[datetime] = None) -> None:
        """Tombstone the account. Children are left untouched."""
        self._deleted_at = at or utc_now()
        self._status = AccountStatus.INACTIVE
        self._touch()

    def _ensure_not_terminal(self) -> None:
        if self.is_deleted or self._status.is_terminal():
            raise InactiveAccountError(self._name)

    def _touch(self) -> None:
        self._updated_at = utc_now()

    @staticmethod
    def _validated_name(name: str) -> str:
        if not name or not name.strip():
            msg = "Account name cannot be empty"
            raise ValidationError(msg)
        return name.strip()

    @staticmethod
    def _validated_email(email: str) -> str:
        normalized = (email or "").strip().lower()
        if not EMAIL_PATTERN.match(normalized):
            msg = f"Invalid primary contact email: '{email}'"
            raise ValidationError(msg)
        return normalized

    def __eq__(self, other) -> bool:
        if not isinstance(other, Account):
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __str__(self) -> str:
        return f"{self._name} ({self._status.value})"

    def __repr__(self) -> str:
        return (
            f"Account(id={self._id}, name={self._name!r}, "
            f"parent_id={self._parent_id}, status={self._status.value})"
        )
