"""Account domain exceptions."""

from uuid import UUID

from revenue.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class AccountNotFoundError(EntityNotFoundError):
    """Raised when an account does not exist or has been soft-deleted."""

    def __init__(
        self,
        account_id: str | UUID | None = None,
        account_name: str | None = None,
        message: str | None = None,
        code: ErrorCode = ErrorCode.ACCOUNT_NOT_FOUND,
    ) -> None:
        identifier = account_id or account_name or "unknown"
        super().__init__(
            message=message or f"Account '{identifier}' not found",
            code=code,
            details={
                "account_id": str(account_id) if account_id else None,
                "account_name": account_name,
            },
        )


class ParentAccountNotFoundError(AccountNotFoundError):
    """Raised when a proposed parent cannot be resolved to a live account."""

    def __init__(self, parent_id: str | UUID) -> None:
        super().__init__(
            account_id=parent_id,
            message=f"Parent account '{parent_id}' not found",
            code=ErrorCode.PARENT_ACCOUNT_NOT_FOUND,
        )


class SelfParentError(ValidationError):
    """Raised when an account is proposed as its own parent."""

    def __init__(self, account_id: str | UUID) -> None:
        super().__init__(
            message="Account cannot be its own parent",
            code=ErrorCode.SELF_PARENT,
            details={"account_id": str(account_id)},
        )


class CircularHierarchyError(ValidationError):
    """Raised when a proposed parent already sits below the account."""

    def __init__(self, account_id: str | UUID, parent_id: str | UUID) -> None:
        super().__init__(
            message="Cannot create circular account hierarchy",
            code=ErrorCode.CIRCULAR_HIERARCHY,
            details={"account_id": str(account_id), "parent_id": str(parent_id)},
        )


class AccountAlreadyExistsError(ConflictError):
    """Raised when the primary contact email is already taken."""

    def __init__(self, primary_contact_email: str) -> None:
        super().__init__(
            message="Account with this email already exists",
            code=ErrorCode.DUPLICATE_ACCOUNT,
            details={"primary_contact_email": primary_contact_email},
        )


class InactiveAccountError(BusinessRuleViolation):
    """Raised when a status transition is attempted on an inactive account."""

    def __init__(self, account_name: str) -> None:
        super().__init__(
            message=f"Account '{account_name}' is not active",
            code=ErrorCode.INACTIVE_ACCOUNT,
            details={"account_name": account_name},
        )


class InvalidAccountTypeError(ValidationError):
    """Raised when an invalid account type is provided."""

    def __init__(self, account_type: str, valid_types: list[str] | None = None) -> None:
        valid = ", ".join(valid_types) if valid_types else "enterprise, smb, startup"
        super().__init__(
            message=f"Invalid account type '{account_type}'. Valid types: {valid}",
            code=ErrorCode.INVALID_ACCOUNT_TYPE,
            details={"account_type": account_type, "valid_types": valid_types},
        )


class InvalidAccountStatusError(ValidationError):
    """Raised when a status cannot be set through an update."""

    def __init__(self, status: str, valid_statuses: list[str] | None = None) -> None:
        valid = ", ".join(valid_statuses) if valid_statuses else "active, suspended"
        super().__init__(
            message=f"Invalid account status '{status}'. Valid statuses: {valid}",
            code=ErrorCode.INVALID_ACCOUNT_STATUS,
            details={"status": status, "valid_statuses": valid_statuses},
        )


class InvalidCurrencyError(ValidationError):
    """Raised when an invalid currency code is provided."""

    def __init__(
        self,
        currency: str,
        valid_currencies: list[str] | None = None,
    ) -> None:
        valid = ", ".join(valid_currencies) if valid_currencies else "USD"
        super().__init__(
            message=f"Invalid currency '{currency}'. Valid currencies: {valid}",
            code=ErrorCode.INVALID_CURRENCY,
            details={"currency": currency, "valid_currencies": valid_currencies},
        )
