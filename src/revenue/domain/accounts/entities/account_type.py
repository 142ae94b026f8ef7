"""Account type enumeration for billable business entities."""

from enum import Enum


class AccountType(Enum):
    """Commercial segment of an account."""

    ENTERPRISE = "enterprise"
    SMB = "smb"
    STARTUP = "startup"
