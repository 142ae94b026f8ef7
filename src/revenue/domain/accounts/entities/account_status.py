"""Account lifecycle status."""

from enum import Enum


class AccountStatus(Enum):
    """Lifecycle status of an account.

    ``active`` and ``suspended`` are business states an account can move
    between. ``inactive`` is terminal and is reached through soft deletion.
    """

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"

    def is_terminal(self) -> bool:
        return self is AccountStatus.INACTIVE
