"""Account directory interface.

Accounts and households are owned by the identity service; this core only
reads them.
"""

from abc import ABC, abstractmethod

from famlink.domain.model.account import Account
from famlink.domain.value import Email, UserId


class AccountDirectory(ABC):
    """Read-only lookup of registered accounts."""

    @abstractmethod
    async def find_by_email(self, email: Email) -> Account | None:
        """Find the account registered with the email, compared case-insensitively.

        Raises:
            TransientError: If the directory is temporarily unreachable
        """
        pass

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Account | None:
        """Find an account by ID."""
        pass
