"""In-memory account directory for testing."""

from typing import Optional

from famlink.domain.error import TransientError
from famlink.domain.model import Account
from famlink.domain.repository import AccountDirectory
from famlink.domain.value import Email, UserId

from .store import InMemoryStore


class InMemoryAccountDirectory(AccountDirectory):
    """In-memory implementation of AccountDirectory for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def _check_available(self) -> None:
        if self.store.accounts_unavailable:
            raise TransientError("Account lookup is temporarily unavailable")

    async def find_by_email(self, email: Email) -> Optional[Account]:
        self._check_available()
        for account in self.store.accounts.values():
            if account.email.strip().lower() == email.root:
                return account
        return None

    async def find_by_id(self, user_id: UserId) -> Optional[Account]:
        self._check_available()
        return self.store.accounts.get(user_id)
