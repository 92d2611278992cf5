"""PostgreSQL implementation of the account directory."""

from typing import Optional

import logfire
from sqlalchemy import func, select
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from famlink.domain.error import TransientError
from famlink.domain.model import Account
from famlink.domain.repository import AccountDirectory
from famlink.domain.value import Email, UserId
from famlink.persistence.mappers import row_to_account
from famlink.persistence.tables import users_table


class PostgresAccountDirectory(AccountDirectory):
    """Reads accounts from the users table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _first(self, stmt) -> Optional[Account]:
        try:
            result = await self.session.execute(stmt)
        except (OperationalError, InterfaceError) as e:
            logfire.error("Account lookup unavailable", error=str(e))
            raise TransientError("Account lookup is temporarily unavailable") from e
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def find_by_email(self, email: Email) -> Optional[Account]:
        """Find the account with the email, ignoring case.

        Raises:
            TransientError: If the database is unreachable
        """
        stmt = select(users_table).where(func.lower(users_table.c.email) == email.root)
        return await self._first(stmt)

    async def find_by_id(self, user_id: UserId) -> Optional[Account]:
        stmt = select(users_table).where(users_table.c.id == user_id)
        return await self._first(stmt)
