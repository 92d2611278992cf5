"""Identity resolver domain service."""

import logfire
from pydantic import ValidationError as PydanticValidationError

from famlink.domain.model.identity import NO_MATCH, IdentityMatch
from famlink.domain.repository import AccountDirectory
from famlink.domain.value import Email

from .base import Service


class IdentityResolver(Service):
    """Translate an email address to the registered account that owns it.

    Side-effect free. A directory outage propagates as TransientError and is
    never reported as "no match".
    """

    def __init__(self, account_directory: AccountDirectory) -> None:
        self.account_directory = account_directory

    async def resolve(self, email: Email | str | None) -> IdentityMatch:
        """Resolve an email to an account, case-insensitively.

        Args:
            email: Email to look up; blank or malformed values never match

        Returns:
            The match, or NO_MATCH
        """
        if email is None:
            return NO_MATCH
        if not isinstance(email, Email):
            if not email.strip():
                return NO_MATCH
            try:
                email = Email(email)
            except PydanticValidationError:
                return NO_MATCH

        with logfire.span("identity_resolver.resolve"):
            account = await self.account_directory.find_by_email(email)
            if account is None:
                logfire.info("No account matches email")
                return NO_MATCH

            logfire.info("Email resolved to account", account_id=str(account.id))
            return IdentityMatch(account_id=account.id, account_email=account.email)
