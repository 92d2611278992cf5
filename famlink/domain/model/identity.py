"""Identity resolution result."""

from typing import Optional

from famlink.domain.value import UserId
from famlink.domain.value.common import ValueObject


class IdentityMatch(ValueObject):
    """Result of resolving an email to a registered account.

    Ephemeral: never persisted, recomputed on every admission check and
    every read of an external person.
    """

    account_id: Optional[UserId] = None
    account_email: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.account_id is not None


NO_MATCH = IdentityMatch()
