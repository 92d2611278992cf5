"""Registered account (read-only view).

Accounts are owned by the account service. This core only needs to know
an account's email and the household it belongs to.
"""

from typing import Optional

from famlink.domain.model.common import DomainModel
from famlink.domain.value import HouseholdId, UserId


class Account(DomainModel):
    """A registered user account."""

    id: UserId
    email: str
    household_id: Optional[HouseholdId] = None
