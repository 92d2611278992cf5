"""External person entity.

An external person is a household-scoped contact (gift recipient,
co-owner, ...) who does not need an account. When their email matches a
registered account, a household member may invite that account to view
the records linked to the person.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import Field

from famlink.domain.model.common import DomainModel, utc_now
from famlink.domain.value import Email, ExternalPersonId, HouseholdId, UserId


class ExternalPerson(DomainModel):
    """External person entity.

    Business rules:
    - Owned by exactly one household
    - Email is optional, normalized, and unique within the household
    - Cannot be deleted while a pending or accepted connection references it
    - Deleting only archives the row (sets deleted_at), so its connection
      history keeps its subject
    """

    id: ExternalPersonId
    household_id: HouseholdId
    name: str = Field(min_length=1, max_length=255)
    email: Optional[Email] = None
    relationship: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = None
    birth_date: Optional[date] = None
    created_by: UserId
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    deleted_at: Optional[datetime] = None

    @property
    def has_email(self) -> bool:
        return self.email is not None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
