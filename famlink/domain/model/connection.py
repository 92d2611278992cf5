"""Connection entity (the invitation).

A connection authorizes one registered account (the invitee) to read the
financial records a household has linked to one of its external persons.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from famlink.domain.model.common import DomainModel, utc_now
from famlink.domain.value import ConnectionId, ConnectionStatus, ExternalPersonId, UserId
from famlink.domain.value.common import ValueObject


class Connection(DomainModel):
    """Connection entity.

    Business rules:
    - Invitee and inviter are never the same account
    - At most one pending/accepted connection per (external person, invitee)
    - expires_at is fixed at creation and never extended
    - responded_at is stamped by every transition out of PENDING or ACCEPTED
    - Rows are never deleted; terminal rows are the audit trail
    """

    id: ConnectionId
    external_person_id: ExternalPersonId
    invited_user_id: UserId
    invited_by_user_id: UserId
    status: ConnectionStatus = ConnectionStatus.PENDING
    invited_at: datetime = Field(default_factory=utc_now)
    responded_at: Optional[datetime] = None
    expires_at: datetime

    @model_validator(mode="after")
    def check_not_self(self) -> "Connection":
        if self.invited_user_id == self.invited_by_user_id:
            raise ValueError("Invitee and inviter must be different accounts")
        return self

    def is_party(self, user_id: UserId) -> bool:
        """Whether the user is the inviter or the invitee."""
        return user_id in (self.invited_user_id, self.invited_by_user_id)


class TransitionGuard(ValueObject):
    """Condition a stored connection must satisfy for a transition to apply.

    Repositories evaluate the guard and the status change as one write,
    so there is never a gap between checking and updating.
    """

    expected: ConnectionStatus
    invitee_id: Optional[UserId] = None
    inviter_id: Optional[UserId] = None
    party_id: Optional[UserId] = None
    # expires_at > unexpired_at
    unexpired_at: Optional[datetime] = None
    # expires_at <= expired_at
    expired_at: Optional[datetime] = None

    def matches(self, connection: Connection) -> bool:
        """Evaluate the guard against a connection snapshot."""
        if connection.status != self.expected:
            return False
        if self.invitee_id is not None and connection.invited_user_id != self.invitee_id:
            return False
        if self.inviter_id is not None and connection.invited_by_user_id != self.inviter_id:
            return False
        if self.party_id is not None and not connection.is_party(self.party_id):
            return False
        if self.unexpired_at is not None and connection.expires_at <= self.unexpired_at:
            return False
        if self.expired_at is not None and connection.expires_at > self.expired_at:
            return False
        return True


class ConnectionView(DomainModel):
    """Connection enriched with display data for listings."""

    connection: Connection
    external_person_name: Optional[str] = None
    external_person_email: Optional[str] = None
    invited_user_email: Optional[str] = None
    invited_by_user_email: Optional[str] = None
