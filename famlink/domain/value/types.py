"""Domain value objects for famlink.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum

from pydantic import EmailStr, field_validator

from famlink.domain.value.common import RootValueObject


class ConnectionStatus(str, Enum):
    """Status of an external-person connection (the invitation).

    PENDING is the only initial state. ACCEPTED may still move to REVOKED;
    the rest are terminal.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    REVOKED = "revoked"
    EXPIRED = "expired"

    @property
    def is_active(self) -> bool:
        """Whether the status blocks a new invitation for the same pair."""
        return self in (ConnectionStatus.PENDING, ConnectionStatus.ACCEPTED)


class RevokeMode(str, Enum):
    """Who may revoke a connection."""

    INVITER_ONLY = "inviter_only"  # administrative revoke
    EITHER_PARTY = "either_party"  # mutual disconnect


class InvitationListFilter(str, Enum):
    """Filter for listing a user's invitations."""

    PENDING = "pending"  # invitations waiting on me
    ACCEPTED = "accepted"  # live connections I am a party to
    SENT = "sent"  # invitations I sent, any status
    ALL = "all"  # pending + accepted


class NotificationType(str, Enum):
    """Notification kinds emitted by the invitation lifecycle."""

    INVITATION_RECEIVED = "invitation_received"
    INVITATION_ACCEPTED = "invitation_accepted"
    INVITATION_REVOKED = "invitation_revoked"
    INVITATION_EXPIRED = "invitation_expired"


# related_entity_type attached to every lifecycle notification
CONNECTION_ENTITY_TYPE = "external_person_connection"


class Email(RootValueObject[EmailStr]):
    """Email address, normalized to lowercase with whitespace trimmed.

    Syntax is checked by pydantic's EmailStr after normalization.
    """

    @field_validator("root", mode="before")
    @classmethod
    def normalize_email(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v
