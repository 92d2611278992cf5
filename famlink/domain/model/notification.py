"""User notification (outbound to the notification sink)."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from famlink.domain.model.common import DomainModel, utc_now
from famlink.domain.value import NotificationId, NotificationType, UserId


class Notification(DomainModel):
    """Notification addressed to a single user.

    Delivery is best-effort; the invitation lifecycle never waits on it.
    """

    id: NotificationId
    recipient_user_id: UserId
    type: NotificationType
    title: str
    message: str
    related_entity_type: Optional[str] = None
    related_entity_id: Optional[UUID] = None
    read: bool = False
    created_at: datetime = Field(default_factory=utc_now)
