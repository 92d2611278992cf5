"""Notification domain service."""

from uuid import uuid4

import logfire

from famlink.domain.model.connection import Connection
from famlink.domain.model.notification import Notification
from famlink.domain.repository import NotificationSink
from famlink.domain.value import (
    CONNECTION_ENTITY_TYPE,
    NotificationId,
    NotificationType,
    UserId,
)

from .base import Service


class NotificationService(Service):
    """Builds lifecycle notifications and hands them to the sink.

    Sending is best-effort: failures are logged and swallowed, so a
    notification problem never undoes or blocks the transition it reports.
    """

    def __init__(self, notification_sink: NotificationSink) -> None:
        """Initialize notification service.

        Args:
            notification_sink: Outbound notification delivery
        """
        self.notification_sink = notification_sink

    async def invitation_received(
        self, connection: Connection, inviter_email: str | None
    ) -> None:
        """Tell the invitee about a new invitation."""
        inviter = inviter_email or "A household member"
        await self._send(
            connection.invited_user_id,
            NotificationType.INVITATION_RECEIVED,
            "You have been invited to view linked financial data",
            f"{inviter} has invited you to view expenses, income, and assets "
            "linked to you. Click to accept or reject.",
            connection,
        )

    async def invitation_accepted(self, connection: Connection) -> None:
        """Tell the inviter the invitation was accepted."""
        await self._send(
            connection.invited_by_user_id,
            NotificationType.INVITATION_ACCEPTED,
            "Your invitation was accepted",
            "Your invitation to view linked financial data has been accepted.",
            connection,
        )

    async def invitation_revoked(self, connection: Connection) -> None:
        """Tell the invitee their access was withdrawn."""
        await self._send(
            connection.invited_user_id,
            NotificationType.INVITATION_REVOKED,
            "Your invitation was revoked",
            "Your access to view linked financial data has been revoked.",
            connection,
        )

    async def invitation_expired(self, connection: Connection) -> None:
        """Tell both parties the invitation expired."""
        await self._send(
            connection.invited_user_id,
            NotificationType.INVITATION_EXPIRED,
            "Invitation expired",
            "Your invitation to view linked financial data has expired.",
            connection,
        )
        await self._send(
            connection.invited_by_user_id,
            NotificationType.INVITATION_EXPIRED,
            "Invitation expired",
            "Your invitation to external person "
            f"(ID: {connection.external_person_id}) has expired.",
            connection,
        )

    async def _send(
        self,
        recipient: UserId,
        notification_type: NotificationType,
        title: str,
        message: str,
        connection: Connection,
    ) -> None:
        notification = Notification(
            id=NotificationId(uuid4()),
            recipient_user_id=recipient,
            type=notification_type,
            title=title,
            message=message,
            related_entity_type=CONNECTION_ENTITY_TYPE,
            related_entity_id=connection.id,
        )
        try:
            await self.notification_sink.send(notification)
            logfire.info(
                "Notification sent",
                type=notification_type.value,
                recipient=str(recipient),
                connection_id=str(connection.id),
            )
        except Exception as e:
            logfire.warn(
                "Notification send failed",
                type=notification_type.value,
                recipient=str(recipient),
                connection_id=str(connection.id),
                error=str(e),
            )
