"""PostgreSQL notification sink."""

from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession

from famlink.domain.model import Notification
from famlink.domain.repository import NotificationSink
from famlink.persistence.mappers import notification_to_dict
from famlink.persistence.tables import notifications_table


class PostgresNotificationSink(NotificationSink):
    """Stores notifications in user_notifications for the client to poll."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def send(self, notification: Notification) -> None:
        """Insert the notification inside a savepoint.

        A failed insert rolls back to the savepoint only, leaving the
        surrounding transition intact.
        """
        async with self.session.begin_nested():
            await self.session.execute(
                insert(notifications_table).values(**notification_to_dict(notification))
            )
