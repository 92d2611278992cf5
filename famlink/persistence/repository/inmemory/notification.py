"""In-memory notification sink for testing."""

from famlink.domain.model import Notification
from famlink.domain.repository import NotificationSink

from .store import InMemoryStore


class InMemoryNotificationSink(NotificationSink):
    """Collects notifications in the store."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def send(self, notification: Notification) -> None:
        if self.store.notifications_failing:
            raise ConnectionError("Notification delivery failed")
        self.store.notifications.append(notification)
