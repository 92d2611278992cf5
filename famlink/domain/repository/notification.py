"""Notification sink interface."""

from abc import ABC, abstractmethod

from famlink.domain.model.notification import Notification


class NotificationSink(ABC):
    """Outbound delivery of user notifications."""

    @abstractmethod
    async def send(self, notification: Notification) -> None:
        """Deliver a notification.

        Raises:
            Exception: Any delivery failure; callers treat sending as best-effort
        """
        pass
