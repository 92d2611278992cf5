"""In-memory connection repository for testing.

compare_and_set and expire_due never await between reading a row and
writing it back, so each of them is atomic on the event loop.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError

from famlink.domain.model import Connection, ConnectionView, TransitionGuard
from famlink.domain.repository import ConnectionRepository
from famlink.domain.value import ConnectionId, ConnectionStatus, ExternalPersonId, UserId

from .store import InMemoryStore


class InMemoryConnectionRepository(ConnectionRepository):
    """In-memory implementation of ConnectionRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def _view(self, connection: Connection) -> ConnectionView:
        person = self.store.external_persons.get(connection.external_person_id)
        return ConnectionView(
            connection=connection,
            external_person_name=person.name if person else None,
            external_person_email=str(person.email) if person and person.email else None,
            invited_user_email=self.store.email_of(connection.invited_user_id),
            invited_by_user_email=self.store.email_of(connection.invited_by_user_id),
        )

    def _views(self, connections, key) -> list[ConnectionView]:
        return [self._view(c) for c in sorted(connections, key=key, reverse=True)]

    async def find_by_id(self, connection_id: ConnectionId) -> Optional[Connection]:
        return self.store.connections.get(connection_id)

    async def find_active(
        self, external_person_id: ExternalPersonId, invited_user_id: UserId
    ) -> Optional[Connection]:
        for connection in self.store.connections.values():
            if (
                connection.external_person_id == external_person_id
                and connection.invited_user_id == invited_user_id
                and connection.status.is_active
            ):
                return connection
        return None

    async def add(self, connection: Connection) -> Connection:
        """Insert a new connection.

        Raises:
            IntegrityError: If the pair already has a live connection
        """
        if await self.find_active(
            connection.external_person_id, connection.invited_user_id
        ):
            raise IntegrityError("Duplicate active connection", None, Exception())
        self.store.connections[connection.id] = connection
        return connection

    async def compare_and_set(
        self,
        connection_id: ConnectionId,
        guard: TransitionGuard,
        target: ConnectionStatus,
        responded_at: datetime | None = None,
    ) -> Optional[Connection]:
        current = self.store.connections.get(connection_id)
        if current is None or not guard.matches(current):
            return None

        update = {"status": target}
        if responded_at is not None:
            update["responded_at"] = responded_at
        updated = current.model_copy(update=update)
        self.store.connections[connection_id] = updated
        return updated

    async def expire_due(self, now: datetime) -> list[Connection]:
        expired = []
        for connection in list(self.store.connections.values()):
            if (
                connection.status == ConnectionStatus.PENDING
                and connection.expires_at <= now
            ):
                updated = connection.model_copy(
                    update={"status": ConnectionStatus.EXPIRED, "responded_at": now}
                )
                self.store.connections[connection.id] = updated
                expired.append(updated)
        return expired

    async def find_pending_for_invitee(self, user_id: UserId) -> list[ConnectionView]:
        return self._views(
            (
                c
                for c in self.store.connections.values()
                if c.invited_user_id == user_id and c.status == ConnectionStatus.PENDING
            ),
            key=lambda c: c.invited_at,
        )

    async def find_accepted_for_party(self, user_id: UserId) -> list[ConnectionView]:
        return self._views(
            (
                c
                for c in self.store.connections.values()
                if c.is_party(user_id) and c.status == ConnectionStatus.ACCEPTED
            ),
            key=lambda c: c.responded_at,
        )

    async def find_by_inviter(
        self, user_id: UserId, status: ConnectionStatus | None = None
    ) -> list[ConnectionView]:
        return self._views(
            (
                c
                for c in self.store.connections.values()
                if c.invited_by_user_id == user_id and (status is None or c.status == status)
            ),
            key=lambda c: c.invited_at,
        )

    async def find_by_external_person(
        self, external_person_id: ExternalPersonId
    ) -> list[ConnectionView]:
        return self._views(
            (
                c
                for c in self.store.connections.values()
                if c.external_person_id == external_person_id
            ),
            key=lambda c: c.invited_at,
        )
