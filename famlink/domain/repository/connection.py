"""Connection repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from famlink.domain.model.connection import Connection, ConnectionView, TransitionGuard
from famlink.domain.value import ConnectionId, ConnectionStatus, ExternalPersonId, UserId


class ConnectionRepository(ABC):
    """Repository for Connection entity.

    Status changes go exclusively through compare_and_set and expire_due:
    both evaluate their condition and write the new status in a single
    atomic step. There is no generic save for existing connections.
    """

    @abstractmethod
    async def find_by_id(self, connection_id: ConnectionId) -> Connection | None:
        """Find a connection by ID.

        Args:
            connection_id: The connection's unique identifier

        Returns:
            The connection if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_active(
        self, external_person_id: ExternalPersonId, invited_user_id: UserId
    ) -> Connection | None:
        """Find the pending or accepted connection for a (person, invitee) pair."""
        pass

    @abstractmethod
    async def add(self, connection: Connection) -> Connection:
        """Insert a new pending connection.

        Args:
            connection: The connection to insert

        Returns:
            The stored connection

        Raises:
            IntegrityError: If a pending or accepted connection already exists
                for the same (external person, invitee) pair
        """
        pass

    @abstractmethod
    async def compare_and_set(
        self,
        connection_id: ConnectionId,
        guard: TransitionGuard,
        target: ConnectionStatus,
        responded_at: datetime | None = None,
    ) -> Connection | None:
        """Atomically move a connection to target if it satisfies guard.

        Args:
            connection_id: Connection to update
            guard: Condition the stored row must satisfy
            target: New status
            responded_at: Response timestamp to record with the transition

        Returns:
            The updated connection, or None when no row satisfied the guard
        """
        pass

    @abstractmethod
    async def expire_due(self, now: datetime) -> list[Connection]:
        """Expire every pending connection with expires_at <= now.

        Returns:
            Exactly the connections this call moved to EXPIRED
        """
        pass

    @abstractmethod
    async def find_pending_for_invitee(self, user_id: UserId) -> list[ConnectionView]:
        """Pending invitations addressed to the user, newest first."""
        pass

    @abstractmethod
    async def find_accepted_for_party(self, user_id: UserId) -> list[ConnectionView]:
        """Accepted connections where the user is inviter or invitee, newest first."""
        pass

    @abstractmethod
    async def find_by_inviter(
        self, user_id: UserId, status: ConnectionStatus | None = None
    ) -> list[ConnectionView]:
        """Invitations the user sent, optionally filtered by status, newest first."""
        pass

    @abstractmethod
    async def find_by_external_person(
        self, external_person_id: ExternalPersonId
    ) -> list[ConnectionView]:
        """Every connection of an external person, any status, newest first."""
        pass
