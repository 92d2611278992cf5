"""Revoke invitation use case."""

from uuid import UUID

from pydantic import BaseModel

from famlink.application.usecase.base import BaseUseCase
from famlink.domain.service import ConnectionService
from famlink.domain.value import ConnectionId, RevokeMode, UserId

from .list_invitations import ConnectionItem


class RevokeInvitationRequest(BaseModel):
    """Revoke invitation request."""

    connection_id: str
    user_id: str  # User ID from auth
    mode: RevokeMode = RevokeMode.INVITER_ONLY


class RevokeInvitationUseCase(BaseUseCase):
    """Use case for revoking an invitation or disconnecting a connection.

    INVITER_ONLY backs the inviter's revoke; EITHER_PARTY backs disconnect.
    """

    def __init__(self, connection_service: ConnectionService) -> None:
        """Initialize revoke invitation use case.

        Args:
            connection_service: Connection service
        """
        self.connection_service = connection_service

    async def execute(self, request: RevokeInvitationRequest) -> ConnectionItem:
        """Execute revoke flow.

        Raises:
            StateConflictError: If there is nothing the user may revoke
        """
        connection = await self.connection_service.revoke(
            ConnectionId(UUID(request.connection_id)),
            UserId(UUID(request.user_id)),
            request.mode,
        )
        return ConnectionItem.from_connection(connection)
