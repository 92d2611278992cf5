"""Accept / reject invitation use cases."""

from uuid import UUID

from pydantic import BaseModel

from famlink.application.usecase.base import BaseUseCase
from famlink.domain.service import ConnectionService
from famlink.domain.value import ConnectionId, UserId

from .list_invitations import ConnectionItem


class RespondToInvitationRequest(BaseModel):
    """Accept or reject request."""

    connection_id: str
    user_id: str  # Invitee ID from auth


class AcceptInvitationUseCase(BaseUseCase):
    """Use case for accepting an invitation."""

    def __init__(self, connection_service: ConnectionService) -> None:
        self.connection_service = connection_service

    async def execute(self, request: RespondToInvitationRequest) -> ConnectionItem:
        """Execute accept flow.

        Raises:
            InvitationExpiredError: If the deadline has passed; the invitation
                is expired as a side effect
            StateConflictError: If there is no pending invitation to accept
        """
        connection = await self.connection_service.accept(
            ConnectionId(UUID(request.connection_id)),
            UserId(UUID(request.user_id)),
        )
        return ConnectionItem.from_connection(connection)


class RejectInvitationUseCase(BaseUseCase):
    """Use case for rejecting an invitation."""

    def __init__(self, connection_service: ConnectionService) -> None:
        self.connection_service = connection_service

    async def execute(self, request: RespondToInvitationRequest) -> ConnectionItem:
        """Execute reject flow.

        Raises:
            StateConflictError: If there is no pending invitation to reject
        """
        connection = await self.connection_service.reject(
            ConnectionId(UUID(request.connection_id)),
            UserId(UUID(request.user_id)),
        )
        return ConnectionItem.from_connection(connection)
