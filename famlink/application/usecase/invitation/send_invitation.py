"""Send invitation use case."""

from uuid import UUID

from pydantic import BaseModel

from famlink.application.usecase.base import BaseUseCase
from famlink.domain.service import ConnectionService
from famlink.domain.value import ExternalPersonId, UserId

from .list_invitations import ConnectionItem


class SendInvitationRequest(BaseModel):
    """Send invitation request."""

    external_person_id: str
    user_id: str  # Inviter ID from auth


class SendInvitationUseCase(BaseUseCase):
    """Use case for inviting the account behind an external person's email."""

    def __init__(self, connection_service: ConnectionService) -> None:
        """Initialize send invitation use case.

        Args:
            connection_service: Connection service
        """
        self.connection_service = connection_service

    async def execute(self, request: SendInvitationRequest) -> ConnectionItem:
        """Execute send invitation flow.

        Returns:
            The pending connection

        Raises:
            NotFoundError: If the external person does not exist
            PolicyDeniedError: With the reason the invitation is blocked
            TransientError: If the account lookup is unavailable
        """
        connection = await self.connection_service.send_invitation(
            ExternalPersonId(UUID(request.external_person_id)),
            UserId(UUID(request.user_id)),
        )
        return ConnectionItem.from_connection(connection)
