"""List invitations use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from famlink.application.usecase.base import BaseUseCase
from famlink.domain.model.connection import Connection, ConnectionView
from famlink.domain.service import ConnectionService
from famlink.domain.value import ConnectionStatus, InvitationListFilter, UserId


class ConnectionItem(BaseModel):
    """Connection in responses."""

    connection_id: str
    external_person_id: str
    invited_user_id: str
    invited_by_user_id: str
    status: ConnectionStatus
    invited_at: datetime
    responded_at: datetime | None
    expires_at: datetime
    external_person_name: str | None = None
    external_person_email: str | None = None
    invited_user_email: str | None = None
    invited_by_user_email: str | None = None

    @classmethod
    def from_connection(cls, connection: Connection) -> "ConnectionItem":
        return cls(
            connection_id=str(connection.id),
            external_person_id=str(connection.external_person_id),
            invited_user_id=str(connection.invited_user_id),
            invited_by_user_id=str(connection.invited_by_user_id),
            status=connection.status,
            invited_at=connection.invited_at,
            responded_at=connection.responded_at,
            expires_at=connection.expires_at,
        )

    @classmethod
    def from_view(cls, view: ConnectionView) -> "ConnectionItem":
        return cls.from_connection(view.connection).model_copy(
            update={
                "external_person_name": view.external_person_name,
                "external_person_email": view.external_person_email,
                "invited_user_email": view.invited_user_email,
                "invited_by_user_email": view.invited_by_user_email,
            }
        )


class ListInvitationsRequest(BaseModel):
    """List invitations request."""

    user_id: str  # User ID from auth
    status: InvitationListFilter = InvitationListFilter.ALL


class ListInvitationsResponse(BaseModel):
    """List invitations response."""

    invitations: list[ConnectionItem]
    total: int


class ListInvitationsUseCase(BaseUseCase):
    """Use case for listing the invitations a user takes part in."""

    def __init__(self, connection_service: ConnectionService) -> None:
        """Initialize list invitations use case.

        Args:
            connection_service: Connection service
        """
        self.connection_service = connection_service

    async def execute(self, request: ListInvitationsRequest) -> ListInvitationsResponse:
        """Execute list invitations flow.

        Args:
            request: User and status filter

        Returns:
            Matching invitations, enriched with names and emails
        """
        views = await self.connection_service.list_invitations(
            UserId(UUID(request.user_id)), request.status
        )
        items = [ConnectionItem.from_view(view) for view in views]
        return ListInvitationsResponse(invitations=items, total=len(items))
