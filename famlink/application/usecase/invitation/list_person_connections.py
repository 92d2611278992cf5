"""List external person connections use case."""

from uuid import UUID

from pydantic import BaseModel

from famlink.application.usecase.base import BaseUseCase
from famlink.domain.service import ConnectionService
from famlink.domain.value import ExternalPersonId, UserId

from .list_invitations import ConnectionItem


class ListPersonConnectionsRequest(BaseModel):
    """List external person connections request."""

    external_person_id: str
    user_id: str  # User ID from auth


class ListPersonConnectionsResponse(BaseModel):
    """Connection history of an external person."""

    connections: list[ConnectionItem]
    total: int


class ListPersonConnectionsUseCase(BaseUseCase):
    """Use case for the connection history of an external person."""

    def __init__(self, connection_service: ConnectionService) -> None:
        self.connection_service = connection_service

    async def execute(
        self, request: ListPersonConnectionsRequest
    ) -> ListPersonConnectionsResponse:
        views = await self.connection_service.list_for_external_person(
            ExternalPersonId(UUID(request.external_person_id)),
            UserId(UUID(request.user_id)),
        )
        items = [ConnectionItem.from_view(view) for view in views]
        return ListPersonConnectionsResponse(connections=items, total=len(items))
