"""List linked connections use case."""

from uuid import UUID

from pydantic import BaseModel

from famlink.application.usecase.base import BaseUseCase
from famlink.application.usecase.invitation.list_invitations import ConnectionItem
from famlink.domain.service import LinkedDataService
from famlink.domain.value import UserId


class ListLinkedConnectionsRequest(BaseModel):
    """List linked connections request."""

    user_id: str  # User ID from auth


class ListLinkedConnectionsResponse(BaseModel):
    """Accepted connections the user can view linked data through."""

    connections: list[ConnectionItem]
    total: int


class ListLinkedConnectionsUseCase(BaseUseCase):
    """Use case for the entry list of the linked data screen."""

    def __init__(self, linked_data_service: LinkedDataService) -> None:
        self.linked_data_service = linked_data_service

    async def execute(
        self, request: ListLinkedConnectionsRequest
    ) -> ListLinkedConnectionsResponse:
        views = await self.linked_data_service.list_connections(
            UserId(UUID(request.user_id))
        )
        items = [ConnectionItem.from_view(view) for view in views]
        return ListLinkedConnectionsResponse(connections=items, total=len(items))
