"""List external persons use case."""

from uuid import UUID

from pydantic import BaseModel

from famlink.application.usecase.base import BaseUseCase
from famlink.domain.service import ExternalPersonService, IdentityResolver
from famlink.domain.value import UserId

from .get_external_person import ExternalPersonItem


class ListExternalPersonsRequest(BaseModel):
    """List external persons request."""

    user_id: str  # User ID from auth


class ListExternalPersonsResponse(BaseModel):
    """List external persons response."""

    external_persons: list[ExternalPersonItem]
    total: int


class ListExternalPersonsUseCase(BaseUseCase):
    """Use case for listing the external persons of the user's household."""

    def __init__(
        self,
        external_person_service: ExternalPersonService,
        identity_resolver: IdentityResolver,
    ) -> None:
        self.external_person_service = external_person_service
        self.identity_resolver = identity_resolver

    async def execute(
        self, request: ListExternalPersonsRequest
    ) -> ListExternalPersonsResponse:
        persons = await self.external_person_service.list_for_member(
            UserId(UUID(request.user_id))
        )
        items = [
            ExternalPersonItem.from_person(
                person, await self.identity_resolver.resolve(person.email)
            )
            for person in persons
        ]
        return ListExternalPersonsResponse(external_persons=items, total=len(items))
