"""Delete external person use case."""

from uuid import UUID

from pydantic import BaseModel

from famlink.application.usecase.base import BaseUseCase
from famlink.domain.service import ExternalPersonService
from famlink.domain.value import ExternalPersonId, UserId


class DeleteExternalPersonRequest(BaseModel):
    """Delete external person request."""

    external_person_id: str
    user_id: str  # User ID from auth


class DeleteExternalPersonResponse(BaseModel):
    """Delete external person response."""

    message: str = "External person deleted successfully"


class DeleteExternalPersonUseCase(BaseUseCase):
    """Use case for deleting an external person without live connections."""

    def __init__(self, external_person_service: ExternalPersonService) -> None:
        self.external_person_service = external_person_service

    async def execute(
        self, request: DeleteExternalPersonRequest
    ) -> DeleteExternalPersonResponse:
        """Execute delete external person flow.

        Raises:
            NotFoundError: If the person is not in the user's household
            PolicyDeniedError: If a pending or accepted connection references it
        """
        await self.external_person_service.delete(
            ExternalPersonId(UUID(request.external_person_id)),
            UserId(UUID(request.user_id)),
        )
        return DeleteExternalPersonResponse()
