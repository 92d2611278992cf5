"""Check can invite use case."""

from uuid import UUID

from pydantic import BaseModel

from famlink.application.usecase.base import BaseUseCase
from famlink.domain.service import ConnectionService
from famlink.domain.value import ExternalPersonId, UserId


class CheckCanInviteRequest(BaseModel):
    """Check can invite request."""

    external_person_id: str
    user_id: str  # User ID from auth


class CheckCanInviteResponse(BaseModel):
    """Check can invite response."""

    can_invite: bool
    reason: str | None = None


class CheckCanInviteUseCase(BaseUseCase):
    """Use case for the admission dry-run behind the invite button."""

    def __init__(self, connection_service: ConnectionService) -> None:
        self.connection_service = connection_service

    async def execute(self, request: CheckCanInviteRequest) -> CheckCanInviteResponse:
        reason = await self.connection_service.can_invite(
            ExternalPersonId(UUID(request.external_person_id)),
            UserId(UUID(request.user_id)),
        )
        return CheckCanInviteResponse(can_invite=reason is None, reason=reason)
