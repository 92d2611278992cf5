"""Update external person use case."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from famlink.application.usecase.base import BaseUseCase
from famlink.domain.service import ExternalPersonService, IdentityResolver
from famlink.domain.value import ExternalPersonId, UserId

from .get_external_person import ExternalPersonItem


class UpdateExternalPersonRequest(BaseModel):
    """Update external person request.

    Only fields that were explicitly set are applied; send null to clear.
    """

    external_person_id: str
    user_id: str  # User ID from auth
    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = None
    relationship: str | None = Field(default=None, max_length=100)
    notes: str | None = None
    birth_date: date | None = None


class UpdateExternalPersonUseCase(BaseUseCase):
    """Use case for updating an external person."""

    def __init__(
        self,
        external_person_service: ExternalPersonService,
        identity_resolver: IdentityResolver,
    ) -> None:
        self.external_person_service = external_person_service
        self.identity_resolver = identity_resolver

    async def execute(self, request: UpdateExternalPersonRequest) -> ExternalPersonItem:
        """Execute update external person flow.

        Raises:
            NotFoundError: If the person is not in the user's household
            ValidationError: If nothing changes, the name is cleared or the
                email is malformed or already used
        """
        changes = request.model_dump(
            exclude_unset=True, exclude={"external_person_id", "user_id"}
        )
        person = await self.external_person_service.update(
            ExternalPersonId(UUID(request.external_person_id)),
            UserId(UUID(request.user_id)),
            changes,
        )
        match = await self.identity_resolver.resolve(person.email)
        return ExternalPersonItem.from_person(person, match)
