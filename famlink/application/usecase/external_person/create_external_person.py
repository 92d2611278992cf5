"""Create external person use case."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from famlink.application.usecase.base import BaseUseCase
from famlink.domain.service import ExternalPersonService, IdentityResolver
from famlink.domain.value import UserId

from .get_external_person import ExternalPersonItem


class CreateExternalPersonRequest(BaseModel):
    """Create external person request."""

    user_id: str  # User ID from auth
    name: str = Field(min_length=1, max_length=255)
    email: str | None = None
    relationship: str | None = Field(default=None, max_length=100)
    notes: str | None = None
    birth_date: date | None = None


class CreateExternalPersonUseCase(BaseUseCase):
    """Use case for creating an external person in the user's household."""

    def __init__(
        self,
        external_person_service: ExternalPersonService,
        identity_resolver: IdentityResolver,
    ) -> None:
        """Initialize create external person use case.

        Args:
            external_person_service: External person service
            identity_resolver: Email to account resolution
        """
        self.external_person_service = external_person_service
        self.identity_resolver = identity_resolver

    async def execute(self, request: CreateExternalPersonRequest) -> ExternalPersonItem:
        """Execute create external person flow.

        Raises:
            PolicyDeniedError: If the user has no household
            ValidationError: If the email is malformed or already used
        """
        person = await self.external_person_service.create(
            actor_id=UserId(UUID(request.user_id)),
            name=request.name,
            email=request.email,
            relationship=request.relationship,
            notes=request.notes,
            birth_date=request.birth_date,
        )
        match = await self.identity_resolver.resolve(person.email)
        return ExternalPersonItem.from_person(person, match)
