"""Get external person use case."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel

from famlink.application.usecase.base import BaseUseCase
from famlink.domain.model.external_person import ExternalPerson
from famlink.domain.model.identity import IdentityMatch
from famlink.domain.service import ExternalPersonService, IdentityResolver
from famlink.domain.value import ExternalPersonId, UserId


class ExternalPersonItem(BaseModel):
    """External person in responses.

    account_id/account_email are resolved from the email on every read.
    """

    external_person_id: str
    household_id: str
    name: str
    email: str | None
    relationship: str | None
    notes: str | None
    birth_date: date | None
    created_by: str
    created_at: datetime
    updated_at: datetime
    account_id: str | None = None
    account_email: str | None = None

    @classmethod
    def from_person(
        cls, person: ExternalPerson, match: IdentityMatch | None = None
    ) -> "ExternalPersonItem":
        return cls(
            external_person_id=str(person.id),
            household_id=str(person.household_id),
            name=person.name,
            email=str(person.email) if person.email else None,
            relationship=person.relationship,
            notes=person.notes,
            birth_date=person.birth_date,
            created_by=str(person.created_by),
            created_at=person.created_at,
            updated_at=person.updated_at,
            account_id=str(match.account_id) if match and match.matched else None,
            account_email=match.account_email if match else None,
        )


class GetExternalPersonRequest(BaseModel):
    """Get external person request."""

    external_person_id: str
    user_id: str  # User ID from auth


class GetExternalPersonUseCase(BaseUseCase):
    """Use case for reading one external person with its identity resolution."""

    def __init__(
        self,
        external_person_service: ExternalPersonService,
        identity_resolver: IdentityResolver,
    ) -> None:
        """Initialize get external person use case.

        Args:
            external_person_service: External person service
            identity_resolver: Email to account resolution
        """
        self.external_person_service = external_person_service
        self.identity_resolver = identity_resolver

    async def execute(self, request: GetExternalPersonRequest) -> ExternalPersonItem:
        """Execute get external person flow.

        Raises:
            NotFoundError: If the person is not in the user's household
            TransientError: If the account lookup is unavailable
        """
        person = await self.external_person_service.get_for_member(
            ExternalPersonId(UUID(request.external_person_id)),
            UserId(UUID(request.user_id)),
        )
        match = await self.identity_resolver.resolve(person.email)
        return ExternalPersonItem.from_person(person, match)
