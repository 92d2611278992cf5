"""In-memory external person repository for testing."""

from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError

from famlink.domain.model import ExternalPerson
from famlink.domain.repository import ExternalPersonRepository
from famlink.domain.value import Email, ExternalPersonId, HouseholdId

from .store import InMemoryStore


class InMemoryExternalPersonRepository(ExternalPersonRepository):
    """In-memory implementation of ExternalPersonRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_id(self, person_id: ExternalPersonId) -> Optional[ExternalPerson]:
        person = self.store.external_persons.get(person_id)
        return None if person is None or person.is_deleted else person

    async def find_by_household(self, household_id: HouseholdId) -> list[ExternalPerson]:
        persons = [
            p
            for p in self.store.external_persons.values()
            if p.household_id == household_id and not p.is_deleted
        ]
        return sorted(persons, key=lambda p: p.name)

    async def exists_email_in_household(
        self,
        household_id: HouseholdId,
        email: Email,
        exclude_id: ExternalPersonId | None = None,
    ) -> bool:
        return any(
            p.household_id == household_id
            and p.email == email
            and p.id != exclude_id
            and not p.is_deleted
            for p in self.store.external_persons.values()
        )

    async def save(self, person: ExternalPerson) -> ExternalPerson:
        """Save an external person (create or update).

        Raises:
            IntegrityError: If the email is already used in the household
        """
        if person.email and await self.exists_email_in_household(
            person.household_id, person.email, exclude_id=person.id
        ):
            raise IntegrityError("Duplicate household email", None, Exception())
        self.store.external_persons[person.id] = person
        return person

    async def delete(self, person_id: ExternalPersonId, deleted_at: datetime) -> bool:
        person = self.store.external_persons.get(person_id)
        if person is None or person.is_deleted:
            return False
        if any(
            c.external_person_id == person_id and c.status.is_active
            for c in self.store.connections.values()
        ):
            return False
        self.store.external_persons[person_id] = person.model_copy(
            update={"deleted_at": deleted_at, "updated_at": deleted_at}
        )
        return True
