"""External person repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from famlink.domain.model.external_person import ExternalPerson
from famlink.domain.value import Email, ExternalPersonId, HouseholdId


class ExternalPersonRepository(ABC):
    """Repository for ExternalPerson entity."""

    @abstractmethod
    async def find_by_id(self, person_id: ExternalPersonId) -> ExternalPerson | None:
        """Find a live (not deleted) external person by ID.

        Args:
            person_id: The external person's unique identifier

        Returns:
            The external person if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_household(self, household_id: HouseholdId) -> list[ExternalPerson]:
        """List the live external persons of a household, ordered by name."""
        pass

    @abstractmethod
    async def exists_email_in_household(
        self,
        household_id: HouseholdId,
        email: Email,
        exclude_id: ExternalPersonId | None = None,
    ) -> bool:
        """Check whether another live external person in the household uses the email.

        Args:
            household_id: Household to search
            email: Normalized email
            exclude_id: Person to ignore (the one being updated)

        Returns:
            True if the email is taken, False otherwise
        """
        pass

    @abstractmethod
    async def save(self, person: ExternalPerson) -> ExternalPerson:
        """Save an external person (create or update).

        Raises:
            IntegrityError: If the email is already used in the household
        """
        pass

    @abstractmethod
    async def delete(self, person_id: ExternalPersonId, deleted_at: datetime) -> bool:
        """Archive an external person that no live connection references.

        The row is kept, marked deleted, so its connection history stays
        intact. The connection check and the archive are one atomic write.

        Args:
            person_id: Person to archive
            deleted_at: Archive timestamp

        Returns:
            True if archived; False if missing, already archived, or
            referenced by a pending or accepted connection
        """
        pass
