"""External person domain service."""

from datetime import date
from typing import Any
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from famlink.domain.error import NotFoundError, PolicyDeniedError, ValidationError
from famlink.domain.model.common import utc_now
from famlink.domain.model.external_person import ExternalPerson
from famlink.domain.repository import AccountDirectory, ExternalPersonRepository
from famlink.domain.value import Email, ExternalPersonId, HouseholdId, UserId

from .base import Service

DUPLICATE_EMAIL = "An external person with this email already exists in this household"


def normalize_email(value: str | None) -> Email | None:
    """Turn user input into an Email; blank input means no email.

    Raises:
        ValidationError: If the address is malformed
    """
    if value is None or not value.strip():
        return None
    try:
        return Email(value)
    except PydanticValidationError:
        raise ValidationError("Invalid email address")


class ExternalPersonService(Service):
    """Domain service for household-scoped external persons."""

    def __init__(
        self,
        external_person_repository: ExternalPersonRepository,
        account_directory: AccountDirectory,
    ) -> None:
        """Initialize external person service.

        Args:
            external_person_repository: External person repository
            account_directory: Account lookup, for household membership
        """
        self.external_person_repository = external_person_repository
        self.account_directory = account_directory

    async def get_member_household(self, user_id: UserId) -> HouseholdId:
        """Return the household the user belongs to.

        Raises:
            PolicyDeniedError: If the user is unknown or has no household
        """
        account = await self.account_directory.find_by_id(user_id)
        if account is None:
            raise PolicyDeniedError("User not found")
        if account.household_id is None:
            raise PolicyDeniedError("User is not assigned to a household")
        return account.household_id

    async def create(
        self,
        actor_id: UserId,
        name: str,
        email: str | None = None,
        relationship: str | None = None,
        notes: str | None = None,
        birth_date: date | None = None,
    ) -> ExternalPerson:
        """Create an external person in the actor's household.

        Raises:
            PolicyDeniedError: If the actor has no household
            ValidationError: If a field is invalid or the email is taken
        """
        with logfire.span("external_person_service.create", actor_id=str(actor_id)):
            household_id = await self.get_member_household(actor_id)
            normalized = normalize_email(email)

            if normalized and await self.external_person_repository.exists_email_in_household(
                household_id, normalized
            ):
                logfire.warn(
                    "Duplicate external person email",
                    household_id=str(household_id),
                )
                raise ValidationError(DUPLICATE_EMAIL)

            try:
                person = ExternalPerson(
                    id=ExternalPersonId(uuid4()),
                    household_id=household_id,
                    name=name.strip(),
                    email=normalized,
                    relationship=relationship or None,
                    notes=notes or None,
                    birth_date=birth_date,
                    created_by=actor_id,
                )
            except PydanticValidationError as e:
                raise ValidationError(str(e))

            try:
                saved = await self.external_person_repository.save(person)
            except IntegrityError:
                logfire.warn(
                    "Duplicate external person email on insert",
                    household_id=str(household_id),
                )
                raise ValidationError(DUPLICATE_EMAIL)

            logfire.info(
                "External person created",
                person_id=str(saved.id),
                household_id=str(household_id),
            )
            return saved

    async def get_for_member(
        self, person_id: ExternalPersonId, actor_id: UserId
    ) -> ExternalPerson:
        """Get an external person the actor's household owns.

        Persons of other households are reported as not found.

        Raises:
            NotFoundError: If the person does not exist in the actor's household
        """
        person = await self.external_person_repository.find_by_id(person_id)
        if person is None:
            raise NotFoundError("External person", str(person_id))

        account = await self.account_directory.find_by_id(actor_id)
        if account is None or account.household_id != person.household_id:
            logfire.warn(
                "External person requested outside its household",
                person_id=str(person_id),
                actor_id=str(actor_id),
            )
            raise NotFoundError("External person", str(person_id))
        return person

    async def list_for_member(self, actor_id: UserId) -> list[ExternalPerson]:
        """List the external persons of the actor's household.

        An actor without a household sees an empty list.
        """
        with logfire.span(
            "external_person_service.list_for_member", actor_id=str(actor_id)
        ):
            account = await self.account_directory.find_by_id(actor_id)
            if account is None or account.household_id is None:
                return []
            persons = await self.external_person_repository.find_by_household(
                account.household_id
            )
            logfire.info("External persons listed", count=len(persons))
            return persons

    async def update(
        self,
        person_id: ExternalPersonId,
        actor_id: UserId,
        changes: dict[str, Any],
    ) -> ExternalPerson:
        """Apply a partial update.

        Args:
            person_id: Person to update
            actor_id: Acting household member
            changes: Fields to change; only keys present are applied

        Raises:
            NotFoundError: If the person does not exist in the actor's household
            ValidationError: If no field is given, a field is invalid or the
                email is taken
        """
        with logfire.span(
            "external_person_service.update",
            person_id=str(person_id),
            actor_id=str(actor_id),
        ):
            person = await self.get_for_member(person_id, actor_id)
            if not changes:
                raise ValidationError("No fields to update")

            update = dict(changes)
            if "email" in update:
                update["email"] = normalize_email(update["email"])
                if update["email"] and await self.external_person_repository.exists_email_in_household(
                    person.household_id, update["email"], exclude_id=person.id
                ):
                    raise ValidationError(DUPLICATE_EMAIL)
            if isinstance(update.get("name"), str):
                update["name"] = update["name"].strip()
            for key in ("relationship", "notes"):
                if key in update and not update[key]:
                    update[key] = None

            try:
                updated = ExternalPerson.model_validate(
                    {**person.model_dump(), **update, "updated_at": utc_now()}
                )
            except PydanticValidationError as e:
                raise ValidationError(str(e))

            try:
                saved = await self.external_person_repository.save(updated)
            except IntegrityError:
                raise ValidationError(DUPLICATE_EMAIL)

            logfire.info("External person updated", person_id=str(person_id))
            return saved

    async def delete(self, person_id: ExternalPersonId, actor_id: UserId) -> None:
        """Delete an external person with no pending or accepted connection.

        The person is archived rather than removed, so terminal connections
        keep pointing at it. The connection check is part of the archive
        write, so a concurrent send cannot slip in between.

        Raises:
            NotFoundError: If the person does not exist in the actor's household
            PolicyDeniedError: If a pending or accepted connection references it
        """
        with logfire.span(
            "external_person_service.delete",
            person_id=str(person_id),
            actor_id=str(actor_id),
        ):
            await self.get_for_member(person_id, actor_id)

            if not await self.external_person_repository.delete(person_id, utc_now()):
                logfire.warn(
                    "Refusing to delete connected external person",
                    person_id=str(person_id),
                )
                raise PolicyDeniedError(
                    "External person has an active or pending connection"
                )

            logfire.info("External person deleted", person_id=str(person_id))
