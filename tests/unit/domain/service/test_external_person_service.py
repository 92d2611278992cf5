"""Unit tests for ExternalPersonService."""

from datetime import date
from uuid import uuid4

import pytest

from famlink.domain.error import NotFoundError, PolicyDeniedError, ValidationError
from famlink.domain.repository import ExternalPersonRepository
from famlink.domain.service import ConnectionService, ExternalPersonService
from famlink.domain.value import (
    ConnectionStatus,
    Email,
    ExternalPersonId,
    HouseholdId,
    InvitationListFilter,
)
from famlink.persistence.repository.inmemory import InMemoryStore
from tests.conftest import add_account, add_connection, add_person, seed_family
from tests.harness import create_env_fixture

# Unit test fixture - in-memory persistence
unit_env = create_env_fixture()


class TestCreate:
    """Tests for create method."""

    @pytest.mark.asyncio
    async def test_create_in_actor_household(self, unit_env):
        """The person lands in the actor's household with a normalized email."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        service = await unit_env.get(ExternalPersonService)
        repo = await unit_env.get(ExternalPersonRepository)
        household_id = HouseholdId(uuid4())
        bob = add_account(store, "bob@example.com", household_id)

        # Act
        person = await service.create(
            bob.id,
            "  Alice  ",
            email=" Alice@Example.com ",
            relationship="sister",
            birth_date=date(1990, 4, 2),
        )

        # Assert
        assert person.household_id == household_id
        assert person.name == "Alice"
        assert person.email == Email("alice@example.com")
        assert person.relationship == "sister"
        assert person.created_by == bob.id
        assert await repo.find_by_id(person.id) == person

    @pytest.mark.asyncio
    async def test_blank_email_is_stored_as_none(self, unit_env):
        store = await unit_env.get(InMemoryStore)
        service = await unit_env.get(ExternalPersonService)
        bob = add_account(store, "bob@example.com", HouseholdId(uuid4()))

        person = await service.create(bob.id, "Grandpa", email="   ")

        assert person.email is None

    @pytest.mark.asyncio
    async def test_actor_without_household_is_denied(self, unit_env):
        """Creating requires household membership."""
        store = await unit_env.get(InMemoryStore)
        service = await unit_env.get(ExternalPersonService)
        loner = add_account(store, "loner@example.com")

        with pytest.raises(PolicyDeniedError) as exc_info:
            await service.create(loner.id, "Alice")

        assert exc_info.value.reason == "User is not assigned to a household"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email", ["alice-at-example", "a@b", "x@y..z", "two@@example.com"]
    )
    async def test_malformed_email_is_rejected(self, unit_env, email):
        store = await unit_env.get(InMemoryStore)
        service = await unit_env.get(ExternalPersonService)
        bob = add_account(store, "bob@example.com", HouseholdId(uuid4()))

        with pytest.raises(ValidationError):
            await service.create(bob.id, "Alice", email=email)

    @pytest.mark.asyncio
    async def test_duplicate_email_in_household_is_rejected(self, unit_env):
        """Email uniqueness within a household ignores case."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        service = await unit_env.get(ExternalPersonService)
        family = seed_family(store)

        # Act & Assert
        with pytest.raises(ValidationError):
            await service.create(family.inviter.id, "Alice again", email="ALICE@example.com")

    @pytest.mark.asyncio
    async def test_same_email_in_other_household_is_allowed(self, unit_env):
        store = await unit_env.get(InMemoryStore)
        service = await unit_env.get(ExternalPersonService)
        seed_family(store)
        carol = add_account(store, "carol@example.com", HouseholdId(uuid4()))

        person = await service.create(carol.id, "Alice", email="alice@example.com")

        assert person.email == Email("alice@example.com")


class TestGetAndList:
    """Tests for get_for_member and list_for_member."""

    @pytest.mark.asyncio
    async def test_person_of_other_household_is_not_found(self, unit_env):
        """Other households' persons look exactly like missing ones."""
        store = await unit_env.get(InMemoryStore)
        service = await unit_env.get(ExternalPersonService)
        family = seed_family(store)
        outsider = add_account(store, "eve@example.com", HouseholdId(uuid4()))

        with pytest.raises(NotFoundError):
            await service.get_for_member(family.person.id, outsider.id)

    @pytest.mark.asyncio
    async def test_missing_person_is_not_found(self, unit_env):
        store = await unit_env.get(InMemoryStore)
        service = await unit_env.get(ExternalPersonService)
        family = seed_family(store)

        with pytest.raises(NotFoundError):
            await service.get_for_member(ExternalPersonId(uuid4()), family.inviter.id)

    @pytest.mark.asyncio
    async def test_list_returns_only_own_household(self, unit_env):
        # Arrange
        store = await unit_env.get(InMemoryStore)
        service = await unit_env.get(ExternalPersonService)
        family = seed_family(store)
        add_person(store, family.household_id, family.inviter.id, "Bert")
        add_person(store, HouseholdId(uuid4()), family.invitee.id, "Stranger")

        # Act
        persons = await service.list_for_member(family.inviter.id)

        # Assert
        assert [p.name for p in persons] == ["Alice", "Bert"]

    @pytest.mark.asyncio
    async def test_list_without_household_is_empty(self, unit_env):
        store = await unit_env.get(InMemoryStore)
        service = await unit_env.get(ExternalPersonService)
        seed_family(store)
        loner = add_account(store, "loner@example.com")

        assert await service.list_for_member(loner.id) == []


class TestUpdate:
    """Tests for update method."""

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, unit_env):
        """Only the given keys change; None clears a field."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        service = await unit_env.get(ExternalPersonService)
        family = seed_family(store)

        # Act
        updated = await service.update(
            family.person.id,
            family.inviter.id,
            {"notes": "Lives abroad", "email": None},
        )

        # Assert
        assert updated.name == "Alice"
        assert updated.notes == "Lives abroad"
        assert updated.email is None
        assert updated.updated_at >= family.person.updated_at

    @pytest.mark.asyncio
    async def test_no_changes_is_rejected(self, unit_env):
        store = await unit_env.get(InMemoryStore)
        service = await unit_env.get(ExternalPersonService)
        family = seed_family(store)

        with pytest.raises(ValidationError, match="No fields to update"):
            await service.update(family.person.id, family.inviter.id, {})

    @pytest.mark.asyncio
    async def test_email_taken_by_sibling_is_rejected(self, unit_env):
        store = await unit_env.get(InMemoryStore)
        service = await unit_env.get(ExternalPersonService)
        family = seed_family(store)
        bert = add_person(
            store, family.household_id, family.inviter.id, "Bert", "bert@example.com"
        )

        with pytest.raises(ValidationError):
            await service.update(bert.id, family.inviter.id, {"email": "alice@example.com"})

    @pytest.mark.asyncio
    async def test_keeping_own_email_is_allowed(self, unit_env):
        store = await unit_env.get(InMemoryStore)
        service = await unit_env.get(ExternalPersonService)
        family = seed_family(store)

        updated = await service.update(
            family.person.id, family.inviter.id, {"email": "ALICE@example.com"}
        )

        assert updated.email == Email("alice@example.com")


class TestDelete:
    """Tests for delete method."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status", [ConnectionStatus.PENDING, ConnectionStatus.ACCEPTED]
    )
    async def test_live_connection_blocks_delete(self, unit_env, status):
        """A pending or accepted connection keeps the person alive."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        service = await unit_env.get(ExternalPersonService)
        family = seed_family(store)
        add_connection(store, family.person, family.invitee.id, family.inviter.id, status)

        # Act & Assert
        with pytest.raises(PolicyDeniedError):
            await service.delete(family.person.id, family.inviter.id)
        assert not store.external_persons[family.person.id].is_deleted

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status",
        [ConnectionStatus.REJECTED, ConnectionStatus.REVOKED, ConnectionStatus.EXPIRED],
    )
    async def test_delete_keeps_connection_history(self, unit_env, status):
        """The person is archived; terminal connections survive untouched."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        service = await unit_env.get(ExternalPersonService)
        connection_service = await unit_env.get(ConnectionService)
        family = seed_family(store)
        connection = add_connection(
            store, family.person, family.invitee.id, family.inviter.id, status
        )

        # Act
        await service.delete(family.person.id, family.inviter.id)

        # Assert
        assert store.connections[connection.id] == connection
        assert store.external_persons[family.person.id].is_deleted
        views = await connection_service.list_invitations(
            family.inviter.id, InvitationListFilter.SENT
        )
        assert [v.connection.id for v in views] == [connection.id]
        assert views[0].external_person_name == "Alice"

    @pytest.mark.asyncio
    async def test_deleted_person_is_hidden(self, unit_env):
        """Reads, listings and new invitations no longer see an archived person."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        service = await unit_env.get(ExternalPersonService)
        connection_service = await unit_env.get(ConnectionService)
        family = seed_family(store)

        # Act
        await service.delete(family.person.id, family.inviter.id)

        # Assert
        with pytest.raises(NotFoundError):
            await service.get_for_member(family.person.id, family.inviter.id)
        assert await service.list_for_member(family.inviter.id) == []
        with pytest.raises(NotFoundError):
            await connection_service.send_invitation(family.person.id, family.inviter.id)
        with pytest.raises(NotFoundError):
            await service.delete(family.person.id, family.inviter.id)

    @pytest.mark.asyncio
    async def test_email_of_deleted_person_can_be_reused(self, unit_env):
        store = await unit_env.get(InMemoryStore)
        service = await unit_env.get(ExternalPersonService)
        family = seed_family(store)
        await service.delete(family.person.id, family.inviter.id)

        person = await service.create(
            family.inviter.id, "Alice", email="alice@example.com"
        )

        assert person.id != family.person.id
        assert person.email == Email("alice@example.com")
