"""Unit tests for the external person use cases."""

from uuid import uuid4

import pytest

from famlink.application.usecase.external_person import (
    CreateExternalPersonRequest,
    CreateExternalPersonUseCase,
    GetExternalPersonRequest,
    GetExternalPersonUseCase,
    ListExternalPersonsRequest,
    ListExternalPersonsUseCase,
    UpdateExternalPersonRequest,
    UpdateExternalPersonUseCase,
)
from famlink.domain.value import HouseholdId
from famlink.persistence.repository.inmemory import InMemoryStore
from tests.conftest import add_account, add_person, seed_family
from tests.harness import create_env_fixture

# Unit test fixture - in-memory persistence
unit_env = create_env_fixture()


class TestCreateExternalPersonUseCase:
    """Tests for CreateExternalPersonUseCase."""

    @pytest.mark.asyncio
    async def test_created_item_carries_identity_resolution(self, unit_env):
        """The response says which account the email belongs to."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        use_case = await unit_env.get(CreateExternalPersonUseCase)
        household_id = HouseholdId(uuid4())
        bob = add_account(store, "bob@example.com", household_id)
        alice = add_account(store, "alice@example.com")

        # Act
        item = await use_case.execute(
            CreateExternalPersonRequest(
                user_id=str(bob.id),
                name="Alice",
                email="ALICE@example.com ",
            )
        )

        # Assert
        assert item.email == "alice@example.com"
        assert item.household_id == str(household_id)
        assert item.created_by == str(bob.id)
        assert item.account_id == str(alice.id)
        assert item.account_email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_unmatched_email_has_no_account(self, unit_env):
        store = await unit_env.get(InMemoryStore)
        use_case = await unit_env.get(CreateExternalPersonUseCase)
        bob = add_account(store, "bob@example.com", HouseholdId(uuid4()))

        item = await use_case.execute(
            CreateExternalPersonRequest(
                user_id=str(bob.id), name="Ghost", email="ghost@example.com"
            )
        )

        assert item.account_id is None
        assert item.account_email is None


class TestReadUseCases:
    """Tests for get and list."""

    @pytest.mark.asyncio
    async def test_get_resolves_account(self, unit_env):
        store = await unit_env.get(InMemoryStore)
        use_case = await unit_env.get(GetExternalPersonUseCase)
        family = seed_family(store)

        item = await use_case.execute(
            GetExternalPersonRequest(
                external_person_id=str(family.person.id),
                user_id=str(family.inviter.id),
            )
        )

        assert item.name == "Alice"
        assert item.account_id == str(family.invitee.id)
        assert item.account_email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_list_household_persons(self, unit_env):
        # Arrange
        store = await unit_env.get(InMemoryStore)
        use_case = await unit_env.get(ListExternalPersonsUseCase)
        family = seed_family(store)
        add_person(store, family.household_id, family.inviter.id, "Bert")

        # Act
        response = await use_case.execute(
            ListExternalPersonsRequest(user_id=str(family.inviter.id))
        )

        # Assert
        assert response.total == 2
        by_name = {item.name: item for item in response.external_persons}
        assert by_name["Alice"].account_id == str(family.invitee.id)
        assert by_name["Bert"].account_id is None


class TestUpdateExternalPersonUseCase:
    """Tests for UpdateExternalPersonUseCase."""

    @pytest.mark.asyncio
    async def test_only_explicit_fields_change(self, unit_env):
        """Unset fields are left alone; explicit nulls clear."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        use_case = await unit_env.get(UpdateExternalPersonUseCase)
        family = seed_family(store)

        # Act
        item = await use_case.execute(
            UpdateExternalPersonRequest(
                external_person_id=str(family.person.id),
                user_id=str(family.inviter.id),
                relationship="cousin",
                email=None,
            )
        )

        # Assert
        assert item.name == "Alice"
        assert item.relationship == "cousin"
        assert item.email is None
        assert item.account_id is None
