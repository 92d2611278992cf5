"""Integration tests for PostgresExternalPersonRepository."""

from datetime import timedelta
from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from famlink.domain.model import Connection, ExternalPerson
from famlink.domain.model.common import utc_now
from famlink.domain.repository import ConnectionRepository, ExternalPersonRepository
from famlink.domain.value import (
    ConnectionId,
    ConnectionStatus,
    Email,
    ExternalPersonId,
    HouseholdId,
    UserId,
)
from famlink.persistence.tables import external_persons_table, households_table, users_table
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

integration_env = create_env_fixture(unmock={"persistence"})


@pytest_asyncio.fixture
async def household(integration_env):
    """Household with a member and an outside account to invite."""
    session = await integration_env.get(AsyncSession)
    household_id = HouseholdId(uuid4())
    member_id = UserId(uuid4())
    outsider_id = UserId(uuid4())
    tag = uuid4().hex[:8]

    await session.execute(
        insert(households_table).values(id=household_id, name=f"household-{tag}")
    )
    await session.execute(
        insert(users_table),
        [
            {"id": member_id, "email": f"bob-{tag}@example.com", "household_id": household_id},
            {"id": outsider_id, "email": f"alice-{tag}@example.com", "household_id": None},
        ],
    )

    yield session, household_id, member_id, outsider_id, tag

    await session.rollback()


def person_in(household_id, member_id, email: str) -> ExternalPerson:
    return ExternalPerson(
        id=ExternalPersonId(uuid4()),
        household_id=household_id,
        name="Alice",
        email=Email(email),
        created_by=member_id,
    )


def connection_for(person, invitee_id, inviter_id, status) -> Connection:
    now = utc_now()
    return Connection(
        id=ConnectionId(uuid4()),
        external_person_id=person.id,
        invited_user_id=invitee_id,
        invited_by_user_id=inviter_id,
        status=status,
        invited_at=now,
        responded_at=None if status == ConnectionStatus.PENDING else now,
        expires_at=now + timedelta(days=5),
    )


class TestExternalPersonRepositoryIntegration:
    """Archiving against PostgreSQL."""

    @pytest.mark.asyncio
    async def test_delete_archives_and_keeps_history(self, integration_env, household):
        # Arrange
        session, household_id, member_id, outsider_id, tag = household
        persons = await integration_env.get(ExternalPersonRepository)
        connections = await integration_env.get(ConnectionRepository)
        person = await persons.save(person_in(household_id, member_id, f"alice-{tag}@example.com"))
        revoked = await connections.add(
            connection_for(person, outsider_id, member_id, ConnectionStatus.REVOKED)
        )

        # Act
        deleted = await persons.delete(person.id, utc_now())

        # Assert
        assert deleted is True
        assert await persons.find_by_id(person.id) is None
        assert await persons.find_by_household(household_id) == []
        assert await connections.find_by_id(revoked.id) is not None
        row = (
            await session.execute(
                select(external_persons_table.c.deleted_at).where(
                    external_persons_table.c.id == person.id
                )
            )
        ).first()
        assert row is not None and row.deleted_at is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status", [ConnectionStatus.PENDING, ConnectionStatus.ACCEPTED]
    )
    async def test_live_connection_blocks_delete(self, integration_env, household, status):
        _, household_id, member_id, outsider_id, tag = household
        persons = await integration_env.get(ExternalPersonRepository)
        connections = await integration_env.get(ConnectionRepository)
        person = await persons.save(person_in(household_id, member_id, f"alice-{tag}@example.com"))
        await connections.add(connection_for(person, outsider_id, member_id, status))

        assert await persons.delete(person.id, utc_now()) is False
        assert await persons.find_by_id(person.id) is not None

    @pytest.mark.asyncio
    async def test_archived_email_can_be_reused(self, integration_env, household):
        _, household_id, member_id, _, tag = household
        persons = await integration_env.get(ExternalPersonRepository)
        email = f"alice-{tag}@example.com"
        first = await persons.save(person_in(household_id, member_id, email))
        await persons.delete(first.id, utc_now())

        second = await persons.save(person_in(household_id, member_id, email))

        assert await persons.exists_email_in_household(household_id, Email(email))
        found = await persons.find_by_id(second.id)
        assert found is not None and found.id == second.id
