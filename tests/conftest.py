"""Test configuration and seeding helpers.

The helpers write straight into the in-memory store, standing in for the
account and finance services that own those rows in production.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import uuid4

from famlink.config import Settings
from famlink.domain.model import Account, Connection, ExternalPerson
from famlink.domain.model.common import utc_now
from famlink.domain.value import (
    ConnectionId,
    ConnectionStatus,
    Email,
    ExternalPersonId,
    HouseholdId,
    UserId,
)
from famlink.persistence.repository.inmemory import InMemoryStore
from famlink.util.jwt import create_token


def add_account(
    store: InMemoryStore, email: str, household_id: HouseholdId | None = None
) -> Account:
    """Register an account in the store."""
    return store.add_account(
        Account(id=UserId(uuid4()), email=email, household_id=household_id)
    )


def add_person(
    store: InMemoryStore,
    household_id: HouseholdId,
    created_by: UserId,
    name: str = "Alice",
    email: str | None = None,
) -> ExternalPerson:
    """Create an external person directly in the store."""
    person = ExternalPerson(
        id=ExternalPersonId(uuid4()),
        household_id=household_id,
        name=name,
        email=Email(email) if email else None,
        created_by=created_by,
    )
    store.external_persons[person.id] = person
    return person


def add_connection(
    store: InMemoryStore,
    person: ExternalPerson,
    invitee_id: UserId,
    inviter_id: UserId,
    status: ConnectionStatus = ConnectionStatus.PENDING,
    invited_at: datetime | None = None,
    expires_at: datetime | None = None,
) -> Connection:
    """Insert a connection in any state, bypassing admission."""
    invited_at = invited_at or utc_now()
    connection = Connection(
        id=ConnectionId(uuid4()),
        external_person_id=person.id,
        invited_user_id=invitee_id,
        invited_by_user_id=inviter_id,
        status=status,
        invited_at=invited_at,
        responded_at=None if status == ConnectionStatus.PENDING else invited_at,
        expires_at=expires_at or invited_at + timedelta(days=5),
    )
    store.connections[connection.id] = connection
    return connection


@dataclass
class Family:
    """Bob's household, its external person Alice, and Alice's own account."""

    household_id: HouseholdId
    inviter: Account
    invitee: Account
    person: ExternalPerson


def seed_family(
    store: InMemoryStore,
    invitee_email: str = "alice@example.com",
    person_email: str | None = "Alice@Example.com",
) -> Family:
    """Seed the usual invitation scenario.

    Bob (bob@example.com) lives in a household that records Alice as an
    external person; Alice has her own account in another household.
    """
    household_id = HouseholdId(uuid4())
    inviter = add_account(store, "bob@example.com", household_id)
    invitee = add_account(store, invitee_email, HouseholdId(uuid4()))
    person = add_person(store, household_id, inviter.id, "Alice", person_email)
    return Family(household_id, inviter, invitee, person)


def auth_cookie(account: Account) -> dict[str, str]:
    """Cookie jar entry authenticating as the account."""
    token = create_token(str(account.id), account.email, Settings().auth)
    return {"auth_token": token}
