"""PostgreSQL implementation of ExternalPerson repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, exists, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from famlink.domain.model import ExternalPerson
from famlink.domain.repository import ExternalPersonRepository
from famlink.domain.value import ConnectionStatus, Email, ExternalPersonId, HouseholdId
from famlink.persistence.mappers import external_person_to_dict, row_to_external_person
from famlink.persistence.tables import connections_table, external_persons_table

LIVE_STATUSES = (ConnectionStatus.PENDING.value, ConnectionStatus.ACCEPTED.value)


class PostgresExternalPersonRepository(ExternalPersonRepository):
    """PostgreSQL implementation of ExternalPersonRepository.

    Deleted persons stay in the table with deleted_at set; every read here
    skips them.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, person_id: ExternalPersonId) -> Optional[ExternalPerson]:
        stmt = select(external_persons_table).where(
            and_(
                external_persons_table.c.id == person_id,
                external_persons_table.c.deleted_at.is_(None),
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_external_person(dict(row)) if row else None

    async def find_by_household(self, household_id: HouseholdId) -> list[ExternalPerson]:
        stmt = (
            select(external_persons_table)
            .where(
                and_(
                    external_persons_table.c.household_id == household_id,
                    external_persons_table.c.deleted_at.is_(None),
                )
            )
            .order_by(external_persons_table.c.name.asc())
        )
        result = await self.session.execute(stmt)
        return [row_to_external_person(dict(row)) for row in result.mappings().all()]

    async def exists_email_in_household(
        self,
        household_id: HouseholdId,
        email: Email,
        exclude_id: ExternalPersonId | None = None,
    ) -> bool:
        """Check if another person in the household has the email.

        Emails are stored normalized, so this is a plain equality match.
        """
        stmt = select(external_persons_table.c.id).where(
            and_(
                external_persons_table.c.household_id == household_id,
                external_persons_table.c.email == email.root,
                external_persons_table.c.deleted_at.is_(None),
            )
        )
        if exclude_id is not None:
            stmt = stmt.where(external_persons_table.c.id != exclude_id)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def save(self, person: ExternalPerson) -> ExternalPerson:
        """Save an external person (create or update).

        Raises:
            IntegrityError: If the email is already used in the household
        """
        person_dict = external_person_to_dict(person)

        existing = await self.find_by_id(person.id)
        if existing:
            stmt = (
                update(external_persons_table)
                .where(external_persons_table.c.id == person.id)
                .values(**person_dict)
            )
        else:
            stmt = insert(external_persons_table).values(**person_dict)
        await self.session.execute(stmt)

        await self.session.flush()
        return person

    async def delete(self, person_id: ExternalPersonId, deleted_at: datetime) -> bool:
        p = external_persons_table.c
        c = connections_table.c
        live_connection = exists().where(
            and_(c.external_person_id == p.id, c.status.in_(LIVE_STATUSES))
        )
        stmt = (
            update(external_persons_table)
            .where(and_(p.id == person_id, p.deleted_at.is_(None), ~live_connection))
            .values(deleted_at=deleted_at, updated_at=deleted_at)
            .returning(p.id)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None
