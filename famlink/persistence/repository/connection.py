"""PostgreSQL implementation of Connection repository.

Transitions are single UPDATE ... WHERE <guard> RETURNING statements.
Under READ COMMITTED a concurrent writer blocks on the row lock and then
re-evaluates the WHERE clause against the committed row, so of two
competing transitions exactly one matches.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from famlink.domain.model import Connection, ConnectionView, TransitionGuard
from famlink.domain.repository import ConnectionRepository
from famlink.domain.value import ConnectionId, ConnectionStatus, ExternalPersonId, UserId
from famlink.persistence.mappers import (
    connection_to_dict,
    row_to_connection,
    row_to_connection_view,
)
from famlink.persistence.tables import (
    connections_table,
    external_persons_table,
    users_table,
)

_ACTIVE = (ConnectionStatus.PENDING.value, ConnectionStatus.ACCEPTED.value)


class PostgresConnectionRepository(ConnectionRepository):
    """PostgreSQL implementation of ConnectionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _view_select(self):
        invitee = users_table.alias("invitee")
        inviter = users_table.alias("inviter")
        c = connections_table
        return select(
            c,
            external_persons_table.c.name.label("external_person_name"),
            external_persons_table.c.email.label("external_person_email"),
            invitee.c.email.label("invited_user_email"),
            inviter.c.email.label("invited_by_user_email"),
        ).select_from(
            c.join(
                external_persons_table,
                external_persons_table.c.id == c.c.external_person_id,
            )
            .outerjoin(invitee, invitee.c.id == c.c.invited_user_id)
            .outerjoin(inviter, inviter.c.id == c.c.invited_by_user_id)
        )

    async def _fetch_views(self, stmt) -> list[ConnectionView]:
        result = await self.session.execute(stmt)
        return [row_to_connection_view(dict(row)) for row in result.mappings().all()]

    async def find_by_id(self, connection_id: ConnectionId) -> Optional[Connection]:
        stmt = select(connections_table).where(connections_table.c.id == connection_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_connection(dict(row)) if row else None

    async def find_active(
        self, external_person_id: ExternalPersonId, invited_user_id: UserId
    ) -> Optional[Connection]:
        stmt = select(connections_table).where(
            and_(
                connections_table.c.external_person_id == external_person_id,
                connections_table.c.invited_user_id == invited_user_id,
                connections_table.c.status.in_(_ACTIVE),
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_connection(dict(row)) if row else None

    async def add(self, connection: Connection) -> Connection:
        """Insert a new connection.

        Raises:
            IntegrityError: If the pair already has a live connection
        """
        stmt = insert(connections_table).values(**connection_to_dict(connection))
        await self.session.execute(stmt)
        await self.session.flush()
        return connection

    async def compare_and_set(
        self,
        connection_id: ConnectionId,
        guard: TransitionGuard,
        target: ConnectionStatus,
        responded_at: datetime | None = None,
    ) -> Optional[Connection]:
        c = connections_table.c
        conditions = [c.id == connection_id, c.status == guard.expected.value]
        if guard.invitee_id is not None:
            conditions.append(c.invited_user_id == guard.invitee_id)
        if guard.inviter_id is not None:
            conditions.append(c.invited_by_user_id == guard.inviter_id)
        if guard.party_id is not None:
            conditions.append(
                or_(
                    c.invited_user_id == guard.party_id,
                    c.invited_by_user_id == guard.party_id,
                )
            )
        if guard.unexpired_at is not None:
            conditions.append(c.expires_at > guard.unexpired_at)
        if guard.expired_at is not None:
            conditions.append(c.expires_at <= guard.expired_at)

        values = {"status": target.value, "updated_at": func.now()}
        if responded_at is not None:
            values["responded_at"] = responded_at

        stmt = (
            update(connections_table)
            .where(and_(*conditions))
            .values(**values)
            .returning(*connections_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_connection(dict(row)) if row else None

    async def expire_due(self, now: datetime) -> list[Connection]:
        c = connections_table.c
        stmt = (
            update(connections_table)
            .where(
                and_(
                    c.status == ConnectionStatus.PENDING.value,
                    c.expires_at <= now,
                )
            )
            .values(
                status=ConnectionStatus.EXPIRED.value,
                responded_at=now,
                updated_at=func.now(),
            )
            .returning(*connections_table.c)
        )
        result = await self.session.execute(stmt)
        return [row_to_connection(dict(row)) for row in result.mappings().all()]

    async def find_pending_for_invitee(self, user_id: UserId) -> list[ConnectionView]:
        c = connections_table.c
        stmt = (
            self._view_select()
            .where(
                and_(
                    c.invited_user_id == user_id,
                    c.status == ConnectionStatus.PENDING.value,
                )
            )
            .order_by(c.invited_at.desc())
        )
        return await self._fetch_views(stmt)

    async def find_accepted_for_party(self, user_id: UserId) -> list[ConnectionView]:
        c = connections_table.c
        stmt = (
            self._view_select()
            .where(
                and_(
                    or_(c.invited_user_id == user_id, c.invited_by_user_id == user_id),
                    c.status == ConnectionStatus.ACCEPTED.value,
                )
            )
            .order_by(c.responded_at.desc())
        )
        return await self._fetch_views(stmt)

    async def find_by_inviter(
        self, user_id: UserId, status: ConnectionStatus | None = None
    ) -> list[ConnectionView]:
        c = connections_table.c
        stmt = (
            self._view_select()
            .where(c.invited_by_user_id == user_id)
            .order_by(c.invited_at.desc())
        )
        if status:
            stmt = stmt.where(c.status == status.value)
        return await self._fetch_views(stmt)

    async def find_by_external_person(
        self, external_person_id: ExternalPersonId
    ) -> list[ConnectionView]:
        c = connections_table.c
        stmt = (
            self._view_select()
            .where(c.external_person_id == external_person_id)
            .order_by(c.invited_at.desc())
        )
        return await self._fetch_views(stmt)
