"""Connection (invitation) domain service.

Every status change is one conditional write through
ConnectionRepository.compare_and_set or expire_due. When the write matches
no row the caller lost a race or the connection was already processed, and
a StateConflictError is raised.
"""

from datetime import datetime, timedelta
from typing import NamedTuple
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from famlink.config import InvitationSettings
from famlink.domain.error import (
    InvitationExpiredError,
    NotFoundError,
    PolicyDeniedError,
    StateConflictError,
)
from famlink.domain.model.account import Account
from famlink.domain.model.common import utc_now
from famlink.domain.model.connection import Connection, ConnectionView, TransitionGuard
from famlink.domain.model.external_person import ExternalPerson
from famlink.domain.model.identity import IdentityMatch
from famlink.domain.repository import (
    AccountDirectory,
    ConnectionRepository,
    ExternalPersonRepository,
)
from famlink.domain.value import (
    ConnectionId,
    ConnectionStatus,
    ExternalPersonId,
    InvitationListFilter,
    RevokeMode,
    UserId,
)

from .base import Service
from .identity_resolver import IdentityResolver
from .notification_service import NotificationService

ALREADY_PENDING = "An invitation is already pending"
ALREADY_ACCEPTED = "Invitation already accepted"


class Admission(NamedTuple):
    """Everything admission checks looked up, reused to build the connection."""

    person: ExternalPerson
    inviter: Account
    match: IdentityMatch


class ConnectionService(Service):
    """Domain service for the invitation lifecycle."""

    def __init__(
        self,
        connection_repository: ConnectionRepository,
        external_person_repository: ExternalPersonRepository,
        account_directory: AccountDirectory,
        identity_resolver: IdentityResolver,
        notification_service: NotificationService,
        invitation_settings: InvitationSettings,
    ) -> None:
        """Initialize connection service.

        Args:
            connection_repository: Connection repository
            external_person_repository: External person repository
            account_directory: Account lookup
            identity_resolver: Email to account resolution
            notification_service: Best-effort lifecycle notifications
            invitation_settings: Invitation TTL
        """
        self.connection_repository = connection_repository
        self.external_person_repository = external_person_repository
        self.account_directory = account_directory
        self.identity_resolver = identity_resolver
        self.notification_service = notification_service
        self.invitation_settings = invitation_settings

    async def _admit(
        self, external_person_id: ExternalPersonId, actor_id: UserId
    ) -> Admission:
        """Run the admission checks in order; the first failure wins.

        Raises:
            NotFoundError: If the external person does not exist
            PolicyDeniedError: With the reason of the first failed check
            TransientError: If the account lookup is unavailable
        """
        person = await self.external_person_repository.find_by_id(external_person_id)
        if person is None:
            raise NotFoundError("External person", str(external_person_id))

        inviter = await self.account_directory.find_by_id(actor_id)
        if inviter is None:
            raise PolicyDeniedError("User not found")
        if inviter.household_id != person.household_id:
            raise PolicyDeniedError("User does not belong to the same household")

        if not person.has_email:
            raise PolicyDeniedError("External person has no email")

        match = await self.identity_resolver.resolve(person.email)
        if not match.matched:
            raise PolicyDeniedError("No registered user found with this email")

        if match.account_id == actor_id:
            raise PolicyDeniedError("Cannot invite yourself")

        existing = await self.connection_repository.find_active(
            person.id, match.account_id
        )
        if existing is not None:
            if existing.status == ConnectionStatus.ACCEPTED:
                raise PolicyDeniedError(ALREADY_ACCEPTED)
            raise PolicyDeniedError(ALREADY_PENDING)

        return Admission(person=person, inviter=inviter, match=match)

    async def can_invite(
        self, external_person_id: ExternalPersonId, actor_id: UserId
    ) -> str | None:
        """Dry-run admission.

        Returns:
            None when an invitation would be admitted, otherwise the reason
        """
        with logfire.span(
            "connection_service.can_invite",
            external_person_id=str(external_person_id),
            actor_id=str(actor_id),
        ):
            try:
                await self._admit(external_person_id, actor_id)
            except NotFoundError:
                return "External person not found"
            except PolicyDeniedError as e:
                return e.reason
            return None

    async def send_invitation(
        self, external_person_id: ExternalPersonId, actor_id: UserId
    ) -> Connection:
        """Admit and store a new PENDING invitation.

        Args:
            external_person_id: Person the invitation is about
            actor_id: Inviting household member

        Returns:
            The pending connection

        Raises:
            NotFoundError: If the external person does not exist
            PolicyDeniedError: If an admission check fails
            TransientError: If the account lookup is unavailable
        """
        with logfire.span(
            "connection_service.send_invitation",
            external_person_id=str(external_person_id),
            actor_id=str(actor_id),
        ):
            try:
                admission = await self._admit(external_person_id, actor_id)
            except PolicyDeniedError as e:
                logfire.warn(
                    "Invitation denied",
                    external_person_id=str(external_person_id),
                    actor_id=str(actor_id),
                    reason=e.reason,
                )
                raise

            now = utc_now()
            connection = Connection(
                id=ConnectionId(uuid4()),
                external_person_id=admission.person.id,
                invited_user_id=admission.match.account_id,
                invited_by_user_id=actor_id,
                status=ConnectionStatus.PENDING,
                invited_at=now,
                expires_at=now + timedelta(days=self.invitation_settings.expiry_days),
            )

            try:
                saved = await self.connection_repository.add(connection)
            except IntegrityError:
                # A concurrent send for the same pair won
                logfire.warn(
                    "Duplicate invitation on insert",
                    external_person_id=str(external_person_id),
                    invited_user_id=str(connection.invited_user_id),
                )
                raise PolicyDeniedError(ALREADY_PENDING)

            logfire.info(
                "Invitation sent",
                connection_id=str(saved.id),
                external_person_id=str(saved.external_person_id),
                invited_user_id=str(saved.invited_user_id),
                expires_at=saved.expires_at.isoformat(),
            )
            await self.notification_service.invitation_received(
                saved, admission.inviter.email
            )
            return saved

    async def accept(self, connection_id: ConnectionId, actor_id: UserId) -> Connection:
        """Accept a pending invitation addressed to the actor.

        An invitation past its deadline is expired on the spot instead.

        Raises:
            InvitationExpiredError: If the deadline has passed
            StateConflictError: If the connection is missing, not addressed to
                the actor, or no longer pending
        """
        with logfire.span(
            "connection_service.accept",
            connection_id=str(connection_id),
            actor_id=str(actor_id),
        ):
            now = utc_now()
            accepted = await self.connection_repository.compare_and_set(
                connection_id,
                TransitionGuard(
                    expected=ConnectionStatus.PENDING,
                    invitee_id=actor_id,
                    unexpired_at=now,
                ),
                ConnectionStatus.ACCEPTED,
                responded_at=now,
            )
            if accepted is not None:
                logfire.info("Invitation accepted", connection_id=str(connection_id))
                await self.notification_service.invitation_accepted(accepted)
                return accepted

            expired = await self.connection_repository.compare_and_set(
                connection_id,
                TransitionGuard(
                    expected=ConnectionStatus.PENDING,
                    invitee_id=actor_id,
                    expired_at=now,
                ),
                ConnectionStatus.EXPIRED,
                responded_at=now,
            )
            if expired is not None:
                logfire.info(
                    "Invitation expired on accept", connection_id=str(connection_id)
                )
                raise InvitationExpiredError()

            logfire.warn(
                "Accept found no pending invitation", connection_id=str(connection_id)
            )
            raise StateConflictError()

    async def reject(self, connection_id: ConnectionId, actor_id: UserId) -> Connection:
        """Reject a pending invitation addressed to the actor.

        There is no deadline check: an overdue invitation can still be rejected.

        Raises:
            StateConflictError: If there is no pending invitation to reject
        """
        with logfire.span(
            "connection_service.reject",
            connection_id=str(connection_id),
            actor_id=str(actor_id),
        ):
            rejected = await self.connection_repository.compare_and_set(
                connection_id,
                TransitionGuard(expected=ConnectionStatus.PENDING, invitee_id=actor_id),
                ConnectionStatus.REJECTED,
                responded_at=utc_now(),
            )
            if rejected is None:
                logfire.warn(
                    "Reject found no pending invitation", connection_id=str(connection_id)
                )
                raise StateConflictError()

            logfire.info("Invitation rejected", connection_id=str(connection_id))
            return rejected

    async def revoke(
        self,
        connection_id: ConnectionId,
        actor_id: UserId,
        mode: RevokeMode = RevokeMode.INVITER_ONLY,
    ) -> Connection:
        """Revoke a connection.

        INVITER_ONLY lets the inviter withdraw a pending or accepted
        connection. EITHER_PARTY lets either side disconnect an accepted one.
        The invitee is notified only when access they had is withdrawn.

        Raises:
            StateConflictError: If there is nothing the actor may revoke
        """
        with logfire.span(
            "connection_service.revoke",
            connection_id=str(connection_id),
            actor_id=str(actor_id),
            mode=mode.value,
        ):
            if mode == RevokeMode.INVITER_ONLY:
                # pending before accepted: a row can only move forward between them
                candidates = (ConnectionStatus.PENDING, ConnectionStatus.ACCEPTED)
                actor_guard = {"inviter_id": actor_id}
            else:
                candidates = (ConnectionStatus.ACCEPTED,)
                actor_guard = {"party_id": actor_id}

            now = utc_now()
            for prior in candidates:
                revoked = await self.connection_repository.compare_and_set(
                    connection_id,
                    TransitionGuard(expected=prior, **actor_guard),
                    ConnectionStatus.REVOKED,
                    responded_at=now,
                )
                if revoked is None:
                    continue

                logfire.info(
                    "Connection revoked",
                    connection_id=str(connection_id),
                    prior_status=prior.value,
                )
                if prior == ConnectionStatus.ACCEPTED:
                    await self.notification_service.invitation_revoked(revoked)
                return revoked

            logfire.warn(
                "Revoke found no revocable connection", connection_id=str(connection_id)
            )
            raise StateConflictError()

    async def expire_due(self, now: datetime | None = None) -> list[Connection]:
        """Expire every overdue pending invitation and notify both parties.

        Returns:
            The connections this call expired; a repeated call returns none
        """
        now = now or utc_now()
        with logfire.span("connection_service.expire_due", now=now.isoformat()):
            expired = await self.connection_repository.expire_due(now)
            logfire.info("Overdue invitations expired", count=len(expired))
            for connection in expired:
                await self.notification_service.invitation_expired(connection)
            return expired

    async def list_invitations(
        self,
        user_id: UserId,
        status_filter: InvitationListFilter = InvitationListFilter.ALL,
    ) -> list[ConnectionView]:
        """List invitations the user takes part in.

        PENDING: waiting on the user. ACCEPTED: live connections the user is
        a party to. SENT: everything the user sent. ALL: PENDING then ACCEPTED.
        """
        with logfire.span(
            "connection_service.list_invitations",
            user_id=str(user_id),
            status=status_filter.value,
        ):
            repo = self.connection_repository
            if status_filter == InvitationListFilter.PENDING:
                views = await repo.find_pending_for_invitee(user_id)
            elif status_filter == InvitationListFilter.ACCEPTED:
                views = await repo.find_accepted_for_party(user_id)
            elif status_filter == InvitationListFilter.SENT:
                views = await repo.find_by_inviter(user_id)
            else:
                views = await repo.find_pending_for_invitee(user_id)
                views += await repo.find_accepted_for_party(user_id)

            logfire.info("Invitations listed", user_id=str(user_id), count=len(views))
            return views

    async def list_for_external_person(
        self, external_person_id: ExternalPersonId, actor_id: UserId
    ) -> list[ConnectionView]:
        """Connection history of an external person, for its household members.

        Raises:
            NotFoundError: If the person does not exist in the actor's household
        """
        with logfire.span(
            "connection_service.list_for_external_person",
            external_person_id=str(external_person_id),
            actor_id=str(actor_id),
        ):
            person = await self.external_person_repository.find_by_id(external_person_id)
            actor = await self.account_directory.find_by_id(actor_id)
            if (
                person is None
                or actor is None
                or actor.household_id != person.household_id
            ):
                raise NotFoundError("External person", str(external_person_id))

            return await self.connection_repository.find_by_external_person(person.id)
