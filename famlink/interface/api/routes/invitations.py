"""Invitation routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel

from famlink.application.usecase.invitation import (
    AcceptInvitationUseCase,
    ConnectionItem,
    ListInvitationsRequest,
    ListInvitationsResponse,
    ListInvitationsUseCase,
    RejectInvitationUseCase,
    RespondToInvitationRequest,
    RevokeInvitationRequest,
    RevokeInvitationUseCase,
    SendInvitationRequest,
    SendInvitationUseCase,
)
from famlink.domain.error import DomainError
from famlink.domain.service import JWTService
from famlink.domain.value import InvitationListFilter, RevokeMode

from .common import authenticate, http_error

router = APIRouter(prefix="/invitations", tags=["invitations"], route_class=DishkaRoute)


class SendInvitationAPIRequest(BaseModel):
    """API request for sending an invitation."""

    external_person_id: UUID


@router.post("", response_model=ConnectionItem, status_code=status.HTTP_201_CREATED)
async def send_invitation(
    request: SendInvitationAPIRequest,
    send_invitation_use_case: FromDishka[SendInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ConnectionItem:
    """Invite the account behind an external person's email.

    Args:
        request: Request with the external person to invite
        send_invitation_use_case: Send invitation use case from DI
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie

    Returns:
        The pending connection

    Raises:
        HTTPException: 400 with the reason when the invitation is not allowed
    """
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await send_invitation_use_case.execute(
            SendInvitationRequest(
                external_person_id=str(request.external_person_id), user_id=user_id
            )
        )
    except DomainError as e:
        raise http_error(e)


@router.get("", response_model=ListInvitationsResponse)
async def list_invitations(
    list_invitations_use_case: FromDishka[ListInvitationsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    status_filter: InvitationListFilter = Query(
        default=InvitationListFilter.ALL, alias="status"
    ),
) -> ListInvitationsResponse:
    """List the current user's invitations.

    pending: waiting on me. accepted: live connections I am a party to.
    sent: everything I sent. all: pending + accepted.
    """
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await list_invitations_use_case.execute(
            ListInvitationsRequest(user_id=user_id, status=status_filter)
        )
    except DomainError as e:
        raise http_error(e)


@router.post("/{connection_id}/accept", response_model=ConnectionItem)
async def accept_invitation(
    connection_id: UUID,
    accept_invitation_use_case: FromDishka[AcceptInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ConnectionItem:
    """Accept an invitation addressed to the current user.

    Raises:
        HTTPException: 410 past the deadline, 409 when no longer pending
    """
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await accept_invitation_use_case.execute(
            RespondToInvitationRequest(connection_id=str(connection_id), user_id=user_id)
        )
    except DomainError as e:
        raise http_error(e)


@router.post("/{connection_id}/reject", response_model=ConnectionItem)
async def reject_invitation(
    connection_id: UUID,
    reject_invitation_use_case: FromDishka[RejectInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ConnectionItem:
    """Reject an invitation addressed to the current user."""
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await reject_invitation_use_case.execute(
            RespondToInvitationRequest(connection_id=str(connection_id), user_id=user_id)
        )
    except DomainError as e:
        raise http_error(e)


@router.delete("/{connection_id}", response_model=ConnectionItem)
async def revoke_invitation(
    connection_id: UUID,
    revoke_invitation_use_case: FromDishka[RevokeInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ConnectionItem:
    """Revoke a pending or accepted invitation the current user sent."""
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await revoke_invitation_use_case.execute(
            RevokeInvitationRequest(
                connection_id=str(connection_id),
                user_id=user_id,
                mode=RevokeMode.INVITER_ONLY,
            )
        )
    except DomainError as e:
        raise http_error(e)


@router.post("/{connection_id}/disconnect", response_model=ConnectionItem)
async def disconnect(
    connection_id: UUID,
    revoke_invitation_use_case: FromDishka[RevokeInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ConnectionItem:
    """End an accepted connection. Either party may disconnect."""
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await revoke_invitation_use_case.execute(
            RevokeInvitationRequest(
                connection_id=str(connection_id),
                user_id=user_id,
                mode=RevokeMode.EITHER_PARTY,
            )
        )
    except DomainError as e:
        raise http_error(e)
