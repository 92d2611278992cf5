"""Invitation use cases."""

from .check_can_invite import (
    CheckCanInviteRequest,
    CheckCanInviteResponse,
    CheckCanInviteUseCase,
)
from .list_invitations import (
    ConnectionItem,
    ListInvitationsRequest,
    ListInvitationsResponse,
    ListInvitationsUseCase,
)
from .list_person_connections import (
    ListPersonConnectionsRequest,
    ListPersonConnectionsResponse,
    ListPersonConnectionsUseCase,
)
from .respond_to_invitation import (
    AcceptInvitationUseCase,
    RejectInvitationUseCase,
    RespondToInvitationRequest,
)
from .revoke_invitation import RevokeInvitationRequest, RevokeInvitationUseCase
from .send_invitation import SendInvitationRequest, SendInvitationUseCase

__all__ = [
    "AcceptInvitationUseCase",
    "CheckCanInviteRequest",
    "CheckCanInviteResponse",
    "CheckCanInviteUseCase",
    "ConnectionItem",
    "ListInvitationsRequest",
    "ListInvitationsResponse",
    "ListInvitationsUseCase",
    "ListPersonConnectionsRequest",
    "ListPersonConnectionsResponse",
    "ListPersonConnectionsUseCase",
    "RejectInvitationUseCase",
    "RespondToInvitationRequest",
    "RevokeInvitationRequest",
    "RevokeInvitationUseCase",
    "SendInvitationRequest",
    "SendInvitationUseCase",
]
