"""Domain value objects for famlink."""

from famlink.domain.value.identifiers import (
    AssetId,
    CategoryId,
    ConnectionId,
    ExpenseId,
    ExternalPersonId,
    HouseholdId,
    HouseholdMemberId,
    IncomeId,
    NotificationId,
    UserId,
)
from famlink.domain.value.types import (
    CONNECTION_ENTITY_TYPE,
    ConnectionStatus,
    Email,
    InvitationListFilter,
    NotificationType,
    RevokeMode,
)

__all__ = [
    # Identifiers
    "UserId",
    "HouseholdId",
    "HouseholdMemberId",
    "ExternalPersonId",
    "ConnectionId",
    "NotificationId",
    "ExpenseId",
    "IncomeId",
    "AssetId",
    "CategoryId",
    # Types
    "ConnectionStatus",
    "RevokeMode",
    "InvitationListFilter",
    "NotificationType",
    "CONNECTION_ENTITY_TYPE",
    "Email",
]
