"""Strongly typed identifiers for famlink domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Core domain entity identifiers
UserId = NewType("UserId", UUID)
HouseholdId = NewType("HouseholdId", UUID)
ExternalPersonId = NewType("ExternalPersonId", UUID)
ConnectionId = NewType("ConnectionId", UUID)
NotificationId = NewType("NotificationId", UUID)

# Identifiers of records owned by other services (read-only here)
HouseholdMemberId = NewType("HouseholdMemberId", UUID)
ExpenseId = NewType("ExpenseId", UUID)
IncomeId = NewType("IncomeId", UUID)
AssetId = NewType("AssetId", UUID)
CategoryId = NewType("CategoryId", UUID)
