"""Shared in-memory data for the in-memory repositories.

One store backs every in-memory repository of a container, so a connection
view can see person names and account emails, and a separate DI scope (the
expiry reclaimer's) sees the same rows as the request that wrote them.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from uuid import UUID

from famlink.domain.model import (
    Account,
    AssetRecord,
    Connection,
    ExpenseRecord,
    ExternalPerson,
    Notification,
)
from famlink.domain.value import (
    AssetId,
    ConnectionId,
    ExpenseId,
    ExternalPersonId,
    HouseholdId,
    HouseholdMemberId,
    UserId,
)


@dataclass
class OwnershipShare:
    asset_id: AssetId
    household_member_id: HouseholdMemberId
    ownership_percentage: Decimal


@dataclass
class InMemoryStore:
    """Tables as plain dicts and lists."""

    accounts: dict[UserId, Account] = field(default_factory=dict)
    household_members: dict[HouseholdMemberId, HouseholdId] = field(default_factory=dict)
    external_persons: dict[ExternalPersonId, ExternalPerson] = field(default_factory=dict)
    connections: dict[ConnectionId, Connection] = field(default_factory=dict)
    notifications: list[Notification] = field(default_factory=list)
    expenses: dict[ExpenseId, ExpenseRecord] = field(default_factory=dict)
    expense_links: set[tuple[ExpenseId, ExternalPersonId]] = field(default_factory=set)
    assets: dict[AssetId, AssetRecord] = field(default_factory=dict)
    ownership: list[OwnershipShare] = field(default_factory=list)

    # Fault injection for tests
    accounts_unavailable: bool = False
    notifications_failing: bool = False

    def add_account(self, account: Account) -> Account:
        self.accounts[account.id] = account
        return account

    def add_household_member(
        self, member_id: HouseholdMemberId, household_id: HouseholdId
    ) -> HouseholdMemberId:
        self.household_members[member_id] = household_id
        return member_id

    def add_expense(
        self, expense: ExpenseRecord, *linked_to: ExternalPersonId
    ) -> ExpenseRecord:
        self.expenses[expense.id] = expense
        for person_id in linked_to:
            self.expense_links.add((expense.id, person_id))
        return expense

    def add_asset(self, asset: AssetRecord) -> AssetRecord:
        self.assets[asset.id] = asset
        return asset

    def add_ownership(
        self,
        asset_id: AssetId,
        household_member_id: HouseholdMemberId,
        ownership_percentage: Decimal,
    ) -> None:
        self.ownership.append(
            OwnershipShare(asset_id, household_member_id, ownership_percentage)
        )

    def email_of(self, user_id: UUID) -> str | None:
        account = self.accounts.get(UserId(user_id))
        return account.email if account else None
