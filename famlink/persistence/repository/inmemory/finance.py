"""In-memory financial record source for testing."""

from datetime import date

from famlink.domain.model import AssetRecord, ExpenseRecord
from famlink.domain.repository import FinancialRecordSource
from famlink.domain.value import CategoryId, ExternalPersonId, HouseholdId

from .store import InMemoryStore


class InMemoryFinancialRecordSource(FinancialRecordSource):
    """In-memory implementation of FinancialRecordSource for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def _linked_expenses(self, external_person_id: ExternalPersonId) -> list[ExpenseRecord]:
        return [
            self.store.expenses[expense_id]
            for expense_id, person_id in self.store.expense_links
            if person_id == external_person_id and expense_id in self.store.expenses
        ]

    async def find_expenses_linked_to(
        self,
        external_person_id: ExternalPersonId,
        start_date: date | None = None,
        end_date: date | None = None,
        category_id: CategoryId | None = None,
    ) -> list[ExpenseRecord]:
        expenses = self._linked_expenses(external_person_id)
        if start_date is not None:
            expenses = [e for e in expenses if e.start_date >= start_date]
        if end_date is not None:
            expenses = [e for e in expenses if (e.end_date or e.start_date) <= end_date]
        if category_id is not None:
            expenses = [e for e in expenses if e.category_id == category_id]
        return sorted(expenses, key=lambda e: e.start_date, reverse=True)

    async def find_assets_linked_to(
        self,
        external_person_id: ExternalPersonId,
        viewer_household_id: HouseholdId | None,
    ) -> list[AssetRecord]:
        asset_ids = {
            e.linked_asset_id
            for e in self._linked_expenses(external_person_id)
            if e.linked_asset_id is not None
        }

        shares: dict = {}
        if viewer_household_id is not None:
            for share in self.store.ownership:
                household = self.store.household_members.get(share.household_member_id)
                if household == viewer_household_id:
                    shares[share.asset_id] = (
                        shares.get(share.asset_id, 0) + share.ownership_percentage
                    )
        asset_ids |= shares.keys()

        assets = [
            self.store.assets[asset_id].model_copy(
                update={"household_ownership_percentage": shares.get(asset_id)}
            )
            for asset_id in asset_ids
            if asset_id in self.store.assets
        ]
        return sorted(assets, key=lambda a: a.created_at, reverse=True)
