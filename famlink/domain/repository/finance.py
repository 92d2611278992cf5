"""Financial record source interface."""

from abc import ABC, abstractmethod
from datetime import date

from famlink.domain.model.finance import AssetRecord, ExpenseRecord
from famlink.domain.value import CategoryId, ExternalPersonId, HouseholdId


class FinancialRecordSource(ABC):
    """Read access to the finance services' records."""

    @abstractmethod
    async def find_expenses_linked_to(
        self,
        external_person_id: ExternalPersonId,
        start_date: date | None = None,
        end_date: date | None = None,
        category_id: CategoryId | None = None,
    ) -> list[ExpenseRecord]:
        """Expenses linked to an external person, newest start_date first.

        Args:
            external_person_id: Person the expenses are linked to
            start_date: Keep expenses with start_date >= this date
            end_date: Keep expenses whose end (or start, if open) <= this date
            category_id: Keep expenses of this category

        Returns:
            Matching expenses, each listed once
        """
        pass

    @abstractmethod
    async def find_assets_linked_to(
        self,
        external_person_id: ExternalPersonId,
        viewer_household_id: HouseholdId | None,
    ) -> list[AssetRecord]:
        """Assets visible through an external person, newest first.

        The union of assets referenced by an expense linked to the person
        and assets in which the viewer's household holds a shared-ownership
        share. household_ownership_percentage is the viewer household's
        summed share, or None when it holds none.

        Args:
            external_person_id: Person the expenses are linked to
            viewer_household_id: Household of the account viewing the data

        Returns:
            Matching assets, each listed once
        """
        pass
