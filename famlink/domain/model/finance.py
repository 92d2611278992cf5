"""Financial records owned by the household finance services.

Read-only views: this core never creates or mutates them, it only decides
which of them an accepted connection may see.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from famlink.domain.model.common import DomainModel, utc_now
from famlink.domain.value import (
    AssetId,
    CategoryId,
    ExpenseId,
    HouseholdId,
    IncomeId,
)


class ExpenseRecord(DomainModel):
    """Expense row."""

    id: ExpenseId
    household_id: HouseholdId
    category_id: Optional[CategoryId] = None
    amount: Decimal
    currency: str = Field(min_length=3, max_length=4)
    description: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    linked_asset_id: Optional[AssetId] = None


class IncomeRecord(DomainModel):
    """Income row."""

    id: IncomeId
    household_id: HouseholdId
    amount: Decimal
    currency: str = Field(min_length=3, max_length=4)
    description: Optional[str] = None
    start_date: date


class AssetRecord(DomainModel):
    """Asset row.

    household_ownership_percentage is the summed shared-ownership share of
    the viewing household, when it holds one.
    """

    id: AssetId
    household_id: HouseholdId
    name: str
    amount: Decimal
    current_value: Optional[Decimal] = None
    currency: str = Field(min_length=3, max_length=4)
    created_at: datetime = Field(default_factory=utc_now)
    household_ownership_percentage: Optional[Decimal] = None

    @property
    def value(self) -> Decimal:
        """Current valuation, falling back to the booked amount."""
        return self.current_value if self.current_value is not None else self.amount
