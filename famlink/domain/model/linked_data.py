"""Read-only views of financial records shared through a connection."""

from decimal import Decimal
from typing import Literal

from pydantic import Field

from famlink.domain.model.common import DomainModel
from famlink.domain.model.finance import AssetRecord, ExpenseRecord, IncomeRecord
from famlink.domain.value import UserId


class LinkedExpense(ExpenseRecord):
    """Expense visible through an accepted connection."""

    is_read_only: Literal[True] = True
    shared_from_user_id: UserId


class LinkedIncome(IncomeRecord):
    """Income visible through an accepted connection."""

    is_read_only: Literal[True] = True
    shared_from_user_id: UserId


class LinkedAsset(AssetRecord):
    """Asset visible through an accepted connection."""

    is_read_only: Literal[True] = True
    shared_from_user_id: UserId


class LinkedDataSummary(DomainModel):
    """Counts and currency-native totals of the linked data.

    Totals are keyed by currency code; amounts in different currencies are
    never added together.
    """

    expenses_count: int = 0
    expenses_total: dict[str, Decimal] = Field(default_factory=dict)
    income_count: int = 0
    income_total: dict[str, Decimal] = Field(default_factory=dict)
    assets_count: int = 0
    assets_total_value: dict[str, Decimal] = Field(default_factory=dict)
