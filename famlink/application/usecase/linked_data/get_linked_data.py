"""Linked-data use cases.

All of them return an empty result, never an error, when the connection is
not accepted or the user is not a party to it.
"""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, model_validator

from famlink.application.usecase.base import BaseUseCase
from famlink.domain.model.linked_data import (
    LinkedAsset,
    LinkedDataSummary,
    LinkedExpense,
    LinkedIncome,
)
from famlink.domain.service import LinkedDataService
from famlink.domain.value import CategoryId, ConnectionId, UserId


class LinkedDataRequest(BaseModel):
    """Linked data request for one connection."""

    connection_id: str
    user_id: str  # User ID from auth


class GetLinkedExpensesRequest(LinkedDataRequest):
    """Linked expenses request with optional filters."""

    start_date: date | None = None
    end_date: date | None = None
    category_id: str | None = None

    @model_validator(mode="after")
    def check_date_range(self) -> "GetLinkedExpensesRequest":
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class GetLinkedExpensesResponse(BaseModel):
    expenses: list[LinkedExpense]
    total: int


class GetLinkedIncomeResponse(BaseModel):
    income: list[LinkedIncome]
    total: int


class GetLinkedAssetsResponse(BaseModel):
    assets: list[LinkedAsset]
    total: int


class GetLinkedExpensesUseCase(BaseUseCase):
    """Use case for the expenses shared through a connection."""

    def __init__(self, linked_data_service: LinkedDataService) -> None:
        """Initialize get linked expenses use case.

        Args:
            linked_data_service: Linked data gateway
        """
        self.linked_data_service = linked_data_service

    async def execute(
        self, request: GetLinkedExpensesRequest
    ) -> GetLinkedExpensesResponse:
        expenses = await self.linked_data_service.get_expenses(
            ConnectionId(UUID(request.connection_id)),
            UserId(UUID(request.user_id)),
            start_date=request.start_date,
            end_date=request.end_date,
            category_id=(
                CategoryId(UUID(request.category_id)) if request.category_id else None
            ),
        )
        return GetLinkedExpensesResponse(expenses=expenses, total=len(expenses))


class GetLinkedIncomeUseCase(BaseUseCase):
    """Use case for linked income (always empty)."""

    def __init__(self, linked_data_service: LinkedDataService) -> None:
        self.linked_data_service = linked_data_service

    async def execute(self, request: LinkedDataRequest) -> GetLinkedIncomeResponse:
        income = await self.linked_data_service.get_income(
            ConnectionId(UUID(request.connection_id)), UserId(UUID(request.user_id))
        )
        return GetLinkedIncomeResponse(income=income, total=len(income))


class GetLinkedAssetsUseCase(BaseUseCase):
    """Use case for the assets shared through a connection."""

    def __init__(self, linked_data_service: LinkedDataService) -> None:
        self.linked_data_service = linked_data_service

    async def execute(self, request: LinkedDataRequest) -> GetLinkedAssetsResponse:
        assets = await self.linked_data_service.get_assets(
            ConnectionId(UUID(request.connection_id)), UserId(UUID(request.user_id))
        )
        return GetLinkedAssetsResponse(assets=assets, total=len(assets))


class GetLinkedSummaryUseCase(BaseUseCase):
    """Use case for the linked data summary."""

    def __init__(self, linked_data_service: LinkedDataService) -> None:
        self.linked_data_service = linked_data_service

    async def execute(self, request: LinkedDataRequest) -> LinkedDataSummary:
        return await self.linked_data_service.get_summary(
            ConnectionId(UUID(request.connection_id)), UserId(UUID(request.user_id))
        )
