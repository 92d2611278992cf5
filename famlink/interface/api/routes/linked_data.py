"""Linked data routes.

Every endpoint answers with an empty result rather than an error when the
connection is not accepted or the caller is not one of its parties.
"""

from datetime import date
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Query, status
from pydantic import ValidationError as PydanticValidationError

from famlink.application.usecase.linked_data import (
    GetLinkedAssetsResponse,
    GetLinkedAssetsUseCase,
    GetLinkedExpensesRequest,
    GetLinkedExpensesResponse,
    GetLinkedExpensesUseCase,
    GetLinkedIncomeResponse,
    GetLinkedIncomeUseCase,
    GetLinkedSummaryUseCase,
    LinkedDataRequest,
    ListLinkedConnectionsRequest,
    ListLinkedConnectionsResponse,
    ListLinkedConnectionsUseCase,
)
from famlink.domain.error import DomainError
from famlink.domain.model.linked_data import LinkedDataSummary
from famlink.domain.service import JWTService

from .common import authenticate, http_error

router = APIRouter(prefix="/linked-data", tags=["linked-data"], route_class=DishkaRoute)


@router.get("/connections", response_model=ListLinkedConnectionsResponse)
async def list_linked_connections(
    use_case: FromDishka[ListLinkedConnectionsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListLinkedConnectionsResponse:
    """Accepted connections the current user can view linked data through."""
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await use_case.execute(ListLinkedConnectionsRequest(user_id=user_id))
    except DomainError as e:
        raise http_error(e)


@router.get("/{connection_id}/expenses", response_model=GetLinkedExpensesResponse)
async def get_linked_expenses(
    connection_id: UUID,
    use_case: FromDishka[GetLinkedExpensesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    category_id: UUID | None = Query(default=None),
) -> GetLinkedExpensesResponse:
    """Expenses linked to the connection's external person.

    Args:
        connection_id: Accepted connection to read through
        use_case: Get linked expenses use case from DI
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie
        start_date: Only expenses starting on or after this date
        end_date: Only expenses starting on or before this date
        category_id: Only expenses in this category
    """
    user_id = authenticate(jwt_service, auth_token)
    try:
        request = GetLinkedExpensesRequest(
            connection_id=str(connection_id),
            user_id=user_id,
            start_date=start_date,
            end_date=end_date,
            category_id=str(category_id) if category_id else None,
        )
    except PydanticValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.errors()[0]["msg"],
        )

    try:
        return await use_case.execute(request)
    except DomainError as e:
        raise http_error(e)


@router.get("/{connection_id}/income", response_model=GetLinkedIncomeResponse)
async def get_linked_income(
    connection_id: UUID,
    use_case: FromDishka[GetLinkedIncomeUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetLinkedIncomeResponse:
    """Income linked to the connection's external person."""
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await use_case.execute(
            LinkedDataRequest(connection_id=str(connection_id), user_id=user_id)
        )
    except DomainError as e:
        raise http_error(e)


@router.get("/{connection_id}/assets", response_model=GetLinkedAssetsResponse)
async def get_linked_assets(
    connection_id: UUID,
    use_case: FromDishka[GetLinkedAssetsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetLinkedAssetsResponse:
    """Assets linked to the connection's external person."""
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await use_case.execute(
            LinkedDataRequest(connection_id=str(connection_id), user_id=user_id)
        )
    except DomainError as e:
        raise http_error(e)


@router.get("/{connection_id}/summary", response_model=LinkedDataSummary)
async def get_linked_summary(
    connection_id: UUID,
    use_case: FromDishka[GetLinkedSummaryUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> LinkedDataSummary:
    """Counts and per-currency totals of the linked data."""
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await use_case.execute(
            LinkedDataRequest(connection_id=str(connection_id), user_id=user_id)
        )
    except DomainError as e:
        raise http_error(e)
