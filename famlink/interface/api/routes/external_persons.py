"""External person routes."""

from datetime import date
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel, Field

from famlink.application.usecase.external_person import (
    CreateExternalPersonRequest,
    CreateExternalPersonUseCase,
    DeleteExternalPersonRequest,
    DeleteExternalPersonResponse,
    DeleteExternalPersonUseCase,
    ExternalPersonItem,
    GetExternalPersonRequest,
    GetExternalPersonUseCase,
    ListExternalPersonsRequest,
    ListExternalPersonsResponse,
    ListExternalPersonsUseCase,
    UpdateExternalPersonRequest,
    UpdateExternalPersonUseCase,
)
from famlink.application.usecase.invitation import (
    CheckCanInviteRequest,
    CheckCanInviteResponse,
    CheckCanInviteUseCase,
    ListPersonConnectionsRequest,
    ListPersonConnectionsResponse,
    ListPersonConnectionsUseCase,
)
from famlink.domain.error import DomainError
from famlink.domain.service import JWTService

from .common import authenticate, http_error

router = APIRouter(
    prefix="/external-persons", tags=["external-persons"], route_class=DishkaRoute
)


class CreateExternalPersonAPIRequest(BaseModel):
    """API request for creating an external person."""

    name: str = Field(min_length=1, max_length=255)
    email: str | None = None
    relationship: str | None = Field(default=None, max_length=100)
    notes: str | None = None
    birth_date: date | None = None


class UpdateExternalPersonAPIRequest(BaseModel):
    """API request for updating an external person (partial)."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = None
    relationship: str | None = Field(default=None, max_length=100)
    notes: str | None = None
    birth_date: date | None = None


@router.get("", response_model=ListExternalPersonsResponse)
async def list_external_persons(
    use_case: FromDishka[ListExternalPersonsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListExternalPersonsResponse:
    """List the external persons of the current user's household."""
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await use_case.execute(ListExternalPersonsRequest(user_id=user_id))
    except DomainError as e:
        raise http_error(e)


@router.post(
    "", response_model=ExternalPersonItem, status_code=status.HTTP_201_CREATED
)
async def create_external_person(
    request: CreateExternalPersonAPIRequest,
    use_case: FromDishka[CreateExternalPersonUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ExternalPersonItem:
    """Create an external person in the current user's household.

    Raises:
        HTTPException: 400 without a household, 422 on a bad or duplicate email
    """
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await use_case.execute(
            CreateExternalPersonRequest(user_id=user_id, **request.model_dump())
        )
    except DomainError as e:
        raise http_error(e)


@router.get("/{external_person_id}", response_model=ExternalPersonItem)
async def get_external_person(
    external_person_id: UUID,
    use_case: FromDishka[GetExternalPersonUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ExternalPersonItem:
    """Get an external person with the account its email resolves to."""
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await use_case.execute(
            GetExternalPersonRequest(
                external_person_id=str(external_person_id), user_id=user_id
            )
        )
    except DomainError as e:
        raise http_error(e)


@router.put("/{external_person_id}", response_model=ExternalPersonItem)
async def update_external_person(
    external_person_id: UUID,
    request: UpdateExternalPersonAPIRequest,
    use_case: FromDishka[UpdateExternalPersonUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ExternalPersonItem:
    """Update an external person. Only fields present in the body change."""
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await use_case.execute(
            UpdateExternalPersonRequest(
                external_person_id=str(external_person_id),
                user_id=user_id,
                **request.model_dump(exclude_unset=True),
            )
        )
    except DomainError as e:
        raise http_error(e)


@router.delete("/{external_person_id}", response_model=DeleteExternalPersonResponse)
async def delete_external_person(
    external_person_id: UUID,
    use_case: FromDishka[DeleteExternalPersonUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteExternalPersonResponse:
    """Delete an external person.

    Raises:
        HTTPException: 400 while a pending or accepted connection exists
    """
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await use_case.execute(
            DeleteExternalPersonRequest(
                external_person_id=str(external_person_id), user_id=user_id
            )
        )
    except DomainError as e:
        raise http_error(e)


@router.get("/{external_person_id}/can-invite", response_model=CheckCanInviteResponse)
async def check_can_invite(
    external_person_id: UUID,
    use_case: FromDishka[CheckCanInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CheckCanInviteResponse:
    """Tell whether an invitation could be sent now, and why not."""
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await use_case.execute(
            CheckCanInviteRequest(
                external_person_id=str(external_person_id), user_id=user_id
            )
        )
    except DomainError as e:
        raise http_error(e)


@router.get(
    "/{external_person_id}/connections", response_model=ListPersonConnectionsResponse
)
async def list_person_connections(
    external_person_id: UUID,
    use_case: FromDishka[ListPersonConnectionsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListPersonConnectionsResponse:
    """Connection history of an external person, any status."""
    user_id = authenticate(jwt_service, auth_token)
    try:
        return await use_case.execute(
            ListPersonConnectionsRequest(
                external_person_id=str(external_person_id), user_id=user_id
            )
        )
    except DomainError as e:
        raise http_error(e)
