"""Shared route helpers: cookie authentication and domain error mapping."""

from fastapi import HTTPException, status

from famlink.domain.error import (
    DomainError,
    InvitationExpiredError,
    NotFoundError,
    PolicyDeniedError,
    StateConflictError,
    TransientError,
    ValidationError,
)
from famlink.domain.service import JWTService
from famlink.util.jwt import JWTError
from famlink.util.logging import get_logger

logger = get_logger(__name__)


def authenticate(jwt_service: JWTService, auth_token: str | None) -> str:
    """Return the user ID carried by the auth cookie.

    Raises:
        HTTPException: 401 if the cookie is missing or invalid
    """
    if not auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    try:
        payload = jwt_service.verify_token(auth_token)
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )
    return payload.user_id


def http_error(error: DomainError) -> HTTPException:
    """Map a domain error to the HTTP error the API returns for it."""
    # Expired is a kind of state conflict, so it is checked first
    if isinstance(error, InvitationExpiredError):
        code = status.HTTP_410_GONE
    elif isinstance(error, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, PolicyDeniedError):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(error, StateConflictError):
        code = status.HTTP_409_CONFLICT
    elif isinstance(error, ValidationError):
        code = status.HTTP_422_UNPROCESSABLE_ENTITY
    elif isinstance(error, TransientError):
        logger.warning(f"Backing store unavailable: {error}")
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        logger.error(f"Unmapped domain error: {error!r}")
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=code, detail=str(error))
