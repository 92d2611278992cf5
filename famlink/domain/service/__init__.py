"""Domain services."""

from .base import Service
from .connection_service import ConnectionService
from .external_person_service import ExternalPersonService
from .identity_resolver import IdentityResolver
from .jwt_service import JWTService
from .linked_data_service import LinkedDataService
from .notification_service import NotificationService

__all__ = [
    "ConnectionService",
    "ExternalPersonService",
    "IdentityResolver",
    "JWTService",
    "LinkedDataService",
    "NotificationService",
    "Service",
]
