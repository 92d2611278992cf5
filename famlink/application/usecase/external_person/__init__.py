"""External person use cases."""

from .create_external_person import (
    CreateExternalPersonRequest,
    CreateExternalPersonUseCase,
)
from .delete_external_person import (
    DeleteExternalPersonRequest,
    DeleteExternalPersonResponse,
    DeleteExternalPersonUseCase,
)
from .get_external_person import (
    ExternalPersonItem,
    GetExternalPersonRequest,
    GetExternalPersonUseCase,
)
from .list_external_persons import (
    ListExternalPersonsRequest,
    ListExternalPersonsResponse,
    ListExternalPersonsUseCase,
)
from .update_external_person import (
    UpdateExternalPersonRequest,
    UpdateExternalPersonUseCase,
)

__all__ = [
    "CreateExternalPersonRequest",
    "CreateExternalPersonUseCase",
    "DeleteExternalPersonRequest",
    "DeleteExternalPersonResponse",
    "DeleteExternalPersonUseCase",
    "ExternalPersonItem",
    "GetExternalPersonRequest",
    "GetExternalPersonUseCase",
    "ListExternalPersonsRequest",
    "ListExternalPersonsResponse",
    "ListExternalPersonsUseCase",
    "UpdateExternalPersonRequest",
    "UpdateExternalPersonUseCase",
]
