"""Linked data use cases."""

from .get_linked_data import (
    GetLinkedAssetsResponse,
    GetLinkedAssetsUseCase,
    GetLinkedExpensesRequest,
    GetLinkedExpensesResponse,
    GetLinkedExpensesUseCase,
    GetLinkedIncomeResponse,
    GetLinkedIncomeUseCase,
    GetLinkedSummaryUseCase,
    LinkedDataRequest,
)
from .list_linked_connections import (
    ListLinkedConnectionsRequest,
    ListLinkedConnectionsResponse,
    ListLinkedConnectionsUseCase,
)

__all__ = [
    "GetLinkedAssetsResponse",
    "GetLinkedAssetsUseCase",
    "GetLinkedExpensesRequest",
    "GetLinkedExpensesResponse",
    "GetLinkedExpensesUseCase",
    "GetLinkedIncomeResponse",
    "GetLinkedIncomeUseCase",
    "GetLinkedSummaryUseCase",
    "LinkedDataRequest",
    "ListLinkedConnectionsRequest",
    "ListLinkedConnectionsResponse",
    "ListLinkedConnectionsUseCase",
]
