"""In-memory repository implementations for testing."""

from .account import InMemoryAccountDirectory
from .connection import InMemoryConnectionRepository
from .external_person import InMemoryExternalPersonRepository
from .finance import InMemoryFinancialRecordSource
from .notification import InMemoryNotificationSink
from .store import InMemoryStore, OwnershipShare

__all__ = [
    "InMemoryAccountDirectory",
    "InMemoryConnectionRepository",
    "InMemoryExternalPersonRepository",
    "InMemoryFinancialRecordSource",
    "InMemoryNotificationSink",
    "InMemoryStore",
    "OwnershipShare",
]
