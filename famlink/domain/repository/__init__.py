"""Repository interfaces for the famlink domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from famlink.domain.repository.account import AccountDirectory
from famlink.domain.repository.connection import ConnectionRepository
from famlink.domain.repository.external_person import ExternalPersonRepository
from famlink.domain.repository.finance import FinancialRecordSource
from famlink.domain.repository.notification import NotificationSink

__all__ = [
    "AccountDirectory",
    "ConnectionRepository",
    "ExternalPersonRepository",
    "FinancialRecordSource",
    "NotificationSink",
]
