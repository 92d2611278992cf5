"""PostgreSQL repository implementations."""

from famlink.persistence.repository.account import PostgresAccountDirectory
from famlink.persistence.repository.connection import PostgresConnectionRepository
from famlink.persistence.repository.external_person import (
    PostgresExternalPersonRepository,
)
from famlink.persistence.repository.finance import PostgresFinancialRecordSource
from famlink.persistence.repository.notification import PostgresNotificationSink

__all__ = [
    "PostgresAccountDirectory",
    "PostgresConnectionRepository",
    "PostgresExternalPersonRepository",
    "PostgresFinancialRecordSource",
    "PostgresNotificationSink",
]
