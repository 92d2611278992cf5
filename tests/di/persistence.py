"""Mock persistence providers for testing."""

from dishka import Scope, provide

from famlink.domain.repository import (
    AccountDirectory,
    ConnectionRepository,
    ExternalPersonRepository,
    FinancialRecordSource,
    NotificationSink,
)
from famlink.persistence.repository.inmemory import (
    InMemoryAccountDirectory,
    InMemoryConnectionRepository,
    InMemoryExternalPersonRepository,
    InMemoryFinancialRecordSource,
    InMemoryNotificationSink,
    InMemoryStore,
)
from famlink.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    The store is APP-scoped so every request scope of one container (the
    test's own and the expiry reclaimer's) shares the same rows. Each test
    builds a fresh container, which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_store(self) -> InMemoryStore:
        """Provide the shared in-memory store."""
        return InMemoryStore()

    @provide(scope=Scope.REQUEST)
    def get_external_person_repository(
        self, store: InMemoryStore
    ) -> ExternalPersonRepository:
        """Provide in-memory external person repository."""
        return InMemoryExternalPersonRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_connection_repository(self, store: InMemoryStore) -> ConnectionRepository:
        """Provide in-memory connection repository."""
        return InMemoryConnectionRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_account_directory(self, store: InMemoryStore) -> AccountDirectory:
        """Provide in-memory account directory."""
        return InMemoryAccountDirectory(store)

    @provide(scope=Scope.REQUEST)
    def get_notification_sink(self, store: InMemoryStore) -> NotificationSink:
        """Provide in-memory notification sink."""
        return InMemoryNotificationSink(store)

    @provide(scope=Scope.REQUEST)
    def get_financial_record_source(
        self, store: InMemoryStore
    ) -> FinancialRecordSource:
        """Provide in-memory financial record source."""
        return InMemoryFinancialRecordSource(store)
