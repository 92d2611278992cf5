"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from famlink.config import Settings
from famlink.domain.repository import (
    AccountDirectory,
    ConnectionRepository,
    ExternalPersonRepository,
    FinancialRecordSource,
    NotificationSink,
)
from famlink.persistence.database import create_engine, create_session_factory
from famlink.persistence.repository import (
    PostgresAccountDirectory,
    PostgresConnectionRepository,
    PostgresExternalPersonRepository,
    PostgresFinancialRecordSource,
    PostgresNotificationSink,
)
from famlink.util.di.base import ProviderBase
from famlink.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is automatically committed at the end of the request
        if no exception occurred, or rolled back if an exception was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.info("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_external_person_repository(
        self, session: AsyncSession
    ) -> ExternalPersonRepository:
        """Provide ExternalPerson repository."""
        return PostgresExternalPersonRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_connection_repository(self, session: AsyncSession) -> ConnectionRepository:
        """Provide Connection repository."""
        return PostgresConnectionRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_account_directory(self, session: AsyncSession) -> AccountDirectory:
        """Provide account directory."""
        return PostgresAccountDirectory(session)

    @provide(scope=Scope.REQUEST)
    def get_notification_sink(self, session: AsyncSession) -> NotificationSink:
        """Provide notification sink."""
        return PostgresNotificationSink(session)

    @provide(scope=Scope.REQUEST)
    def get_financial_record_source(
        self, session: AsyncSession
    ) -> FinancialRecordSource:
        """Provide financial record source."""
        return PostgresFinancialRecordSource(session)
