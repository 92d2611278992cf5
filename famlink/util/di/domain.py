"""Domain layer DI providers."""

from dishka import Scope, provide

from famlink.config import AuthSettings, InvitationSettings
from famlink.domain.repository import (
    AccountDirectory,
    ConnectionRepository,
    ExternalPersonRepository,
    FinancialRecordSource,
    NotificationSink,
)
from famlink.domain.service import (
    ConnectionService,
    ExternalPersonService,
    IdentityResolver,
    JWTService,
    LinkedDataService,
    NotificationService,
)
from famlink.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request (and each expiry sweep) gets fresh service instances
    with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_identity_resolver(self, account_directory: AccountDirectory) -> IdentityResolver:
        """Provide identity resolver."""
        return IdentityResolver(account_directory=account_directory)

    @provide
    def get_notification_service(
        self, notification_sink: NotificationSink
    ) -> NotificationService:
        """Provide notification domain service."""
        return NotificationService(notification_sink=notification_sink)

    @provide
    def get_external_person_service(
        self,
        external_person_repository: ExternalPersonRepository,
        account_directory: AccountDirectory,
    ) -> ExternalPersonService:
        """Provide external person domain service."""
        return ExternalPersonService(
            external_person_repository=external_person_repository,
            account_directory=account_directory,
        )

    @provide
    def get_connection_service(
        self,
        connection_repository: ConnectionRepository,
        external_person_repository: ExternalPersonRepository,
        account_directory: AccountDirectory,
        identity_resolver: IdentityResolver,
        notification_service: NotificationService,
        invitation_settings: InvitationSettings,
    ) -> ConnectionService:
        """Provide connection (invitation lifecycle) domain service."""
        return ConnectionService(
            connection_repository=connection_repository,
            external_person_repository=external_person_repository,
            account_directory=account_directory,
            identity_resolver=identity_resolver,
            notification_service=notification_service,
            invitation_settings=invitation_settings,
        )

    @provide
    def get_linked_data_service(
        self,
        connection_repository: ConnectionRepository,
        financial_record_source: FinancialRecordSource,
        account_directory: AccountDirectory,
    ) -> LinkedDataService:
        """Provide linked-data gateway."""
        return LinkedDataService(
            connection_repository=connection_repository,
            financial_record_source=financial_record_source,
            account_directory=account_directory,
        )
