"""Application layer DI providers."""

from dishka import Scope, provide

from famlink.application.usecase.external_person import (
    CreateExternalPersonUseCase,
    DeleteExternalPersonUseCase,
    GetExternalPersonUseCase,
    ListExternalPersonsUseCase,
    UpdateExternalPersonUseCase,
)
from famlink.application.usecase.invitation import (
    AcceptInvitationUseCase,
    CheckCanInviteUseCase,
    ListInvitationsUseCase,
    ListPersonConnectionsUseCase,
    RejectInvitationUseCase,
    RevokeInvitationUseCase,
    SendInvitationUseCase,
)
from famlink.application.usecase.linked_data import (
    GetLinkedAssetsUseCase,
    GetLinkedExpensesUseCase,
    GetLinkedIncomeUseCase,
    GetLinkedSummaryUseCase,
    ListLinkedConnectionsUseCase,
)
from famlink.domain.service import (
    ConnectionService,
    ExternalPersonService,
    IdentityResolver,
    LinkedDataService,
)
from famlink.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # External person use cases
    @provide
    def get_create_external_person_use_case(
        self,
        external_person_service: ExternalPersonService,
        identity_resolver: IdentityResolver,
    ) -> CreateExternalPersonUseCase:
        """Provide create external person use case."""
        return CreateExternalPersonUseCase(external_person_service, identity_resolver)

    @provide
    def get_get_external_person_use_case(
        self,
        external_person_service: ExternalPersonService,
        identity_resolver: IdentityResolver,
    ) -> GetExternalPersonUseCase:
        """Provide get external person use case."""
        return GetExternalPersonUseCase(external_person_service, identity_resolver)

    @provide
    def get_list_external_persons_use_case(
        self,
        external_person_service: ExternalPersonService,
        identity_resolver: IdentityResolver,
    ) -> ListExternalPersonsUseCase:
        """Provide list external persons use case."""
        return ListExternalPersonsUseCase(external_person_service, identity_resolver)

    @provide
    def get_update_external_person_use_case(
        self,
        external_person_service: ExternalPersonService,
        identity_resolver: IdentityResolver,
    ) -> UpdateExternalPersonUseCase:
        """Provide update external person use case."""
        return UpdateExternalPersonUseCase(external_person_service, identity_resolver)

    @provide
    def get_delete_external_person_use_case(
        self, external_person_service: ExternalPersonService
    ) -> DeleteExternalPersonUseCase:
        """Provide delete external person use case."""
        return DeleteExternalPersonUseCase(external_person_service)

    # Invitation use cases
    @provide
    def get_check_can_invite_use_case(
        self, connection_service: ConnectionService
    ) -> CheckCanInviteUseCase:
        """Provide admission dry-run use case."""
        return CheckCanInviteUseCase(connection_service)

    @provide
    def get_send_invitation_use_case(
        self, connection_service: ConnectionService
    ) -> SendInvitationUseCase:
        """Provide send invitation use case."""
        return SendInvitationUseCase(connection_service)

    @provide
    def get_list_invitations_use_case(
        self, connection_service: ConnectionService
    ) -> ListInvitationsUseCase:
        """Provide list invitations use case."""
        return ListInvitationsUseCase(connection_service)

    @provide
    def get_list_person_connections_use_case(
        self, connection_service: ConnectionService
    ) -> ListPersonConnectionsUseCase:
        """Provide external person connection history use case."""
        return ListPersonConnectionsUseCase(connection_service)

    @provide
    def get_accept_invitation_use_case(
        self, connection_service: ConnectionService
    ) -> AcceptInvitationUseCase:
        """Provide accept invitation use case."""
        return AcceptInvitationUseCase(connection_service)

    @provide
    def get_reject_invitation_use_case(
        self, connection_service: ConnectionService
    ) -> RejectInvitationUseCase:
        """Provide reject invitation use case."""
        return RejectInvitationUseCase(connection_service)

    @provide
    def get_revoke_invitation_use_case(
        self, connection_service: ConnectionService
    ) -> RevokeInvitationUseCase:
        """Provide revoke / disconnect use case."""
        return RevokeInvitationUseCase(connection_service)

    # Linked data use cases
    @provide
    def get_list_linked_connections_use_case(
        self, linked_data_service: LinkedDataService
    ) -> ListLinkedConnectionsUseCase:
        """Provide list linked connections use case."""
        return ListLinkedConnectionsUseCase(linked_data_service)

    @provide
    def get_linked_expenses_use_case(
        self, linked_data_service: LinkedDataService
    ) -> GetLinkedExpensesUseCase:
        """Provide linked expenses use case."""
        return GetLinkedExpensesUseCase(linked_data_service)

    @provide
    def get_linked_income_use_case(
        self, linked_data_service: LinkedDataService
    ) -> GetLinkedIncomeUseCase:
        """Provide linked income use case."""
        return GetLinkedIncomeUseCase(linked_data_service)

    @provide
    def get_linked_assets_use_case(
        self, linked_data_service: LinkedDataService
    ) -> GetLinkedAssetsUseCase:
        """Provide linked assets use case."""
        return GetLinkedAssetsUseCase(linked_data_service)

    @provide
    def get_linked_summary_use_case(
        self, linked_data_service: LinkedDataService
    ) -> GetLinkedSummaryUseCase:
        """Provide linked data summary use case."""
        return GetLinkedSummaryUseCase(linked_data_service)
