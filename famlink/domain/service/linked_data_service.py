"""Linked-data access gateway."""

from collections import defaultdict
from collections.abc import Awaitable, Iterable
from datetime import date
from decimal import Decimal

import logfire

from famlink.domain.model.connection import Connection, ConnectionView
from famlink.domain.model.linked_data import (
    LinkedAsset,
    LinkedDataSummary,
    LinkedExpense,
    LinkedIncome,
)
from famlink.domain.repository import (
    AccountDirectory,
    ConnectionRepository,
    FinancialRecordSource,
)
from famlink.domain.value import CategoryId, ConnectionId, ConnectionStatus, UserId

from .base import Service


class LinkedDataService(Service):
    """Read-only view of the records shared through an accepted connection.

    Authorization is looked up again on every call, so a revoked connection
    is denied on the very next request. A denied call returns an empty
    result instead of an error and does not reveal whether the connection
    exists.
    """

    def __init__(
        self,
        connection_repository: ConnectionRepository,
        financial_record_source: FinancialRecordSource,
        account_directory: AccountDirectory,
    ) -> None:
        """Initialize linked data service.

        Args:
            connection_repository: Connection repository
            financial_record_source: Finance records
            account_directory: Account lookup, for the viewer's household
        """
        self.connection_repository = connection_repository
        self.financial_record_source = financial_record_source
        self.account_directory = account_directory

    async def _authorize(
        self, connection_id: ConnectionId, actor_id: UserId
    ) -> Connection | None:
        connection = await self.connection_repository.find_by_id(connection_id)
        if (
            connection is None
            or connection.status != ConnectionStatus.ACCEPTED
            or not connection.is_party(actor_id)
        ):
            logfire.warn(
                "Linked data access denied",
                connection_id=str(connection_id),
                actor_id=str(actor_id),
            )
            return None
        return connection

    async def list_connections(self, actor_id: UserId) -> list[ConnectionView]:
        """Accepted connections the actor can view linked data through."""
        with logfire.span(
            "linked_data_service.list_connections", actor_id=str(actor_id)
        ):
            return await self.connection_repository.find_accepted_for_party(actor_id)

    async def get_expenses(
        self,
        connection_id: ConnectionId,
        actor_id: UserId,
        start_date: date | None = None,
        end_date: date | None = None,
        category_id: CategoryId | None = None,
    ) -> list[LinkedExpense]:
        """Expenses tagged to the connection's external person.

        Args:
            connection_id: Accepted connection
            actor_id: Inviter or invitee
            start_date: Keep expenses starting on or after this date
            end_date: Keep expenses ending (or starting, if open) on or before this date
            category_id: Keep expenses of this category

        Returns:
            Read-only expenses, newest first; empty when access is denied
        """
        with logfire.span(
            "linked_data_service.get_expenses",
            connection_id=str(connection_id),
            actor_id=str(actor_id),
        ):
            connection = await self._authorize(connection_id, actor_id)
            if connection is None:
                return []

            records = await self.financial_record_source.find_expenses_linked_to(
                connection.external_person_id,
                start_date=start_date,
                end_date=end_date,
                category_id=category_id,
            )
            logfire.info("Linked expenses read", count=len(records))
            return [
                LinkedExpense(
                    **record.model_dump(),
                    shared_from_user_id=connection.invited_by_user_id,
                )
                for record in records
            ]

    async def get_income(
        self, connection_id: ConnectionId, actor_id: UserId
    ) -> list[LinkedIncome]:
        """Linked income.

        Income records cannot be tagged to an external person, so this is
        always empty. Authorization is still checked.
        """
        with logfire.span(
            "linked_data_service.get_income",
            connection_id=str(connection_id),
            actor_id=str(actor_id),
        ):
            await self._authorize(connection_id, actor_id)
            return []

    async def get_assets(
        self, connection_id: ConnectionId, actor_id: UserId
    ) -> list[LinkedAsset]:
        """Assets reachable through linked expenses or owned in part by the
        actor's household.

        Returns:
            Read-only assets, newest first; empty when access is denied
        """
        with logfire.span(
            "linked_data_service.get_assets",
            connection_id=str(connection_id),
            actor_id=str(actor_id),
        ):
            connection = await self._authorize(connection_id, actor_id)
            if connection is None:
                return []

            actor = await self.account_directory.find_by_id(actor_id)
            records = await self.financial_record_source.find_assets_linked_to(
                connection.external_person_id,
                actor.household_id if actor else None,
            )
            logfire.info("Linked assets read", count=len(records))
            return [
                LinkedAsset(
                    **record.model_dump(),
                    shared_from_user_id=connection.invited_by_user_id,
                )
                for record in records
            ]

    async def get_summary(
        self, connection_id: ConnectionId, actor_id: UserId
    ) -> LinkedDataSummary:
        """Counts and per-currency totals of expenses, income and assets.

        Each category is read on its own; a failing category is logged and
        counted as empty without affecting the other two.
        """
        with logfire.span(
            "linked_data_service.get_summary",
            connection_id=str(connection_id),
            actor_id=str(actor_id),
        ):
            expenses = await self._read_category(
                "expenses", self.get_expenses(connection_id, actor_id)
            )
            income = await self._read_category(
                "income", self.get_income(connection_id, actor_id)
            )
            assets = await self._read_category(
                "assets", self.get_assets(connection_id, actor_id)
            )

            return LinkedDataSummary(
                expenses_count=len(expenses),
                expenses_total=_totals((e.currency, e.amount) for e in expenses),
                income_count=len(income),
                income_total=_totals((i.currency, i.amount) for i in income),
                assets_count=len(assets),
                assets_total_value=_totals((a.currency, a.value) for a in assets),
            )

    async def _read_category(self, name: str, reader: Awaitable[list]) -> list:
        try:
            return await reader
        except Exception as e:
            logfire.error("Linked data category failed", category=name, error=str(e))
            return []


def _totals(pairs: Iterable[tuple[str, Decimal]]) -> dict[str, Decimal]:
    totals: dict[str, Decimal] = defaultdict(Decimal)
    for currency, amount in pairs:
        totals[currency] += amount
    return dict(totals)
