"""Unit tests for LinkedDataService (the linked-data access gateway)."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from famlink.domain.model import AssetRecord, ExpenseRecord
from famlink.domain.service import ConnectionService, LinkedDataService
from famlink.domain.value import (
    AssetId,
    CategoryId,
    ConnectionId,
    ConnectionStatus,
    ExpenseId,
    HouseholdId,
    HouseholdMemberId,
    RevokeMode,
)
from famlink.persistence.repository.inmemory import InMemoryStore
from tests.conftest import add_account, add_connection, seed_family
from tests.harness import create_env_fixture

# Unit test fixture - in-memory persistence
unit_env = create_env_fixture()


def make_expense(
    household_id: HouseholdId,
    amount: str,
    start: date,
    currency: str = "EUR",
    end: date | None = None,
    category_id: CategoryId | None = None,
    linked_asset_id: AssetId | None = None,
) -> ExpenseRecord:
    return ExpenseRecord(
        id=ExpenseId(uuid4()),
        household_id=household_id,
        category_id=category_id,
        amount=Decimal(amount),
        currency=currency,
        start_date=start,
        end_date=end,
        linked_asset_id=linked_asset_id,
    )


def make_asset(
    household_id: HouseholdId,
    name: str,
    amount: str,
    current_value: str | None = None,
    currency: str = "EUR",
    created_at: datetime | None = None,
) -> AssetRecord:
    return AssetRecord(
        id=AssetId(uuid4()),
        household_id=household_id,
        name=name,
        amount=Decimal(amount),
        current_value=Decimal(current_value) if current_value else None,
        currency=currency,
        created_at=created_at or datetime.now(timezone.utc),
    )


class TestAuthorization:
    """Access is granted only through an accepted connection to its parties."""

    @pytest.mark.asyncio
    async def test_both_parties_read_expenses(self, unit_env):
        # Arrange
        store = await unit_env.get(InMemoryStore)
        gateway = await unit_env.get(LinkedDataService)
        family = seed_family(store)
        store.add_expense(
            make_expense(family.household_id, "12.50", date(2025, 3, 1)),
            family.person.id,
        )
        connection = add_connection(
            store,
            family.person,
            family.invitee.id,
            family.inviter.id,
            ConnectionStatus.ACCEPTED,
        )

        # Act
        as_invitee = await gateway.get_expenses(connection.id, family.invitee.id)
        as_inviter = await gateway.get_expenses(connection.id, family.inviter.id)

        # Assert
        assert len(as_invitee) == 1
        assert as_invitee[0].amount == Decimal("12.50")
        assert as_invitee[0].is_read_only is True
        assert as_invitee[0].shared_from_user_id == family.inviter.id
        assert as_inviter == as_invitee

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status",
        [
            ConnectionStatus.PENDING,
            ConnectionStatus.REJECTED,
            ConnectionStatus.REVOKED,
            ConnectionStatus.EXPIRED,
        ],
    )
    async def test_non_accepted_connection_reads_empty(self, unit_env, status):
        store = await unit_env.get(InMemoryStore)
        gateway = await unit_env.get(LinkedDataService)
        family = seed_family(store)
        store.add_expense(
            make_expense(family.household_id, "5", date(2025, 3, 1)), family.person.id
        )
        connection = add_connection(
            store, family.person, family.invitee.id, family.inviter.id, status
        )

        assert await gateway.get_expenses(connection.id, family.invitee.id) == []
        assert await gateway.get_assets(connection.id, family.invitee.id) == []

    @pytest.mark.asyncio
    async def test_stranger_and_unknown_connection_read_empty(self, unit_env):
        """Denials look the same whether or not the connection exists."""
        store = await unit_env.get(InMemoryStore)
        gateway = await unit_env.get(LinkedDataService)
        family = seed_family(store)
        stranger = add_account(store, "eve@example.com")
        store.add_expense(
            make_expense(family.household_id, "5", date(2025, 3, 1)), family.person.id
        )
        connection = add_connection(
            store,
            family.person,
            family.invitee.id,
            family.inviter.id,
            ConnectionStatus.ACCEPTED,
        )

        assert await gateway.get_expenses(connection.id, stranger.id) == []
        assert await gateway.get_expenses(ConnectionId(uuid4()), family.invitee.id) == []

    @pytest.mark.asyncio
    async def test_revoke_takes_effect_on_next_read(self, unit_env):
        """After a revoke the very next gateway call is denied."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        gateway = await unit_env.get(LinkedDataService)
        connections = await unit_env.get(ConnectionService)
        family = seed_family(store)
        store.add_expense(
            make_expense(family.household_id, "30", date(2025, 1, 10)), family.person.id
        )
        sent = await connections.send_invitation(family.person.id, family.inviter.id)
        await connections.accept(sent.id, family.invitee.id)
        assert len(await gateway.get_expenses(sent.id, family.invitee.id)) == 1

        # Act
        await connections.revoke(sent.id, family.invitee.id, RevokeMode.EITHER_PARTY)

        # Assert
        assert await gateway.get_expenses(sent.id, family.invitee.id) == []
        assert await gateway.list_connections(family.invitee.id) == []


class TestGetExpenses:
    """Tests for expense filters."""

    @pytest.mark.asyncio
    async def test_only_expenses_linked_to_person(self, unit_env):
        store = await unit_env.get(InMemoryStore)
        gateway = await unit_env.get(LinkedDataService)
        family = seed_family(store)
        linked = store.add_expense(
            make_expense(family.household_id, "10", date(2025, 2, 1)), family.person.id
        )
        store.add_expense(make_expense(family.household_id, "99", date(2025, 2, 2)))
        connection = add_connection(
            store,
            family.person,
            family.invitee.id,
            family.inviter.id,
            ConnectionStatus.ACCEPTED,
        )

        expenses = await gateway.get_expenses(connection.id, family.invitee.id)

        assert [e.id for e in expenses] == [linked.id]

    @pytest.mark.asyncio
    async def test_date_and_category_filters(self, unit_env):
        # Arrange
        store = await unit_env.get(InMemoryStore)
        gateway = await unit_env.get(LinkedDataService)
        family = seed_family(store)
        groceries = CategoryId(uuid4())
        january = store.add_expense(
            make_expense(family.household_id, "10", date(2025, 1, 15), category_id=groceries),
            family.person.id,
        )
        spanning = store.add_expense(
            make_expense(
                family.household_id, "20", date(2025, 2, 1), end=date(2025, 4, 30)
            ),
            family.person.id,
        )
        march = store.add_expense(
            make_expense(family.household_id, "30", date(2025, 3, 5), category_id=groceries),
            family.person.id,
        )
        connection = add_connection(
            store,
            family.person,
            family.invitee.id,
            family.inviter.id,
            ConnectionStatus.ACCEPTED,
        )

        # Act
        from_february = await gateway.get_expenses(
            connection.id, family.invitee.id, start_date=date(2025, 2, 1)
        )
        until_march = await gateway.get_expenses(
            connection.id, family.invitee.id, end_date=date(2025, 3, 31)
        )
        only_groceries = await gateway.get_expenses(
            connection.id, family.invitee.id, category_id=groceries
        )

        # Assert
        assert [e.id for e in from_february] == [march.id, spanning.id]
        assert [e.id for e in until_march] == [march.id, january.id]
        assert [e.id for e in only_groceries] == [march.id, january.id]


class TestGetAssetsAndIncome:
    """Tests for get_assets and get_income."""

    @pytest.mark.asyncio
    async def test_assets_via_expenses_and_shared_ownership(self, unit_env):
        """Assets come from linked expenses and from the viewer's ownership shares."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        gateway = await unit_env.get(LinkedDataService)
        family = seed_family(store)
        now = datetime.now(timezone.utc)

        car = store.add_asset(
            make_asset(family.household_id, "Car", "15000", created_at=now - timedelta(days=2))
        )
        cabin = store.add_asset(
            make_asset(family.household_id, "Cabin", "80000", "95000", created_at=now)
        )
        store.add_asset(make_asset(family.household_id, "Boat", "5000"))

        store.add_expense(
            make_expense(
                family.household_id, "300", date(2025, 5, 1), linked_asset_id=car.id
            ),
            family.person.id,
        )
        viewer_household = family.invitee.household_id
        first = store.add_household_member(HouseholdMemberId(uuid4()), viewer_household)
        second = store.add_household_member(HouseholdMemberId(uuid4()), viewer_household)
        store.add_ownership(cabin.id, first, Decimal("30"))
        store.add_ownership(cabin.id, second, Decimal("20"))

        connection = add_connection(
            store,
            family.person,
            family.invitee.id,
            family.inviter.id,
            ConnectionStatus.ACCEPTED,
        )

        # Act
        assets = await gateway.get_assets(connection.id, family.invitee.id)

        # Assert
        assert [a.name for a in assets] == ["Cabin", "Car"]
        assert assets[0].household_ownership_percentage == Decimal("50")
        assert assets[1].household_ownership_percentage is None
        assert all(a.shared_from_user_id == family.inviter.id for a in assets)

    @pytest.mark.asyncio
    async def test_income_is_always_empty(self, unit_env):
        store = await unit_env.get(InMemoryStore)
        gateway = await unit_env.get(LinkedDataService)
        family = seed_family(store)
        connection = add_connection(
            store,
            family.person,
            family.invitee.id,
            family.inviter.id,
            ConnectionStatus.ACCEPTED,
        )

        assert await gateway.get_income(connection.id, family.invitee.id) == []


class TestGetSummary:
    """Tests for get_summary method."""

    @pytest.mark.asyncio
    async def test_totals_are_per_currency(self, unit_env):
        """Amounts in different currencies are never added together."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        gateway = await unit_env.get(LinkedDataService)
        family = seed_family(store)
        house = store.add_asset(
            make_asset(family.household_id, "House", "200000", "250000")
        )
        for amount, currency in [("10.00", "EUR"), ("5.50", "EUR"), ("7.25", "USD")]:
            store.add_expense(
                make_expense(
                    family.household_id,
                    amount,
                    date(2025, 6, 1),
                    currency=currency,
                    linked_asset_id=house.id,
                ),
                family.person.id,
            )
        connection = add_connection(
            store,
            family.person,
            family.invitee.id,
            family.inviter.id,
            ConnectionStatus.ACCEPTED,
        )

        # Act
        summary = await gateway.get_summary(connection.id, family.invitee.id)

        # Assert
        assert summary.expenses_count == 3
        assert summary.expenses_total == {"EUR": Decimal("15.50"), "USD": Decimal("7.25")}
        assert summary.income_count == 0
        assert summary.income_total == {}
        assert summary.assets_count == 1
        assert summary.assets_total_value == {"EUR": Decimal("250000")}

    @pytest.mark.asyncio
    async def test_failing_category_counts_as_empty(self, unit_env, monkeypatch):
        """One failing category does not spoil the others."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        gateway = await unit_env.get(LinkedDataService)
        family = seed_family(store)
        store.add_expense(
            make_expense(family.household_id, "42", date(2025, 6, 1)), family.person.id
        )
        connection = add_connection(
            store,
            family.person,
            family.invitee.id,
            family.inviter.id,
            ConnectionStatus.ACCEPTED,
        )

        async def broken(*args, **kwargs):
            raise RuntimeError("assets store down")

        monkeypatch.setattr(
            gateway.financial_record_source, "find_assets_linked_to", broken
        )

        # Act
        summary = await gateway.get_summary(connection.id, family.invitee.id)

        # Assert
        assert summary.expenses_count == 1
        assert summary.expenses_total == {"EUR": Decimal("42")}
        assert summary.assets_count == 0

    @pytest.mark.asyncio
    async def test_denied_summary_is_zero(self, unit_env):
        store = await unit_env.get(InMemoryStore)
        gateway = await unit_env.get(LinkedDataService)
        family = seed_family(store)
        pending = add_connection(store, family.person, family.invitee.id, family.inviter.id)

        summary = await gateway.get_summary(pending.id, family.invitee.id)

        assert summary.expenses_count == 0
        assert summary.assets_count == 0
        assert summary.expenses_total == {}
