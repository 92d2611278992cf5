"""PostgreSQL implementation of the financial record source."""

from datetime import date

from sqlalchemy import and_, exists, func, literal, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from famlink.domain.model import AssetRecord, ExpenseRecord
from famlink.domain.repository import FinancialRecordSource
from famlink.domain.value import CategoryId, ExternalPersonId, HouseholdId
from famlink.persistence.mappers import row_to_asset, row_to_expense
from famlink.persistence.tables import (
    assets_table,
    expense_person_links_table,
    expenses_table,
    household_members_table,
    shared_ownership_table,
)


class PostgresFinancialRecordSource(FinancialRecordSource):
    """Reads expenses and assets owned by the finance services.

    Each read runs in its own savepoint: a failed query rolls back to it and
    leaves the request transaction usable for the next read.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_expenses_linked_to(
        self,
        external_person_id: ExternalPersonId,
        start_date: date | None = None,
        end_date: date | None = None,
        category_id: CategoryId | None = None,
    ) -> list[ExpenseRecord]:
        e = expenses_table.c
        linked_ids = select(expense_person_links_table.c.expense_id).where(
            expense_person_links_table.c.external_person_id == external_person_id
        )
        stmt = select(expenses_table).where(e.id.in_(linked_ids))
        if start_date is not None:
            stmt = stmt.where(e.start_date >= start_date)
        if end_date is not None:
            stmt = stmt.where(func.coalesce(e.end_date, e.start_date) <= end_date)
        if category_id is not None:
            stmt = stmt.where(e.category_id == category_id)
        stmt = stmt.order_by(e.start_date.desc())

        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            return [row_to_expense(dict(row)) for row in result.mappings().all()]

    async def find_assets_linked_to(
        self,
        external_person_id: ExternalPersonId,
        viewer_household_id: HouseholdId | None,
    ) -> list[AssetRecord]:
        a = assets_table.c
        links = expense_person_links_table
        linked_via_expense = exists().where(
            and_(
                expenses_table.c.linked_asset_id == a.id,
                expenses_table.c.id == links.c.expense_id,
                links.c.external_person_id == external_person_id,
            )
        )

        if viewer_household_id is None:
            stmt = select(
                assets_table,
                literal(None).label("household_ownership_percentage"),
            ).where(linked_via_expense)
        else:
            sod = shared_ownership_table.alias("sod")
            sod_owned = shared_ownership_table.alias("sod_owned")
            viewer_members = select(household_members_table.c.id).where(
                household_members_table.c.household_id == viewer_household_id
            )
            owned_by_viewer = exists().where(
                and_(
                    sod_owned.c.asset_id == a.id,
                    sod_owned.c.household_member_id.in_(viewer_members),
                )
            )
            share = (
                func.sum(sod.c.ownership_percentage)
                .filter(sod.c.household_member_id.in_(viewer_members))
                .label("household_ownership_percentage")
            )
            stmt = (
                select(assets_table, share)
                .select_from(assets_table.outerjoin(sod, sod.c.asset_id == a.id))
                .where(or_(linked_via_expense, owned_by_viewer))
                .group_by(a.id)
            )

        stmt = stmt.order_by(a.created_at.desc())
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            return [row_to_asset(dict(row)) for row in result.mappings().all()]
