"""initial_schema

Create the famlink schema:
- Households, users and household members (read-only mirrors of the account service)
- External persons (household-scoped contacts)
- External person connections (invitations with a five-state lifecycle)
- User notifications
- Assets, shared ownership, expenses and expense links (read-only mirrors of the finance services)

Revision ID: 3c1f0a9d2b6e
Revises:
Create Date: 2026-10-18 09:12:44.204311

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d2b6e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def _timestamp_column(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # HOUSEHOLDS / USERS / HOUSEHOLD_MEMBERS
    # ========================================================================
    op.create_table(
        "households",
        _id_column(),
        sa.Column("name", sa.String(255), nullable=False),
        _timestamp_column("created_at"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "users",
        _id_column(),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("household_id", sa.UUID(), nullable=True),
        _timestamp_column("created_at"),
        sa.ForeignKeyConstraint(
            ["household_id"], ["households.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.execute("CREATE UNIQUE INDEX idx_users_email_lower ON users (lower(email))")
    op.create_index("idx_users_household_id", "users", ["household_id"])

    op.create_table(
        "household_members",
        _id_column(),
        sa.Column("household_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.ForeignKeyConstraint(
            ["household_id"], ["households.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_household_members_household_id", "household_members", ["household_id"]
    )

    # ========================================================================
    # EXTERNAL_PERSONS
    # ========================================================================
    op.create_table(
        "external_persons",
        _id_column(),
        sa.Column("household_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("relationship", sa.String(100), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column("created_by_user_id", sa.UUID(), nullable=False),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.Column("deleted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["household_id"], ["households.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["created_by_user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_external_persons_household_id", "external_persons", ["household_id"]
    )
    op.create_index(
        "idx_external_persons_unique_household_email",
        "external_persons",
        ["household_id", "email"],
        unique=True,
        postgresql_where=sa.text("email IS NOT NULL AND deleted_at IS NULL"),
    )

    # ========================================================================
    # EXTERNAL_PERSON_USER_CONNECTIONS
    # ========================================================================
    op.create_table(
        "external_person_user_connections",
        _id_column(),
        sa.Column("external_person_id", sa.UUID(), nullable=False),
        sa.Column("invited_user_id", sa.UUID(), nullable=False),
        sa.Column("invited_by_user_id", sa.UUID(), nullable=False),
        sa.Column(
            "status", sa.String(20), nullable=False, server_default="pending"
        ),
        _timestamp_column("invited_at"),
        sa.Column("responded_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        _timestamp_column("updated_at"),
        sa.ForeignKeyConstraint(
            ["external_person_id"], ["external_persons.id"], ondelete="RESTRICT"
        ),
        sa.ForeignKeyConstraint(["invited_user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["invited_by_user_id"], ["users.id"], ondelete="CASCADE"
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected', 'revoked', 'expired')",
            name="connection_status_check",
        ),
        sa.CheckConstraint(
            "invited_user_id <> invited_by_user_id", name="connection_not_self"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_connections_external_person_id",
        "external_person_user_connections",
        ["external_person_id"],
    )
    op.create_index(
        "idx_connections_invited_user_id",
        "external_person_user_connections",
        ["invited_user_id"],
    )
    op.create_index(
        "idx_connections_invited_by_user_id",
        "external_person_user_connections",
        ["invited_by_user_id"],
    )
    op.create_index(
        "idx_connections_status_expires_at",
        "external_person_user_connections",
        ["status", "expires_at"],
    )
    # Terminal rows are kept as history, so uniqueness only covers live ones
    op.create_index(
        "idx_connections_unique_active_pair",
        "external_person_user_connections",
        ["external_person_id", "invited_user_id"],
        unique=True,
        postgresql_where=sa.text("status IN ('pending', 'accepted')"),
    )

    # ========================================================================
    # USER_NOTIFICATIONS
    # ========================================================================
    op.create_table(
        "user_notifications",
        _id_column(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("related_entity_type", sa.String(50), nullable=True),
        sa.Column("related_entity_id", sa.UUID(), nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default="false"),
        _timestamp_column("created_at"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.execute(
        "CREATE INDEX idx_user_notifications_user_id "
        "ON user_notifications (user_id, created_at DESC)"
    )

    # ========================================================================
    # ASSETS / SHARED_OWNERSHIP_DISTRIBUTION / EXPENSES
    # ========================================================================
    op.create_table(
        "assets",
        _id_column(),
        sa.Column("household_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("current_value", sa.Numeric(14, 2), nullable=True),
        sa.Column("currency", sa.String(4), nullable=False),
        _timestamp_column("created_at"),
        sa.ForeignKeyConstraint(
            ["household_id"], ["households.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "shared_ownership_distribution",
        _id_column(),
        sa.Column("asset_id", sa.UUID(), nullable=False),
        sa.Column("household_member_id", sa.UUID(), nullable=False),
        sa.Column("ownership_percentage", sa.Numeric(5, 2), nullable=False),
        sa.ForeignKeyConstraint(["asset_id"], ["assets.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["household_member_id"], ["household_members.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_shared_ownership_asset_id", "shared_ownership_distribution", ["asset_id"]
    )

    op.create_table(
        "expenses",
        _id_column(),
        sa.Column("household_id", sa.UUID(), nullable=False),
        sa.Column("category_id", sa.UUID(), nullable=True),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("currency", sa.String(4), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("linked_asset_id", sa.UUID(), nullable=True),
        sa.ForeignKeyConstraint(
            ["household_id"], ["households.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["linked_asset_id"], ["assets.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "expense_external_person_links",
        sa.Column("expense_id", sa.UUID(), nullable=False),
        sa.Column("external_person_id", sa.UUID(), nullable=False),
        sa.ForeignKeyConstraint(["expense_id"], ["expenses.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["external_person_id"], ["external_persons.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("expense_id", "external_person_id"),
    )
    op.create_index(
        "idx_expense_person_links_external_person_id",
        "expense_external_person_links",
        ["external_person_id"],
    )

    # ========================================================================
    # TRIGGERS
    # ========================================================================
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)

    for table in ("external_persons", "external_person_user_connections"):
        op.execute(f"""
            CREATE TRIGGER update_{table}_updated_at
            BEFORE UPDATE ON {table}
            FOR EACH ROW EXECUTE FUNCTION update_updated_at_column();
        """)


def downgrade() -> None:
    """Downgrade schema."""
    for table in ("external_persons", "external_person_user_connections"):
        op.execute(f"DROP TRIGGER IF EXISTS update_{table}_updated_at ON {table}")
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")

    # Drop tables (in reverse order of dependencies)
    op.drop_table("expense_external_person_links")
    op.drop_table("expenses")
    op.drop_table("shared_ownership_distribution")
    op.drop_table("assets")
    op.drop_table("user_notifications")
    op.drop_table("external_person_user_connections")
    op.drop_table("external_persons")
    op.drop_table("household_members")
    op.drop_table("users")
    op.drop_table("households")
