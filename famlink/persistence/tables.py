"""SQLAlchemy table definitions for famlink.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.

users, households, household_members, expenses, assets and
shared_ownership_distribution belong to the account and finance services;
they are declared here so the read queries can join against them.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    ForeignKey,
    Index,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    and_,
    func,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# HOUSEHOLDS / USERS (owned by the account service)
# ============================================================================
households_table = Table(
    "households",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("email", String(255), nullable=False),
    Column(
        "household_id",
        UUID,
        ForeignKey("households.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# Case-insensitive email lookup
Index("idx_users_email_lower", func.lower(users_table.c.email), unique=True)
Index("idx_users_household_id", users_table.c.household_id)

household_members_table = Table(
    "household_members",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "household_id",
        UUID,
        ForeignKey("households.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("name", String(255), nullable=False),
)

Index("idx_household_members_household_id", household_members_table.c.household_id)

# ============================================================================
# EXTERNAL PERSONS
# ============================================================================
external_persons_table = Table(
    "external_persons",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "household_id",
        UUID,
        ForeignKey("households.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=True),  # stored lowercased
    Column("relationship", String(100), nullable=True),
    Column("notes", Text, nullable=True),
    Column("birth_date", Date, nullable=True),
    Column(
        "created_by_user_id",
        UUID,
        ForeignKey("users.id"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    # Set on delete; archived rows keep their connection history
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_external_persons_household_id", external_persons_table.c.household_id)
Index(
    "idx_external_persons_unique_household_email",
    external_persons_table.c.household_id,
    external_persons_table.c.email,
    unique=True,
    postgresql_where=and_(
        external_persons_table.c.email.is_not(None),
        external_persons_table.c.deleted_at.is_(None),
    ),
)

# ============================================================================
# EXTERNAL PERSON CONNECTIONS (invitations)
# ============================================================================
connections_table = Table(
    "external_person_user_connections",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "external_person_id",
        UUID,
        ForeignKey("external_persons.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column(
        "invited_user_id",
        UUID,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "invited_by_user_id",
        UUID,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("status", String(20), nullable=False, server_default="pending"),
    Column(
        "invited_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("responded_at", TIMESTAMP(timezone=True), nullable=True),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "status IN ('pending', 'accepted', 'rejected', 'revoked', 'expired')",
        name="connection_status_check",
    ),
    CheckConstraint(
        "invited_user_id <> invited_by_user_id", name="connection_not_self"
    ),
)

Index("idx_connections_external_person_id", connections_table.c.external_person_id)
Index("idx_connections_invited_user_id", connections_table.c.invited_user_id)
Index("idx_connections_invited_by_user_id", connections_table.c.invited_by_user_id)
# Expiry sweep
Index(
    "idx_connections_status_expires_at",
    connections_table.c.status,
    connections_table.c.expires_at,
)
# At most one live connection per (person, invitee); terminal rows don't count
Index(
    "idx_connections_unique_active_pair",
    connections_table.c.external_person_id,
    connections_table.c.invited_user_id,
    unique=True,
    postgresql_where=connections_table.c.status.in_(["pending", "accepted"]),
)

# ============================================================================
# USER NOTIFICATIONS
# ============================================================================
notifications_table = Table(
    "user_notifications",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("type", String(50), nullable=False),
    Column("title", String(255), nullable=False),
    Column("message", Text, nullable=False),
    Column("related_entity_type", String(50), nullable=True),
    Column("related_entity_id", UUID, nullable=True),
    Column("is_read", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_user_notifications_user_id",
    notifications_table.c.user_id,
    notifications_table.c.created_at.desc(),
)

# ============================================================================
# FINANCE (owned by the finance services, read-only here)
# ============================================================================
assets_table = Table(
    "assets",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "household_id",
        UUID,
        ForeignKey("households.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("name", String(255), nullable=False),
    Column("amount", Numeric(14, 2), nullable=False),
    Column("current_value", Numeric(14, 2), nullable=True),
    Column("currency", String(4), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

shared_ownership_table = Table(
    "shared_ownership_distribution",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("asset_id", UUID, ForeignKey("assets.id", ondelete="CASCADE"), nullable=False),
    Column(
        "household_member_id",
        UUID,
        ForeignKey("household_members.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("ownership_percentage", Numeric(5, 2), nullable=False),
)

Index("idx_shared_ownership_asset_id", shared_ownership_table.c.asset_id)

expenses_table = Table(
    "expenses",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "household_id",
        UUID,
        ForeignKey("households.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("category_id", UUID, nullable=True),
    Column("amount", Numeric(14, 2), nullable=False),
    Column("currency", String(4), nullable=False),
    Column("description", Text, nullable=True),
    Column("start_date", Date, nullable=False),
    Column("end_date", Date, nullable=True),
    Column(
        "linked_asset_id",
        UUID,
        ForeignKey("assets.id", ondelete="SET NULL"),
        nullable=True,
    ),
)

expense_person_links_table = Table(
    "expense_external_person_links",
    metadata,
    Column(
        "expense_id",
        UUID,
        ForeignKey("expenses.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "external_person_id",
        UUID,
        ForeignKey("external_persons.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)

Index(
    "idx_expense_person_links_external_person_id",
    expense_person_links_table.c.external_person_id,
)
