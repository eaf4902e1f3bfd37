"""SQLAlchemy table definitions for mentor booking.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    Time,
)
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# PRODUCTS TABLE (catalog, read-only for the engine)
# ============================================================================
products_table = Table(
    "products",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(255), nullable=False),
    Column("description", Text, nullable=True),
    Column(
        "approved_mentors",
        ARRAY(UUID(as_uuid=True)),
        nullable=False,
        server_default="{}",
    ),
    Column("required_traits", ARRAY(Text), nullable=False, server_default="{}"),
    Column("min_amount_mentors", Integer, nullable=False, server_default="1"),
    Column("max_amount_mentors", Integer, nullable=True),
    Column("is_mentor_product", Boolean, nullable=False, server_default="true"),
    CheckConstraint("min_amount_mentors >= 1", name="ck_products_min_mentors"),
)

# ============================================================================
# EVENTS TABLE
# ============================================================================
events_table = Table(
    "events",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("company", String(255), nullable=False),
    Column("description", Text, nullable=True),
    Column("date", Date, nullable=False),
    Column("time", Time, nullable=False),
    Column("duration_minutes", Integer, nullable=False, server_default="60"),
    # Written from time + duration on every insert/update
    Column("end_time", Time, nullable=False),
    Column("mode", String(20), nullable=False, server_default="live"),
    Column("teams_link", Text, nullable=True),
    Column("amount_requiredmentors", Integer, nullable=False, server_default="1"),
    Column(
        "requesting_mentors",
        ARRAY(UUID(as_uuid=True)),
        nullable=False,
        server_default="{}",
    ),
    Column(
        "accepted_mentors",
        ARRAY(UUID(as_uuid=True)),
        nullable=False,
        server_default="{}",
    ),
    Column(
        "declined_mentors",
        ARRAY(UUID(as_uuid=True)),
        nullable=False,
        server_default="{}",
    ),
    Column("locked", Boolean, nullable=False, server_default="false"),
    Column("staff_members", ARRAY(UUID(as_uuid=True)), nullable=False),
    Column(
        "product_id",
        Integer,
        ForeignKey("products.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "initial_selected_mentors",
        ARRAY(UUID(as_uuid=True)),
        nullable=False,
        server_default="{}",
    ),
    Column("version", Integer, nullable=False, server_default="1"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("amount_requiredmentors >= 1", name="ck_events_required_mentors"),
    CheckConstraint("duration_minutes >= 1", name="ck_events_duration"),
    CheckConstraint(
        "cardinality(staff_members) >= 1", name="ck_events_staff_not_empty"
    ),
)

Index("idx_events_date_time", events_table.c.date, events_table.c.time)
# GIN indexes back the realtime "array contains mentor" filters
Index(
    "idx_events_requesting_mentors",
    events_table.c.requesting_mentors,
    postgresql_using="gin",
)
Index(
    "idx_events_accepted_mentors",
    events_table.c.accepted_mentors,
    postgresql_using="gin",
)
Index(
    "idx_events_declined_mentors",
    events_table.c.declined_mentors,
    postgresql_using="gin",
)
