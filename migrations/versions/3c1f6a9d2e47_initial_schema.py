"""initial_schema

Create the mentor booking schema:
- Products (catalog entries events may be created from)
- Events (time-boxed engagements with mentor membership sets)

Revision ID: 3c1f6a9d2e47
Revises:
Create Date: 2026-10-12 09:14:52.310418

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f6a9d2e47"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _uuid_array(name: str, **kwargs) -> sa.Column:
    return sa.Column(
        name,
        postgresql.ARRAY(postgresql.UUID(as_uuid=True)),
        nullable=False,
        **kwargs,
    )


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # PRODUCTS
    # ========================================================================
    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        _uuid_array("approved_mentors", server_default="{}"),
        sa.Column(
            "required_traits",
            postgresql.ARRAY(sa.Text()),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "min_amount_mentors", sa.Integer(), nullable=False, server_default="1"
        ),
        sa.Column("max_amount_mentors", sa.Integer(), nullable=True),
        sa.Column(
            "is_mentor_product", sa.Boolean(), nullable=False, server_default="true"
        ),
        sa.CheckConstraint("min_amount_mentors >= 1", name="ck_products_min_mentors"),
    )

    # ========================================================================
    # EVENTS
    # ========================================================================
    op.create_table(
        "events",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("company", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.Time(), nullable=False),
        sa.Column(
            "duration_minutes", sa.Integer(), nullable=False, server_default="60"
        ),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("mode", sa.String(20), nullable=False, server_default="live"),
        sa.Column("teams_link", sa.Text(), nullable=True),
        sa.Column(
            "amount_requiredmentors", sa.Integer(), nullable=False, server_default="1"
        ),
        _uuid_array("requesting_mentors", server_default="{}"),
        _uuid_array("accepted_mentors", server_default="{}"),
        _uuid_array("declined_mentors", server_default="{}"),
        sa.Column("locked", sa.Boolean(), nullable=False, server_default="false"),
        _uuid_array("staff_members"),
        sa.Column(
            "product_id",
            sa.Integer(),
            sa.ForeignKey("products.id", ondelete="SET NULL"),
            nullable=True,
        ),
        _uuid_array("initial_selected_mentors", server_default="{}"),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.CheckConstraint(
            "amount_requiredmentors >= 1", name="ck_events_required_mentors"
        ),
        sa.CheckConstraint("duration_minutes >= 1", name="ck_events_duration"),
        sa.CheckConstraint(
            "cardinality(staff_members) >= 1", name="ck_events_staff_not_empty"
        ),
    )

    op.create_index("idx_events_date_time", "events", ["date", "time"])

    # Realtime filters look for a mentor inside the membership arrays
    for column in ("requesting_mentors", "accepted_mentors", "declined_mentors"):
        op.create_index(
            f"idx_events_{column}",
            "events",
            [column],
            postgresql_using="gin",
        )


def downgrade() -> None:
    """Downgrade schema."""
    for column in ("requesting_mentors", "accepted_mentors", "declined_mentors"):
        op.drop_index(f"idx_events_{column}", table_name="events")
    op.drop_index("idx_events_date_time", table_name="events")
    op.drop_table("events")
    op.drop_table("products")
