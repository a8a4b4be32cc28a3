"""Initial database schema

Revision ID: 001_initial_schema
Revises: None
Create Date: 2026-01-28

Creates the trip_plans table for stored and shared trip plans.
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create initial database schema."""

    # Create trip_plans table
    op.create_table(
        "trip_plans",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False,
                  server_default=sa.text("gen_random_uuid()")),
        sa.Column("shareable_id", sa.String(64), nullable=False,
                  comment="Random id used in share links, independent of id"),
        sa.Column("preferences", postgresql.JSONB(astext_type=sa.Text()), nullable=False,
                  comment="Preferences the plan was generated from"),
        sa.Column("plan", postgresql.JSONB(astext_type=sa.Text()), nullable=False,
                  comment="Generated plan JSON"),
        # Timestamps
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False,
                  server_default=sa.text("now()")),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False,
                  comment="Share link stops resolving at this instant"),
        sa.PrimaryKeyConstraint("id", name="pk_trip_plans"),
    )

    # Create indexes for trip_plans
    op.create_index("ix_trip_plans_shareable_id", "trip_plans", ["shareable_id"], unique=True)
    op.create_index("ix_trip_plans_expires_at", "trip_plans", ["expires_at"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index("ix_trip_plans_expires_at", table_name="trip_plans")
    op.drop_index("ix_trip_plans_shareable_id", table_name="trip_plans")
    op.drop_table("trip_plans")
