"""Stations, battery types and batteries.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "stations",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("station_code", sa.String(50), nullable=False, unique=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "battery_types",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("type_code", sa.String(50), nullable=False, unique=True),
        sa.Column("type_name", sa.String(255), nullable=False),
        sa.Column("manufacturer", sa.String(255), nullable=False),
        sa.Column("capacity_kwh", sa.Float, nullable=False),
    )

    op.create_table(
        "batteries",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("battery_code", sa.String(50), nullable=False, unique=True),
        sa.Column("serial_number", sa.String(100), nullable=False),
        sa.Column("status", sa.String(50), nullable=False, server_default="available"),
        sa.Column("charge_level", sa.Integer, nullable=False, server_default="0"),
        sa.Column("soh_percentage", sa.Float, nullable=False, server_default="100"),
        sa.Column("total_cycles", sa.Integer, nullable=False, server_default="0"),
        sa.Column(
            "battery_type_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("battery_types.id"),
            nullable=False,
        ),
        sa.Column(
            "station_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("stations.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("last_maintenance_date", sa.Date, nullable=True),
        sa.Column("next_maintenance_date", sa.Date, nullable=True),
        sa.Column("last_swap_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint(
            "charge_level >= 0 AND charge_level <= 100", name="ck_batteries_charge_level"
        ),
        sa.CheckConstraint("total_cycles >= 0", name="ck_batteries_total_cycles"),
    )
    op.create_index("ix_batteries_station_id", "batteries", ["station_id"])
    op.create_index("ix_batteries_status", "batteries", ["status"])


def downgrade() -> None:
    op.drop_index("ix_batteries_status")
    op.drop_index("ix_batteries_station_id")
    op.drop_table("batteries")
    op.drop_table("battery_types")
    op.drop_table("stations")
