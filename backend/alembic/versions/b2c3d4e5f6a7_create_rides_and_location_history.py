"""create_rides_and_location_history

Revision ID: b2c3d4e5f6a7
Revises: a1b2c3d4e5f6
Create Date: 2026-09-29

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "b2c3d4e5f6a7"
down_revision: Union[str, Sequence[str], None] = "a1b2c3d4e5f6"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create location_history and rides tables."""
    op.create_table(
        "location_history",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("vehicle_id", sa.String(length=36), nullable=False),
        sa.Column("ts", sa.DateTime(), nullable=False),
        sa.Column("longitude", sa.Numeric(9, 6), nullable=False),
        sa.Column("latitude", sa.Numeric(8, 6), nullable=False),
        sa.ForeignKeyConstraint(["vehicle_id"], ["vehicles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_location_history_vehicle_id_ts", "location_history", ["vehicle_id", "ts"])
    op.create_table(
        "rides",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("vehicle_id", sa.String(length=36), nullable=False),
        sa.Column("user_email", sa.String(length=255), nullable=False),
        sa.Column("start_ts", sa.DateTime(), nullable=False),
        sa.Column("end_ts", sa.DateTime(), nullable=True),
        sa.Column("start_longitude", sa.Numeric(9, 6), nullable=True),
        sa.Column("start_latitude", sa.Numeric(8, 6), nullable=True),
        sa.Column("end_longitude", sa.Numeric(9, 6), nullable=True),
        sa.Column("end_latitude", sa.Numeric(8, 6), nullable=True),
        sa.Column("end_battery", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["vehicle_id"], ["vehicles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_email"], ["users.email"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_rides_vehicle_id", "rides", ["vehicle_id"])
    op.create_index("ix_rides_user_email", "rides", ["user_email"])


def downgrade() -> None:
    """Drop rides and location_history tables."""
    op.drop_index("ix_rides_user_email", table_name="rides")
    op.drop_index("ix_rides_vehicle_id", table_name="rides")
    op.drop_table("rides", if_exists=True)
    op.drop_index("ix_location_history_vehicle_id_ts", table_name="location_history")
    op.drop_table("location_history", if_exists=True)
