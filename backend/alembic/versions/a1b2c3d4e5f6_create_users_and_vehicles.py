"""create_users_and_vehicles

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-09-28

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "a1b2c3d4e5f6"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users and vehicles tables."""
    op.create_table(
        "users",
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=255), nullable=False),
        sa.Column("last_name", sa.String(length=255), nullable=False),
        sa.Column("phone_numbers", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("email"),
    )
    op.create_table(
        "vehicles",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("battery", sa.Integer(), nullable=False),
        sa.Column("in_use", sa.Boolean(), nullable=False),
        sa.Column("vehicle_type", sa.String(length=32), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("battery >= 0 AND battery <= 100", name="ck_vehicles_battery_range"),
    )


def downgrade() -> None:
    """Drop vehicles and users tables."""
    op.drop_table("vehicles", if_exists=True)
    op.drop_table("users", if_exists=True)
