"""Create cars, test_drive_bookings and saved_cars

Revision ID: 3c1e9b7a4d20
Revises:
Create Date: 2026-10-18 10:02:11.431870

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1e9b7a4d20"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "cars",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("make", sa.String(50), nullable=False),
        sa.Column("model", sa.String(50), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("price", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("mileage", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("color", sa.String(30), nullable=False, server_default=""),
        sa.Column("fuel_type", sa.String(20), nullable=False, server_default=""),
        sa.Column("transmission", sa.String(20), nullable=False, server_default=""),
        sa.Column("body_type", sa.String(30), nullable=False, server_default=""),
        sa.Column("seats", sa.Integer(), nullable=True),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("status", sa.String(20), nullable=False, server_default="AVAILABLE"),
        sa.Column("featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "images",
            postgresql.ARRAY(sa.Text()),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
    )
    op.create_index("ix_cars_make", "cars", ["make"])
    op.create_index("ix_cars_status", "cars", ["status"])

    op.create_table(
        "test_drive_bookings",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "car_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("cars.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("booking_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.String(5), nullable=False),
        sa.Column("end_time", sa.String(5), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
    )
    op.create_index("ix_test_drive_bookings_user_id", "test_drive_bookings", ["user_id"])
    # At most one PENDING/CONFIRMED booking per (car, date, start time)
    op.create_index(
        "uq_test_drive_active_slot",
        "test_drive_bookings",
        ["car_id", "booking_date", "start_time"],
        unique=True,
        postgresql_where=sa.text("status IN ('PENDING', 'CONFIRMED')"),
    )

    op.create_table(
        "saved_cars",
        sa.Column("user_id", sa.String(64), primary_key=True),
        sa.Column(
            "car_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("cars.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "saved_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("saved_cars")
    op.drop_index("uq_test_drive_active_slot", table_name="test_drive_bookings")
    op.drop_index("ix_test_drive_bookings_user_id", table_name="test_drive_bookings")
    op.drop_table("test_drive_bookings")
    op.drop_index("ix_cars_status", table_name="cars")
    op.drop_index("ix_cars_make", table_name="cars")
    op.drop_table("cars")
