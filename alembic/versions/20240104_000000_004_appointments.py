"""Appointments table with slot uniqueness and cancellation columns.

Revision ID: 004
Revises: 003
Create Date: 2024-01-04 00:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

IdType = sa.BigInteger().with_variant(sa.Integer(), "sqlite")

NOT_CANCELLED = sa.text("status <> 'CANCELLED'")


def upgrade() -> None:
    """Create the appointments table."""
    op.create_table(
        "appointments",
        sa.Column("id", IdType, autoincrement=True, nullable=False),
        sa.Column("patient_id", IdType, nullable=False),
        sa.Column("doctor_id", IdType, nullable=False),
        # Clinic wall-clock time
        sa.Column("date_time", sa.DateTime(timezone=False), nullable=False),
        sa.Column("scheduled_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="OPEN"),
        sa.Column("cancellation_reason", sa.String(30), nullable=True),
        sa.Column("cancelled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_appointments"),
        sa.ForeignKeyConstraint(
            ["patient_id"],
            ["patients.id"],
            name="fk_appointments_patient_id_patients",
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["doctor_id"],
            ["doctors.id"],
            name="fk_appointments_doctor_id_doctors",
            ondelete="RESTRICT",
        ),
    )
    op.create_index("ix_appointments_patient_id", "appointments", ["patient_id"])
    op.create_index("ix_appointments_doctor_id", "appointments", ["doctor_id"])
    op.create_index("ix_appointments_date_time", "appointments", ["date_time"])

    # Cancelled rows release the slot and the patient's day
    op.create_index(
        "uq_appointments_doctor_slot",
        "appointments",
        ["doctor_id", "date_time"],
        unique=True,
        postgresql_where=NOT_CANCELLED,
        sqlite_where=NOT_CANCELLED,
    )
    op.create_index(
        "uq_appointments_patient_day",
        "appointments",
        ["patient_id", "scheduled_date"],
        unique=True,
        postgresql_where=NOT_CANCELLED,
        sqlite_where=NOT_CANCELLED,
    )


def downgrade() -> None:
    """Drop the appointments table."""
    op.drop_index("uq_appointments_patient_day", table_name="appointments")
    op.drop_index("uq_appointments_doctor_slot", table_name="appointments")
    op.drop_index("ix_appointments_date_time", table_name="appointments")
    op.drop_index("ix_appointments_doctor_id", table_name="appointments")
    op.drop_index("ix_appointments_patient_id", table_name="appointments")
    op.drop_table("appointments")
