"""Patients table with embedded address.

Revision ID: 002
Revises: 001
Create Date: 2024-01-02 00:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

IdType = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def upgrade() -> None:
    """Create the patients table."""
    op.create_table(
        "patients",
        sa.Column("id", IdType, autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(20), nullable=False),
        sa.Column("document", sa.String(14), nullable=False),
        # Address
        sa.Column("address_street", sa.String(150), nullable=False),
        sa.Column("address_neighbourhood", sa.String(100), nullable=False),
        sa.Column("address_postal_code", sa.String(8), nullable=False),
        sa.Column("address_city", sa.String(100), nullable=False),
        sa.Column("address_state", sa.String(2), nullable=False),
        sa.Column("address_number", sa.String(20), nullable=True),
        sa.Column("address_complement", sa.String(100), nullable=True),
        # Soft delete
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("deactivated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_patients"),
        sa.UniqueConstraint("document", name="uq_patients_document"),
    )
    op.create_index("ix_patients_name", "patients", ["name"])
    op.create_index("ix_patients_active", "patients", ["active"])


def downgrade() -> None:
    """Drop the patients table."""
    op.drop_index("ix_patients_active", table_name="patients")
    op.drop_index("ix_patients_name", table_name="patients")
    op.drop_table("patients")
