"""Add patient records table."""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

revision = "0002_patients"
down_revision = "0001_users_and_auth_tokens"
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create patients with unique email."""

    op.create_table(
        "patients",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=False),
        sa.Column("registered_date", sa.Date(), nullable=False),
        sa.UniqueConstraint("email", name="uq_patients_email"),
    )
    op.create_index("ix_patients_name", "patients", ["name"])


def downgrade() -> None:
    """Drop patients table."""

    op.drop_index("ix_patients_name", table_name="patients")
    op.drop_table("patients")
