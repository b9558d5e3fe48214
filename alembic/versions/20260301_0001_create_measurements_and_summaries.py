"""create measurements and summaries tables

Revision ID: 20260301_0001
Revises:
Create Date: 2026-03-01 09:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "20260301_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "measurements",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("file_name", sa.String(length=255), nullable=False,
                  comment="Name of the uploaded file the row belongs to"),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("execution_time", sa.Numeric(precision=18, scale=6), nullable=False,
                  comment="Execution time in seconds, non-negative"),
        sa.Column("value", sa.Numeric(precision=18, scale=6), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_measurements_file_name", "measurements", ["file_name"], unique=False)
    op.create_index("ix_measurements_date", "measurements", ["date"], unique=False)
    op.create_index(
        "ix_measurements_file_name_date",
        "measurements",
        ["file_name", "date"],
        unique=False,
    )

    op.create_table(
        "summaries",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("time_delta_seconds", sa.BigInteger(), nullable=False,
                  comment="max(date) - min(date) in whole seconds"),
        sa.Column("min_start_time", sa.DateTime(timezone=True), nullable=False,
                  comment="Earliest measurement date of the file"),
        sa.Column("avg_execution_time", sa.Numeric(precision=18, scale=6), nullable=False),
        sa.Column("avg_value", sa.Numeric(precision=18, scale=6), nullable=False),
        sa.Column("median_value", sa.Numeric(precision=18, scale=6), nullable=False),
        sa.Column("max_value", sa.Numeric(precision=18, scale=6), nullable=False),
        sa.Column("min_value", sa.Numeric(precision=18, scale=6), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_summaries_file_name", "summaries", ["file_name"], unique=True)
    op.create_index("ix_summaries_min_start_time", "summaries", ["min_start_time"], unique=False)
    op.create_index("ix_summaries_avg_value", "summaries", ["avg_value"], unique=False)
    op.create_index(
        "ix_summaries_avg_execution_time",
        "summaries",
        ["avg_execution_time"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_summaries_avg_execution_time", table_name="summaries")
    op.drop_index("ix_summaries_avg_value", table_name="summaries")
    op.drop_index("ix_summaries_min_start_time", table_name="summaries")
    op.drop_index("ix_summaries_file_name", table_name="summaries")
    op.drop_table("summaries")

    op.drop_index("ix_measurements_file_name_date", table_name="measurements")
    op.drop_index("ix_measurements_date", table_name="measurements")
    op.drop_index("ix_measurements_file_name", table_name="measurements")
    op.drop_table("measurements")
