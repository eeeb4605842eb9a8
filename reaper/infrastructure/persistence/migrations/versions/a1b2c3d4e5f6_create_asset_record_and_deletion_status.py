"""create asset_record and deletion_status tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19

asset_record is the record index (soft delete marker in deleted_at/deleted_by).
deletion_status is the SQL status ledger; rows outlive the index entry.
"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op

revision: str = "a1b2c3d4e5f6"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "asset_record",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("collections", sa.JSON(), nullable=False),
        sa.Column("identifiers", sa.JSON(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deleted_by", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_asset_record_uploaded_at", "asset_record", ["uploaded_at"], unique=False
    )
    op.create_index(
        "ix_asset_record_deleted_at", "asset_record", ["deleted_at"], unique=False
    )
    op.create_index(
        "ix_asset_record_deleted_at_uploaded_at_id",
        "asset_record",
        ["deleted_at", "uploaded_at", "id"],
        unique=False,
    )

    op.create_table(
        "deletion_status",
        sa.Column("record_id", sa.String(), nullable=False),
        sa.Column("deleted_by", sa.String(), nullable=False),
        sa.Column("delete_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_deleted", sa.Boolean(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("record_id"),
    )


def downgrade() -> None:
    op.drop_table("deletion_status")
    op.drop_index("ix_asset_record_deleted_at_uploaded_at_id", table_name="asset_record")
    op.drop_index("ix_asset_record_deleted_at", table_name="asset_record")
    op.drop_index("ix_asset_record_uploaded_at", table_name="asset_record")
    op.drop_table("asset_record")
