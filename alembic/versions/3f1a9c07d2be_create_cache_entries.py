"""create cache_entries

Revision ID: 3f1a9c07d2be
Revises: 
Create Date: 2026-10-19 09:12:44.208113

"""
from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import mysql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = '3f1a9c07d2be'
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "cache_entries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("key", sa.String(255), nullable=False),
        sa.Column("value", sa.Text(), nullable=True),
        sa.Column("expires_at", sa.DateTime(), nullable=True),
        sa.Column(
            "owner_id",
            sa.BigInteger().with_variant(mysql.BIGINT(unsigned=True), "mysql", "mariadb"),
            nullable=True,
        ),
    )
    op.create_index("ix_cache_entries_key", "cache_entries", ["key"], unique=True)
    op.create_index("ix_cache_entries_expires_at", "cache_entries", ["expires_at"])
    op.create_index("ix_cache_entries_owner_id", "cache_entries", ["owner_id"])


def downgrade() -> None:
    op.drop_index("ix_cache_entries_owner_id", table_name="cache_entries")
    op.drop_index("ix_cache_entries_expires_at", table_name="cache_entries")
    op.drop_index("ix_cache_entries_key", table_name="cache_entries")
    op.drop_table("cache_entries")
