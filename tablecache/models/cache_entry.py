"""Cache entry model — one row per sanitized key."""

from datetime import datetime

from sqlalchemy import BigInteger, Column, DateTime, Text
from sqlalchemy.dialects import mysql
from sqlmodel import Field, SQLModel


class CacheEntry(SQLModel, table=True):
    __tablename__ = "cache_entries"

    id: int | None = Field(default=None, primary_key=True)
    key: str = Field(max_length=255, nullable=False, unique=True, index=True)

    # JSON text; decoded only by the caller
    value: str | None = Field(default=None, sa_column=Column(Text, nullable=True))

    # Naive wall-clock time in the configured zone; NULL never expires
    expires_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=False), nullable=True, index=True),
    )

    # Grouping tag for bulk deletion, not an access scope
    owner_id: int | None = Field(
        default=None,
        sa_column=Column(
            BigInteger().with_variant(mysql.BIGINT(unsigned=True), "mysql", "mariadb"),
            nullable=True,
            index=True,
        ),
    )


cache_table = CacheEntry.__table__  # type: ignore[attr-defined]
