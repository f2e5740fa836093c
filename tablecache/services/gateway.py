"""Table persistence for cache entries.

Every call opens its own session and commits before returning. Errors from
the database propagate as ``SQLAlchemyError``; the store decides which of
them become return values.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any, Protocol

from sqlalchemy import delete, insert, inspect, text, update
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.orm import Session, sessionmaker
from sqlmodel import select

from tablecache.models.cache_entry import CacheEntry, cache_table

logger = logging.getLogger(__name__)


class StorageGateway(Protocol):
    """What the cache store needs from its backing table."""

    def find_by_key(self, key: str) -> CacheEntry | None: ...

    def insert(self, entry: CacheEntry) -> bool: ...

    def update_by_key(
        self,
        key: str,
        *,
        value: str | None,
        expires_at: datetime | None,
        owner_id: int | None,
    ) -> bool: ...

    def upsert(self, entry: CacheEntry) -> bool: ...

    def delete_where(
        self,
        *,
        key: str | None = None,
        owner_id: int | None = None,
        expired_by: datetime | None = None,
    ) -> int: ...

    def truncate(self) -> None: ...


# ── Dialect upserts ──────────────────────────────────────────

def _on_conflict_upsert(dialect_insert: Callable[..., Any]) -> Callable[[dict], Any]:
    def build(values: dict) -> Any:
        stmt = dialect_insert(cache_table).values(**values)
        return stmt.on_conflict_do_update(
            index_elements=["key"],
            set_={
                "value": stmt.excluded.value,
                "expires_at": stmt.excluded.expires_at,
                "owner_id": stmt.excluded.owner_id,
            },
        )

    return build


def _mysql_upsert(values: dict) -> Any:
    stmt = mysql.insert(cache_table).values(**values)
    return stmt.on_duplicate_key_update(
        value=stmt.inserted.value,
        expires_at=stmt.inserted.expires_at,
        owner_id=stmt.inserted.owner_id,
    )


_UPSERT_BUILDERS: dict[str, Callable[[dict], Any]] = {
    "sqlite": _on_conflict_upsert(sqlite.insert),
    "postgresql": _on_conflict_upsert(postgresql.insert),
    "mysql": _mysql_upsert,
    "mariadb": _mysql_upsert,
}


def _entry_values(entry: CacheEntry) -> dict:
    return {
        "key": entry.key,
        "value": entry.value,
        "expires_at": entry.expires_at,
        "owner_id": entry.owner_id,
    }


class SqlStorageGateway:
    """StorageGateway over the ``cache_entries`` table."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def find_by_key(self, key: str) -> CacheEntry | None:
        with self._session_factory() as session:
            stmt = select(CacheEntry).where(CacheEntry.key == key)
            result = session.execute(stmt)
            return result.scalar_one_or_none()

    def insert(self, entry: CacheEntry) -> bool:
        with self._session_factory() as session:
            result = session.execute(insert(cache_table).values(**_entry_values(entry)))
            session.commit()
            return result.rowcount != 0

    def update_by_key(
        self,
        key: str,
        *,
        value: str | None,
        expires_at: datetime | None,
        owner_id: int | None,
    ) -> bool:
        with self._session_factory() as session:
            stmt = (
                update(cache_table)
                .where(cache_table.c.key == key)
                .values(value=value, expires_at=expires_at, owner_id=owner_id)
            )
            result = session.execute(stmt)
            session.commit()
            return result.rowcount != 0

    def upsert(self, entry: CacheEntry) -> bool:
        """Insert the entry, or overwrite value, expiry and owner of its key.

        Uses the dialect's atomic upsert when there is one. Otherwise the row
        is looked up ``FOR UPDATE`` and updated or inserted in the same
        transaction; two writers racing on an absent key can still hit the
        unique index there, and the loser gets an ``IntegrityError``.
        """
        values = _entry_values(entry)
        with self._session_factory() as session:
            build = _UPSERT_BUILDERS.get(session.get_bind().dialect.name)
            if build is not None:
                result = session.execute(build(values))
            else:
                result = self._locked_upsert(session, values)
            session.commit()
            return result.rowcount != 0

    def _locked_upsert(self, session: Session, values: dict) -> Any:
        existing = session.execute(
            select(cache_table.c.id)
            .where(cache_table.c.key == values["key"])
            .with_for_update()
        ).first()
        if existing is None:
            return session.execute(insert(cache_table).values(**values))
        return session.execute(
            update(cache_table)
            .where(cache_table.c.key == values["key"])
            .values(
                value=values["value"],
                expires_at=values["expires_at"],
                owner_id=values["owner_id"],
            )
        )

    def delete_where(
        self,
        *,
        key: str | None = None,
        owner_id: int | None = None,
        expired_by: datetime | None = None,
    ) -> int:
        """Delete rows matching every given filter; returns the row count.

        ``expired_by`` matches rows whose deadline is at or before it. At
        least one filter is required; use ``truncate`` to empty the table.
        """
        criteria = []
        if key is not None:
            criteria.append(cache_table.c.key == key)
        if owner_id is not None:
            criteria.append(cache_table.c.owner_id == owner_id)
        if expired_by is not None:
            criteria.append(cache_table.c.expires_at.is_not(None))
            criteria.append(cache_table.c.expires_at <= expired_by)
        if not criteria:
            raise ValueError("delete_where needs at least one filter")

        with self._session_factory() as session:
            result = session.execute(delete(cache_table).where(*criteria))
            session.commit()
            return result.rowcount

    def truncate(self) -> None:
        with self._session_factory() as session:
            dialect = session.get_bind().dialect
            if dialect.name == "sqlite":
                # SQLite has no TRUNCATE; unqualified DELETE takes the fast path
                session.execute(delete(cache_table))
            else:
                table_name = dialect.identifier_preparer.format_table(cache_table)
                session.execute(text(f"TRUNCATE TABLE {table_name}"))
            session.commit()

    # ── Provisioning ─────────────────────────────────────────

    def table_exists(self) -> bool:
        with self._session_factory() as session:
            return inspect(session.connection()).has_table(cache_table.name)

    def create_table(self) -> None:
        with self._session_factory() as session:
            cache_table.create(session.connection())
            session.commit()
        logger.info("Created cache table %s", cache_table.name)

    def ensure_table(self) -> None:
        """Create the cache table unless it already exists."""
        if not self.table_exists():
            self.create_table()
