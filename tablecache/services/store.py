"""Table-backed key-value cache with lazy expiration.

Expired rows are removed when a ``get`` finds them (or by the purge worker),
never by the store on its own schedule.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, tzinfo
from enum import Enum
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from tablecache.models.cache_entry import CacheEntry
from tablecache.services.codec import decode_value, encode_value
from tablecache.services.expiry import Clock, Ttl, expires_at, is_expired, now_in, wall_clock
from tablecache.services.gateway import StorageGateway
from tablecache.services.keys import sanitize_key

logger = logging.getLogger(__name__)


class Miss(Enum):
    """Result of a lookup that found nothing usable.

    Distinct from every decodable value, including ``None`` and ``False``.
    """

    MISS = "miss"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISS"


MISS = Miss.MISS


class CacheStore:
    """Get / save / delete cached JSON values by sanitized key."""

    def __init__(
        self,
        gateway: StorageGateway,
        zone: tzinfo,
        clock: Clock = now_in,
    ) -> None:
        self._gateway = gateway
        self._zone = zone
        self._clock = clock

    def _now(self) -> datetime:
        return self._clock(self._zone)

    def save(
        self,
        key: str,
        value: Any,
        ttl: Ttl = 0,
        owner_id: int | None = None,
    ) -> bool:
        """Store ``value`` under ``key``, replacing any existing entry.

        Args:
            key: Raw key; sanitized before use.
            value: Any JSON-serializable value.
            ttl: Minutes until expiry. ``0`` expires immediately,
                ``Expiry.NEVER`` (or the legacy ``1001``) never expires.
            owner_id: Optional tag for ``delete_by_owner``.

        Returns:
            True if a row was written, False if the database refused the write.

        Raises:
            SerializationError: ``value`` cannot be encoded. Nothing is written.
        """
        key = sanitize_key(key)
        entry = CacheEntry(
            key=key,
            value=encode_value(value),
            expires_at=expires_at(ttl, self._now()),
            owner_id=owner_id,
        )
        try:
            saved = self._gateway.upsert(entry)
        except SQLAlchemyError:
            logger.exception("Failed to save cache entry %r", key)
            return False

        logger.debug("Saved cache entry %r (expires_at=%s)", key, entry.expires_at)
        return saved

    def get(self, key: str, owner_id: int | None = None) -> Any:
        """Return the cached value for ``key``, or ``MISS``.

        An entry past its deadline is deleted and reported as a miss.
        ``owner_id`` is accepted for call-site symmetry with ``save`` but the
        lookup is by key alone.

        Raises:
            DeserializationError: the stored text is not valid JSON.
        """
        key = sanitize_key(key)
        entry = self._gateway.find_by_key(key)
        if entry is None:
            logger.debug("Cache miss for %r", key)
            return MISS

        now = self._now()
        if entry.expires_at is not None and is_expired(entry.expires_at, now):
            # Only the expired version; a concurrent save keeps its row
            self._gateway.delete_where(key=key, expired_by=wall_clock(now))
            logger.debug("Cache entry %r expired at %s, deleted", key, entry.expires_at)
            return MISS

        return decode_value(entry.value)

    def get_or_set(
        self,
        key: str,
        factory: Callable[[], Any],
        ttl: Ttl = 0,
        owner_id: int | None = None,
    ) -> Any:
        """Return the cached value, computing and saving it on a miss."""
        cached = self.get(key, owner_id)
        if cached is not MISS:
            return cached

        value = factory()
        self.save(key, value, ttl, owner_id)
        return value

    def delete(self, key: str) -> int:
        key = sanitize_key(key)
        try:
            return self._gateway.delete_where(key=key)
        except SQLAlchemyError:
            logger.exception("Failed to delete cache entry %r", key)
            return 0

    def delete_by_owner(self, owner_id: int | None) -> int:
        """Delete every entry tagged with ``owner_id``; returns the count.

        ``owner_id`` is coerced with ``int``; ``None`` is treated as owner 0,
        never as "rows without an owner".
        """
        owner_id = int(owner_id) if owner_id is not None else 0
        try:
            removed = self._gateway.delete_where(owner_id=owner_id)
        except SQLAlchemyError:
            logger.exception("Failed to delete cache entries for owner %s", owner_id)
            return 0

        logger.info("Deleted %d cache entries for owner %s", removed, owner_id)
        return removed

    def delete_all(self) -> None:
        self._gateway.truncate()
        logger.info("Cleared all cache entries")

    def purge_expired(self) -> int:
        """Bulk-delete entries whose deadline has passed."""
        removed = self._gateway.delete_where(expired_by=wall_clock(self._now()))
        logger.info("Purged %d expired cache entries", removed)
        return removed
