"""Periodic job — delete cache rows whose deadline has passed.

Reads already drop expired rows one at a time; this job only bounds how long
never-read rows linger.
"""

from __future__ import annotations

import asyncio
import logging

from tablecache.services.store import CacheStore

logger = logging.getLogger(__name__)


async def purge_expired_entries(ctx: dict) -> dict:
    """ARQ cron job: bulk-delete expired cache entries.

    The store is placed in ``ctx["store"]`` by the worker's startup hook;
    tests inject their own.
    """
    store: CacheStore = ctx["store"]
    # The store blocks on the database; keep the worker loop free
    removed = await asyncio.to_thread(store.purge_expired)

    if removed:
        logger.info("Purge: removed %d expired cache entries", removed)
    else:
        logger.info("Purge: no expired cache entries")
    return {"removed": removed}
