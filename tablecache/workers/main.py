"""ARQ worker entrypoint for cache maintenance."""

import asyncio

from arq import cron
from arq.connections import RedisSettings

from tablecache.core.config import get_settings
from tablecache.workers.purge import purge_expired_entries


def _schedule(interval_minutes: int) -> dict:
    """Translate an interval into ARQ cron fields.

    Sub-hour intervals run on matching minutes of every hour; longer ones run
    at minute 0 of every ``interval // 60``-th hour.
    """
    if interval_minutes <= 0:
        raise ValueError(f"Purge interval must be positive, got {interval_minutes}")
    if interval_minutes < 60:
        return {"minute": set(range(0, 60, interval_minutes))}
    hours = max(interval_minutes // 60, 1)
    return {"hour": set(range(0, 24, hours)), "minute": {0}}


async def startup(ctx: dict) -> None:
    """Called when the worker starts."""
    from tablecache.core.database import build_store
    ctx["store"] = build_store()


async def shutdown(ctx: dict) -> None:
    """Called when the worker shuts down."""
    from tablecache.core.database import engine
    engine.dispose()


class WorkerSettings:
    """ARQ worker configuration."""
    functions = [purge_expired_entries]
    cron_jobs = [
        cron(
            purge_expired_entries,
            run_at_startup=True,
            **_schedule(get_settings().purge_interval_minutes),
        ),
    ]
    on_startup = startup
    on_shutdown = shutdown
    redis_settings = RedisSettings.from_dsn(get_settings().redis_url)
    max_jobs = 1


if __name__ == "__main__":
    from arq import run_worker
    asyncio.run(run_worker(WorkerSettings))  # type: ignore[arg-type]
