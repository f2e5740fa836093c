"""Tests for the periodic purge job and its schedule."""

import pytest

from tablecache.services.expiry import Expiry
from tablecache.workers.main import WorkerSettings, _schedule
from tablecache.workers.purge import purge_expired_entries


@pytest.mark.asyncio
async def test_purge_job_removes_expired_rows(store, clock, gateway):
    store.save("stale", "v", ttl=1)
    store.save("fresh", "v", ttl=30)
    store.save("pinned", "v", ttl=Expiry.NEVER)
    clock.advance(minutes=5)

    result = await purge_expired_entries({"store": store})

    assert result == {"removed": 1}
    assert gateway.find_by_key("stale") is None
    assert gateway.find_by_key("fresh") is not None


@pytest.mark.asyncio
async def test_purge_job_with_nothing_due(store):
    store.save("fresh", "v", ttl=30)

    result = await purge_expired_entries({"store": store})

    assert result == {"removed": 0}


def test_schedule_sub_hour():
    assert _schedule(15) == {"minute": {0, 15, 30, 45}}


def test_schedule_hourly_and_longer():
    assert _schedule(60) == {"hour": set(range(24)), "minute": {0}}
    assert _schedule(360) == {"hour": {0, 6, 12, 18}, "minute": {0}}


def test_schedule_rejects_non_positive():
    with pytest.raises(ValueError):
        _schedule(0)


def test_worker_registers_purge_cron():
    assert purge_expired_entries in WorkerSettings.functions
    assert len(WorkerSettings.cron_jobs) == 1
