"""Tests for the FastAPI cache dependency."""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from tablecache.api.deps import CacheStoreDep, get_cache_store
from tablecache.services.store import MISS

app = FastAPI()


@app.put("/cache/{key}")
def put_value(key: str, payload: dict, cache: CacheStoreDep) -> dict:
    return {"saved": cache.save(key, payload, ttl=10)}


@app.get("/cache/{key}")
def read_value(key: str, cache: CacheStoreDep) -> dict:
    value = cache.get(key)
    return {"hit": value is not MISS, "value": None if value is MISS else value}


@pytest.fixture
async def client(store) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_cache_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_route_round_trip_through_dependency(client: AsyncClient):
    resp = await client.put("/cache/greeting", json={"text": "merhaba"})
    assert resp.status_code == 200
    assert resp.json() == {"saved": True}

    resp = await client.get("/cache/greeting")
    assert resp.json() == {"hit": True, "value": {"text": "merhaba"}}


@pytest.mark.asyncio
async def test_route_miss(client: AsyncClient):
    resp = await client.get("/cache/unknown")
    assert resp.json() == {"hit": False, "value": None}
