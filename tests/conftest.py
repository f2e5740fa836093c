"""Shared test fixtures — SQLite in-memory cache table + frozen clock."""

from collections.abc import Generator
from datetime import datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

# Import all models so metadata is populated
import tablecache.models  # noqa: F401
from tablecache.services.gateway import SqlStorageGateway
from tablecache.services.store import CacheStore

ZONE = ZoneInfo("Europe/Istanbul")


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self, zone: tzinfo) -> datetime:
        return self.current.replace(tzinfo=zone)

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def engine():
    # One shared connection so worker threads see the same in-memory DB
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def test_session_factory(engine) -> sessionmaker[Session]:
    return sessionmaker(engine, class_=Session, expire_on_commit=False)


@pytest.fixture
def gateway(test_session_factory) -> SqlStorageGateway:
    return SqlStorageGateway(test_session_factory)


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2026, 3, 14, 9, 26, 53, 589793))


@pytest.fixture
def store(gateway, clock) -> Generator[CacheStore, None, None]:
    yield CacheStore(gateway, zone=ZONE, clock=clock)
