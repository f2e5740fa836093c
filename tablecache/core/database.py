"""Database engine, session factory and cache store wiring."""

from zoneinfo import ZoneInfo

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from tablecache.core.config import get_settings
from tablecache.services.gateway import SqlStorageGateway
from tablecache.services.store import CacheStore

settings = get_settings()

engine = create_engine(
    settings.database_url,
    echo=False,
    pool_pre_ping=True,
)

session_factory = sessionmaker(
    engine,
    class_=Session,
    expire_on_commit=False,
)


def build_store() -> CacheStore:
    """Create a CacheStore bound to the configured database."""
    gateway = SqlStorageGateway(session_factory)
    if settings.create_table_on_startup:
        gateway.ensure_table()
    return CacheStore(gateway, zone=ZoneInfo(settings.time_zone))
