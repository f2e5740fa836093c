"""FastAPI dependency that hands route handlers the configured cache."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from tablecache.core.database import build_store
from tablecache.services.store import CacheStore


@lru_cache
def get_cache_store() -> CacheStore:
    """One CacheStore per process, bound to the configured database."""
    return build_store()


# Typed shorthand for use in route signatures
CacheStoreDep = Annotated[CacheStore, Depends(get_cache_store)]
