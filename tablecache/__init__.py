"""Table-backed key-value cache with lazy per-entry expiration."""

from tablecache.core.errors import CacheError, DeserializationError, SerializationError
from tablecache.services.expiry import Expiry
from tablecache.services.store import MISS, CacheStore

__all__ = [
    "MISS",
    "CacheError",
    "CacheStore",
    "DeserializationError",
    "Expiry",
    "SerializationError",
]
