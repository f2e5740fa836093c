"""Import all models so SQLModel.metadata picks them up."""

from tablecache.models.cache_entry import CacheEntry, cache_table

__all__ = [
    "CacheEntry",
    "cache_table",
]
