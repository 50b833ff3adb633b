"""Approximate-coordinate cache for computed energy data."""

from geoenergy.cache.store import (
    COORDINATE_TOLERANCE,
    CacheRepository,
    InMemoryCacheStore,
    JsonFileCacheStore,
)

__all__ = [
    "COORDINATE_TOLERANCE",
    "CacheRepository",
    "InMemoryCacheStore",
    "JsonFileCacheStore",
]
