"""Content-addressed response cache."""

from psp_calldata.cache.keys import compute_cache_key
from psp_calldata.cache.store import (
    CacheStore,
    FileCacheStore,
    MemoryCacheStore,
    NullCacheStore,
    ResponseCache,
)

__all__ = [
    "compute_cache_key",
    "CacheStore",
    "FileCacheStore",
    "MemoryCacheStore",
    "NullCacheStore",
    "ResponseCache",
]
