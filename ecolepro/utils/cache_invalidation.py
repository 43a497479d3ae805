# ecolepro/utils/cache_invalidation.py
"""Cache key naming and invalidation for store collections."""
from typing import Optional

from ..core.cache import CacheManager, cache_manager

STORE_CACHE_PREFIX = "store"


def collection_cache_key(key: str) -> str:
    return f"{STORE_CACHE_PREFIX}:{key}"


async def invalidate_collection_cache(key: str, cache: Optional[CacheManager] = None):
    """Drop one cached collection."""
    await (cache or cache_manager).delete(collection_cache_key(key))


async def invalidate_store_cache(cache: Optional[CacheManager] = None) -> int:
    """Drop every cached collection, used after restore and reset."""
    return await (cache or cache_manager).clear_pattern(f"{STORE_CACHE_PREFIX}:*")
