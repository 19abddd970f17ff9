"""Repository layer for data access.

This layer abstracts the key-value cache behind the CacheStore protocol.
The repositories are protocol-based (structural typing), not
inheritance-based. Any class implementing get/put/health_check will
satisfy the protocol.
"""

from site_analysis.config import settings
from site_analysis.protocols import CacheStore

from .memory_repository import MemoryCacheRepository
from .redis_repository import RedisCacheRepository


def create_cache_store() -> CacheStore:
    """Build the cache store selected by CACHE_BACKEND."""
    if settings.cache_backend == "memory":
        return MemoryCacheRepository.create()
    return RedisCacheRepository.create()


__all__ = [
    "CacheStore",
    "MemoryCacheRepository",
    "RedisCacheRepository",
    "create_cache_store",
]
