"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of cache backends (Redis, in-memory, Workers KV, etc.)
- Unit testing with fake implementations
- Clear separation of concerns

Usage:
    ```python
    from site_analysis.protocols import CacheStore

    # Type hints work with any implementation
    store: CacheStore = RedisCacheRepository()   # works
    store: CacheStore = MemoryCacheRepository()  # also works
    ```
"""

from .cache_store import CacheStore

__all__ = [
    "CacheStore",
]
