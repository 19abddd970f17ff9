"""Key-value cache store protocol.

Defines the interface for the store that memoizes serialized check
responses. The store owns expiry: entries are written with a TTL and
disappear passively, nothing above this layer evicts or invalidates.

Implementations can include:
- Redis (default)
- In-process memory (development and tests)
- Any key-value service with per-key expiry
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for key-value cache backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed.

    Example:
        ```python
        from site_analysis.protocols import CacheStore

        store: CacheStore = RedisCacheRepository.create()
        store.put("dns:example.com:A", body, ttl=3600)
        store.get("dns:example.com:A")
        ```
    """

    def get(self, key: str) -> str | None:
        """Read a cached body.

        Args:
            key: The cache key

        Returns:
            The stored string, or None if absent or expired
        """
        ...

    def put(self, key: str, value: str, ttl: int) -> None:
        """Write a body with a time-to-live.

        Args:
            key: The cache key
            value: The serialized response body
            ttl: Time-to-live in seconds
        """
        ...

    def health_check(self) -> bool:
        """Check if the store is accessible.

        Returns:
            True if healthy, False otherwise
        """
        ...
