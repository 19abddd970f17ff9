"""Redis implementation of CacheStore.

Each entry is a plain string key written with ``SET key value EX ttl``,
so Redis expires it on its own.
"""

import redis

from site_analysis.config import get_redis_client, settings


class RedisCacheRepository:
    """Redis key-value cache.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ) -> None:
        """Initialize the Redis cache repository.

        Args:
            redis_client: Redis client instance. If None, creates default.
            prefix: Namespace prepended to every key. Defaults to settings.
        """
        self._client = redis_client or get_redis_client()
        self._prefix = prefix if prefix is not None else settings.cache_prefix

    @classmethod
    def create(cls, prefix: str | None = None) -> "RedisCacheRepository":
        """Factory method to create RedisCacheRepository with defaults.

        Args:
            prefix: Key namespace. If None, uses settings.

        Returns:
            Configured RedisCacheRepository
        """
        return cls(prefix=prefix)

    def _full_key(self, key: str) -> str:
        return f"{self._prefix}:{key}" if self._prefix else key

    def get(self, key: str) -> str | None:
        value = self._client.get(self._full_key(key))
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def put(self, key: str, value: str, ttl: int) -> None:
        self._client.set(self._full_key(key), value.encode("utf-8"), ex=ttl)

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
