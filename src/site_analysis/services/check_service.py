"""Check service for the shared request/cache/normalize protocol.

Every check runs the same steps:
1. Validate query parameters (no I/O on failure)
2. Derive the cache key from the raw parameter values
3. Return the stored body verbatim on a cache hit
4. Otherwise call the upstream source(s), wrap the mapped data in the
   envelope, serialize once, store with the check TTL, and return it
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime

import httpx

from site_analysis.checks import CHECKS
from site_analysis.config import settings
from site_analysis.dto import APIResponse, iso_timestamp
from site_analysis.entities import CachedBody, CheckContext, CheckDefinition, Err, Ok, Result
from site_analysis.entities.check import utc_now
from site_analysis.entities.result import CHECK_FAILED, INVALID_REQUEST
from site_analysis.protocols import CacheStore

logger = logging.getLogger(__name__)


class CheckService:
    """Runs cache-fronted analysis checks.

    This service depends on PROTOCOLS, not concrete implementations:
    - CacheStore: can be Redis, in-memory, or any key-value service

    Failures never escape as exceptions; ``run`` always returns an
    ``Ok(CachedBody)`` or an ``Err`` whose code is the HTTP status to
    answer with.

    Example:
        ```python
        service = CheckService.create(
            repository=MemoryCacheRepository.create(),
            http_client=httpx.AsyncClient(),
        )
        result = await service.run("headers", {"url": "https://example.com"})
        if result.success:
            print(result.data.body, result.data.cache_status)
        ```
    """

    def __init__(
        self,
        repository: CacheStore,
        http_client: httpx.AsyncClient,
        checks: dict[str, CheckDefinition] | None = None,
        coalesce: bool | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the check service.

        Args:
            repository: Key-value cache store (required).
            http_client: Outbound HTTP client for upstream calls (required).
            checks: Check registry. Defaults to the built-in six checks.
            coalesce: Share one computation between concurrent misses on the
                same key. Defaults to settings.
            clock: Source of the current UTC time.
        """
        self._repository = repository
        self._http = http_client
        self._checks = checks if checks is not None else CHECKS
        self._coalesce = settings.coalesce_requests if coalesce is None else coalesce
        self._clock = clock
        self._context = CheckContext(http=http_client, clock=clock)
        self._inflight: dict[str, asyncio.Future] = {}

    @classmethod
    def create(
        cls,
        repository: CacheStore,
        http_client: httpx.AsyncClient,
        coalesce: bool | None = None,
    ) -> "CheckService":
        """Factory method to create CheckService with the built-in checks.

        Args:
            repository: Key-value cache store (required).
            http_client: Outbound HTTP client (required).
            coalesce: Override the COALESCE_REQUESTS setting.

        Returns:
            Configured CheckService instance
        """
        return cls(repository=repository, http_client=http_client, coalesce=coalesce)

    def get_check(self, name: str) -> CheckDefinition:
        """Look up a check definition by name.

        Raises:
            KeyError: If no check has that name
        """
        return self._checks[name]

    async def run(self, name: str, raw_params: dict[str, str | None]) -> Result[CachedBody]:
        """Run a check end to end.

        Args:
            name: Check name (``dns``, ``whois``, ``ssl``, ...)
            raw_params: Query parameter values as received

        Returns:
            Ok with the response body and cache status, or Err
        """
        definition = self.get_check(name)

        params, problem = definition.validate(raw_params)
        if problem is not None:
            return Err(problem, INVALID_REQUEST)

        key = definition.cache_key(params)
        cached = self._read(key)
        if cached is not None:
            logger.debug("Cache hit for %s", key)
            return Ok(CachedBody(body=cached, hit=True))

        logger.debug("Cache miss for %s", key)
        if not self._coalesce:
            return await self._compute(definition, key, params)

        pending = self._inflight.get(key)
        if pending is None:
            pending = asyncio.ensure_future(self._compute(definition, key, params))
            self._inflight[key] = pending
            pending.add_done_callback(lambda _: self._inflight.pop(key, None))
        else:
            logger.debug("Joining in-flight computation for %s", key)
        return await asyncio.shield(pending)

    async def _compute(
        self,
        definition: CheckDefinition,
        key: str,
        params: dict[str, str],
    ) -> Result[CachedBody]:
        try:
            data = await definition.fetch(self._context, params)
        except Exception as e:
            logger.warning("Check %s failed for %s: %s", definition.name, key, e)
            return Err(str(e) or definition.default_error, CHECK_FAILED)

        body = APIResponse.ok(data, timestamp=iso_timestamp(self._clock())).to_json()
        self._write(key, body, definition.ttl)
        return Ok(CachedBody(body=body, hit=False))

    def _read(self, key: str) -> str | None:
        try:
            return self._repository.get(key)
        except Exception as e:
            logger.warning("Cache read failed for %s, treating as miss: %s", key, e)
            return None

    def _write(self, key: str, body: str, ttl: int) -> None:
        try:
            self._repository.put(key, body, ttl)
        except Exception as e:
            logger.warning("Cache write failed for %s: %s", key, e)

    def is_healthy(self) -> bool:
        """Check if the cache store is reachable."""
        return self._repository.health_check()

    @property
    def checks(self) -> dict[str, CheckDefinition]:
        """Get the check registry."""
        return self._checks

    @property
    def repository(self) -> CacheStore:
        """Get the underlying repository (for testing)."""
        return self._repository

    async def close(self) -> None:
        """Close the outbound HTTP client."""
        await self._http.aclose()
