"""Site Analysis - cache-fronted website analysis checks.

Six independent checks (DNS, WHOIS, SSL, security headers, security
heuristics, page performance), each proxying an upstream source and
memoizing the normalized answer in a key-value cache.

Layers:
    - protocols: Interface contracts (CacheStore)
    - repositories: Cache store implementations (Redis, in-memory)
    - checks: Per-check upstream calls and mapping
    - services: The shared validate/cache/fetch/store protocol
    - handlers: HTTP response handling
    - dto: Data transfer objects (API contracts)
    - entities: Internal models (check descriptors, result type)

Usage:
    ```python
    from site_analysis.services import CheckService

    service = CheckService.create(repository=store, http_client=client)
    result = await service.run("ssl", {"domain": "example.com"})
    ```

For HTTP API:
    ```python
    from site_analysis.api.app import app
    ```
"""

from site_analysis.client import AnalysisClient
from site_analysis.config import get_redis_client, settings
from site_analysis.dto import APIResponse, DNSRecordType
from site_analysis.entities import CheckDefinition, Err, Ok
from site_analysis.handlers import CheckHandler
from site_analysis.protocols import CacheStore
from site_analysis.repositories import MemoryCacheRepository, RedisCacheRepository
from site_analysis.services import CheckService

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "CacheStore",
    # Services (business logic)
    "CheckService",
    # Handlers (HTTP)
    "CheckHandler",
    # Repositories (data access)
    "RedisCacheRepository",
    "MemoryCacheRepository",
    # Entities (internal models)
    "CheckDefinition",
    "Ok",
    "Err",
    # DTOs (API contracts)
    "APIResponse",
    "DNSRecordType",
    # Client
    "AnalysisClient",
]
