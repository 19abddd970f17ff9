"""Service layer for business logic.

This layer runs the shared check protocol. Services depend on protocols
(interfaces), not concrete implementations, making them testable and
flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from site_analysis.services import CheckService

    service = CheckService.create(repository=store, http_client=client)
    result = await service.run("dns", {"domain": "example.com", "type": "MX"})
    ```
"""

from .check_service import CheckService

__all__ = [
    "CheckService",
]
