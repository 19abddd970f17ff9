"""HTTP handlers for analysis checks.

Handlers convert service results into responses. They handle HTTP
concerns like status codes, the ``X-Cache`` header and error bodies.
"""

from fastapi import Response, status

from site_analysis.dto import APIResponse
from site_analysis.entities.result import INVALID_REQUEST
from site_analysis.services import CheckService

JSON_MEDIA_TYPE = "application/json"


class CheckHandler:
    """HTTP handler shared by every check endpoint.

    Successful bodies are returned byte-for-byte as the service produced
    (or the cache stored) them, never re-serialized.

    Example:
        ```python
        handler = CheckHandler(check_service=service)

        @app.get("/api/dns")
        async def dns(domain: str | None = None, type: str | None = None):
            return await handler.handle("dns", {"domain": domain, "type": type})
        ```
    """

    def __init__(self, check_service: CheckService) -> None:
        """Initialize the check handler.

        Args:
            check_service: The check service for business logic (required).
        """
        self._checks = check_service

    async def handle(self, name: str, params: dict[str, str | None]) -> Response:
        """Handle ``GET /api/{name}`` requests.

        Args:
            name: Check name
            params: Raw query parameter values

        Returns:
            200 with the envelope and ``X-Cache: HIT|MISS``, 400 on a missing
            or malformed parameter, 500 when the check failed
        """
        result = await self._checks.run(name, params)

        if result.success:
            cached = result.data
            return Response(
                content=cached.body,
                media_type=JSON_MEDIA_TYPE,
                headers={"X-Cache": cached.cache_status},
            )

        body = APIResponse.fail(result.message).to_json()
        if result.code == INVALID_REQUEST:
            # Rejected before the cache was consulted
            return Response(content=body, status_code=status.HTTP_400_BAD_REQUEST, media_type=JSON_MEDIA_TYPE)

        return Response(
            content=body,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            media_type=JSON_MEDIA_TYPE,
            headers={"X-Cache": "MISS"},
        )

    async def health_check(self) -> tuple[dict, int]:
        """Handle GET /health requests.

        Returns:
            Health payload and the status code to answer with
        """
        is_healthy = self._checks.is_healthy()
        payload = {
            "status": "healthy" if is_healthy else "unhealthy",
            "cache_healthy": is_healthy,
        }
        code = status.HTTP_200_OK if is_healthy else status.HTTP_503_SERVICE_UNAVAILABLE
        return payload, code
