"""Generic client for the analysis API.

Every call returns the same ``APIResponse`` envelope, whether it failed
in transport, with a non-2xx status, or with an error in a 2xx body, so
callers need only one failure branch.
"""

import logging
from typing import Any

import httpx

from site_analysis.config import settings
from site_analysis.dto import APIResponse, ErrorInfo, ResponseMeta, iso_timestamp

logger = logging.getLogger(__name__)


def _error_message(body: Any, default: str) -> str:
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
    return default


class AnalysisClient:
    """Async client for the ``/api`` check endpoints.

    Example:
        ```python
        async with AnalysisClient("http://localhost:8000/api") as client:
            response = await client.lookup_dns("example.com", "MX")
            if response.success:
                print(response.data["records"])
            else:
                print(response.error.message)
        ```
    """

    def __init__(
        self,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API base URL including the ``/api`` path. Defaults to settings.
            http_client: Preconfigured httpx client (e.g. with a test transport).
            timeout: Request timeout in seconds for the default client.
        """
        self._base_url = (base_url or settings.api_base_url).rstrip("/")
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "AnalysisClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> APIResponse:
        """Send one request and normalize the outcome into an envelope.

        Args:
            endpoint: Path below the base URL, query string included
            method: HTTP method
            body: JSON-serializable request body
            headers: Extra request headers

        Returns:
            APIResponse with either data or error set
        """
        try:
            response = await self._client.request(
                method,
                f"{self._base_url}{endpoint}",
                json=body,
                headers={"Content-Type": "application/json", **(headers or {})},
            )
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.debug("Request to %s failed: %s", endpoint, e)
            return APIResponse(success=False, error=ErrorInfo(message=str(e) or "Unknown error"))

        if not response.is_success:
            return APIResponse(
                success=False,
                error=ErrorInfo(
                    message=_error_message(data, "Request failed"),
                    code=str(response.status_code),
                ),
            )

        if isinstance(data, dict) and (data.get("success") is False or data.get("error")):
            return APIResponse(
                success=False,
                error=ErrorInfo(message=_error_message(data, "Request failed")),
            )

        payload = data.get("data", data) if isinstance(data, dict) else data
        return APIResponse(
            success=True,
            data=payload,
            meta=ResponseMeta(
                timestamp=iso_timestamp(),
                cached=response.headers.get("x-cache") == "HIT",
            ),
        )

    async def get(self, endpoint: str, headers: dict[str, str] | None = None) -> APIResponse:
        return await self.request(endpoint, method="GET", headers=headers)

    async def post(self, endpoint: str, body: Any, headers: dict[str, str] | None = None) -> APIResponse:
        return await self.request(endpoint, method="POST", body=body, headers=headers)

    # Per-check helpers

    async def _check(self, path: str, params: dict[str, str]) -> APIResponse:
        return await self.get(f"{path}?{httpx.QueryParams(params)}")

    async def lookup_dns(self, domain: str, record_type: str = "A") -> APIResponse:
        return await self._check("/dns", {"domain": domain, "type": record_type})

    async def lookup_whois(self, domain: str) -> APIResponse:
        return await self._check("/whois", {"domain": domain})

    async def check_ssl(self, domain: str) -> APIResponse:
        return await self._check("/ssl", {"domain": domain})

    async def check_security(self, url: str) -> APIResponse:
        return await self._check("/security", {"url": url})

    async def check_performance(self, url: str) -> APIResponse:
        return await self._check("/performance", {"url": url})

    async def analyze_headers(self, url: str) -> APIResponse:
        return await self._check("/headers", {"url": url})
