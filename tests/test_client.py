"""
Tests for AnalysisClient envelope normalization.
"""

import httpx

from site_analysis.client import AnalysisClient
from site_analysis.handlers import CheckHandler


def client_for(handler) -> AnalysisClient:
    transport = httpx.MockTransport(handler)
    return AnalysisClient("http://api.test/api", http_client=httpx.AsyncClient(transport=transport))


async def test_success_unwraps_data_and_reads_cache_header():
    def handler(request):
        return httpx.Response(
            200,
            json={"success": True, "data": {"domain": "example.com"}, "meta": {"cached": False}},
            headers={"X-Cache": "HIT"},
        )

    async with client_for(handler) as client:
        response = await client.get("/whois?domain=example.com")

    assert response.success is True
    assert response.data == {"domain": "example.com"}
    assert response.error is None
    assert response.meta.cached is True


async def test_non_2xx_carries_message_and_status_code():
    def handler(request):
        return httpx.Response(400, json={"success": False, "error": {"message": "Domain parameter is required"}})

    async with client_for(handler) as client:
        response = await client.lookup_whois("")

    assert response.success is False
    assert response.error.message == "Domain parameter is required"
    assert response.error.code == "400"
    assert response.data is None


async def test_error_in_2xx_body_is_failure():
    def handler(request):
        return httpx.Response(200, json={"success": False, "error": {"message": "quota exceeded"}})

    async with client_for(handler) as client:
        response = await client.get("/dns?domain=example.com")

    assert response.success is False
    assert response.error.message == "quota exceeded"


async def test_transport_error_is_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with client_for(handler) as client:
        response = await client.check_ssl("example.com")

    assert response.success is False
    assert response.error.message == "connection refused"
    assert response.error.code is None


async def test_non_json_body_is_failure():
    def handler(request):
        return httpx.Response(502, text="<html>Bad Gateway</html>")

    async with client_for(handler) as client:
        response = await client.check_performance("https://example.com/")

    assert response.success is False
    assert response.error.message


async def test_check_helpers_encode_parameters():
    seen = []

    def handler(request):
        seen.append(request.url)
        return httpx.Response(200, json={"success": True, "data": {}})

    async with client_for(handler) as client:
        await client.lookup_dns("example.com", "MX")
        await client.analyze_headers("https://example.com/a?b=c")

    assert seen[0].path == "/api/dns"
    assert seen[0].params["type"] == "MX"
    assert seen[1].path == "/api/headers"
    assert seen[1].params["url"] == "https://example.com/a?b=c"


async def test_client_against_app(service, upstream):
    """End to end: client -> API -> service -> scripted upstream."""
    from site_analysis.api.app import create_app

    upstream.add("GET", "https://cloudflare-dns.com/dns-query", json={"Status": 0})
    app = create_app()
    app.state.check_service = service
    app.state.check_handler = CheckHandler(check_service=service)
    transport = httpx.ASGITransport(app=app)

    async with AnalysisClient("http://api.test/api", http_client=httpx.AsyncClient(transport=transport)) as client:
        first = await client.lookup_dns("example.com", "MX")
        second = await client.lookup_dns("example.com", "MX")
        missing = await client.lookup_dns("")

    assert first.success and second.success
    assert first.data["records"] == []
    assert first.meta.cached is False
    assert second.meta.cached is True
    assert first.data == second.data
    assert missing.error.code == "400"
