"""
Tests for CheckService: validation, cache behaviour and request coalescing.
"""

import asyncio

import httpx
import pytest
import redis

from site_analysis.dto import HeadersResult
from site_analysis.entities import CheckDefinition, QueryParam
from site_analysis.repositories import MemoryCacheRepository
from site_analysis.services import CheckService
from tests.conftest import FIXED_NOW


class CountingCheck:
    """A check whose fetch blocks until released and counts its calls."""

    def __init__(self) -> None:
        self.calls = 0
        self.release = asyncio.Event()

    async def fetch(self, ctx, params):
        self.calls += 1
        await self.release.wait()
        return HeadersResult(
            url=params["url"],
            security_headers=[],
            security_score=0,
            timestamp="2024-06-01T12:00:00.000Z",
        )

    def definition(self) -> CheckDefinition:
        return CheckDefinition(
            name="slow",
            params=(QueryParam(name="url", label="URL"),),
            ttl=60,
            fetch=self.fetch,
        )


class BrokenStore:
    """A cache store whose backend is down."""

    def get(self, key):
        raise redis.ConnectionError("Connection refused")

    def put(self, key, value, ttl):
        raise redis.ConnectionError("Connection refused")

    def health_check(self):
        return False


def make_service(check: CountingCheck, store=None, coalesce=True) -> CheckService:
    return CheckService(
        repository=store or MemoryCacheRepository(),
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200))),
        checks={"slow": check.definition()},
        coalesce=coalesce,
        clock=lambda: FIXED_NOW,
    )


async def test_concurrent_misses_share_one_fetch():
    check = CountingCheck()
    service = make_service(check, coalesce=True)

    pending = asyncio.gather(
        service.run("slow", {"url": "https://example.com/"}),
        service.run("slow", {"url": "https://example.com/"}),
    )
    await asyncio.sleep(0)
    check.release.set()
    first, second = await pending

    assert check.calls == 1
    assert first.data.body == second.data.body
    assert not first.data.hit


async def test_without_coalescing_each_miss_fetches():
    check = CountingCheck()
    service = make_service(check, coalesce=False)

    pending = asyncio.gather(
        service.run("slow", {"url": "https://example.com/"}),
        service.run("slow", {"url": "https://example.com/"}),
    )
    await asyncio.sleep(0)
    check.release.set()
    await pending

    assert check.calls == 2


async def test_inflight_entry_cleared_after_completion():
    check = CountingCheck()
    check.release.set()
    store = MemoryCacheRepository()
    service = make_service(check, store=store)

    await service.run("slow", {"url": "https://example.com/"})
    second = await service.run("slow", {"url": "https://example.com/"})

    assert check.calls == 1
    assert second.data.hit is True
    assert service._inflight == {}


async def test_cache_store_outage_degrades_to_uncached():
    check = CountingCheck()
    check.release.set()
    service = make_service(check, store=BrokenStore())

    result = await service.run("slow", {"url": "https://example.com/"})

    assert result.success
    assert result.data.cache_status == "MISS"
    assert not service.is_healthy()


async def test_invalid_params_return_400_code():
    check = CountingCheck()
    service = make_service(check)

    result = await service.run("slow", {"url": None})

    assert not result.success
    assert result.code == "400"
    assert result.message == "URL parameter is required"
    assert check.calls == 0


async def test_fetch_exception_becomes_500_code():
    async def explode(ctx, params):
        raise RuntimeError("")

    service = CheckService(
        repository=MemoryCacheRepository(),
        http_client=httpx.AsyncClient(),
        checks={"boom": CheckDefinition(name="boom", params=(), ttl=60, fetch=explode, default_error="Boom failed")},
        coalesce=False,
    )

    result = await service.run("boom", {})

    assert result.code == "500"
    assert result.message == "Boom failed"


def test_unknown_check_name(service):
    with pytest.raises(KeyError):
        service.get_check("traceroute")


def test_cache_keys():
    definition = CheckDefinition(
        name="dns",
        params=(
            QueryParam(name="domain", label="Domain"),
            QueryParam(name="type", label="Type", required=False, default="A"),
        ),
        ttl=60,
        fetch=None,
    )

    params, problem = definition.validate({"domain": "example.com", "type": None})

    assert problem is None
    assert definition.cache_key(params) == "dns:example.com:A"
    assert definition.cache_key({"domain": "example.com", "type": "MX"}) == "dns:example.com:MX"


def test_builtin_ttls(service):
    ttls = {name: check.ttl for name, check in service.checks.items()}
    assert ttls == {
        "dns": 3600,
        "whois": 86400,
        "ssl": 3600,
        "security": 1800,
        "performance": 300,
        "headers": 300,
    }
