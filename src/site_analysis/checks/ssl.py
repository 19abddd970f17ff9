"""SSL/TLS certificate check.

Reachability comes from a HEAD request to ``https://{domain}``. Certificate
details come from the SSL Labs analyze API, read in cached mode only: a
fresh assessment is never started or polled, so domains without a recent
report get the reachability-only fallback.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any

from site_analysis.config import settings
from site_analysis.dto import SSLResult, iso_timestamp
from site_analysis.entities import CheckContext

logger = logging.getLogger(__name__)

FALLBACK_ISSUER = "Unable to retrieve (use SSL Labs for details)"
MS_PER_DAY = 1000 * 60 * 60 * 24


def _from_epoch_ms(value: int | float) -> datetime:
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


def days_remaining(not_after_ms: int | float, now: datetime) -> int:
    """Whole days until expiry, floored; negative once expired."""
    now_ms = now.timestamp() * 1000
    return math.floor((not_after_ms - now_ms) / MS_PER_DAY)


def _first_suite_name(details: dict[str, Any]) -> str | None:
    suites = details.get("suites")
    # v3 reports a list of per-protocol groups, older reports one group
    if isinstance(suites, list):
        suites = suites[0] if suites else None
    if not suites:
        return None
    listed = suites.get("list") or []
    return listed[0].get("name") if listed else None


def parse_report(domain: str, reachable: bool, report: dict[str, Any], now: datetime) -> SSLResult:
    """Map an SSL Labs report onto the SSL result, or fall back."""
    endpoints = report.get("endpoints") or []
    if report.get("status") != "READY" or not endpoints:
        return SSLResult(
            domain=domain,
            valid=reachable,
            issuer=FALLBACK_ISSUER,
            timestamp=iso_timestamp(now),
        )

    details = endpoints[0].get("details") or {}
    cert = details.get("cert") or {}
    not_before = cert.get("notBefore")
    not_after = cert.get("notAfter")
    protocols = details.get("protocols") or []

    return SSLResult(
        domain=domain,
        valid=reachable,
        issuer=cert.get("issuerLabel"),
        subject=cert.get("subject"),
        valid_from=iso_timestamp(_from_epoch_ms(not_before)) if not_before else None,
        valid_to=iso_timestamp(_from_epoch_ms(not_after)) if not_after else None,
        days_remaining=days_remaining(not_after, now) if not_after else None,
        protocol=protocols[0].get("name") if protocols else None,
        cipher=_first_suite_name(details),
        timestamp=iso_timestamp(now),
    )


async def fetch_ssl(ctx: CheckContext, params: dict[str, str]) -> SSLResult:
    domain = params["domain"]

    probe = await ctx.http.head(f"https://{domain}", follow_redirects=True)

    response = await ctx.http.get(
        settings.ssl_labs_url,
        params={"host": domain, "fromCache": "on", "maxAge": "24"},
    )
    report = response.json()
    if report.get("status") != "READY":
        logger.info("No ready SSL Labs report for %s (status=%s)", domain, report.get("status"))

    return parse_report(domain, probe.is_success, report, ctx.clock())
