"""Basic security heuristics for a URL.

Score out of 100:
    40  URL scheme is https
    30  no mixed-content markers in the page body (also granted when the
        page cannot be fetched or the URL is plain http)
    10  each for Strict-Transport-Security, Content-Security-Policy and
        X-Frame-Options response headers

The body and header probes fail independently; neither fails the check.
"""

import logging

import httpx

from site_analysis.dto import SecurityResult, iso_timestamp
from site_analysis.entities import CheckContext

logger = logging.getLogger(__name__)

MIXED_CONTENT_MARKERS = ("http://", 'src="http:', 'href="http:')
SCORED_HEADERS = ("strict-transport-security", "content-security-policy", "x-frame-options")


def has_mixed_content(html: str) -> bool:
    return any(marker in html for marker in MIXED_CONTENT_MARKERS)


def header_points(headers: httpx.Headers) -> int:
    return sum(10 for name in SCORED_HEADERS if name in headers)


async def fetch_security(ctx: CheckContext, params: dict[str, str]) -> SecurityResult:
    url = params["url"]
    parsed = httpx.URL(url)
    if not parsed.scheme or not parsed.host:
        raise ValueError(f"Invalid URL: {url}")

    https = parsed.scheme == "https"
    score = 40 if https else 0

    mixed_content = False
    try:
        page = await ctx.http.get(url, follow_redirects=True)
        if https and has_mixed_content(page.text):
            mixed_content = True
        else:
            score += 30
    except httpx.HTTPError as e:
        logger.info("Body fetch failed for %s, assuming no mixed content: %s", url, e)
        score += 30

    try:
        head = await ctx.http.head(url, follow_redirects=True)
        score += header_points(head.headers)
    except httpx.HTTPError as e:
        logger.info("Header probe failed for %s: %s", url, e)

    return SecurityResult(
        url=url,
        https=https,
        mixed_content=mixed_content,
        security_score=score,
        timestamp=iso_timestamp(ctx.clock()),
    )
