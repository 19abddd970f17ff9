"""Page load timing for a URL."""

import time

from site_analysis.dto import PerformanceMetrics, PerformanceResult, iso_timestamp
from site_analysis.entities import CheckContext


def content_size(value: str | None) -> int:
    """Parse a Content-Length header, 0 when absent or malformed."""
    try:
        return int(value) if value else 0
    except ValueError:
        return 0


async def fetch_performance(ctx: CheckContext, params: dict[str, str]) -> PerformanceResult:
    url = params["url"]

    start = time.perf_counter()
    response = await ctx.http.get(url, follow_redirects=True)
    load_time = round((time.perf_counter() - start) * 1000)

    # Only whether the final URL moved is observable, not the hop count
    redirects = 1 if str(response.url) != url else 0

    return PerformanceResult(
        url=url,
        load_time=load_time,
        response_time=load_time,
        content_size=content_size(response.headers.get("content-length")),
        status_code=response.status_code,
        redirects=redirects,
        # No first-byte timing is available; approximated by the full load
        metrics=PerformanceMetrics(ttfb=load_time),
        timestamp=iso_timestamp(ctx.clock()),
    )
