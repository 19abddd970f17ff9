"""HTTP security header posture for a URL."""

import httpx

from site_analysis.dto import HeadersResult, SecurityHeader, iso_timestamp
from site_analysis.entities import CheckContext

SECURITY_HEADERS = (
    ("Strict-Transport-Security", "Enable HSTS to force HTTPS connections"),
    ("Content-Security-Policy", "Implement CSP to prevent XSS attacks"),
    ("X-Frame-Options", "Prevent clickjacking attacks"),
    ("X-Content-Type-Options", "Prevent MIME-sniffing attacks"),
    ("Referrer-Policy", "Control referrer information"),
    ("Permissions-Policy", "Control browser features and APIs"),
)


def grade_headers(headers: httpx.Headers) -> tuple[list[SecurityHeader], int]:
    """Report each tracked header and the percentage present."""
    graded = []
    for name, recommendation in SECURITY_HEADERS:
        value = headers.get(name)
        graded.append(
            SecurityHeader(
                name=name,
                present=bool(value),
                value=value or None,
                recommendation=None if value else recommendation,
            )
        )

    present = sum(1 for header in graded if header.present)
    score = round(present / len(SECURITY_HEADERS) * 100)
    return graded, score


async def fetch_headers(ctx: CheckContext, params: dict[str, str]) -> HeadersResult:
    url = params["url"]

    response = await ctx.http.head(url, follow_redirects=True)
    security_headers, score = grade_headers(response.headers)

    return HeadersResult(
        url=url,
        headers=dict(response.headers.items()),
        security_headers=security_headers,
        security_score=score,
        timestamp=iso_timestamp(ctx.clock()),
    )
