"""Client-side input normalizers and format checks.

Pure functions, no network access. They only short-circuit obviously
malformed input before a request is sent; the API itself keys its cache
on whatever it receives.
"""

import re
from urllib.parse import urlparse

SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)

# Alphanumeric labels with inner hyphens, at least two labels
HOSTNAME_RE = re.compile(
    r"^[a-z0-9]([a-z0-9\-]{0,61}[a-z0-9])?"
    r"(\.[a-z0-9]([a-z0-9\-]{0,61}[a-z0-9])?)+$"
)


def normalize_url(url: str) -> str:
    """Prepend ``https://`` unless the input already has an http(s) scheme."""
    url = url.strip()
    if not SCHEME_RE.match(url):
        return f"https://{url}"
    return url


def is_valid_url(url: str) -> bool:
    """Check that a string parses as an absolute URL with a host."""
    try:
        parsed = urlparse(url)
        # Accessing port validates it
        parsed.port
    except ValueError:
        return False
    if not parsed.scheme or not parsed.hostname:
        return False
    return not any(char.isspace() for char in parsed.hostname)


def extract_domain(url: str) -> str:
    """Return the hostname of a URL, or the input unchanged if it has none."""
    try:
        hostname = urlparse(normalize_url(url)).hostname
    except ValueError:
        return url
    return hostname or url


def normalize_domain(domain: str) -> str:
    """Reduce user input to a bare lower-case hostname.

    Strips surrounding whitespace, any scheme, path, port and trailing dot,
    so ``https://Example.com/about`` becomes ``example.com``.
    """
    domain = domain.strip()
    if SCHEME_RE.match(domain) or "/" in domain or ":" in domain:
        domain = extract_domain(domain)
    return domain.lower().rstrip(".")


def is_valid_domain(domain: str) -> bool:
    """Check that a string is a well-formed multi-label hostname."""
    if not domain or len(domain) > 253:
        return False
    return bool(HOSTNAME_RE.match(domain.lower()))
