"""Check definitions.

Each analysis check is a row in the registry below: its query
parameters, cache TTL, upstream coroutine and default failure message.
The service layer runs every row through the same
validate -> cache -> fetch -> cache-write protocol.
"""

from site_analysis.config import Settings, settings
from site_analysis.dto import DNSRecordType
from site_analysis.entities import CheckDefinition, QueryParam

from .dns import fetch_dns
from .headers import fetch_headers
from .performance import fetch_performance
from .security import fetch_security
from .ssl import fetch_ssl
from .whois import fetch_whois

DOMAIN = QueryParam(name="domain", label="Domain")
URL = QueryParam(name="url", label="URL")
RECORD_TYPE = QueryParam(
    name="type",
    label="Type",
    required=False,
    default=DNSRecordType.A.value,
    choices=tuple(t.value for t in DNSRecordType),
)


def build_checks(config: Settings = settings) -> dict[str, CheckDefinition]:
    """Build the check registry keyed by check name."""
    definitions = [
        CheckDefinition(
            name="dns",
            params=(DOMAIN, RECORD_TYPE),
            ttl=config.dns_cache_ttl,
            fetch=fetch_dns,
            default_error="DNS lookup failed",
        ),
        CheckDefinition(
            name="whois",
            params=(DOMAIN,),
            ttl=config.whois_cache_ttl,
            fetch=fetch_whois,
            default_error="WHOIS lookup failed",
        ),
        CheckDefinition(
            name="ssl",
            params=(DOMAIN,),
            ttl=config.ssl_cache_ttl,
            fetch=fetch_ssl,
            default_error="SSL check failed",
        ),
        CheckDefinition(
            name="security",
            params=(URL,),
            ttl=config.security_cache_ttl,
            fetch=fetch_security,
            default_error="Security check failed",
        ),
        CheckDefinition(
            name="performance",
            params=(URL,),
            ttl=config.performance_cache_ttl,
            fetch=fetch_performance,
            default_error="Performance check failed",
        ),
        CheckDefinition(
            name="headers",
            params=(URL,),
            ttl=config.headers_cache_ttl,
            fetch=fetch_headers,
            default_error="Headers analysis failed",
        ),
    ]
    return {definition.name: definition for definition in definitions}


CHECKS = build_checks()

__all__ = [
    "CHECKS",
    "build_checks",
    "fetch_dns",
    "fetch_whois",
    "fetch_ssl",
    "fetch_security",
    "fetch_performance",
    "fetch_headers",
]
