"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract: the response
envelope and the data shape of every check. Field names are snake_case
in Python and camelCase on the wire.

Internal logic should use entities from the entities package.
"""

from .requests import DNSRecordType
from .responses import (
    APIResponse,
    DNSLookupResult,
    DNSRecord,
    ErrorInfo,
    HeadersResult,
    PerformanceMetrics,
    PerformanceResult,
    ResponseMeta,
    SafeBrowsing,
    SecurityHeader,
    SecurityResult,
    SSLResult,
    WhoisResult,
    iso_timestamp,
)

__all__ = [
    "DNSRecordType",
    "APIResponse",
    "ErrorInfo",
    "ResponseMeta",
    "DNSRecord",
    "DNSLookupResult",
    "WhoisResult",
    "SSLResult",
    "SafeBrowsing",
    "SecurityResult",
    "PerformanceMetrics",
    "PerformanceResult",
    "SecurityHeader",
    "HeadersResult",
    "iso_timestamp",
]
