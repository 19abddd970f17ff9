"""Response DTOs for API endpoints."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def iso_timestamp(moment: datetime | None = None) -> str:
    """Format a UTC instant as ``2024-01-31T12:00:00.000Z``."""
    moment = (moment or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class WireModel(BaseModel):
    """Base for wire models: camelCase aliases, populated by field name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ErrorInfo(WireModel):
    """Error detail of a failed envelope."""

    message: str = Field(..., description="Human-readable failure reason")
    code: str | None = Field(None, description="Optional code (HTTP status on the client side)")


class ResponseMeta(WireModel):
    """Envelope metadata."""

    timestamp: str = Field(..., description="When the envelope was produced (ISO-8601 UTC)")
    cached: bool = Field(False, description="Whether the body was served from cache")


class APIResponse(WireModel):
    """Uniform envelope returned by every check.

    ``success=True`` carries ``data``; ``success=False`` carries ``error``.
    """

    success: bool
    data: Any | None = None
    error: ErrorInfo | None = None
    meta: ResponseMeta | None = None

    @classmethod
    def ok(cls, data: Any, timestamp: str | None = None, cached: bool = False) -> "APIResponse":
        return cls(
            success=True,
            data=data,
            meta=ResponseMeta(timestamp=timestamp or iso_timestamp(), cached=cached),
        )

    @classmethod
    def fail(cls, message: str, code: str | None = None) -> "APIResponse":
        return cls(success=False, error=ErrorInfo(message=message, code=code))

    def to_json(self) -> str:
        """Serialize for the wire, dropping absent optional fields."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


# DNS


class DNSRecord(WireModel):
    name: str | None = None
    type: str
    ttl: int | None = Field(None, alias="TTL")
    data: str | None = None


class DNSLookupResult(WireModel):
    domain: str
    record_type: str
    records: list[DNSRecord] = Field(default_factory=list)
    timestamp: str


# WHOIS


class WhoisResult(WireModel):
    domain: str
    registrar: str | None = None
    registrant_organization: str | None = None
    registration_date: str | None = None
    expiration_date: str | None = None
    updated_date: str | None = None
    name_servers: list[str | None] | None = None
    status: list[str] | None = None
    raw_data: str = Field(..., description="Upstream RDAP JSON, pretty-printed")
    timestamp: str


# SSL


class SSLResult(WireModel):
    domain: str
    valid: bool
    issuer: str | None = None
    subject: str | None = None
    valid_from: str | None = None
    valid_to: str | None = None
    days_remaining: int | None = None
    protocol: str | None = None
    cipher: str | None = None
    certificate_chain: list[str] | None = None
    timestamp: str


# Security


class SafeBrowsing(WireModel):
    safe: bool = True
    threats: list[str] = Field(default_factory=list)


class SecurityResult(WireModel):
    url: str
    safe_browsing: SafeBrowsing = Field(default_factory=SafeBrowsing)
    https: bool
    mixed_content: bool
    security_score: int = Field(..., ge=0, le=100)
    timestamp: str


# Performance


class PerformanceMetrics(WireModel):
    ttfb: int | None = None
    fcp: int | None = None
    lcp: int | None = None


class PerformanceResult(WireModel):
    url: str
    load_time: int = Field(..., description="Elapsed milliseconds, request start to body end")
    response_time: int
    content_size: int
    status_code: int
    redirects: int
    metrics: PerformanceMetrics | None = None
    timestamp: str


# Headers


class SecurityHeader(WireModel):
    name: str
    present: bool
    value: str | None = None
    recommendation: str | None = None


class HeadersResult(WireModel):
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    security_headers: list[SecurityHeader]
    security_score: int = Field(..., ge=0, le=100)
    timestamp: str
