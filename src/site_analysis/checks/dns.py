"""DNS resolution check over DNS-over-HTTPS (JSON answer format)."""

import logging
from typing import Any

from site_analysis.config import settings
from site_analysis.dto import DNSLookupResult, DNSRecord, DNSRecordType, iso_timestamp
from site_analysis.entities import CheckContext

logger = logging.getLogger(__name__)

DOH_HEADERS = {"Accept": "application/dns-json"}


def parse_answer(payload: dict[str, Any]) -> list[DNSRecord]:
    """Turn a DoH JSON answer into records, naming each numeric type."""
    return [
        DNSRecord(
            name=record.get("name"),
            type=DNSRecordType.from_number(record.get("type")),
            ttl=record.get("TTL"),
            data=record.get("data"),
        )
        for record in payload.get("Answer") or []
    ]


async def fetch_dns(ctx: CheckContext, params: dict[str, str]) -> DNSLookupResult:
    domain = params["domain"]
    record_type = DNSRecordType(params["type"])

    response = await ctx.http.get(
        settings.doh_url,
        params={"name": domain, "type": record_type.number},
        headers=DOH_HEADERS,
    )
    if not response.is_success:
        logger.warning("DoH resolver answered %s for %s", response.status_code, domain)
        raise RuntimeError("DNS lookup failed")

    records = parse_answer(response.json())
    return DNSLookupResult(
        domain=domain,
        record_type=record_type.value,
        records=records,
        timestamp=iso_timestamp(ctx.clock()),
    )
