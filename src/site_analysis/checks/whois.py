"""WHOIS registration check via RDAP.

RDAP servers are tried in order; the first one that answers 2xx with a
JSON body wins. A server that errors, answers non-2xx, or returns
something that is not JSON is skipped.
"""

import json
import logging
from typing import Any

import httpx

from site_analysis.config import settings
from site_analysis.dto import WhoisResult, iso_timestamp
from site_analysis.entities import CheckContext

logger = logging.getLogger(__name__)

RDAP_HEADERS = {"Accept": "application/json"}


def _find_entity(rdap: dict[str, Any], role: str) -> dict[str, Any] | None:
    for entity in rdap.get("entities") or []:
        if role in (entity.get("roles") or []):
            return entity
    return None


def _vcard_field(entity: dict[str, Any] | None, name: str) -> Any:
    """Return the value of a jCard property (``["fn", {}, "text", value]``)."""
    if not entity:
        return None
    vcard = entity.get("vcardArray") or []
    if len(vcard) < 2:
        return None
    for prop in vcard[1]:
        if prop and prop[0] == name and len(prop) > 3:
            return prop[3]
    return None


def _event_date(rdap: dict[str, Any], action: str) -> str | None:
    for event in rdap.get("events") or []:
        if event.get("eventAction") == action:
            return event.get("eventDate")
    return None


def parse_rdap(domain: str, rdap: dict[str, Any], timestamp: str) -> WhoisResult:
    """Map an RDAP domain object onto the WHOIS result shape."""
    registrant = _find_entity(rdap, "registrant")
    organization = _vcard_field(registrant, "org") or _vcard_field(registrant, "fn")
    if isinstance(organization, list):
        organization = organization[0] if organization else None

    nameservers = rdap.get("nameservers")
    return WhoisResult(
        domain=rdap.get("ldhName") or domain,
        registrar=_vcard_field(_find_entity(rdap, "registrar"), "fn"),
        registrant_organization=organization,
        registration_date=_event_date(rdap, "registration"),
        expiration_date=_event_date(rdap, "expiration"),
        updated_date=_event_date(rdap, "last changed"),
        name_servers=[ns.get("ldhName") for ns in nameservers] if nameservers is not None else None,
        status=rdap.get("status"),
        raw_data=json.dumps(rdap, indent=2, ensure_ascii=False),
        timestamp=timestamp,
    )


async def query_rdap(http: httpx.AsyncClient, domain: str) -> dict[str, Any] | None:
    """Return the first RDAP answer from the configured servers, or None."""
    for template in settings.rdap_servers:
        server = template.format(domain=domain)
        try:
            response = await http.get(server, headers=RDAP_HEADERS, follow_redirects=True)
            if not response.is_success:
                logger.warning("RDAP server %s answered %s", server, response.status_code)
                continue
            payload = response.json()
            if isinstance(payload, dict):
                return payload
            logger.warning("RDAP server %s returned a non-object body", server)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("RDAP server %s failed: %s", server, e)
    return None


async def fetch_whois(ctx: CheckContext, params: dict[str, str]) -> WhoisResult:
    domain = params["domain"]

    rdap = await query_rdap(ctx.http, domain)
    if rdap is None:
        raise RuntimeError("Unable to fetch WHOIS data")

    return parse_rdap(domain, rdap, iso_timestamp(ctx.clock()))
