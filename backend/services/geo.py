"""ip-api.com geolocation client for visitor hits.

Free API, no key required. Strictly best-effort: lookup() always returns a
GeoLocation and never raises.
"""

import ipaddress
import logging
from dataclasses import dataclass

import httpx

from config import settings
from errors import GeoLookupError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeoLocation:
    country: str
    city: str


UNKNOWN = GeoLocation("Unknown", "Unknown")


def _is_lookupable(ip: str) -> bool:
    """False for loopback, private and otherwise unroutable addresses."""
    if not ip or ip == "localhost":
        return False
    try:
        addr = ipaddress.ip_address(ip)
    except ValueError:
        return False
    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped:
        addr = addr.ipv4_mapped
    return not (addr.is_loopback or addr.is_private or addr.is_unspecified)


async def _fetch(ip: str, transport: httpx.AsyncBaseTransport | None) -> GeoLocation:
    try:
        async with httpx.AsyncClient(timeout=settings.geo_timeout, transport=transport) as client:
            resp = await client.get(
                f"{settings.geo_api_url.rstrip('/')}/{ip}",
                params={"fields": "status,message,country,city"},
            )
            resp.raise_for_status()
            data = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        raise GeoLookupError(f"Geolocation request failed: {e}") from e

    if not isinstance(data, dict) or data.get("status") != "success":
        reason = data.get("message") if isinstance(data, dict) else "malformed body"
        raise GeoLookupError(f"Geolocation refused: {reason}")

    return GeoLocation(
        country=data.get("country") or UNKNOWN.country,
        city=data.get("city") or UNKNOWN.city,
    )


async def lookup(ip: str, *, transport: httpx.AsyncBaseTransport | None = None) -> GeoLocation:
    """Resolve an address to country/city, or UNKNOWN on any failure."""
    if not _is_lookupable(ip):
        return UNKNOWN

    try:
        return await _fetch(ip, transport)
    except GeoLookupError as e:
        logger.warning("Geolocation lookup failed for %s: %s", ip, e)
        return UNKNOWN
