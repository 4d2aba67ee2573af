"""Google Geocoding API client: free-text address to country / admin / city."""

import logging
from dataclasses import dataclass

import httpx

from tinyhouse.config import settings
from tinyhouse.errors import UpstreamError

logger = logging.getLogger(__name__)

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"


@dataclass(frozen=True)
class GeocodedAddress:
    country: str | None = None
    admin: str | None = None
    city: str | None = None


def parse_address_components(components: list[dict]) -> GeocodedAddress:
    """Pick country, first-level administrative area and city out of Google's components."""
    country = admin = city = None
    for component in components:
        types = component.get("types", [])
        if "country" in types:
            country = component["long_name"]
        if "administrative_area_level_1" in types:
            admin = component["long_name"]
        if "locality" in types or "postal_town" in types:
            city = component["long_name"]
    return GeocodedAddress(country=country, admin=admin, city=city)


async def geocode(address: str) -> GeocodedAddress:
    """Resolve ``address`` with the Geocoding API.

    An address Google cannot place yields an empty ``GeocodedAddress``;
    any other non-OK status is raised as ``UpstreamError``.
    """
    logger.info("Geocoding address %r", address)
    async with httpx.AsyncClient() as client:
        try:
            response = await client.get(
                GEOCODE_URL,
                params={"address": address, "key": settings.google_geocode_key},
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise UpstreamError(f"failed to geocode address: {exc}") from exc

    body = response.json()
    status = body.get("status")
    if status == "ZERO_RESULTS":
        return GeocodedAddress()
    if status != "OK":
        raise UpstreamError(f"failed to geocode address: {status} {body.get('error_message', '')}".strip())

    return parse_address_components(body["results"][0]["address_components"])
