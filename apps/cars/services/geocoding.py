"""
Geocoding client.

Talks to a Nominatim compatible HTTP API for reverse geocoding (parking
spot -> street address) and free-text place search.
"""

from dataclasses import dataclass
from typing import List

import requests
from django.conf import settings

from .exceptions import GeocodingError


@dataclass(frozen=True)
class PlaceCandidate:
    name: str
    address: str
    latitude: float
    longitude: float


def _get(path: str, params: dict):
    url = f"{settings.GEOCODER_BASE_URL.rstrip('/')}/{path}"
    headers = {"User-Agent": settings.GEOCODER_USER_AGENT}

    try:
        response = requests.get(
            url,
            params=params,
            headers=headers,
            timeout=settings.GEOCODER_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        return response.json()
    except (requests.RequestException, ValueError) as e:
        raise GeocodingError(f"Geocoding request failed: {e}") from e


def format_address(address: dict) -> str:
    """Render a Nominatim address block as "street number, city"."""
    street = address.get("road") or address.get("pedestrian") or ""
    number = address.get("house_number") or ""
    city = (
        address.get("city")
        or address.get("town")
        or address.get("village")
        or address.get("municipality")
        or ""
    )

    street_line = " ".join(part for part in (street, number) if part)
    return ", ".join(part for part in (street_line, city) if part)


def reverse_geocode(latitude: float, longitude: float) -> str:
    """
    Resolve a coordinate to a human-readable address.

    Raises:
        GeocodingError: If the provider fails or knows no address there
    """
    data = _get("reverse", {
        "format": "jsonv2",
        "lat": latitude,
        "lon": longitude,
        "addressdetails": 1,
    })

    if not isinstance(data, dict) or data.get("error"):
        raise GeocodingError(f"No address found for {latitude}, {longitude}")

    address = format_address(data.get("address") or {}) or data.get("display_name", "")
    if not address:
        raise GeocodingError(f"No address found for {latitude}, {longitude}")

    return address


def search_places(query: str, limit: int = 10) -> List[PlaceCandidate]:
    """
    Search places matching a free-text query.

    Raises:
        GeocodingError: If the provider fails
    """
    query = (query or "").strip()
    if not query:
        return []

    results = _get("search", {
        "q": query.lower(),
        "format": "jsonv2",
        "addressdetails": 1,
        "limit": limit,
    })

    places = []
    for item in results or []:
        try:
            latitude = float(item["lat"])
            longitude = float(item["lon"])
        except (KeyError, TypeError, ValueError):
            continue

        places.append(PlaceCandidate(
            name=item.get("name") or item.get("display_name", ""),
            address=format_address(item.get("address") or {}) or item.get("display_name", ""),
            latitude=latitude,
            longitude=longitude,
        ))

    return places
