"""Address geocoding through a Nominatim-compatible HTTP endpoint."""

import logging

import httpx

from stayhub.config import settings
from stayhub.services.errors import GeocodingError

logger = logging.getLogger(__name__)


async def geocode_address(address: str, client: httpx.AsyncClient | None = None) -> tuple[float, float] | None:
    """Resolve a free-form address to ``(lat, long)``.

    Returns None when the geocoder knows no match.

    Raises:
        GeocodingError: On transport errors, non-2xx responses or malformed payloads.
    """
    params = {"q": address, "format": "json", "limit": 1}
    headers = {"User-Agent": settings.geocoding_user_agent}

    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=settings.geocoding_timeout_seconds)

    try:
        response = await client.get(settings.geocoding_url, params=params, headers=headers)
        response.raise_for_status()
        results = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        raise GeocodingError(f"Geocoding failed for {address!r}: {exc}") from exc
    finally:
        if owns_client:
            await client.aclose()

    if not results:
        return None

    try:
        first = results[0]
        return float(first["lat"]), float(first["lon"])
    except (KeyError, IndexError, TypeError, ValueError) as exc:
        raise GeocodingError(f"Unexpected geocoder payload for {address!r}") from exc
