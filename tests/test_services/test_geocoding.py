"""Tests for the Nominatim geocoder client."""

import httpx
import pytest

from stayhub.config import settings
from stayhub.services.errors import GeocodingError
from stayhub.services.geocoding import geocode_address


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestGeocodeAddress:
    async def test_returns_first_match(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["q"] = request.url.params["q"]
            seen["agent"] = request.headers["User-Agent"]
            return httpx.Response(200, json=[{"lat": "51.5007", "lon": "-0.1246"}, {"lat": "0", "lon": "0"}])

        async with _client(handler) as client:
            result = await geocode_address("Westminster, London", client=client)

        assert result == (51.5007, -0.1246)
        assert seen["q"] == "Westminster, London"
        assert seen["agent"] == settings.geocoding_user_agent

    async def test_no_match(self):
        async with _client(lambda request: httpx.Response(200, json=[])) as client:
            assert await geocode_address("Nowhere", client=client) is None

    async def test_http_error(self):
        async with _client(lambda request: httpx.Response(503)) as client:
            with pytest.raises(GeocodingError):
                await geocode_address("London", client=client)

    async def test_malformed_payload(self):
        async with _client(lambda request: httpx.Response(200, json=[{"latitude": 1}])) as client:
            with pytest.raises(GeocodingError):
                await geocode_address("London", client=client)

    async def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        async with _client(handler) as client:
            with pytest.raises(GeocodingError):
                await geocode_address("London", client=client)
