"""Tests for owner property creation and the public property view."""

import uuid
from datetime import date, timedelta

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.config import settings
from stayhub.schemas.property import PropertyCreate
from stayhub.services.errors import NotFoundError
from stayhub.services.properties import create_property, get_property_details, list_owner_properties
from tests.factories import make_apartment, make_booking, make_city, make_facility, make_property, make_user


def _geocoder(payload, status_code: int = 200) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(status_code, json=payload)))


class TestCreateProperty:
    async def test_geocodes_missing_coordinates(self, db_session: AsyncSession, monkeypatch):
        monkeypatch.setattr(settings, "geocoding_enabled", True)
        owner = await make_user(db_session, role="owner")
        city = await make_city(db_session)
        data = PropertyCreate(name="River View", city_id=city.id, address_street="10 Downing Street")

        async with _geocoder([{"lat": "51.5034", "lon": "-0.1276"}]) as client:
            prop = await create_property(db_session, owner.id, data, geocoder_client=client)

        assert (prop.lat, prop.long) == (51.5034, -0.1276)

    async def test_keeps_given_coordinates(self, db_session: AsyncSession, monkeypatch):
        monkeypatch.setattr(settings, "geocoding_enabled", True)
        owner = await make_user(db_session, role="owner")
        city = await make_city(db_session)
        data = PropertyCreate(name="Given", city_id=city.id, address_street="1 Road", lat=1.5, long=2.5)

        async with _geocoder([{"lat": "9", "lon": "9"}]) as client:
            prop = await create_property(db_session, owner.id, data, geocoder_client=client)

        assert (prop.lat, prop.long) == (1.5, 2.5)

    async def test_geocoder_failure_leaves_coordinates_empty(self, db_session: AsyncSession, monkeypatch, caplog):
        monkeypatch.setattr(settings, "geocoding_enabled", True)
        owner = await make_user(db_session, role="owner")
        city = await make_city(db_session)
        data = PropertyCreate(name="Offline", city_id=city.id, address_street="1 Road")

        async with _geocoder({"error": "busy"}, status_code=503) as client:
            prop = await create_property(db_session, owner.id, data, geocoder_client=client)

        assert prop.id is not None
        assert prop.lat is None and prop.long is None
        assert "Could not geocode" in caplog.text

    async def test_unknown_city(self, db_session: AsyncSession):
        owner = await make_user(db_session, role="owner")
        data = PropertyCreate(name="Lost", city_id=uuid.uuid4(), address_street="1 Road")

        with pytest.raises(NotFoundError):
            await create_property(db_session, owner.id, data)


async def test_list_owner_properties_scoped_to_owner(db_session: AsyncSession):
    owner = await make_user(db_session, role="owner")
    other = await make_user(db_session, role="owner")
    city = await make_city(db_session)
    for index in range(3):
        await make_property(db_session, owner, city, f"Mine {index}")
    await make_property(db_session, other, city, "Theirs")

    items, total = await list_owner_properties(db_session, owner.id, skip=0, limit=2)

    assert total == 3
    assert len(items) == 2
    assert all(item.owner_id == owner.id for item in items)


class TestGetPropertyDetails:
    async def test_lists_every_fitting_apartment_closest_first(self, db_session: AsyncSession):
        owner = await make_user(db_session, role="owner")
        guest = await make_user(db_session)
        prop = await make_property(db_session, owner, await make_city(db_session))
        balcony = await make_facility(db_session, "Balcony")
        await make_apartment(db_session, prop, "Large", adults=4, children=2)
        await make_apartment(db_session, prop, "Small", adults=1, children=0)
        medium = await make_apartment(db_session, prop, "Medium", adults=2, children=1, facilities=[balcony])
        booked = await make_apartment(db_session, prop, "Booked", adults=3, children=1)
        start = date(2026, 10, 1)
        await make_booking(db_session, booked, guest, start, start + timedelta(days=3))

        result = await get_property_details(db_session, prop.id, 2, 1, start, start + timedelta(days=1))

        assert [apartment.name for apartment in result.apartments] == ["Medium", "Large"]
        assert result.apartments[0].id == medium.id
        assert [facility.name for facility in result.apartments[0].facilities] == ["Balcony"]

    async def test_without_party_lists_all(self, db_session: AsyncSession):
        owner = await make_user(db_session, role="owner")
        prop = await make_property(db_session, owner, await make_city(db_session))
        await make_apartment(db_session, prop, "B")
        await make_apartment(db_session, prop, "A")

        result = await get_property_details(db_session, prop.id)

        assert [apartment.name for apartment in result.apartments] == ["A", "B"]

    async def test_unknown_property(self, db_session: AsyncSession):
        with pytest.raises(NotFoundError):
            await get_property_details(db_session, uuid.uuid4())
