"""Tests for the public apartment endpoints."""

import uuid
from datetime import date, timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories import add_price, make_apartment, make_city, make_facility, make_property

pytestmark = pytest.mark.asyncio

D0 = date(2026, 11, 1)


@pytest.fixture
async def apartment(db_session: AsyncSession, test_owner):
    kitchen = [
        await make_facility(db_session, "Oven", category="Kitchen"),
        await make_facility(db_session, "Fridge", category="Kitchen"),
    ]
    extras = [
        await make_facility(db_session, "Hairdryer", category="Bathroom"),
        await make_facility(db_session, "Board games"),
    ]
    prop = await make_property(db_session, test_owner, await make_city(db_session))
    return await make_apartment(
        db_session,
        prop,
        "Garden flat",
        adults=3,
        children=2,
        beds=["Single bed", "Single bed", "Sofa bed"],
        apartment_type="Entire apartment",
        facilities=kitchen + extras,
        wheelchair_access=True,
    )


class TestApartmentDetail:
    async def test_detail(self, client: AsyncClient, apartment) -> None:
        response = await client.get(f"/api/v1/apartments/{apartment.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Garden flat"
        assert data["type"] == "Entire apartment"
        assert data["beds_list"] == "3 beds (2 Single beds, 1 Sofa bed)"
        assert data["capacity_adults"] == 3
        assert data["wheelchair_access"] is True
        assert data["pets_allowed"] is False

    async def test_facilities_grouped_by_category(self, client: AsyncClient, apartment) -> None:
        data = (await client.get(f"/api/v1/apartments/{apartment.id}")).json()

        assert data["facility_categories"] == {
            "Other": ["Board games"],
            "Kitchen": ["Fridge", "Oven"],
            "Bathroom": ["Hairdryer"],
        }

    async def test_not_found(self, client: AsyncClient) -> None:
        response = await client.get(f"/api/v1/apartments/{uuid.uuid4()}")
        assert response.status_code == 404


class TestApartmentPrice:
    async def test_price_is_repeatable(self, client: AsyncClient, db_session: AsyncSession, apartment) -> None:
        await add_price(db_session, apartment, D0, D0 + timedelta(days=2), 100)
        await add_price(db_session, apartment, D0 + timedelta(days=3), D0 + timedelta(days=10), 90)
        params = {"start_date": D0.isoformat(), "end_date": (D0 + timedelta(days=4)).isoformat()}

        first = await client.get(f"/api/v1/apartments/{apartment.id}/price", params=params)
        second = await client.get(f"/api/v1/apartments/{apartment.id}/price", params=params)

        assert first.status_code == 200
        assert first.json()["price"] == 480
        assert second.json() == first.json()

    async def test_reversed_dates(self, client: AsyncClient, apartment) -> None:
        params = {"start_date": "2026-11-05", "end_date": "2026-11-01"}
        response = await client.get(f"/api/v1/apartments/{apartment.id}/price", params=params)
        assert response.status_code == 422

    async def test_unknown_apartment(self, client: AsyncClient) -> None:
        params = {"start_date": "2026-11-01", "end_date": "2026-11-02"}
        response = await client.get(f"/api/v1/apartments/{uuid.uuid4()}/price", params=params)
        assert response.status_code == 404
