"""Property creation for owners and the public property detail view."""

import logging
import uuid
from datetime import date

import httpx
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from stayhub.config import settings
from stayhub.models.apartment import Apartment, Room
from stayhub.models.location import City
from stayhub.models.property import Property
from stayhub.schemas.property import PropertyCreate, PropertySearchResult
from stayhub.schemas.search import SearchFilters
from stayhub.services.availability import find_unavailable_apartment_ids
from stayhub.services.capacity import suitable_apartments
from stayhub.services.errors import GeocodingError, NotFoundError
from stayhub.services.geocoding import geocode_address
from stayhub.services.pricing import load_prices_for_range
from stayhub.services.search import build_property_result, pricing_dates

logger = logging.getLogger(__name__)


async def create_property(
    db: AsyncSession,
    owner_id: uuid.UUID,
    data: PropertyCreate,
    geocoder_client: httpx.AsyncClient | None = None,
) -> Property:
    """Create a property; geocode the address when coordinates are missing.

    A geocoding failure is logged and leaves the coordinates empty.

    Raises:
        NotFoundError: If ``data.city_id`` does not exist.
    """
    city = await db.get(City, data.city_id)
    if city is None:
        raise NotFoundError("City", data.city_id)

    prop = Property(owner_id=owner_id, **data.model_dump())

    if prop.lat is None and prop.long is None and settings.geocoding_enabled:
        parts = [prop.address_street, prop.address_postcode, city.name, city.country.name if city.country else None]
        full_address = ", ".join(part for part in parts if part)
        try:
            coordinates = await geocode_address(full_address, client=geocoder_client)
        except GeocodingError:
            logger.warning("Could not geocode %r; property saved without coordinates", full_address, exc_info=True)
            coordinates = None
        if coordinates is not None:
            prop.lat, prop.long = coordinates

    db.add(prop)
    await db.flush()
    await db.refresh(prop)
    logger.info("Property created: %s (owner %s)", prop.id, owner_id)
    return prop


async def list_owner_properties(
    db: AsyncSession,
    owner_id: uuid.UUID,
    skip: int = 0,
    limit: int = 20,
) -> tuple[list[Property], int]:
    """Return one page of an owner's properties and the total count."""
    total = (
        await db.execute(select(func.count()).select_from(Property).where(Property.owner_id == owner_id))
    ).scalar_one()
    result = await db.execute(
        select(Property)
        .where(Property.owner_id == owner_id)
        .order_by(Property.created_at.desc(), Property.id)
        .offset(skip)
        .limit(limit)
    )
    return list(result.scalars().all()), total


async def get_property_details(
    db: AsyncSession,
    property_id: uuid.UUID,
    adults: int | None = None,
    children: int | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    today: date | None = None,
) -> PropertySearchResult:
    """Public property page.

    Unlike search, every apartment fitting the party is listed (closest fit
    first), each with its apartment-level facilities.

    Raises:
        NotFoundError: If the property does not exist.
    """
    result = await db.execute(
        select(Property)
        .where(Property.id == property_id)
        .options(
            selectinload(Property.photos),
            selectinload(Property.apartments).selectinload(Apartment.rooms).selectinload(Room.beds),
            selectinload(Property.apartments).selectinload(Apartment.facilities),
        )
        .execution_options(populate_existing=True)
    )
    prop = result.scalar_one_or_none()
    if prop is None:
        raise NotFoundError("Property", property_id)

    filters = SearchFilters(adults=adults, children=children, start_date=start_date, end_date=end_date)

    unavailable: set[uuid.UUID] = set()
    if filters.capacity_requested and filters.dates_requested:
        unavailable = await find_unavailable_apartment_ids(
            db, [apartment.id for apartment in prop.apartments], start_date, end_date
        )

    apartments = suitable_apartments(
        prop.apartments,
        filters.adults,
        filters.children,
        is_available=lambda apartment: apartment.id not in unavailable,
    )

    price_start, price_end = pricing_dates(filters, today)
    prices = await load_prices_for_range(db, [apartment.id for apartment in apartments], price_start, price_end)
    return build_property_result(prop, apartments, prices, price_start, price_end, include_facilities=True)
