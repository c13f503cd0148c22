"""Property search: filtering, closest-fit apartment choice, pricing and facets.

The search runs in three steps so every relation is fetched in a bounded
number of queries:

1. Filters are resolved into SQL conditions over ``properties``. Radius
   search narrows by bounding box, then by haversine distance, both in SQL.
2. The database counts, orders by rating and paginates the match; facility
   counts run over the same match as a subquery. Only the page's ids reach
   Python.
3. The page's properties are loaded with the relations the response needs,
   plus one batched query each for availability and price periods.
"""

import logging
import math
import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from sqlalchemy import Select, distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from stayhub.config import settings
from stayhub.models.apartment import Apartment, ApartmentPrice, Room
from stayhub.models.facility import Facility, facility_property
from stayhub.models.location import City, Geoobject
from stayhub.models.property import Property
from stayhub.schemas.apartment import ApartmentSearchResult, FacilityResponse
from stayhub.schemas.property import PropertySearchResult
from stayhub.schemas.search import SearchFilters
from stayhub.services.availability import conflicting_bookings_query, find_unavailable_apartment_ids
from stayhub.services.beds import apartment_bed_type_names, format_beds_list
from stayhub.services.capacity import select_best_apartment
from stayhub.services.geo import bounding_box, within_radius_clause
from stayhub.services.pricing import calculate_price, default_stay_dates, load_prices_for_range

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """A page of matching properties plus facility counts for the whole match."""

    properties: list[PropertySearchResult]
    total: int
    page: int
    per_page: int
    facilities: dict[str, int]

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))


# ---------------------------------------------------------------------------
# Presentation helpers (shared with the property detail endpoint)
# ---------------------------------------------------------------------------


def property_address(prop: Property) -> str:
    """``"{street}, {postcode}, {city}"``, skipping empty parts."""
    parts = [prop.address_street, prop.address_postcode, prop.city.name if prop.city else None]
    return ", ".join(part for part in parts if part)


def apartment_summary(
    apartment: Apartment,
    prices: Iterable[ApartmentPrice],
    start_date: date,
    end_date: date,
    include_facilities: bool = False,
) -> ApartmentSearchResult:
    return ApartmentSearchResult(
        id=apartment.id,
        name=apartment.name,
        type=apartment.apartment_type.name if apartment.apartment_type else None,
        size=apartment.size,
        beds_list=format_beds_list(apartment_bed_type_names(apartment)),
        bathrooms=apartment.bathrooms,
        price=calculate_price(prices, start_date, end_date),
        wheelchair_access=apartment.wheelchair_access,
        pets_allowed=apartment.pets_allowed,
        smoking_allowed=apartment.smoking_allowed,
        free_cancellation=apartment.free_cancellation,
        all_day_access=apartment.all_day_access,
        facilities=(
            [FacilityResponse.model_validate(facility) for facility in apartment.facilities]
            if include_facilities
            else None
        ),
    )


def build_property_result(
    prop: Property,
    apartments: Iterable[Apartment],
    prices: dict[uuid.UUID, list[ApartmentPrice]],
    start_date: date,
    end_date: date,
    include_facilities: bool = False,
) -> PropertySearchResult:
    return PropertySearchResult(
        id=prop.id,
        name=prop.name,
        address=property_address(prop),
        lat=prop.lat,
        long=prop.long,
        apartments=[
            apartment_summary(apartment, prices.get(apartment.id, []), start_date, end_date, include_facilities)
            for apartment in apartments
        ],
        photos=[photo.url for photo in prop.photos],
        avg_rating=prop.average_rating,
    )


def pricing_dates(filters: SearchFilters, today: date | None = None) -> tuple[date, date]:
    """Dates used to price shown apartments: the requested ones or tomorrow/day after."""
    default_start, default_end = default_stay_dates(today)
    return filters.start_date or default_start, filters.end_date or default_end


def matches_amenities(apartment: Apartment, amenities: dict[str, bool]) -> bool:
    return all(getattr(apartment, name) == value for name, value in amenities.items())


# ---------------------------------------------------------------------------
# Filter resolution
# ---------------------------------------------------------------------------


def _apartment_conditions(filters: SearchFilters) -> list:
    """Conditions a single apartment must meet for its property to match."""
    conditions = [getattr(Apartment, name) == value for name, value in filters.amenities.items()]
    if filters.capacity_requested:
        conditions.append(Apartment.capacity_adults >= filters.adults)
        conditions.append(Apartment.capacity_children >= filters.children)
        if filters.dates_requested:
            conditions.append(
                Apartment.id.not_in(conflicting_bookings_query(filters.start_date, filters.end_date))
            )
    return conditions


async def _resolve_geoobject(db: AsyncSession, geoobject_id: uuid.UUID | None) -> Geoobject | None:
    if geoobject_id is None:
        return None
    geoobject = await db.get(Geoobject, geoobject_id)
    if geoobject is None:
        # Radius search is best effort: an unknown point means no geographic filter
        logger.info("Ignoring unknown geoobject %s in search", geoobject_id)
    return geoobject


def _property_conditions(filters: SearchFilters, center: Geoobject | None, radius_km: float) -> list:
    conditions = []

    if filters.city is not None:
        conditions.append(Property.city_id == filters.city)

    if filters.country is not None:
        conditions.append(Property.city_id.in_(select(City.id).where(City.country_id == filters.country)))

    if center is not None:
        min_lat, max_lat, min_lon, max_lon = bounding_box(center.lat, center.long, radius_km)
        conditions.extend([Property.lat.is_not(None), Property.long.is_not(None)])
        conditions.append(Property.lat.between(min_lat, max_lat))
        # Near the antimeridian the box wraps; leave longitude to the exact check
        if min_lon >= -180 and max_lon <= 180:
            conditions.append(Property.long.between(min_lon, max_lon))
        conditions.append(within_radius_clause(Property.lat, Property.long, center.lat, center.long, radius_km))

    apartment_conditions = _apartment_conditions(filters)
    if apartment_conditions:
        conditions.append(Property.id.in_(select(Apartment.property_id).where(*apartment_conditions)))

    if filters.facilities:
        conditions.append(
            Property.id.in_(
                select(facility_property.c.property_id).where(
                    facility_property.c.facility_id.in_(filters.facilities)
                )
            )
        )

    if filters.price_from is not None:
        conditions.append(
            Property.id.in_(
                select(Apartment.property_id)
                .join(ApartmentPrice, ApartmentPrice.apartment_id == Apartment.id)
                .where(ApartmentPrice.price >= filters.price_from)
            )
        )

    if filters.price_to is not None:
        conditions.append(
            Property.id.in_(
                select(Apartment.property_id)
                .join(ApartmentPrice, ApartmentPrice.apartment_id == Apartment.id)
                .where(ApartmentPrice.price <= filters.price_to)
            )
        )

    return conditions


# Highest rating first, unrated last; creation time and id keep pages stable
_RATING_ORDER = (
    Property.average_rating.is_(None),
    Property.average_rating.desc(),
    Property.created_at,
    Property.id,
)


async def _matching_conditions(db: AsyncSession, filters: SearchFilters, radius_km: float) -> list:
    center = await _resolve_geoobject(db, filters.geoobject)
    return _property_conditions(filters, center, radius_km)


# ---------------------------------------------------------------------------
# Facets
# ---------------------------------------------------------------------------


async def count_facilities(db: AsyncSession, property_ids: Select | list[uuid.UUID]) -> dict[str, int]:
    """Property-level facility name -> number of the given properties having it.

    ``property_ids`` is either a list of ids or a select of ``Property.id``.
    Zero counts are omitted; the mapping is ordered by count, highest first.
    """
    if isinstance(property_ids, list) and not property_ids:
        return {}

    properties_count = func.count(distinct(facility_property.c.property_id))
    result = await db.execute(
        select(Facility.name, properties_count)
        .join(facility_property, facility_property.c.facility_id == Facility.id)
        .where(facility_property.c.property_id.in_(property_ids))
        .group_by(Facility.name)
        .order_by(properties_count.desc(), Facility.name)
    )
    return {name: count for name, count in result.all() if count > 0}


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


async def _load_properties(db: AsyncSession, property_ids: list[uuid.UUID]) -> list[Property]:
    """Load properties with everything a search card needs, in the given order."""
    if not property_ids:
        return []

    result = await db.execute(
        select(Property)
        .where(Property.id.in_(property_ids))
        .options(
            selectinload(Property.photos),
            selectinload(Property.apartments).selectinload(Apartment.rooms).selectinload(Room.beds),
        )
        .execution_options(populate_existing=True)
    )
    by_id = {prop.id: prop for prop in result.scalars().all()}
    return [by_id[property_id] for property_id in property_ids if property_id in by_id]


def _shown_apartments(
    prop: Property,
    filters: SearchFilters,
    unavailable: set[uuid.UUID],
) -> list[Apartment]:
    amenities = filters.amenities
    apartments = [apartment for apartment in prop.apartments if matches_amenities(apartment, amenities)]

    if not filters.capacity_requested:
        return apartments

    best = select_best_apartment(
        apartments,
        filters.adults,
        filters.children,
        is_available=lambda apartment: apartment.id not in unavailable,
    )
    return [best] if best is not None else []


async def search_properties(
    db: AsyncSession,
    filters: SearchFilters,
    page: int = 1,
    per_page: int | None = None,
    today: date | None = None,
) -> SearchResult:
    """Search properties matching ``filters`` and return one page of results.

    Results are ordered by average rating, highest first and unrated last.
    With a party size each property shows only its closest-fitting apartment
    (free for the requested dates, when given). Facility counts cover every
    matching property, not only the current page.
    """
    per_page = per_page or settings.search_page_size
    page = max(page, 1)

    conditions = await _matching_conditions(db, filters, settings.search_radius_km)
    matching_ids = select(Property.id).where(*conditions)

    total = await db.scalar(select(func.count()).select_from(Property).where(*conditions)) or 0
    facilities = await count_facilities(db, matching_ids)

    page_ids = list(
        await db.scalars(matching_ids.order_by(*_RATING_ORDER).offset((page - 1) * per_page).limit(per_page))
    )
    properties = await _load_properties(db, page_ids)

    all_apartment_ids = [apartment.id for prop in properties for apartment in prop.apartments]
    unavailable: set[uuid.UUID] = set()
    if filters.capacity_requested and filters.dates_requested:
        unavailable = await find_unavailable_apartment_ids(
            db, all_apartment_ids, filters.start_date, filters.end_date
        )

    shown = {prop.id: _shown_apartments(prop, filters, unavailable) for prop in properties}

    start_date, end_date = pricing_dates(filters, today)
    prices = await load_prices_for_range(
        db,
        [apartment.id for apartments in shown.values() for apartment in apartments],
        start_date,
        end_date,
    )

    results = [build_property_result(prop, shown[prop.id], prices, start_date, end_date) for prop in properties]

    logger.debug("Search matched %d properties, returning page %d (%d items)", total, page, len(results))
    return SearchResult(
        properties=results,
        total=total,
        page=page,
        per_page=per_page,
        facilities=facilities,
    )
