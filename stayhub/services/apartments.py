"""Apartment detail view."""

import uuid
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from stayhub.models.apartment import Apartment, Room
from stayhub.models.facility import Facility
from stayhub.schemas.apartment import ApartmentDetailResponse
from stayhub.services.beds import apartment_bed_type_names, format_beds_list
from stayhub.services.errors import NotFoundError

UNCATEGORIZED = "Other"


def group_facilities_by_category(facilities: Iterable[Facility]) -> dict[str, list[str]]:
    """Category name -> facility names, both in first-seen order."""
    grouped: dict[str, list[str]] = {}
    for facility in facilities:
        category = facility.category.name if facility.category else UNCATEGORIZED
        grouped.setdefault(category, []).append(facility.name)
    return grouped


async def get_apartment_details(db: AsyncSession, apartment_id: uuid.UUID) -> ApartmentDetailResponse:
    """Load an apartment with beds and categorised facilities.

    Raises:
        NotFoundError: If the apartment does not exist.
    """
    result = await db.execute(
        select(Apartment)
        .where(Apartment.id == apartment_id)
        .options(
            selectinload(Apartment.rooms).selectinload(Room.beds),
            selectinload(Apartment.facilities),
        )
        .execution_options(populate_existing=True)
    )
    apartment = result.scalar_one_or_none()
    if apartment is None:
        raise NotFoundError("Apartment", apartment_id)

    facilities = sorted(apartment.facilities, key=lambda facility: facility.name)
    return ApartmentDetailResponse(
        id=apartment.id,
        property_id=apartment.property_id,
        name=apartment.name,
        type=apartment.apartment_type.name if apartment.apartment_type else None,
        size=apartment.size,
        beds_list=format_beds_list(apartment_bed_type_names(apartment)),
        bathrooms=apartment.bathrooms,
        capacity_adults=apartment.capacity_adults,
        capacity_children=apartment.capacity_children,
        facility_categories=group_facilities_by_category(facilities),
        wheelchair_access=apartment.wheelchair_access,
        pets_allowed=apartment.pets_allowed,
        smoking_allowed=apartment.smoking_allowed,
        free_cancellation=apartment.free_cancellation,
        all_day_access=apartment.all_day_access,
    )
