"""Pydantic v2 response schemas for apartments."""

import uuid
from datetime import date

from pydantic import BaseModel, ConfigDict


class FacilityResponse(BaseModel):
    """A facility as listed under an apartment."""

    id: uuid.UUID
    name: str

    model_config = ConfigDict(from_attributes=True)


class ApartmentSearchResult(BaseModel):
    """Apartment summary shown inside a property search result."""

    id: uuid.UUID
    name: str
    type: str | None = None
    size: int | None = None
    beds_list: str
    bathrooms: int
    price: int
    wheelchair_access: bool
    pets_allowed: bool
    smoking_allowed: bool
    free_cancellation: bool
    all_day_access: bool
    # Only present when apartment-level facilities were loaded (property detail)
    facilities: list[FacilityResponse] | None = None


class ApartmentDetailResponse(BaseModel):
    """Apartment detail page with facilities grouped by category."""

    id: uuid.UUID
    property_id: uuid.UUID
    name: str
    type: str | None = None
    size: int | None = None
    beds_list: str
    bathrooms: int
    capacity_adults: int
    capacity_children: int
    facility_categories: dict[str, list[str]]
    wheelchair_access: bool
    pets_allowed: bool
    smoking_allowed: bool
    free_cancellation: bool
    all_day_access: bool


class ApartmentPriceQuote(BaseModel):
    """Total price of a stay in an apartment."""

    apartment_id: uuid.UUID
    start_date: date
    end_date: date
    price: int
