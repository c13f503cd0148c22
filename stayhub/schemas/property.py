"""Pydantic v2 request/response schemas for property endpoints."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from stayhub.schemas.apartment import ApartmentSearchResult

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class PropertyCreate(BaseModel):
    """Schema for an owner creating a property.

    Coordinates are optional; missing ones are geocoded from the address.
    """

    name: str = Field(..., min_length=1, max_length=255)
    city_id: uuid.UUID
    address_street: str = Field(..., min_length=1, max_length=255)
    address_postcode: str | None = Field(None, max_length=50)
    lat: float | None = Field(None, ge=-90, le=90)
    long: float | None = Field(None, ge=-180, le=180)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PropertyResponse(BaseModel):
    """Property as returned to its owner."""

    id: uuid.UUID
    owner_id: uuid.UUID
    city_id: uuid.UUID
    name: str
    address_street: str
    address_postcode: str | None = None
    lat: float | None = None
    long: float | None = None
    average_rating: float | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PropertyListResponse(BaseModel):
    """Paginated list of an owner's properties."""

    items: list[PropertyResponse]
    total: int


class PropertySearchResult(BaseModel):
    """Property card in search results and on the public detail page."""

    id: uuid.UUID
    name: str
    address: str
    lat: float | None = None
    long: float | None = None
    apartments: list[ApartmentSearchResult]
    photos: list[str]
    avg_rating: float | None = None
