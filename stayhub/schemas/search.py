"""Pydantic v2 schemas for property search filters and paginated results."""

import uuid
from datetime import date

from pydantic import BaseModel, Field

from stayhub.schemas.property import PropertySearchResult

AMENITY_FLAGS = (
    "wheelchair_access",
    "pets_allowed",
    "smoking_allowed",
    "free_cancellation",
    "all_day_access",
)


class SearchFilters(BaseModel):
    """Guest search constraints. Every field is optional.

    Paired filters only apply when both halves are present: ``adults`` with
    ``children`` and ``start_date`` with ``end_date``. Dates narrow results
    only together with a party size.
    """

    city: uuid.UUID | None = None
    country: uuid.UUID | None = None
    geoobject: uuid.UUID | None = None
    adults: int | None = Field(None, ge=0)
    children: int | None = Field(None, ge=0)
    start_date: date | None = None
    end_date: date | None = None
    facilities: list[uuid.UUID] = Field(default_factory=list)
    price_from: int | None = Field(None, ge=0)
    price_to: int | None = Field(None, ge=0)
    wheelchair_access: bool | None = None
    pets_allowed: bool | None = None
    smoking_allowed: bool | None = None
    free_cancellation: bool | None = None
    all_day_access: bool | None = None

    @property
    def capacity_requested(self) -> bool:
        return self.adults is not None and self.children is not None

    @property
    def dates_requested(self) -> bool:
        return self.start_date is not None and self.end_date is not None

    @property
    def amenities(self) -> dict[str, bool]:
        """Amenity flags that were actually supplied."""
        return {name: getattr(self, name) for name in AMENITY_FLAGS if getattr(self, name) is not None}


class PaginationLinks(BaseModel):
    first: str
    last: str
    prev: str | None = None
    next: str | None = None


class PaginationMeta(BaseModel):
    current_page: int
    from_: int | None = Field(None, serialization_alias="from")
    last_page: int
    path: str
    per_page: int
    to: int | None = None
    total: int


class PropertyPage(BaseModel):
    """One page of search results with navigation links."""

    data: list[PropertySearchResult]
    links: PaginationLinks
    meta: PaginationMeta


class SearchResponse(BaseModel):
    """Search results plus facility counts over the whole matching set."""

    properties: PropertyPage
    facilities: dict[str, int]
