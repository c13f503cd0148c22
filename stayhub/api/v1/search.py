"""Public property search API route."""

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.api.deps import get_db
from stayhub.schemas.search import (
    PaginationLinks,
    PaginationMeta,
    PropertyPage,
    SearchFilters,
    SearchResponse,
)
from stayhub.services.search import SearchResult, search_properties

router = APIRouter(prefix="/api/v1/search", tags=["search"])


def search_filters(
    city: uuid.UUID | None = Query(None, description="City id"),
    country: uuid.UUID | None = Query(None, description="Country id"),
    geoobject: uuid.UUID | None = Query(None, description="Point of interest; properties within the search radius"),
    adults: int | None = Query(None, ge=0),
    children: int | None = Query(None, ge=0),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    facilities: list[uuid.UUID] = Query([], description="Property must have at least one of these"),
    price_from: int | None = Query(None, ge=0),
    price_to: int | None = Query(None, ge=0),
    wheelchair_access: bool | None = Query(None),
    pets_allowed: bool | None = Query(None),
    smoking_allowed: bool | None = Query(None),
    free_cancellation: bool | None = Query(None),
    all_day_access: bool | None = Query(None),
) -> SearchFilters:
    return SearchFilters(
        city=city,
        country=country,
        geoobject=geoobject,
        adults=adults,
        children=children,
        start_date=start_date,
        end_date=end_date,
        facilities=facilities,
        price_from=price_from,
        price_to=price_to,
        wheelchair_access=wheelchair_access,
        pets_allowed=pets_allowed,
        smoking_allowed=smoking_allowed,
        free_cancellation=free_cancellation,
        all_day_access=all_day_access,
    )


def _page_url(request: Request, page: int) -> str:
    return str(request.url.include_query_params(page=page))


def _paginate(request: Request, result: SearchResult) -> PropertyPage:
    offset = (result.page - 1) * result.per_page
    shown = len(result.properties)
    last_page = result.last_page

    return PropertyPage(
        data=result.properties,
        links=PaginationLinks(
            first=_page_url(request, 1),
            last=_page_url(request, last_page),
            prev=_page_url(request, result.page - 1) if result.page > 1 else None,
            next=_page_url(request, result.page + 1) if result.page < last_page else None,
        ),
        meta=PaginationMeta(
            current_page=result.page,
            from_=offset + 1 if shown else None,
            last_page=last_page,
            path=str(request.url.replace(query="")),
            per_page=result.per_page,
            to=offset + shown if shown else None,
            total=result.total,
        ),
    )


@router.get(
    "",
    response_model=SearchResponse,
    response_model_by_alias=True,
    summary="Search properties",
)
async def search(
    request: Request,
    filters: SearchFilters = Depends(search_filters),
    page: int = Query(1, ge=1),
    db: AsyncSession = Depends(get_db),
) -> SearchResponse:
    """Search properties by location, party size, dates, facilities, price and amenities.

    Results are paginated ten per page and ordered by average rating. The
    ``facilities`` map counts facilities over every matching property.
    """
    result = await search_properties(db, filters, page=page)
    return SearchResponse(
        properties=_paginate(request, result),
        facilities=result.facilities,
    )
