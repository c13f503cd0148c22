"""Public property detail API route."""

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.api.deps import get_db
from stayhub.schemas.property import PropertySearchResult
from stayhub.services.properties import get_property_details

router = APIRouter(prefix="/api/v1/properties", tags=["properties"])


@router.get(
    "/{property_id}",
    response_model=PropertySearchResult,
    summary="Get a property with its suitable apartments",
)
async def get_property(
    property_id: uuid.UUID,
    adults: int | None = Query(None, ge=0),
    children: int | None = Query(None, ge=0),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> PropertySearchResult:
    """Every apartment that fits the party (closest fit first) with its facilities.

    Without ``adults`` and ``children`` all apartments are listed.
    """
    return await get_property_details(db, property_id, adults, children, start_date, end_date)
