"""Public apartment detail and pricing API routes."""

import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.api.deps import get_db
from stayhub.schemas.apartment import ApartmentDetailResponse, ApartmentPriceQuote
from stayhub.services.apartments import get_apartment_details
from stayhub.services.pricing import compute_apartment_price

router = APIRouter(prefix="/api/v1/apartments", tags=["apartments"])


@router.get("/{apartment_id}", response_model=ApartmentDetailResponse, summary="Get an apartment")
async def get_apartment(
    apartment_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> ApartmentDetailResponse:
    """Apartment with its beds list and facilities grouped by category."""
    return await get_apartment_details(db, apartment_id)


@router.get("/{apartment_id}/price", response_model=ApartmentPriceQuote, summary="Price a stay")
async def get_apartment_price(
    apartment_id: uuid.UUID,
    start_date: date = Query(...),
    end_date: date = Query(...),
    db: AsyncSession = Depends(get_db),
) -> ApartmentPriceQuote:
    """Total price of the inclusive stay ``[start_date, end_date]``."""
    if end_date < start_date:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="end_date must not be before start_date",
        )
    price = await compute_apartment_price(db, apartment_id, start_date, end_date)
    return ApartmentPriceQuote(apartment_id=apartment_id, start_date=start_date, end_date=end_date, price=price)
