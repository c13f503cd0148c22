"""Guest bookings API router.

Ownership rule: a guest only sees and changes bookings they made. Cancelled
bookings stay in the listing but can no longer be opened, rated or
cancelled again.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.api.deps import BOOKINGS_MANAGE, ensure_allowed, ensure_owns_booking, get_current_user, get_db
from stayhub.models.booking import Booking
from stayhub.models.user import User
from stayhub.schemas.booking import BookingCreate, BookingResponse, BookingUpdate
from stayhub.services import bookings as booking_service

router = APIRouter(prefix="/api/v1/user/bookings", tags=["bookings"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _get_active_booking(booking_id: uuid.UUID, current_user: User, db: AsyncSession) -> Booking:
    """Fetch a live booking and verify it belongs to the current user.

    Raises ``HTTPException 404`` for unknown or cancelled bookings and
    ``403`` for bookings of other users.
    """
    result = await db.execute(select(Booking).where(Booking.id == booking_id, Booking.deleted_at.is_(None)))
    booking = result.scalar_one_or_none()
    if booking is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found",
        )
    ensure_owns_booking(current_user, booking)
    return booking


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=list[BookingResponse],
    summary="List the current user's bookings, cancelled ones included",
)
async def list_bookings(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[BookingResponse]:
    ensure_allowed(current_user, BOOKINGS_MANAGE)
    result = await db.execute(
        select(Booking).where(Booking.user_id == current_user.id).order_by(Booking.start_date, Booking.created_at)
    )
    return [BookingResponse.from_booking(booking) for booking in result.scalars().all()]


@router.post(
    "",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Book an apartment",
)
async def create_booking(
    body: BookingCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BookingResponse:
    """Book an apartment for inclusive dates.

    The apartment must exist, fit the party and be free for the dates;
    every failed check is reported in a 422 response.
    """
    ensure_allowed(current_user, BOOKINGS_MANAGE)
    guests = [booking_service.GuestDetails(**guest.model_dump()) for guest in body.guests or []]
    booking = await booking_service.create_booking(
        db,
        user_id=current_user.id,
        apartment_id=body.apartment_id,
        start_date=body.start_date,
        end_date=body.end_date,
        adults=body.guests_adults,
        children=body.guests_children,
        guests=guests,
    )
    return BookingResponse.from_booking(booking)


@router.get("/{booking_id}", response_model=BookingResponse, summary="Get one of the user's bookings")
async def get_booking(
    booking_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BookingResponse:
    ensure_allowed(current_user, BOOKINGS_MANAGE)
    booking = await _get_active_booking(booking_id, current_user, db)
    return BookingResponse.from_booking(booking)


@router.put("/{booking_id}", response_model=BookingResponse, summary="Rate and review a booking")
async def update_booking(
    booking_id: uuid.UUID,
    body: BookingUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BookingResponse:
    """Set the rating and/or review; a rating change refreshes the property's average."""
    ensure_allowed(current_user, BOOKINGS_MANAGE)
    booking = await _get_active_booking(booking_id, current_user, db)
    booking = await booking_service.update_review(
        db,
        booking,
        rating=body.rating,
        review_comment=body.review_comment,
        fields_set=body.model_fields_set,
    )
    return BookingResponse.from_booking(booking)


@router.delete(
    "/{booking_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Cancel a booking",
)
async def cancel_booking(
    booking_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    """Cancel a booking. The record is kept and its dates become free again."""
    ensure_allowed(current_user, BOOKINGS_MANAGE)
    booking = await _get_active_booking(booking_id, current_user, db)
    await booking_service.cancel_booking(db, booking)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
