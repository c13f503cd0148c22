"""Apartment availability against active (not cancelled) bookings."""

import uuid
from collections.abc import Iterable
from datetime import date
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.models.booking import Booking
from stayhub.services.intervals import overlap_clause, overlaps


def is_available(bookings: Iterable[Any], start_date: date | None, end_date: date | None) -> bool:
    """Check loaded bookings of one apartment against a requested stay.

    Cancelled bookings never block. Without both dates no date filtering
    applies and the apartment counts as available.
    """
    if start_date is None or end_date is None:
        return True
    return not any(
        booking.deleted_at is None and overlaps(start_date, end_date, booking.start_date, booking.end_date)
        for booking in bookings
    )


def conflicting_bookings_query(start_date: date, end_date: date):
    """Apartment ids holding an active booking that overlaps the range."""
    return select(Booking.apartment_id).where(
        Booking.deleted_at.is_(None),
        overlap_clause(Booking.start_date, Booking.end_date, start_date, end_date),
    )


async def apartment_is_available(
    db: AsyncSession,
    apartment_id: uuid.UUID,
    start_date: date | None,
    end_date: date | None,
    exclude_booking_id: uuid.UUID | None = None,
) -> bool:
    """Store-backed availability check for a single apartment."""
    if start_date is None or end_date is None:
        return True

    query = conflicting_bookings_query(start_date, end_date).where(Booking.apartment_id == apartment_id)
    if exclude_booking_id is not None:
        query = query.where(Booking.id != exclude_booking_id)

    result = await db.execute(query.limit(1))
    return result.first() is None


async def find_unavailable_apartment_ids(
    db: AsyncSession,
    apartment_ids: Iterable[uuid.UUID],
    start_date: date | None,
    end_date: date | None,
) -> set[uuid.UUID]:
    """Batched variant: which of these apartments are booked during the range."""
    ids = list(apartment_ids)
    if not ids or start_date is None or end_date is None:
        return set()

    result = await db.execute(
        conflicting_bookings_query(start_date, end_date).where(Booking.apartment_id.in_(ids)).distinct()
    )
    return set(result.scalars().all())
