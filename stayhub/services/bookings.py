"""Booking lifecycle: pre-commit validation, creation, review and cancellation."""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.models.apartment import Apartment
from stayhub.models.booking import Booking, BookingGuest
from stayhub.services.availability import apartment_is_available
from stayhub.services.capacity import fits_party
from stayhub.services.errors import (
    APARTMENT_NOT_FOUND,
    CAPACITY_EXCEEDED,
    DATE_RANGE_UNAVAILABLE,
    BookingValidationError,
    ValidationIssue,
)
from stayhub.services.pricing import calculate_price, load_prices_for_range
from stayhub.services.ratings import on_booking_rating_changed

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Outcome of the booking pre-commit gate; lists every failed constraint."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues

    @property
    def kinds(self) -> list[str]:
        return [issue.kind for issue in self.issues]


@dataclass
class GuestDetails:
    first_name: str
    last_name: str
    birth_date: date


async def validate_booking_request(
    db: AsyncSession,
    apartment_id: uuid.UUID,
    start_date: date,
    end_date: date,
    adults: int,
    children: int,
    exclude_booking_id: uuid.UUID | None = None,
    lock: bool = False,
) -> ValidationResult:
    """Check capacity and date availability for a prospective booking.

    With ``lock=True`` the apartment row is selected ``FOR UPDATE`` so the
    check and the following insert serialise against concurrent bookings of
    the same apartment (on backends that support row locks).
    """
    result = ValidationResult()

    query = select(Apartment).where(Apartment.id == apartment_id)
    if lock:
        query = query.with_for_update()
    apartment = (await db.execute(query)).scalar_one_or_none()

    if apartment is None:
        result.issues.append(ValidationIssue(APARTMENT_NOT_FOUND, "Sorry, this apartment is not found"))
        return result

    if not fits_party(apartment, adults, children):
        result.issues.append(
            ValidationIssue(CAPACITY_EXCEEDED, "Sorry, this apartment does not fit all your guests")
        )

    if not await apartment_is_available(db, apartment_id, start_date, end_date, exclude_booking_id):
        result.issues.append(
            ValidationIssue(DATE_RANGE_UNAVAILABLE, "Sorry, this apartment is not available for those dates")
        )

    return result


async def create_booking(
    db: AsyncSession,
    user_id: uuid.UUID,
    apartment_id: uuid.UUID,
    start_date: date,
    end_date: date,
    adults: int,
    children: int,
    guests: list[GuestDetails] | None = None,
) -> Booking:
    """Validate under a row lock, price and persist a booking.

    ``total_price`` is computed here once and never recomputed.

    Raises:
        BookingValidationError: If any constraint of the gate fails.
    """
    validation = await validate_booking_request(
        db, apartment_id, start_date, end_date, adults, children, lock=True
    )
    if not validation.ok:
        raise BookingValidationError(validation.issues)

    prices = await load_prices_for_range(db, [apartment_id], start_date, end_date)
    booking = Booking(
        apartment_id=apartment_id,
        user_id=user_id,
        start_date=start_date,
        end_date=end_date,
        guests_adults=adults,
        guests_children=children,
        total_price=calculate_price(prices[apartment_id], start_date, end_date),
        guests=[
            BookingGuest(
                first_name=guest.first_name,
                last_name=guest.last_name,
                birth_date=guest.birth_date,
                position=position,
            )
            for position, guest in enumerate(guests or [])
        ],
    )
    db.add(booking)
    await db.flush()
    await db.refresh(booking)

    logger.info(
        "Booking %s created: apartment %s, %s..%s, total %s",
        booking.id,
        apartment_id,
        start_date,
        end_date,
        booking.total_price,
    )
    return booking


async def update_review(
    db: AsyncSession,
    booking: Booking,
    rating: int | None = None,
    review_comment: str | None = None,
    fields_set: set[str] | None = None,
) -> Booking:
    """Store a guest's rating/review and refresh the property rating when it changed."""
    fields_set = fields_set if fields_set is not None else {"rating", "review_comment"}
    previous_rating = booking.rating

    if "rating" in fields_set:
        booking.rating = rating
    if "review_comment" in fields_set:
        booking.review_comment = review_comment

    await db.flush()

    if "rating" in fields_set:
        if booking.rating != previous_rating:
            logger.info("Booking %s rating changed %s -> %s", booking.id, previous_rating, booking.rating)
        await on_booking_rating_changed(db, booking.id)

    await db.refresh(booking)
    return booking


async def cancel_booking(db: AsyncSession, booking: Booking) -> Booking:
    """Soft-delete a booking. Cancelling twice keeps the first timestamp."""
    if booking.deleted_at is None:
        booking.deleted_at = datetime.now(timezone.utc)
        await db.flush()
        logger.info("Booking %s cancelled", booking.id)
    return booking
