"""Property rating roll-up from booking ratings."""

import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.models.apartment import Apartment
from stayhub.models.booking import Booking
from stayhub.models.property import Property

logger = logging.getLogger(__name__)


async def average_rating_for_property(db: AsyncSession, property_id: uuid.UUID) -> float | None:
    """Mean of every non-null booking rating on the property's apartments.

    Cancelled bookings count: cancellation does not erase a review.
    """
    result = await db.execute(
        select(func.avg(Booking.rating))
        .join(Apartment, Booking.apartment_id == Apartment.id)
        .where(Apartment.property_id == property_id, Booking.rating.is_not(None))
    )
    average = result.scalar_one_or_none()
    return float(average) if average is not None else None


async def recalculate_property_rating(db: AsyncSession, property_id: uuid.UUID) -> float | None:
    """Recompute and store ``Property.average_rating``. Idempotent full recompute."""
    prop = await db.get(Property, property_id)
    if prop is None:
        logger.warning("Skipping rating recalculation: property %s not found", property_id)
        return None

    prop.average_rating = await average_rating_for_property(db, property_id)
    await db.flush()
    logger.info("Recalculated rating of property %s: %s", property_id, prop.average_rating)
    return prop.average_rating


async def on_booking_rating_changed(db: AsyncSession, booking_id: uuid.UUID) -> float | None:
    """Refresh the rating of the property a booking belongs to.

    Never raises: an unresolvable booking, apartment or property is a no-op,
    and a database error is rolled back to a savepoint and logged so the
    booking update that triggered it still succeeds.
    """
    property_id = await db.scalar(
        select(Apartment.property_id)
        .join(Booking, Booking.apartment_id == Apartment.id)
        .where(Booking.id == booking_id)
    )
    if property_id is None:
        logger.warning("Skipping rating recalculation: booking %s has no resolvable property", booking_id)
        return None

    try:
        async with db.begin_nested():
            return await recalculate_property_rating(db, property_id)
    except SQLAlchemyError:
        logger.exception("Rating recalculation failed for property %s", property_id)
        return None
