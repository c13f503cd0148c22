"""Tests for the booking gate and booking lifecycle services."""

import uuid
from datetime import date, timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.services.bookings import (
    GuestDetails,
    cancel_booking,
    create_booking,
    update_review,
    validate_booking_request,
)
from stayhub.services.errors import (
    APARTMENT_NOT_FOUND,
    CAPACITY_EXCEEDED,
    DATE_RANGE_UNAVAILABLE,
    BookingValidationError,
)
from tests.factories import add_price, make_apartment, make_booking, make_city, make_property, make_user

D0 = date(2026, 9, 1)


def day(offset: int) -> date:
    return D0 + timedelta(days=offset)


@pytest.fixture
async def setting(db_session: AsyncSession):
    owner = await make_user(db_session, role="owner")
    guest = await make_user(db_session)
    prop = await make_property(db_session, owner, await make_city(db_session))
    apartment = await make_apartment(db_session, prop, adults=2, children=1)
    await add_price(db_session, apartment, day(0), day(30), 100)
    return guest, prop, apartment


class TestValidateBookingRequest:
    async def test_valid_request(self, db_session: AsyncSession, setting):
        _, _, apartment = setting
        result = await validate_booking_request(db_session, apartment.id, day(1), day(3), 2, 1)
        assert result.ok
        assert result.kinds == []

    async def test_unknown_apartment_stops_other_checks(self, db_session: AsyncSession, setting):
        result = await validate_booking_request(db_session, uuid.uuid4(), day(1), day(3), 9, 9)
        assert result.kinds == [APARTMENT_NOT_FOUND]

    async def test_capacity_exceeded(self, db_session: AsyncSession, setting):
        _, _, apartment = setting
        result = await validate_booking_request(db_session, apartment.id, day(1), day(3), 3, 0)
        assert result.kinds == [CAPACITY_EXCEEDED]

    async def test_reports_every_failure(self, db_session: AsyncSession, setting):
        guest, _, apartment = setting
        await make_booking(db_session, apartment, guest, day(2), day(4))

        result = await validate_booking_request(db_session, apartment.id, day(1), day(3), 2, 2, lock=True)

        assert result.kinds == [CAPACITY_EXCEEDED, DATE_RANGE_UNAVAILABLE]


class TestCreateBooking:
    async def test_prices_and_stores_guests(self, db_session: AsyncSession, setting):
        guest, _, apartment = setting
        people = [
            GuestDetails("Ada", "Lovelace", date(1990, 12, 10)),
            GuestDetails("Charles", "Babbage", date(1988, 12, 26)),
        ]

        booking = await create_booking(db_session, guest.id, apartment.id, day(1), day(3), 2, 0, guests=people)

        assert booking.total_price == 300
        assert [g.first_name for g in booking.guests] == ["Ada", "Charles"]
        assert booking.is_active

    async def test_rejects_overlap(self, db_session: AsyncSession, setting):
        guest, _, apartment = setting
        await create_booking(db_session, guest.id, apartment.id, day(1), day(3), 1, 0)

        with pytest.raises(BookingValidationError) as excinfo:
            await create_booking(db_session, guest.id, apartment.id, day(3), day(5), 1, 0)

        assert excinfo.value.kinds == [DATE_RANGE_UNAVAILABLE]

    async def test_cancelled_dates_can_be_rebooked(self, db_session: AsyncSession, setting):
        guest, _, apartment = setting
        first = await create_booking(db_session, guest.id, apartment.id, day(1), day(3), 1, 0)
        await cancel_booking(db_session, first)

        second = await create_booking(db_session, guest.id, apartment.id, day(1), day(3), 1, 0)

        assert second.id != first.id


class TestReviewAndCancel:
    async def test_rating_updates_property_average(self, db_session: AsyncSession, setting):
        guest, prop, apartment = setting
        booking = await make_booking(db_session, apartment, guest, day(1), day(2))

        await update_review(db_session, booking, rating=9, fields_set={"rating"})

        assert booking.rating == 9
        assert prop.average_rating == pytest.approx(9.0)

    async def test_comment_only_leaves_rating(self, db_session: AsyncSession, setting):
        guest, _, apartment = setting
        booking = await make_booking(db_session, apartment, guest, day(1), day(2), rating=5)

        await update_review(
            db_session, booking, review_comment="Lovely place, would stay again", fields_set={"review_comment"}
        )

        assert booking.rating == 5
        assert booking.review_comment == "Lovely place, would stay again"

    async def test_cancel_twice_keeps_first_timestamp(self, db_session: AsyncSession, setting):
        guest, _, apartment = setting
        booking = await make_booking(db_session, apartment, guest, day(1), day(2))

        await cancel_booking(db_session, booking)
        first = booking.deleted_at
        await cancel_booking(db_session, booking)

        assert first is not None
        assert booking.deleted_at == first
        assert not booking.is_active
