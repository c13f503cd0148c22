"""Pydantic v2 request/response schemas for guest booking endpoints."""

import uuid
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class BookingGuestCreate(BaseModel):
    """A person travelling under the booking."""

    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    birth_date: date


class BookingCreate(BaseModel):
    """Schema for a guest booking an apartment (inclusive dates)."""

    apartment_id: uuid.UUID
    start_date: date
    end_date: date
    guests_adults: int = Field(1, ge=0)
    guests_children: int = Field(0, ge=0)
    guests: list[BookingGuestCreate] | None = None

    @model_validator(mode="after")
    def check_request(self) -> "BookingCreate":
        """Dates in order, at least one guest, guest list matching the party size."""
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        party = self.guests_adults + self.guests_children
        if party < 1:
            raise ValueError("a booking needs at least one guest")
        if self.guests is not None and len(self.guests) != party:
            raise ValueError(f"guests must list exactly {party} people")
        return self


class BookingUpdate(BaseModel):
    """Guest review of a stay. All fields optional."""

    rating: int | None = Field(None, ge=1, le=10)
    review_comment: str | None = Field(None, min_length=20)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BookingGuestResponse(BaseModel):
    id: uuid.UUID
    first_name: str
    last_name: str
    birth_date: date

    model_config = ConfigDict(from_attributes=True)


class BookingResponse(BaseModel):
    """Booking as shown to the guest who made it, cancelled ones included."""

    id: uuid.UUID
    apartment_id: uuid.UUID
    apartment_name: str
    start_date: date
    end_date: date
    guests_adults: int
    guests_children: int
    total_price: int
    cancelled_at: date | None = None
    rating: int | None = None
    review_comment: str | None = None
    guests: list[BookingGuestResponse] = []

    @classmethod
    def from_booking(cls, booking) -> "BookingResponse":
        apartment = booking.apartment
        return cls(
            id=booking.id,
            apartment_id=booking.apartment_id,
            apartment_name=f"{apartment.property.name}: {apartment.name}",
            start_date=booking.start_date,
            end_date=booking.end_date,
            guests_adults=booking.guests_adults,
            guests_children=booking.guests_children,
            total_price=booking.total_price,
            cancelled_at=booking.deleted_at.date() if booking.deleted_at else None,
            rating=booking.rating,
            review_comment=booking.review_comment,
            guests=[BookingGuestResponse.model_validate(guest) for guest in booking.guests],
        )
