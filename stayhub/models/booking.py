"""Booking model: a guest's reservation of an apartment for a date range."""

import uuid
from datetime import date, datetime

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stayhub.database import Base, UUIDPrimaryKeyMixin


class Booking(UUIDPrimaryKeyMixin, Base):
    """A reservation linking a guest user to an apartment for inclusive dates.

    Cancellation is a soft delete: ``deleted_at`` is set and the row keeps its
    price and rating for history, but it no longer blocks availability.
    """

    __tablename__ = "bookings"

    apartment_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("apartments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    guests_adults: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    guests_children: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_price: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    review_comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, index=True)

    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        onupdate=func.now(),
    )

    # Relationships
    apartment: Mapped["Apartment"] = relationship(lazy="selectin")  # type: ignore[name-defined]  # noqa: F821
    guests: Mapped[list["BookingGuest"]] = relationship(
        back_populates="booking",
        lazy="selectin",
        order_by="BookingGuest.position",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("ix_bookings_apartment_dates", "apartment_id", "start_date", "end_date"),
        CheckConstraint("rating IS NULL OR (rating >= 1 AND rating <= 10)", name="ck_bookings_rating"),
    )

    @property
    def is_active(self) -> bool:
        """True unless the booking was cancelled."""
        return self.deleted_at is None

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, apartment_id={self.apartment_id}, user_id={self.user_id}, "
            f"{self.start_date}..{self.end_date})>"
        )


class BookingGuest(UUIDPrimaryKeyMixin, Base):
    """A named person travelling under a booking."""

    __tablename__ = "booking_guests"

    booking_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    booking: Mapped["Booking"] = relationship(back_populates="guests")
