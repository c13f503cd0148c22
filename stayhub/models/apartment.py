"""Apartment model and its rooms, beds, price periods and lookup types."""

import uuid
from datetime import date

from sqlalchemy import Boolean, CheckConstraint, Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stayhub.database import Base, UUIDPrimaryKeyMixin
from stayhub.models.facility import apartment_facility


class ApartmentType(UUIDPrimaryKeyMixin, Base):
    """Lookup: entire apartment, studio, private suite, ..."""

    __tablename__ = "apartment_types"

    name: Mapped[str] = mapped_column(String(255), nullable=False)


class RoomType(UUIDPrimaryKeyMixin, Base):
    """Lookup: bedroom, living room, ..."""

    __tablename__ = "room_types"

    name: Mapped[str] = mapped_column(String(255), nullable=False)


class BedType(UUIDPrimaryKeyMixin, Base):
    """Lookup: single bed, large double bed, sofa bed, ..."""

    __tablename__ = "bed_types"

    name: Mapped[str] = mapped_column(String(255), nullable=False)


class Apartment(UUIDPrimaryKeyMixin, Base):
    """A bookable unit inside a property."""

    __tablename__ = "apartments"

    property_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    apartment_type_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("apartment_types.id", ondelete="SET NULL"),
        nullable=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    capacity_adults: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    capacity_children: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    size: Mapped[int | None] = mapped_column(Integer, default=None)  # square meters
    bathrooms: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    wheelchair_access: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    pets_allowed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    smoking_allowed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    free_cancellation: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    all_day_access: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Relationships
    property: Mapped["Property"] = relationship(back_populates="apartments", lazy="selectin")  # type: ignore[name-defined]  # noqa: F821
    apartment_type: Mapped["ApartmentType | None"] = relationship(lazy="selectin")
    rooms: Mapped[list["Room"]] = relationship(
        back_populates="apartment",
        order_by="Room.position",
        cascade="all, delete-orphan",
    )
    prices: Mapped[list["ApartmentPrice"]] = relationship(
        back_populates="apartment",
        order_by="ApartmentPrice.start_date",
        cascade="all, delete-orphan",
    )
    facilities: Mapped[list["Facility"]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        secondary=apartment_facility
    )

    __table_args__ = (
        CheckConstraint("capacity_adults >= 0", name="ck_apartments_capacity_adults"),
        CheckConstraint("capacity_children >= 0", name="ck_apartments_capacity_children"),
    )

    def __repr__(self) -> str:
        return (
            f"<Apartment(id={self.id}, name={self.name!r}, "
            f"capacity={self.capacity_adults}+{self.capacity_children})>"
        )


class Room(UUIDPrimaryKeyMixin, Base):
    """A room of an apartment; beds live in rooms."""

    __tablename__ = "rooms"

    apartment_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("apartments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    room_type_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("room_types.id", ondelete="SET NULL"),
        nullable=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    apartment: Mapped["Apartment"] = relationship(back_populates="rooms")
    beds: Mapped[list["Bed"]] = relationship(
        back_populates="room",
        order_by="Bed.position",
        cascade="all, delete-orphan",
    )


class Bed(UUIDPrimaryKeyMixin, Base):
    """A bed in a room."""

    __tablename__ = "beds"

    room_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    bed_type_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("bed_types.id"), nullable=False)
    # Insertion order within the room; keeps the beds list grouping deterministic
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    room: Mapped["Room"] = relationship(back_populates="beds")
    bed_type: Mapped["BedType"] = relationship(lazy="selectin")


class ApartmentPrice(UUIDPrimaryKeyMixin, Base):
    """A per-day price valid for an inclusive date range.

    Periods of one apartment may overlap or leave gaps.
    """

    __tablename__ = "apartment_prices"

    apartment_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("apartments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)

    apartment: Mapped["Apartment"] = relationship(back_populates="prices")

    __table_args__ = (
        CheckConstraint("start_date <= end_date", name="ck_apartment_prices_range"),
        CheckConstraint("price >= 0", name="ck_apartment_prices_price"),
    )

    def __repr__(self) -> str:
        return f"<ApartmentPrice({self.start_date}..{self.end_date} @ {self.price})>"
