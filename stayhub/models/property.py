"""Property model: a listing owned by a host, made of bookable apartments."""

import uuid
from datetime import datetime

from sqlalchemy import Float, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stayhub.database import Base, UUIDPrimaryKeyMixin
from stayhub.models.facility import facility_property


class Property(UUIDPrimaryKeyMixin, Base):
    """A hotel, guesthouse or apartment building listed by an owner."""

    __tablename__ = "properties"

    owner_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    city_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("cities.id"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address_street: Mapped[str] = mapped_column(String(255), nullable=False)
    address_postcode: Mapped[str | None] = mapped_column(String(50), default=None)
    lat: Mapped[float | None] = mapped_column(Float, default=None, index=True)
    long: Mapped[float | None] = mapped_column(Float, default=None, index=True)
    # Maintained by services.ratings, never computed on read
    average_rating: Mapped[float | None] = mapped_column(Float, default=None, index=True)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(server_default=func.now(), onupdate=func.now())

    # Relationships
    owner: Mapped["User"] = relationship(lazy="selectin")  # type: ignore[name-defined]  # noqa: F821
    city: Mapped["City"] = relationship(lazy="selectin")  # type: ignore[name-defined]  # noqa: F821
    apartments: Mapped[list["Apartment"]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        back_populates="property", order_by="Apartment.name", cascade="all, delete-orphan"
    )
    facilities: Mapped[list["Facility"]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        secondary=facility_property
    )
    photos: Mapped[list["PropertyPhoto"]] = relationship(
        back_populates="property",
        order_by="PropertyPhoto.position",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, name={self.name!r})>"


class PropertyPhoto(UUIDPrimaryKeyMixin, Base):
    """A photo of a property; ``position`` defines display order."""

    __tablename__ = "property_photos"

    property_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    url: Mapped[str] = mapped_column(String(1024), nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    property: Mapped["Property"] = relationship(back_populates="photos")

    def __repr__(self) -> str:
        return f"<PropertyPhoto(id={self.id}, position={self.position})>"
