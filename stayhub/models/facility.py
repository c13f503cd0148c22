"""Facility models and the two facility association tables."""

import uuid

from sqlalchemy import Column, ForeignKey, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stayhub.database import Base, UUIDPrimaryKeyMixin

# Property-level amenities (parking, reception, ...)
facility_property = Table(
    "facility_property",
    Base.metadata,
    Column("facility_id", ForeignKey("facilities.id", ondelete="CASCADE"), primary_key=True),
    Column("property_id", ForeignKey("properties.id", ondelete="CASCADE"), primary_key=True),
)

# Apartment-level amenities (kitchen, balcony, ...)
apartment_facility = Table(
    "apartment_facility",
    Base.metadata,
    Column("apartment_id", ForeignKey("apartments.id", ondelete="CASCADE"), primary_key=True),
    Column("facility_id", ForeignKey("facilities.id", ondelete="CASCADE"), primary_key=True),
)


class FacilityCategory(UUIDPrimaryKeyMixin, Base):
    """Grouping for facilities shown on the apartment detail page."""

    __tablename__ = "facility_categories"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<FacilityCategory(id={self.id}, name={self.name!r})>"


class Facility(UUIDPrimaryKeyMixin, Base):
    """An amenity attachable to properties and to apartments."""

    __tablename__ = "facilities"

    category_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("facility_categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    category: Mapped["FacilityCategory | None"] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return f"<Facility(id={self.id}, name={self.name!r})>"
