"""Location models: countries, cities and geo-objects used by search."""

import uuid

from sqlalchemy import Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stayhub.database import Base, UUIDPrimaryKeyMixin


class Country(UUIDPrimaryKeyMixin, Base):
    """A country grouping cities."""

    __tablename__ = "countries"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    lat: Mapped[float | None] = mapped_column(Float, default=None)
    long: Mapped[float | None] = mapped_column(Float, default=None)

    def __repr__(self) -> str:
        return f"<Country(id={self.id}, name={self.name!r})>"


class City(UUIDPrimaryKeyMixin, Base):
    """A city; properties reference one."""

    __tablename__ = "cities"

    country_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("countries.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    lat: Mapped[float | None] = mapped_column(Float, default=None)
    long: Mapped[float | None] = mapped_column(Float, default=None)

    country: Mapped["Country"] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return f"<City(id={self.id}, name={self.name!r})>"


class Geoobject(UUIDPrimaryKeyMixin, Base):
    """A named point of interest (station, landmark) searched around by radius."""

    __tablename__ = "geoobjects"

    city_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("cities.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    lat: Mapped[float] = mapped_column(Float, nullable=False)
    long: Mapped[float] = mapped_column(Float, nullable=False)

    def __repr__(self) -> str:
        return f"<Geoobject(id={self.id}, name={self.name!r})>"
