"""SQLAlchemy models for StayHub.

All models are imported here so that ``Base.metadata`` knows every table
(``create_all`` in tests and the seed script). If you add a new model,
import it in this file.
"""

from stayhub.models.apartment import Apartment, ApartmentPrice, ApartmentType, Bed, BedType, Room, RoomType
from stayhub.models.booking import Booking, BookingGuest
from stayhub.models.facility import Facility, FacilityCategory, apartment_facility, facility_property
from stayhub.models.location import City, Country, Geoobject
from stayhub.models.property import Property, PropertyPhoto
from stayhub.models.user import User

__all__ = [
    "Apartment",
    "ApartmentPrice",
    "ApartmentType",
    "Bed",
    "BedType",
    "Booking",
    "BookingGuest",
    "City",
    "Country",
    "Facility",
    "FacilityCategory",
    "Geoobject",
    "Property",
    "PropertyPhoto",
    "Room",
    "RoomType",
    "User",
    "apartment_facility",
    "facility_property",
]
