"""Seed the database with a small, searchable sample marketplace.

Creates one owner and one guest account, two countries with cities and
points of interest, facilities, several properties with apartments, beds,
price periods and a few rated bookings, then rolls the ratings up.

Run from the project root:
    python -m scripts.seed_data
"""

import asyncio
import sys
from datetime import date, timedelta
from pathlib import Path

# Add project root to path so imports work when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import delete

import stayhub.models  # noqa: F401,E402
from stayhub.auth.security import hash_password  # noqa: E402
from stayhub.database import Base, async_session_factory, engine  # noqa: E402
from stayhub.models.apartment import Apartment, ApartmentPrice, ApartmentType, Bed, BedType, Room  # noqa: E402
from stayhub.models.booking import Booking  # noqa: E402
from stayhub.models.facility import Facility, FacilityCategory  # noqa: E402
from stayhub.models.location import City, Country, Geoobject  # noqa: E402
from stayhub.models.property import Property, PropertyPhoto  # noqa: E402
from stayhub.models.user import ROLE_OWNER, ROLE_USER, User  # noqa: E402
from stayhub.services.ratings import recalculate_property_rating  # noqa: E402

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

DEMO_OWNER = {"email": "owner@stayhub.test", "password": "owner1234", "name": "Demo Owner"}
DEMO_GUEST = {"email": "guest@stayhub.test", "password": "guest1234", "name": "Demo Guest"}

LOCATIONS = {
    "United Kingdom": {
        "London": [("Big Ben", 51.5007, -0.1246), ("Tower Bridge", 51.5055, -0.0754)],
        "Manchester": [("Old Trafford", 53.4631, -2.2913)],
    },
    "France": {
        "Paris": [("Eiffel Tower", 48.8584, 2.2945)],
    },
}

FACILITIES = {
    "Property": ["Free Wi-Fi", "Parking", "Swimming pool", "24-hour front desk"],
    "Kitchen": ["Oven", "Fridge", "Dishwasher"],
    "Bathroom": ["Hairdryer", "Bathtub"],
}

# (city, name, street, postcode, lat, long, property facilities, apartments)
# apartment: (name, type, adults, children, beds, nightly price, flags)
PROPERTIES = [
    (
        "London",
        "Westminster Riverside Apartments",
        "12 Millbank",
        "SW1P 4QP",
        51.4946,
        -0.1263,
        ["Free Wi-Fi", "24-hour front desk"],
        [
            ("Studio", "Studio", 2, 0, ["Large double bed"], 140, {"free_cancellation": True}),
            ("Family suite", "Entire apartment", 4, 2, ["Large double bed", "Single bed", "Single bed"], 260, {}),
        ],
    ),
    (
        "London",
        "Shoreditch Loft House",
        "48 Rivington Street",
        "EC2A 3QP",
        51.5265,
        -0.0805,
        ["Free Wi-Fi", "Parking"],
        [
            ("Loft", "Entire apartment", 2, 1, ["Large double bed", "Sofa bed"], 180, {"pets_allowed": True}),
        ],
    ),
    (
        "Manchester",
        "Northern Quarter Rooms",
        "5 Tib Street",
        "M4 1LA",
        53.4839,
        -2.2356,
        ["Free Wi-Fi"],
        [
            ("Single room", "Private room", 1, 0, ["Single bed"], 65, {}),
            ("Twin room", "Private room", 2, 0, ["Single bed", "Single bed"], 90, {"wheelchair_access": True}),
        ],
    ),
    (
        "Paris",
        "Maison du Champ de Mars",
        "7 Avenue Rapp",
        "75007",
        48.8600,
        2.3010,
        ["Free Wi-Fi", "Swimming pool"],
        [
            ("Appartement", "Entire apartment", 3, 2, ["Large double bed", "Sofa bed"], 310, {"all_day_access": True}),
        ],
    ),
]

RATINGS = [9, 8, 10, 7, 9]


# ---------------------------------------------------------------------------
# Main seed function
# ---------------------------------------------------------------------------


async def seed() -> None:
    """Recreate the schema if needed and replace all rows with sample data."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as session:
        for table in reversed(Base.metadata.sorted_tables):
            await session.execute(delete(table))
        await session.flush()

        owner = User(
            email=DEMO_OWNER["email"],
            hashed_password=hash_password(DEMO_OWNER["password"]),
            name=DEMO_OWNER["name"],
            role=ROLE_OWNER,
        )
        guest = User(
            email=DEMO_GUEST["email"],
            hashed_password=hash_password(DEMO_GUEST["password"]),
            name=DEMO_GUEST["name"],
            role=ROLE_USER,
        )
        session.add_all([owner, guest])
        await session.flush()

        # Locations
        cities: dict[str, City] = {}
        for country_name, city_map in LOCATIONS.items():
            country = Country(name=country_name)
            session.add(country)
            await session.flush()
            for city_name, points in city_map.items():
                city = City(name=city_name, country_id=country.id)
                session.add(city)
                await session.flush()
                cities[city_name] = city
                session.add_all(Geoobject(name=name, lat=lat, long=long, city_id=city.id) for name, lat, long in points)

        # Facilities
        facilities: dict[str, Facility] = {}
        for category_name, names in FACILITIES.items():
            category = FacilityCategory(name=category_name)
            session.add(category)
            await session.flush()
            for name in names:
                facilities[name] = Facility(name=name, category_id=category.id)
        session.add_all(facilities.values())
        await session.flush()

        bed_types: dict[str, BedType] = {}
        apartment_types: dict[str, ApartmentType] = {}

        # Properties, apartments, beds, prices
        today = date.today()
        apartments: list[Apartment] = []
        created_properties: list[Property] = []
        for city_name, name, street, postcode, lat, long, property_facilities, apartment_rows in PROPERTIES:
            prop = Property(
                owner_id=owner.id,
                city_id=cities[city_name].id,
                name=name,
                address_street=street,
                address_postcode=postcode,
                lat=lat,
                long=long,
                facilities=[facilities[f] for f in property_facilities],
                photos=[PropertyPhoto(url=f"https://picsum.photos/seed/{postcode.replace(' ', '')}-{i}/800/600", position=i) for i in range(3)],
            )
            session.add(prop)
            await session.flush()
            created_properties.append(prop)

            for apt_name, type_name, adults, children, beds, price, flags in apartment_rows:
                if type_name not in apartment_types:
                    apartment_types[type_name] = ApartmentType(name=type_name)
                for bed in beds:
                    if bed not in bed_types:
                        bed_types[bed] = BedType(name=bed)
                session.add_all([*apartment_types.values(), *bed_types.values()])
                await session.flush()

                apartment = Apartment(
                    property_id=prop.id,
                    apartment_type_id=apartment_types[type_name].id,
                    name=apt_name,
                    capacity_adults=adults,
                    capacity_children=children,
                    size=25 + 15 * adults,
                    bathrooms=1 if adults < 4 else 2,
                    rooms=[
                        Room(
                            name="Bedroom",
                            position=0,
                            beds=[Bed(bed_type_id=bed_types[bed].id, position=i) for i, bed in enumerate(beds)],
                        )
                    ],
                    facilities=[facilities["Fridge"], facilities["Hairdryer"]],
                    prices=[
                        ApartmentPrice(start_date=today, end_date=today + timedelta(days=89), price=price),
                        ApartmentPrice(
                            start_date=today + timedelta(days=90), end_date=today + timedelta(days=364), price=price + 20
                        ),
                    ],
                    **flags,
                )
                session.add(apartment)
                apartments.append(apartment)
            await session.flush()
            print(f"   {prop.name}: {len(apartment_rows)} apartment(s)")

        # Past, rated stays
        for index, rating in enumerate(RATINGS):
            apartment = apartments[index % len(apartments)]
            start = today - timedelta(days=60 - index * 7)
            session.add(
                Booking(
                    apartment_id=apartment.id,
                    user_id=guest.id,
                    start_date=start,
                    end_date=start + timedelta(days=2),
                    guests_adults=1,
                    guests_children=0,
                    total_price=0,
                    rating=rating,
                )
            )
        await session.flush()

        for prop in created_properties:
            await recalculate_property_rating(session, prop.id)

        await session.commit()

        print()
        print("=" * 60)
        print("Seed Summary")
        print("=" * 60)
        print(f"   Owner:       {DEMO_OWNER['email']} / {DEMO_OWNER['password']}")
        print(f"   Guest:       {DEMO_GUEST['email']} / {DEMO_GUEST['password']}")
        print(f"   Properties:  {len(created_properties)}")
        print(f"   Apartments:  {len(apartments)}")
        print(f"   Bookings:    {len(RATINGS)}")
        print("=" * 60)

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
