"""Seed pools - fixed demonstration records.

Included in every fallback listing and used to seed an empty database.
"""

from src.core.pool import Facilities, OpeningHours, PoolRecord


SEED_POOLS: tuple[PoolRecord, ...] = (
    PoolRecord(
        id=None,
        name="Aqua Swimming Pool",
        address="123 Main Road, Attapur",
        city="Hyderabad",
        postal_code="500018",
        latitude=17.3850,
        longitude=78.4867,
        opening_hours=OpeningHours.uniform("9:00 AM - 6:00 PM"),
        facilities=Facilities(
            changing_rooms_available=True,
            locker_facility=True,
        ),
    ),
    PoolRecord(
        id=None,
        name="Blue Wave Swimming Club",
        address="45 Lake View Road, Attapur",
        city="Hyderabad",
        postal_code="500018",
        latitude=17.3855,
        longitude=78.4870,
        opening_hours=OpeningHours.uniform("8:00 AM - 7:00 PM"),
        facilities=Facilities(
            lifeguard_available=True,
            emergency_equipment_available=True,
            cctv_installed=True,
            changing_rooms_available=True,
            locker_facility=True,
        ),
    ),
    PoolRecord(
        id=None,
        name="Crystal Clear Pool",
        address="78 Waterfront Drive, Attapur",
        city="Hyderabad",
        postal_code="500018",
        latitude=17.3845,
        longitude=78.4865,
        opening_hours=OpeningHours.uniform("7:00 AM - 8:00 PM"),
        facilities=Facilities(
            lifeguard_available=True,
            emergency_equipment_available=True,
            changing_rooms_available=True,
            locker_facility=True,
        ),
    ),
    PoolRecord(
        id=None,
        name="Swimmers Place",
        address="321 Sports Complex Road, Attapur",
        city="Hyderabad",
        postal_code="500018",
        latitude=17.3860,
        longitude=78.4880,
        opening_hours=OpeningHours(
            monday="7:00 AM - 9:00 PM",
            tuesday="7:00 AM - 9:00 PM",
            wednesday="7:00 AM - 9:00 PM",
            thursday="7:00 AM - 9:00 PM",
            friday="7:00 AM - 9:00 PM",
            saturday="8:00 AM - 8:00 PM",
            sunday="8:00 AM - 8:00 PM",
        ),
        facilities=Facilities(
            lifeguard_available=True,
            emergency_equipment_available=True,
            cctv_installed=True,
            changing_rooms_available=True,
            locker_facility=True,
        ),
    ),
)
