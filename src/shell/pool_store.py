"""Pool Record Store - Imperative Shell.

This module handles queries against the relational store of operator
pool records, using SQLAlchemy Core so the same queries run on SQLite
and PostgreSQL.

All I/O is contained here; matching and ranking logic is in the core module.
"""

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    and_,
    create_engine,
    func,
    insert,
    literal,
    or_,
    select,
)
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError

from src.core.errors import StoreUnavailable
from src.core.geo import Coordinate, distance_between, match_box
from src.core.matching import StoreMatch
from src.core.pool import ExternalFeature, Facilities, OpeningHours, PoolRecord
from src.core.seed import SEED_POOLS


logger = logging.getLogger(__name__)


metadata = MetaData()

swimming_pools = Table(
    "swimming_pools",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("pool_name", String(255), nullable=False, index=True),
    Column("address", Text, nullable=False),
    Column("city", String(100), nullable=False, index=True),
    Column("postal_code", String(20)),
    Column("latitude", Float, nullable=False),
    Column("longitude", Float, nullable=False),
    Column("api_endpoint", Text),
    Column("contact_number", String(20)),
    Column("email", String(255)),
    Column("opening_hours", JSON),
    Column("lifeguard_available", Boolean, default=False),
    Column("emergency_equipment_available", Boolean, default=False),
    Column("cctv_installed", Boolean, default=False),
    Column("changing_rooms_available", Boolean, default=False),
    Column("locker_facility", Boolean, default=False),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), server_default=func.now()),
)


def row_to_record(row: Mapping[str, Any]) -> PoolRecord:
    """Convert a swimming_pools row mapping to a PoolRecord."""
    return PoolRecord(
        id=row["id"],
        name=row["pool_name"],
        address=row["address"],
        city=row["city"],
        postal_code=row["postal_code"] or "",
        latitude=float(row["latitude"]),
        longitude=float(row["longitude"]),
        api_endpoint=row["api_endpoint"],
        contact_number=row["contact_number"] or "",
        email=row["email"] or "",
        opening_hours=OpeningHours.from_mapping(row["opening_hours"]),
        facilities=Facilities(
            lifeguard_available=bool(row["lifeguard_available"]),
            emergency_equipment_available=bool(row["emergency_equipment_available"]),
            cctv_installed=bool(row["cctv_installed"]),
            changing_rooms_available=bool(row["changing_rooms_available"]),
            locker_facility=bool(row["locker_facility"]),
        ),
    )


def record_to_row(record: PoolRecord) -> dict[str, Any]:
    """Convert a PoolRecord to insertable column values (id excluded)."""
    facilities = record.facilities
    return {
        "pool_name": record.name,
        "address": record.address,
        "city": record.city,
        "postal_code": record.postal_code,
        "latitude": record.latitude,
        "longitude": record.longitude,
        "api_endpoint": record.api_endpoint,
        "contact_number": record.contact_number,
        "email": record.email,
        "opening_hours": record.opening_hours.as_dict(),
        "lifeguard_available": facilities.lifeguard_available,
        "emergency_equipment_available": facilities.emergency_equipment_available,
        "cctv_installed": facilities.cctv_installed,
        "changing_rooms_available": facilities.changing_rooms_available,
        "locker_facility": facilities.locker_facility,
    }


LIKE_ESCAPE = "/"


def _escape_like(expression: Any) -> Any:
    """Escape LIKE wildcards in a SQL string expression."""
    for char in (LIKE_ESCAPE, "%", "_"):
        expression = func.replace(expression, char, LIKE_ESCAPE + char)
    return expression


class PoolStore:
    """Read access to the operator's pool records.

    This is part of the imperative shell - it handles database I/O.
    Every query failure is raised as StoreUnavailable.
    """

    def __init__(self, engine: Engine) -> None:
        """Initialize the store.

        Args:
            engine: SQLAlchemy engine bound to the pool database
        """
        self.engine = engine

    @classmethod
    def from_url(cls, database_url: str) -> "PoolStore":
        """Create a store for a database URL.

        For file-backed SQLite the parent directory is created.
        """
        url = make_url(database_url)
        if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        return cls(create_engine(url))

    def _fetch_records(self, statement: Any) -> list[PoolRecord]:
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(statement).mappings().all()
        except SQLAlchemyError as e:
            logger.error("Pool store query failed: %s", str(e))
            raise StoreUnavailable(f"Pool store query failed: {e}") from e

        return [row_to_record(row) for row in rows]

    def find_match(
        self,
        feature: ExternalFeature,
        query: Coordinate,
    ) -> StoreMatch | None:
        """Find the stored pool matching a map feature.

        A record matches when its name contains the feature's name or is
        contained in it (case-insensitive), or when it lies inside the
        flat ±0.001° box around the feature. The first row in primary
        key order wins; candidates are not re-ranked.

        This method performs database I/O.

        Args:
            feature: A named map feature
            query: The caller's query point, for the distance

        Returns:
            StoreMatch with distance from the query point, or None

        Raises:
            StoreUnavailable: If the query fails
        """
        name = (feature.name or "").lower()
        box = match_box(feature.latitude, feature.longitude)
        stored_name = func.lower(swimming_pools.c.pool_name)

        statement = (
            select(swimming_pools)
            .where(
                or_(
                    stored_name.contains(name, autoescape=True),
                    and_(
                        func.length(swimming_pools.c.pool_name) > 0,
                        literal(name).contains(_escape_like(stored_name), escape=LIKE_ESCAPE),
                    ),
                    and_(
                        swimming_pools.c.latitude.between(box.min_latitude, box.max_latitude),
                        swimming_pools.c.longitude.between(box.min_longitude, box.max_longitude),
                    ),
                )
            )
            .order_by(swimming_pools.c.id)
            .limit(1)
        )

        records = self._fetch_records(statement)
        if not records:
            return None

        record = records[0]
        logger.debug("Feature %s matched stored pool %s", feature.id, record.id)

        return StoreMatch(
            record=record,
            distance_km=distance_between(query, record.coordinate),
        )

    def search_text(self, text: str) -> list[PoolRecord]:
        """Find pools whose name, city or address contains the text.

        This method performs database I/O.

        Args:
            text: Free-text search term

        Returns:
            Matching records in primary key order

        Raises:
            StoreUnavailable: If the query fails
        """
        term = text.lower()
        statement = (
            select(swimming_pools)
            .where(
                or_(
                    func.lower(swimming_pools.c.pool_name).contains(term, autoescape=True),
                    func.lower(swimming_pools.c.city).contains(term, autoescape=True),
                    func.lower(swimming_pools.c.address).contains(term, autoescape=True),
                )
            )
            .order_by(swimming_pools.c.id)
        )

        logger.info("Searching stored pools for %r", text)
        records = self._fetch_records(statement)
        logger.info("Found %d stored pools for %r", len(records), text)

        return records

    def list_all(self) -> list[PoolRecord]:
        """Return every stored pool, ordered by name.

        Raises:
            StoreUnavailable: If the query fails
        """
        statement = select(swimming_pools).order_by(
            swimming_pools.c.pool_name,
            swimming_pools.c.id,
        )
        records = self._fetch_records(statement)
        logger.info("Loaded %d stored pools", len(records))
        return records

    def get_pool(self, pool_id: int) -> PoolRecord | None:
        """Return one stored pool by id, or None.

        Raises:
            StoreUnavailable: If the query fails
        """
        statement = select(swimming_pools).where(swimming_pools.c.id == pool_id)
        records = self._fetch_records(statement)
        return records[0] if records else None

    def insert_pools(self, records: Iterable[PoolRecord]) -> int:
        """Insert pools and return how many were written.

        Raises:
            StoreUnavailable: If the insert fails
        """
        rows = [record_to_row(r) for r in records]
        if not rows:
            return 0

        try:
            with self.engine.begin() as conn:
                conn.execute(insert(swimming_pools), rows)
        except SQLAlchemyError as e:
            logger.error("Pool store insert failed: %s", str(e))
            raise StoreUnavailable(f"Pool store insert failed: {e}") from e

        return len(rows)

    def initialize(self, seed: bool = True) -> None:
        """Create the pools table if missing and seed it when empty.

        This method performs database I/O.

        Args:
            seed: Insert the seed pools into an empty table

        Raises:
            StoreUnavailable: If table creation or seeding fails
        """
        try:
            metadata.create_all(self.engine)
            with self.engine.connect() as conn:
                count = conn.execute(
                    select(func.count()).select_from(swimming_pools)
                ).scalar_one()
        except SQLAlchemyError as e:
            logger.error("Pool store initialization failed: %s", str(e))
            raise StoreUnavailable(f"Pool store initialization failed: {e}") from e

        if seed and count == 0:
            inserted = self.insert_pools(SEED_POOLS)
            logger.info("Seeded pool store with %d pools", inserted)
        else:
            logger.info("Pool store ready with %d pools", count)
