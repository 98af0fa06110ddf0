"""Tests for the pool record store.

Runs real SQLAlchemy queries against an in-memory SQLite database.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool
from unittest.mock import Mock

from src.core.errors import StoreUnavailable
from src.core.geo import Coordinate, calculate_distance
from src.core.pool import ExternalFeature, FeatureTags, OpeningHours, PoolRecord
from src.core.seed import SEED_POOLS
from src.shell.pool_store import PoolStore, metadata


QUERY = Coordinate(17.3850, 78.4867)


def make_feature(name, lat=10.0, lon=10.0, feature_id=1):
    return ExternalFeature(
        id=feature_id,
        element_type="node",
        latitude=lat,
        longitude=lon,
        tags=FeatureTags({"name": name}),
    )


def make_record(name, lat=10.0, lon=10.0, city="Hyderabad", address="1 Road", api_endpoint=None):
    return PoolRecord(
        id=None,
        name=name,
        address=address,
        city=city,
        postal_code="500018",
        latitude=lat,
        longitude=lon,
        api_endpoint=api_endpoint,
        opening_hours=OpeningHours.uniform("6:00 AM - 8:00 PM"),
    )


@pytest.fixture
def engine():
    """Shared in-memory SQLite engine."""
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def store(engine):
    """Empty store with the schema created."""
    metadata.create_all(engine)
    return PoolStore(engine)


@pytest.fixture
def seeded_store(engine):
    """Store seeded with the demonstration pools."""
    pool_store = PoolStore(engine)
    pool_store.initialize(seed=True)
    return pool_store


class TestInitialize:
    """Tests for PoolStore.initialize()."""

    def test_seeds_empty_table(self, seeded_store):
        """An empty table receives the four seed pools."""
        names = [r.name for r in seeded_store.list_all()]

        assert names == sorted(p.name for p in SEED_POOLS)

    def test_does_not_reseed(self, seeded_store):
        """A populated table is left alone."""
        seeded_store.initialize(seed=True)

        assert len(seeded_store.list_all()) == len(SEED_POOLS)

    def test_without_seed(self, engine):
        pool_store = PoolStore(engine)
        pool_store.initialize(seed=False)

        assert pool_store.list_all() == []


class TestFindMatch:
    """Tests for PoolStore.find_match()."""

    def test_stored_name_contains_feature_name(self, store):
        """'Blue Wave' matches 'Blue Wave Swimming Club'."""
        store.insert_pools([make_record("Blue Wave Swimming Club", lat=17.3855, lon=78.4870)])

        match = store.find_match(make_feature("blue wave", lat=0.0, lon=0.0), QUERY)

        assert match is not None
        assert match.record.name == "Blue Wave Swimming Club"

    def test_feature_name_contains_stored_name(self, store):
        """'Aqua Swimming Pool Attapur' matches stored 'Aqua Swimming Pool'."""
        store.insert_pools([make_record("Aqua Swimming Pool")])

        match = store.find_match(make_feature("Aqua Swimming Pool Attapur", lat=0.0, lon=0.0), QUERY)

        assert match is not None
        assert match.record.name == "Aqua Swimming Pool"

    def test_matches_by_location_box(self, store):
        """A differently named pool within the box matches."""
        store.insert_pools([make_record("Municipal Pool", lat=17.3855, lon=78.4870)])

        match = store.find_match(make_feature("Lake Pool", lat=17.3860, lon=78.4875), QUERY)

        assert match is not None
        assert match.record.name == "Municipal Pool"

    def test_outside_box_and_name_does_not_match(self, store):
        store.insert_pools([make_record("Municipal Pool", lat=17.3855, lon=78.4870)])

        match = store.find_match(make_feature("Lake Pool", lat=17.3870, lon=78.4870), QUERY)

        assert match is None

    def test_first_by_primary_key_wins(self, store):
        """With several candidates, the lowest id is used."""
        store.insert_pools([
            make_record("Zed Pool", lat=17.3855, lon=78.4870),
            make_record("Alpha Pool", lat=17.3855, lon=78.4870),
        ])

        match = store.find_match(make_feature("Other", lat=17.3855, lon=78.4870), QUERY)

        assert match.record.name == "Zed Pool"

    def test_distance_from_query_point(self, store):
        """Distance is measured from the caller's point to the stored pool."""
        store.insert_pools([make_record("Blue Wave", lat=17.3855, lon=78.4870)])

        match = store.find_match(make_feature("Blue Wave"), QUERY)

        assert match.distance_km == pytest.approx(
            calculate_distance(17.3850, 78.4867, 17.3855, 78.4870)
        )

    def test_like_wildcards_are_literal(self, store):
        """'%' in a feature name is not a wildcard."""
        store.insert_pools([make_record("Aqua Pool")])

        assert store.find_match(make_feature("%", lat=0.0, lon=0.0), QUERY) is None

    def test_stored_name_wildcards_are_literal(self, store):
        """'_' in a stored name does not match any character."""
        store.insert_pools([make_record("Pool_A", lat=50.0, lon=50.0)])

        assert store.find_match(make_feature("Poolxa club", lat=0.0, lon=0.0), QUERY) is None

    def test_stored_name_with_wildcards_still_matches_itself(self, store):
        """A feature name containing the stored name with '%' and '_' matches."""
        store.insert_pools([make_record("100% Pool_A", lat=50.0, lon=50.0)])

        match = store.find_match(make_feature("The 100% pool_a club", lat=0.0, lon=0.0), QUERY)

        assert match is not None
        assert match.record.name == "100% Pool_A"

    def test_empty_stored_name_does_not_match_everything(self, store):
        """A blank stored name is never contained in a feature name."""
        store.insert_pools([make_record("", lat=50.0, lon=50.0)])

        assert store.find_match(make_feature("Any Pool", lat=0.0, lon=0.0), QUERY) is None

    def test_live_data_flag_from_endpoint(self, store):
        store.insert_pools([make_record("Live Pool", api_endpoint="http://t/pool-data/1")])

        match = store.find_match(make_feature("Live Pool"), QUERY)

        assert match.record.has_live_data is True


class TestSearchText:
    """Tests for PoolStore.search_text()."""

    def test_matches_name_city_or_address(self, store):
        store.insert_pools([
            make_record("Aqua Pool", city="Hyderabad"),
            make_record("Sea Pool", city="Chennai", address="4 Marina Road"),
            make_record("Lake Pool", city="Pune"),
        ])

        assert [r.name for r in store.search_text("aqua")] == ["Aqua Pool"]
        assert [r.name for r in store.search_text("CHENNAI")] == ["Sea Pool"]
        assert [r.name for r in store.search_text("marina")] == ["Sea Pool"]
        assert [r.name for r in store.search_text("pool")] == ["Aqua Pool", "Sea Pool", "Lake Pool"]

    def test_no_match(self, store):
        store.insert_pools([make_record("Aqua Pool")])

        assert store.search_text("xyz") == []


class TestReads:
    """Tests for list_all() and get_pool()."""

    def test_round_trips_record_fields(self, store):
        store.insert_pools([make_record("Aqua Pool", api_endpoint="http://t/1")])

        record = store.list_all()[0]

        assert record.id == 1
        assert record.opening_hours == OpeningHours.uniform("6:00 AM - 8:00 PM")
        assert record.api_endpoint == "http://t/1"
        assert record.facilities.lifeguard_available is False

    def test_list_all_ordered_by_name(self, store):
        store.insert_pools([make_record("Bravo"), make_record("Alpha")])

        assert [r.name for r in store.list_all()] == ["Alpha", "Bravo"]

    def test_get_pool(self, store):
        store.insert_pools([make_record("Alpha")])

        assert store.get_pool(1).name == "Alpha"
        assert store.get_pool(99) is None

    def test_insert_nothing(self, store):
        assert store.insert_pools([]) == 0


class TestStoreFailures:
    """Store errors are raised as StoreUnavailable."""

    def test_missing_table(self, engine):
        """Querying before the schema exists fails cleanly."""
        pool_store = PoolStore(engine)

        with pytest.raises(StoreUnavailable):
            pool_store.list_all()

    def test_connection_failure(self, store):
        engine = Mock()
        engine.connect.side_effect = OperationalError("SELECT 1", {}, Exception("down"))
        broken = PoolStore(engine)

        with pytest.raises(StoreUnavailable):
            broken.find_match(make_feature("Aqua"), QUERY)

        with pytest.raises(StoreUnavailable):
            broken.search_text("aqua")


class TestFromUrl:
    """Tests for PoolStore.from_url()."""

    def test_creates_sqlite_directory(self, tmp_path):
        db_path = tmp_path / "nested" / "pools.db"

        pool_store = PoolStore.from_url(f"sqlite:///{db_path}")
        pool_store.initialize(seed=True)

        assert db_path.exists()
        assert len(pool_store.list_all()) == len(SEED_POOLS)

    def test_in_memory_url(self):
        pool_store = PoolStore.from_url("sqlite://")

        assert pool_store.engine.url.database is None
