"""Tests for the SQLAlchemy store backend."""
import pytest
from datetime import date
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from globetrotter.models import Trip, TripActivity, TripStop
from globetrotter.store import OrderBy, RecordNotFound, StoreError


async def _make_trip(stores, **overrides):
    data = {"user_id": "u1", "name": "Ladakh", "start_date": date(2024, 6, 1), "end_date": date(2024, 6, 8)}
    data.update(overrides)
    return await stores.trips.insert(data)


class TestSqlEntityStore:
    async def test_insert_returns_record(self, sql_stores):
        trip = await _make_trip(sql_stores)
        assert len(trip.id) == 36
        assert trip.start_date == date(2024, 6, 1)
        assert trip.is_public is False
        assert trip.total_budget == 0
        assert trip.created_at is not None

    async def test_get_by_id(self, sql_stores):
        trip = await _make_trip(sql_stores)
        assert (await sql_stores.trips.get_by_id(trip.id)).name == "Ladakh"
        assert await sql_stores.trips.get_by_id("missing") is None

    async def test_list_filter_and_order(self, sql_stores):
        trip = await _make_trip(sql_stores)
        for name, idx in [("Kargil", 2), ("Leh", 0), ("Nubra", 1)]:
            await sql_stores.stops.insert({"trip_id": trip.id, "city_name": name, "order_index": idx})
        other = await _make_trip(sql_stores, user_id="u2")
        await sql_stores.stops.insert({"trip_id": other.id, "city_name": "Manali", "order_index": 0})

        stops = await sql_stores.stops.list({"trip_id": trip.id}, OrderBy("order_index"))
        assert [s.city_name for s in stops] == ["Leh", "Nubra", "Kargil"]

        desc = await sql_stores.stops.list({"trip_id": trip.id}, OrderBy("order_index", descending=True))
        assert [s.city_name for s in desc] == ["Kargil", "Nubra", "Leh"]

    async def test_update(self, sql_stores):
        trip = await _make_trip(sql_stores)
        updated = await sql_stores.trips.update(trip.id, {"is_public": True, "unknown": "ignored"})
        assert updated.is_public is True
        assert updated.name == "Ladakh"

    async def test_update_missing_raises(self, sql_stores):
        with pytest.raises(RecordNotFound):
            await sql_stores.trips.update("missing", {"name": "x"})

    async def test_delete_cascades(self, sql_stores, db_session):
        trip = await _make_trip(sql_stores)
        stop = await sql_stores.stops.insert({"trip_id": trip.id, "city_name": "Leh"})
        await sql_stores.activities.insert({"trip_stop_id": stop.id, "name": "Pangong Lake"})

        assert await sql_stores.trips.delete(trip.id) is True

        assert db_session.query(Trip).count() == 0
        assert db_session.query(TripStop).count() == 0
        assert db_session.query(TripActivity).count() == 0

    async def test_delete_missing_returns_false(self, sql_stores):
        assert await sql_stores.trips.delete("missing") is False

    async def test_duplicate_share_code_raises_store_error(self, sql_stores):
        await _make_trip(sql_stores, share_code="dupe0001")
        with pytest.raises(StoreError):
            await _make_trip(sql_stores, share_code="dupe0001")
        # session is usable again after the rollback
        assert len(await sql_stores.trips.list()) == 1

    async def test_database_error_becomes_store_error(self, sql_stores, db_session):
        with patch.object(db_session, "query", side_effect=OperationalError("SELECT", {}, Exception("db down"))):
            with pytest.raises(StoreError):
                await sql_stores.trips.list()
