from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from globetrotter.models import Activity, City, Profile, Trip, TripActivity, TripStop
from globetrotter.schemas import (
    CatalogActivityRecord,
    CityRecord,
    ProfileRecord,
    TripActivityRecord,
    TripRecord,
    TripStopRecord,
)
from globetrotter.store.base import EntityStore
from globetrotter.store.local import LocalEntityStore, LocalStorage
from globetrotter.store.sql import SqlEntityStore

STORAGE_KEYS = {
    "profiles": "globetrotter_profiles",
    "trips": "globetrotter_trips",
    "stops": "globetrotter_trip_stops",
    "activities": "globetrotter_trip_activities",
    "cities": "globetrotter_cities",
    "catalog_activities": "globetrotter_activities",
}


@dataclass
class Stores:
    """One store per entity type, all from the same backend."""
    trips: EntityStore
    stops: EntityStore
    activities: EntityStore
    cities: EntityStore
    catalog_activities: EntityStore
    profiles: EntityStore


def build_sql_stores(db: Session) -> Stores:
    return Stores(
        trips=SqlEntityStore(db, Trip, TripRecord),
        stops=SqlEntityStore(db, TripStop, TripStopRecord),
        activities=SqlEntityStore(db, TripActivity, TripActivityRecord),
        cities=SqlEntityStore(db, City, CityRecord),
        catalog_activities=SqlEntityStore(db, Activity, CatalogActivityRecord),
        profiles=SqlEntityStore(db, Profile, ProfileRecord),
    )


def build_local_stores(storage: Optional[LocalStorage] = None) -> Stores:
    storage = storage or LocalStorage()
    trips = LocalEntityStore(storage, STORAGE_KEYS["trips"], TripRecord, "trip")
    stops = LocalEntityStore(storage, STORAGE_KEYS["stops"], TripStopRecord, "stop")
    activities = LocalEntityStore(storage, STORAGE_KEYS["activities"], TripActivityRecord, "activity")
    trips.own(stops, "trip_id")
    stops.own(activities, "trip_stop_id")
    return Stores(
        trips=trips,
        stops=stops,
        activities=activities,
        cities=LocalEntityStore(storage, STORAGE_KEYS["cities"], CityRecord, "city"),
        catalog_activities=LocalEntityStore(
            storage, STORAGE_KEYS["catalog_activities"], CatalogActivityRecord, "catalog"
        ),
        profiles=LocalEntityStore(storage, STORAGE_KEYS["profiles"], ProfileRecord, "profile"),
    )
