"""Loads a trip with its ordered stops and each stop's activities."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from globetrotter.schemas import LoadedStop, TripActivityRecord, TripRecord
from globetrotter.store.base import OrderBy
from globetrotter.store.registry import Stores

logger = logging.getLogger(__name__)

BY_ORDER_INDEX = OrderBy("order_index")
NEWEST_FIRST = OrderBy("created_at", descending=True)


@dataclass
class TripGraph:
    trip: TripRecord
    stops: list[LoadedStop]

    def flat_activities(self) -> list[TripActivityRecord]:
        return [activity for stop in self.stops for activity in stop.activities]


async def load_stops(stores: Stores, trip_id: str) -> list[LoadedStop]:
    """
    Stops ordered by order_index, activities fetched for all stops at once.

    If any activity fetch fails the whole load fails; a graph with some
    stops silently missing their activities is never returned.
    """
    stops = await stores.stops.list({"trip_id": trip_id}, BY_ORDER_INDEX)
    activity_lists = await asyncio.gather(
        *(stores.activities.list({"trip_stop_id": stop.id}, BY_ORDER_INDEX) for stop in stops)
    )
    return [
        LoadedStop(**stop.model_dump(), activities=activities)
        for stop, activities in zip(stops, activity_lists)
    ]


async def load_trip_graph(stores: Stores, trip_id: str) -> Optional[TripGraph]:
    trip = await stores.trips.get_by_id(trip_id)
    if not trip:
        return None
    return TripGraph(trip=trip, stops=await load_stops(stores, trip.id))


async def list_user_trips(stores: Stores, user_id: str) -> list[TripRecord]:
    return await stores.trips.list({"user_id": user_id}, NEWEST_FIRST)
