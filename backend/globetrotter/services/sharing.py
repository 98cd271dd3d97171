"""Public share links for trips."""

import logging
import secrets
import string
from typing import Optional

from globetrotter.schemas import TripRecord
from globetrotter.services.trip_loader import TripGraph, load_stops
from globetrotter.store.registry import Stores

logger = logging.getLogger(__name__)

SHARE_CODE_LENGTH = 8
SHARE_QUERY_PARAM = "share"

_ALPHABET = string.ascii_lowercase + string.digits


def generate_share_code() -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(SHARE_CODE_LENGTH))


def build_share_url(base_url: str, share_code: str) -> str:
    return f"{base_url.rstrip('/')}/?{SHARE_QUERY_PARAM}={share_code}"


async def share_trip(stores: Stores, trip: TripRecord, base_url: str) -> tuple[TripRecord, str]:
    """Make the trip public, minting a share code if it has none."""
    updates = {}
    if not trip.share_code:
        updates["share_code"] = generate_share_code()
    if not trip.is_public:
        updates["is_public"] = True
    if updates:
        trip = await stores.trips.update(trip.id, updates)
        logger.info(f"Trip {trip.id} shared with code {trip.share_code}")
    return trip, build_share_url(base_url, trip.share_code)


async def resolve_shared_trip(stores: Stores, share_code: str) -> Optional[TripGraph]:
    """The public trip behind a share code, or None."""
    matches = await stores.trips.list({"share_code": share_code, "is_public": True})
    if not matches:
        return None
    trip = matches[0]
    return TripGraph(trip=trip, stops=await load_stops(stores, trip.id))
