from globetrotter.schemas.trip import TripCreate, TripUpdate, TripRecord
from globetrotter.schemas.stop import (
    TripStopCreate,
    TripStopUpdate,
    TripStopRecord,
    LoadedStop,
    StopMoveRequest,
)
from globetrotter.schemas.activity import TripActivityCreate, TripActivityRecord
from globetrotter.schemas.catalog import CityRecord, CatalogActivityRecord, ProfileRecord

__all__ = [
    "TripCreate", "TripUpdate", "TripRecord",
    "TripStopCreate", "TripStopUpdate", "TripStopRecord", "LoadedStop", "StopMoveRequest",
    "TripActivityCreate", "TripActivityRecord",
    "CityRecord", "CatalogActivityRecord", "ProfileRecord",
]
