from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from globetrotter.config import get_settings
from globetrotter.database import get_db
from globetrotter.schemas import TripRecord
from globetrotter.store import LocalStorage, Stores, build_local_stores, build_sql_stores


@lru_cache
def get_local_storage() -> LocalStorage:
    return LocalStorage(get_settings().local_store_path or None)


def get_stores(db: Session = Depends(get_db)) -> Stores:
    if get_settings().store_backend == "local":
        return build_local_stores(get_local_storage())
    return build_sql_stores(db)


def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    # Authentication happens upstream; the gateway forwards the user id
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id


async def get_owned_trip(stores: Stores, trip_id: str, user_id: str) -> TripRecord:
    trip = await stores.trips.get_by_id(trip_id)
    if not trip:
        raise HTTPException(status_code=404, detail="Trip not found")
    if trip.user_id != user_id:
        raise HTTPException(status_code=403, detail="Not authorized to modify this trip")
    return trip
