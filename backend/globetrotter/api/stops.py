from fastapi import APIRouter, Depends, HTTPException

from globetrotter.api.deps import get_current_user_id, get_owned_trip, get_stores
from globetrotter.schemas import TripActivityCreate, TripStopRecord, TripStopUpdate
from globetrotter.schemas._validators import check_date_range
from globetrotter.services.stop_reordering import is_order_index_taken, next_order_index
from globetrotter.store import StoreError, Stores

router = APIRouter()


async def _get_owned_stop(stores: Stores, stop_id: str, user_id: str) -> TripStopRecord:
    stop = await stores.stops.get_by_id(stop_id)
    if not stop:
        raise HTTPException(status_code=404, detail="Stop not found")
    await get_owned_trip(stores, stop.trip_id, user_id)
    return stop


@router.put("/stops/{stop_id}")
async def update_stop(
    stop_id: str,
    payload: TripStopUpdate,
    user_id: str = Depends(get_current_user_id),
    stores: Stores = Depends(get_stores),
):
    stop = await _get_owned_stop(stores, stop_id, user_id)
    changes = payload.model_dump(exclude_unset=True)
    try:
        check_date_range(
            changes.get("start_date", stop.start_date),
            changes.get("end_date", stop.end_date),
            "Stop",
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        return await stores.stops.update(stop.id, changes)
    except StoreError:
        raise HTTPException(status_code=503, detail="Failed to update stop")


@router.delete("/stops/{stop_id}")
async def delete_stop(
    stop_id: str,
    user_id: str = Depends(get_current_user_id),
    stores: Stores = Depends(get_stores),
):
    stop = await _get_owned_stop(stores, stop_id, user_id)
    try:
        await stores.stops.delete(stop.id)
    except StoreError:
        raise HTTPException(status_code=503, detail="Failed to delete stop")
    return {"deleted": True}


@router.post("/stops/{stop_id}/activities")
async def add_activity(
    stop_id: str,
    payload: TripActivityCreate,
    user_id: str = Depends(get_current_user_id),
    stores: Stores = Depends(get_stores),
):
    stop = await _get_owned_stop(stores, stop_id, user_id)
    data = payload.model_dump()
    try:
        siblings = await stores.activities.list({"trip_stop_id": stop.id})
        if data["order_index"] is None:
            data["order_index"] = next_order_index(siblings)
        elif is_order_index_taken(siblings, data["order_index"]):
            raise HTTPException(status_code=409, detail="Another activity already has this order_index")
        return await stores.activities.insert({**data, "trip_stop_id": stop.id})
    except StoreError:
        raise HTTPException(status_code=503, detail="Failed to add activity")


@router.delete("/activities/{activity_id}")
async def delete_activity(
    activity_id: str,
    user_id: str = Depends(get_current_user_id),
    stores: Stores = Depends(get_stores),
):
    activity = await stores.activities.get_by_id(activity_id)
    if not activity:
        raise HTTPException(status_code=404, detail="Activity not found")
    await _get_owned_stop(stores, activity.trip_stop_id, user_id)
    try:
        await stores.activities.delete(activity.id)
    except StoreError:
        raise HTTPException(status_code=503, detail="Failed to delete activity")
    return {"deleted": True}
