from dataclasses import asdict
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from globetrotter.api.deps import get_current_user_id, get_owned_trip, get_stores
from globetrotter.config import get_settings
from globetrotter.schemas import StopMoveRequest, TripCreate, TripStopCreate, TripUpdate
from globetrotter.schemas._validators import check_date_range
from globetrotter.services.conflict_detector import detect_conflicts
from globetrotter.services.itinerary_aggregator import summarize_trip
from globetrotter.services.sharing import generate_share_code, resolve_shared_trip, share_trip
from globetrotter.services.stop_reordering import (
    ReorderError,
    apply_move,
    is_order_index_taken,
    move_stop,
    next_order_index,
)
from globetrotter.services.trip_codec import (
    ImportValidationError,
    copy_trip,
    dumps_document,
    export_filename,
    export_graph,
    import_document,
    parse_document,
)
from globetrotter.services.trip_loader import TripGraph, list_user_trips, load_stops, load_trip_graph
from globetrotter.store import StoreError, Stores

logger = logging.getLogger(__name__)

router = APIRouter()


def _graph_response(graph: TripGraph) -> dict:
    return {"trip": graph.trip, "stops": graph.stops}


def _summary_response(graph: TripGraph) -> dict:
    summary = summarize_trip(graph.trip, graph.stops)
    data = asdict(summary)
    data["pace"] = {"label": summary.pace.value}
    return data


async def _load_owned_graph(stores: Stores, trip_id: str, user_id: str) -> TripGraph:
    trip = await get_owned_trip(stores, trip_id, user_id)
    return TripGraph(trip=trip, stops=await load_stops(stores, trip.id))


@router.get("")
async def list_trips(
    user_id: str = Depends(get_current_user_id),
    stores: Stores = Depends(get_stores),
):
    trips = await list_user_trips(stores, user_id)
    return {"trips": trips, "count": len(trips)}


@router.post("")
async def create_trip(
    payload: TripCreate,
    user_id: str = Depends(get_current_user_id),
    stores: Stores = Depends(get_stores),
):
    try:
        return await stores.trips.insert({
            **payload.model_dump(),
            "user_id": user_id,
            "share_code": generate_share_code(),
        })
    except StoreError:
        raise HTTPException(status_code=503, detail="Failed to save trip")


@router.post("/import")
async def import_trip(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    stores: Stores = Depends(get_stores),
):
    try:
        document = parse_document(await request.body())
        result = await import_document(stores, document, user_id)
    except ImportValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreError:
        raise HTTPException(status_code=503, detail="Failed to import trip")

    logger.info(
        f"Imported trip {result.trip.id}: {result.stops_inserted} stops, "
        f"{result.activities_inserted} activities"
    )
    return {
        "trip": result.trip,
        "stops_inserted": result.stops_inserted,
        "activities_inserted": result.activities_inserted,
        "activities_dropped": result.activities_dropped,
    }


@router.get("/shared/{share_code}")
async def get_shared_trip(share_code: str, stores: Stores = Depends(get_stores)):
    graph = await resolve_shared_trip(stores, share_code)
    if not graph:
        raise HTTPException(status_code=404, detail="Shared trip not found")
    return {**_graph_response(graph), "summary": _summary_response(graph)}


@router.get("/{trip_id}")
async def get_trip(
    trip_id: str,
    user_id: str = Depends(get_current_user_id),
    stores: Stores = Depends(get_stores),
):
    graph = await _load_owned_graph(stores, trip_id, user_id)
    return _graph_response(graph)


@router.put("/{trip_id}")
async def update_trip(
    trip_id: str,
    payload: TripUpdate,
    user_id: str = Depends(get_current_user_id),
    stores: Stores = Depends(get_stores),
):
    trip = await get_owned_trip(stores, trip_id, user_id)
    changes = payload.model_dump(exclude_unset=True)
    try:
        check_date_range(
            changes.get("start_date", trip.start_date),
            changes.get("end_date", trip.end_date),
            "Trip",
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        return await stores.trips.update(trip.id, changes)
    except StoreError:
        raise HTTPException(status_code=503, detail="Failed to update trip")


@router.delete("/{trip_id}")
async def delete_trip(
    trip_id: str,
    user_id: str = Depends(get_current_user_id),
    stores: Stores = Depends(get_stores),
):
    trip = await get_owned_trip(stores, trip_id, user_id)
    try:
        await stores.trips.delete(trip.id)
    except StoreError:
        raise HTTPException(status_code=503, detail="Failed to delete trip")
    return {"deleted": True}


@router.get("/{trip_id}/summary")
async def get_trip_summary(
    trip_id: str,
    user_id: str = Depends(get_current_user_id),
    stores: Stores = Depends(get_stores),
):
    graph = await _load_owned_graph(stores, trip_id, user_id)
    return _summary_response(graph)


@router.get("/{trip_id}/alerts")
async def get_trip_alerts(
    trip_id: str,
    user_id: str = Depends(get_current_user_id),
    stores: Stores = Depends(get_stores),
):
    graph = await _load_owned_graph(stores, trip_id, user_id)
    alerts = detect_conflicts(graph.trip, graph.stops, get_settings().currency_symbol)
    return {"alerts": [asdict(a) for a in alerts], "count": len(alerts)}


@router.post("/{trip_id}/share")
async def share_trip_link(
    trip_id: str,
    user_id: str = Depends(get_current_user_id),
    stores: Stores = Depends(get_stores),
):
    trip = await get_owned_trip(stores, trip_id, user_id)
    try:
        trip, url = await share_trip(stores, trip, get_settings().base_url)
    except StoreError:
        raise HTTPException(status_code=503, detail="Failed to share trip")
    return {"share_code": trip.share_code, "url": url}


@router.get("/{trip_id}/export")
async def export_trip_file(
    trip_id: str,
    user_id: str = Depends(get_current_user_id),
    stores: Stores = Depends(get_stores),
):
    graph = await _load_owned_graph(stores, trip_id, user_id)
    document = export_graph(graph)
    filename = export_filename(graph.trip.name)
    return JSONResponse(
        content=document,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/{trip_id}/copy")
async def copy_shared_trip(
    trip_id: str,
    user_id: str = Depends(get_current_user_id),
    stores: Stores = Depends(get_stores),
):
    graph = await load_trip_graph(stores, trip_id)
    if not graph or (graph.trip.user_id != user_id and not graph.trip.is_public):
        raise HTTPException(status_code=404, detail="Trip not found")
    try:
        result = await copy_trip(stores, graph, user_id)
    except StoreError:
        raise HTTPException(status_code=503, detail="Failed to copy trip")
    return {"trip": result.trip, "stops_inserted": result.stops_inserted}


@router.post("/{trip_id}/stops")
async def add_stop(
    trip_id: str,
    payload: TripStopCreate,
    user_id: str = Depends(get_current_user_id),
    stores: Stores = Depends(get_stores),
):
    trip = await get_owned_trip(stores, trip_id, user_id)
    data = payload.model_dump()
    try:
        siblings = await stores.stops.list({"trip_id": trip.id})
        if data["order_index"] is None:
            data["order_index"] = next_order_index(siblings)
        elif is_order_index_taken(siblings, data["order_index"]):
            raise HTTPException(status_code=409, detail="Another stop already has this order_index")
        return await stores.stops.insert({**data, "trip_id": trip.id})
    except StoreError:
        raise HTTPException(status_code=503, detail="Failed to add stop")


@router.post("/{trip_id}/stops/{stop_id}/move")
async def move_trip_stop(
    trip_id: str,
    stop_id: str,
    payload: StopMoveRequest,
    user_id: str = Depends(get_current_user_id),
    stores: Stores = Depends(get_stores),
):
    graph = await _load_owned_graph(stores, trip_id, user_id)
    if not any(stop.id == stop_id for stop in graph.stops):
        raise HTTPException(status_code=404, detail="Stop not found")

    try:
        pair = await move_stop(stores.stops, graph.stops, stop_id, payload.direction)
    except ReorderError as e:
        raise HTTPException(status_code=503, detail=str(e))

    if pair is None:
        return {"moved": False, "stops": graph.stops}
    return {"moved": True, "stops": apply_move(graph.stops, pair)}
