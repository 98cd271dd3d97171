"""
Trip Export/Import Codec.

A trip graph is exported as one flat JSON document:

    {"version": "1.0", "trip": {...}, "stops": [...], "activities": [...],
     "exportedAt": "2024-01-01T00:00:00.000Z"}

Stops and activities keep their original foreign keys. Importing is two-phase
because new ids only exist once records are inserted: insert the trip, insert
the stops while building an old-stop-id -> new-stop-id map, then rewrite each
activity's stop reference through that map. Activities whose stop did not
make it are dropped rather than inserted with a dangling reference.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from pydantic import ValidationError

from globetrotter.schemas import (
    TripActivityCreate,
    TripActivityRecord,
    TripCreate,
    TripRecord,
    TripStopCreate,
    TripStopRecord,
)
from globetrotter.services.sharing import generate_share_code
from globetrotter.services.trip_loader import TripGraph
from globetrotter.store.base import StoreError
from globetrotter.store.registry import Stores
from globetrotter.utils.formatting import epoch_millis, safe_filename_stem

logger = logging.getLogger(__name__)

EXPORT_VERSION = "1.0"
IMPORT_SUFFIX = " (Imported)"
COPY_SUFFIX = " (Copy)"


class ImportValidationError(ValueError):
    """The document cannot be imported; nothing was written."""


@dataclass
class PreparedStop:
    original_id: Optional[str]
    data: dict


@dataclass
class PreparedActivity:
    original_stop_id: Optional[str]
    data: dict


@dataclass
class PreparedImport:
    trip: dict
    stops: list[PreparedStop]
    activities: list[PreparedActivity]
    # activities that failed validation and were left out
    invalid_activities: int = 0


@dataclass
class ImportResult:
    trip: TripRecord
    stop_id_map: dict[str, str] = field(default_factory=dict)
    stops_inserted: int = 0
    activities_inserted: int = 0
    activities_dropped: int = 0


def _utc_timestamp(moment: Optional[datetime] = None) -> str:
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def export_trip(
    trip: TripRecord,
    stops: Sequence[TripStopRecord],
    activities: Sequence[TripActivityRecord],
    exported_at: Optional[datetime] = None,
) -> dict:
    def stop_row(stop):
        row = stop.model_dump(mode="json")
        row.pop("activities", None)
        return row

    return {
        "version": EXPORT_VERSION,
        "trip": trip.model_dump(mode="json"),
        "stops": [stop_row(s) for s in stops],
        "activities": [a.model_dump(mode="json") for a in activities],
        "exportedAt": _utc_timestamp(exported_at),
    }


def export_graph(graph: TripGraph, exported_at: Optional[datetime] = None) -> dict:
    return export_trip(graph.trip, graph.stops, graph.flat_activities(), exported_at)


def export_filename(trip_name: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"{safe_filename_stem(trip_name)}_{epoch_millis(now)}.json"


def dumps_document(document: dict) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


def validate_document(document: Any) -> bool:
    """Shape check only; cross references are resolved at insert time."""
    if not isinstance(document, dict):
        return False
    trip = document.get("trip")
    if not isinstance(trip, dict):
        return False
    if not isinstance(document.get("stops"), list):
        return False
    if not isinstance(document.get("activities"), list):
        return False
    name = trip.get("name")
    return isinstance(name, str) and bool(name)


def parse_document(raw) -> dict:
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ImportValidationError("Import file is not UTF-8 text") from e
    try:
        document = json.loads(raw)
    except ValueError as e:
        raise ImportValidationError(f"Import file is not valid JSON: {e}") from e
    if not validate_document(document):
        raise ImportValidationError("Invalid trip file format")
    return document


def _require_dict(row, what: str) -> dict:
    if not isinstance(row, dict):
        raise ImportValidationError(f"Each {what} must be an object")
    return row


def prepare_for_insert(
    document: dict,
    new_owner_id: str,
    name_suffix: str = IMPORT_SUFFIX,
) -> PreparedImport:
    """
    Strip identities from an exported document so it can be inserted fresh.

    The trip is re-owned, renamed with `name_suffix`, made private and loses
    its share code. Stops and activities lose their own ids and parent keys;
    the original parent ids are carried on the Prepared* wrappers for the
    remapping step. An invalid trip or stop rejects the whole document; an
    invalid activity is left out and counted.
    """
    if not validate_document(document):
        raise ImportValidationError("Invalid trip file format")

    source = document["trip"]
    try:
        trip = TripCreate.model_validate({
            "name": source["name"],
            "description": source.get("description"),
            "start_date": source.get("start_date"),
            "end_date": source.get("end_date"),
            "cover_image": source.get("cover_image"),
            "total_budget": source.get("total_budget") or 0,
        })
        stops = [
            PreparedStop(
                original_id=row.get("id"),
                data=TripStopCreate.model_validate({
                    **{k: v for k, v in row.items() if k not in ("id", "trip_id", "activities")},
                    "order_index": row.get("order_index") or 0,
                }).model_dump(),
            )
            for row in (_require_dict(r, "stop") for r in document["stops"])
        ]
    except ValidationError as e:
        raise ImportValidationError(f"Invalid trip data: {e.errors()[0]['msg']}") from e

    activities = []
    invalid_activities = 0
    for row in (_require_dict(r, "activity") for r in document["activities"]):
        try:
            data = TripActivityCreate.model_validate({
                **{k: v for k, v in row.items() if k not in ("id", "trip_stop_id")},
                "order_index": row.get("order_index") or 0,
            }).model_dump()
        except ValidationError as e:
            logger.warning(f"Dropping invalid activity {row.get('name')!r}: {e.errors()[0]['msg']}")
            invalid_activities += 1
            continue
        activities.append(PreparedActivity(original_stop_id=row.get("trip_stop_id"), data=data))

    return PreparedImport(
        trip={
            **trip.model_dump(),
            "user_id": new_owner_id,
            "name": f"{trip.name}{name_suffix}",
            "is_public": False,
            "share_code": None,
        },
        stops=stops,
        activities=activities,
        invalid_activities=invalid_activities,
    )


def remap_activities(
    activities: Sequence[PreparedActivity],
    stop_id_map: dict[str, str],
) -> tuple[list[dict], int]:
    """Point activities at their new stops. Returns (rows, dropped_count)."""
    rows = []
    dropped = 0
    for activity in activities:
        new_stop_id = stop_id_map.get(activity.original_stop_id) if activity.original_stop_id else None
        if new_stop_id is None:
            dropped += 1
            continue
        rows.append({**activity.data, "trip_stop_id": new_stop_id})
    return rows, dropped


async def insert_prepared(
    stores: Stores,
    prepared: PreparedImport,
    share_code: Optional[str] = None,
) -> ImportResult:
    """
    Run the two-phase insert.

    A failing trip insert aborts everything. A stop that fails to insert is
    skipped and its activities are dropped; failing activity inserts are
    dropped too. No rollback is attempted for what was already written.
    """
    trip = await stores.trips.insert({**prepared.trip, "share_code": share_code})
    result = ImportResult(trip=trip)

    for stop in prepared.stops:
        try:
            created = await stores.stops.insert({**stop.data, "trip_id": trip.id})
        except StoreError as e:
            logger.warning(f"Skipping stop {stop.data.get('city_name')!r} of trip {trip.id}: {e}")
            continue
        result.stops_inserted += 1
        if stop.original_id:
            result.stop_id_map[stop.original_id] = created.id

    rows, orphaned = remap_activities(prepared.activities, result.stop_id_map)
    result.activities_dropped = prepared.invalid_activities + orphaned
    for row in rows:
        try:
            await stores.activities.insert(row)
        except StoreError as e:
            logger.warning(f"Dropping activity {row.get('name')!r} of trip {trip.id}: {e}")
            result.activities_dropped += 1
            continue
        result.activities_inserted += 1

    if result.activities_dropped:
        logger.info(f"Trip {trip.id}: {result.activities_dropped} activities dropped during insert")
    return result


async def import_document(stores: Stores, document: Any, owner_id: str) -> ImportResult:
    prepared = prepare_for_insert(document, owner_id, IMPORT_SUFFIX)
    return await insert_prepared(stores, prepared, share_code=generate_share_code())


async def copy_trip(stores: Stores, graph: TripGraph, owner_id: str) -> ImportResult:
    """Duplicate a loaded trip for `owner_id` as a private " (Copy)"."""
    prepared = prepare_for_insert(export_graph(graph), owner_id, COPY_SUFFIX)
    return await insert_prepared(stores, prepared, share_code=generate_share_code())
