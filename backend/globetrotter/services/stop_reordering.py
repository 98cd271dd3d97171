"""
Stop Reordering Engine.

Stops of a trip are totally ordered by `order_index`. Moving a stop up or
down swaps its order_index with the neighbouring stop and persists exactly
those two records.
"""

import asyncio
import logging
from typing import Optional, Sequence, TypeVar

from globetrotter.schemas import TripStopRecord
from globetrotter.store.base import EntityStore, StoreError

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=TripStopRecord)

DIRECTIONS = ("up", "down")


class ReorderError(StoreError):
    """One or both writes of a swap failed; the pair may now be inconsistent."""


def next_order_index(records: Sequence) -> int:
    """Order index for a record appended after `records`."""
    if not records:
        return 0
    return max(r.order_index for r in records) + 1


async def move_stop(
    store: EntityStore,
    stops: Sequence[TripStopRecord],
    stop_id: str,
    direction: str,
) -> Optional[tuple[TripStopRecord, TripStopRecord]]:
    """
    Swap `stop_id` with its neighbour in `direction`.

    Returns the (moved, displaced) records as persisted, or None when the
    move is a no-op (top stop moved up, bottom stop moved down, unknown id).
    Both writes are issued together and awaited; if either fails the whole
    move raises ReorderError. There is no compensation for a half-applied
    swap, so callers should reload before retrying.
    """
    if direction not in DIRECTIONS:
        raise ValueError(f"direction must be 'up' or 'down', got {direction!r}")

    ordered = sorted(stops, key=lambda s: s.order_index)
    current = next((i for i, s in enumerate(ordered) if s.id == stop_id), None)
    if current is None:
        logger.warning(f"Stop {stop_id} not in the supplied list, nothing to move")
        return None

    target = current - 1 if direction == "up" else current + 1
    if target < 0 or target >= len(ordered):
        return None

    moving, neighbour = ordered[current], ordered[target]
    results = await asyncio.gather(
        store.update(moving.id, {"order_index": neighbour.order_index}),
        store.update(neighbour.id, {"order_index": moving.order_index}),
        return_exceptions=True,
    )

    failures = [r for r in results if isinstance(r, Exception)]
    if failures:
        logger.error(f"Reorder of stop {stop_id} ({direction}) failed: {failures[0]}")
        raise ReorderError("Failed to reorder stops") from failures[0]

    return results[0], results[1]


def apply_move(stops: Sequence[S], pair: tuple[TripStopRecord, TripStopRecord]) -> list[S]:
    """The caller's stops with the swapped order indices, re-sorted."""
    new_index = {record.id: record.order_index for record in pair}
    updated = [
        stop.model_copy(update={"order_index": new_index[stop.id]}) if stop.id in new_index else stop
        for stop in stops
    ]
    return sorted(updated, key=lambda s: s.order_index)


def is_order_index_taken(records: Sequence, order_index: int) -> bool:
    return any(r.order_index == order_index for r in records)
