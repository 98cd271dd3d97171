"""
Conflict Detector - advisory planning alerts for a loaded trip.

Three independent passes, reported in this order:
1. stops whose daily spend runs past the trip's daily budget (+20% band)
2. stops with more than MAX_ACTIVITIES_PER_DAY activities per day
3. activities scheduled outside their stop's visit window

Alerts never block anything and nothing is persisted; re-run on every change.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from globetrotter.schemas import LoadedStop, TripRecord
from globetrotter.services.itinerary_aggregator import compute_duration_days
from globetrotter.utils.formatting import format_currency, round_half_up

BUDGET_TOLERANCE = 1.2
MAX_ACTIVITIES_PER_DAY = 5

SEVERITY_WARNING = "warning"
SEVERITY_ERROR = "error"


@dataclass(frozen=True)
class ConflictAlert:
    type: str  # "budget" | "activities" | "date"
    message: str
    severity: str
    stop_id: Optional[str] = None
    activity_id: Optional[str] = None


def _stop_days(stop: LoadedStop) -> Optional[int]:
    if not stop.start_date or not stop.end_date:
        return None
    return (stop.end_date - stop.start_date).days + 1


def _budget_alerts(trip: TripRecord, stops: Sequence[LoadedStop], currency_symbol: str) -> list[ConflictAlert]:
    total_days = compute_duration_days(trip)
    if total_days == 0 or not trip.total_budget or trip.total_budget <= 0:
        return []

    daily_budget = trip.total_budget / total_days
    alerts = []
    for stop in stops:
        stop_days = _stop_days(stop)
        if stop_days is None:
            continue
        stop_cost = (
            (stop.transport_cost or 0)
            + (stop.accommodation_cost or 0)
            + sum(a.estimated_cost or 0 for a in stop.activities)
        )
        stop_daily_cost = stop_cost / stop_days
        if stop_daily_cost > daily_budget * BUDGET_TOLERANCE:
            overrun = format_currency(stop_daily_cost - daily_budget, currency_symbol)
            alerts.append(ConflictAlert(
                type="budget",
                message=f"{stop.city_name} exceeds daily budget by {overrun}",
                severity=SEVERITY_WARNING,
                stop_id=stop.id,
            ))
    return alerts


def _density_alerts(stops: Sequence[LoadedStop]) -> list[ConflictAlert]:
    alerts = []
    for stop in stops:
        stop_days = _stop_days(stop)
        if stop_days is None or not stop.activities:
            continue
        per_day = len(stop.activities) / stop_days
        if per_day > MAX_ACTIVITIES_PER_DAY:
            alerts.append(ConflictAlert(
                type="activities",
                message=(
                    f"{stop.city_name} has {round_half_up(per_day)} activities/day"
                    " - consider spreading them out"
                ),
                severity=SEVERITY_WARNING,
                stop_id=stop.id,
            ))
    return alerts


def _date_alerts(stops: Sequence[LoadedStop]) -> list[ConflictAlert]:
    alerts = []
    for stop in stops:
        if not stop.start_date or not stop.end_date:
            continue
        for activity in stop.activities:
            scheduled = activity.scheduled_date
            if scheduled is None or stop.start_date <= scheduled <= stop.end_date:
                continue
            alerts.append(ConflictAlert(
                type="date",
                message=f'Activity "{activity.name}" in {stop.city_name} is scheduled outside city dates',
                severity=SEVERITY_ERROR,
                stop_id=stop.id,
                activity_id=activity.id,
            ))
    return alerts


def detect_conflicts(
    trip: TripRecord,
    stops: Sequence[LoadedStop],
    currency_symbol: str = "₹",
) -> list[ConflictAlert]:
    return (
        _budget_alerts(trip, stops, currency_symbol)
        + _density_alerts(stops)
        + _date_alerts(stops)
    )
