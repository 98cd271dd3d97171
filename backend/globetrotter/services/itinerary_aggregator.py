"""
Itinerary Aggregator - derived budget and pace metrics for a trip.

Everything here is a pure function of (trip, stops-with-activities), so it is
safe to recompute on every change. Stop order does not matter for any sum.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from globetrotter.schemas import LoadedStop, TripRecord

# Meals estimate per stop when no food/dining activity carries a cost
MEAL_ALLOWANCE_PER_STOP = 1500

MEAL_CATEGORY_KEYWORDS = ("food", "dining")

# Activities per day
PACE_RELAXED_BELOW = 2
PACE_BALANCED_UP_TO = 4


class Pace(str, Enum):
    PLANNING = "Planning"
    RELAXED = "Relaxed"
    BALANCED = "Balanced"
    PACKED = "Packed"


@dataclass(frozen=True)
class CostBreakdown:
    transport: float
    accommodation: float
    activities: float
    meals: float
    # True when `meals` is the per-stop allowance rather than recorded costs
    meals_estimated: bool = False


@dataclass(frozen=True)
class StopCosts:
    stop_id: str
    city_name: str
    transport: float
    accommodation: float
    activities: float


@dataclass(frozen=True)
class TripSummary:
    duration_days: int
    city_count: int
    breakdown: CostBreakdown
    total_estimated: float
    total_budget: float
    remaining_budget: float
    is_over_budget: bool
    average_daily_cost: float
    pace: Pace
    per_stop: list[StopCosts]


def is_meal_category(category) -> bool:
    if not category:
        return False
    label = category.lower()
    return any(keyword in label for keyword in MEAL_CATEGORY_KEYWORDS)


def compute_cost_breakdown(trip: TripRecord, stops: Sequence[LoadedStop]) -> CostBreakdown:
    """
    Split estimated spend into transport, accommodation, activities and meals.

    Activities whose category mentions food or dining count as meals. When no
    meal cost was recorded at all, meals fall back to
    len(stops) * MEAL_ALLOWANCE_PER_STOP. That fallback cannot tell "meals not
    tracked" apart from "meals genuinely free"; `meals_estimated` marks it.
    """
    transport = 0.0
    accommodation = 0.0
    activities = 0.0
    meals = 0.0

    for stop in stops:
        transport += stop.transport_cost or 0
        accommodation += stop.accommodation_cost or 0
        for activity in stop.activities:
            cost = activity.estimated_cost or 0
            if is_meal_category(activity.category):
                meals += cost
            else:
                activities += cost

    meals_estimated = meals == 0
    if meals_estimated:
        meals = float(len(stops) * MEAL_ALLOWANCE_PER_STOP)

    return CostBreakdown(
        transport=transport,
        accommodation=accommodation,
        activities=activities,
        meals=meals,
        meals_estimated=meals_estimated,
    )


def compute_total_estimated(breakdown: CostBreakdown) -> float:
    return breakdown.transport + breakdown.accommodation + breakdown.activities + breakdown.meals


def compute_duration_days(trip: TripRecord) -> int:
    """Inclusive day count, 0 while either date is unset."""
    if not trip.start_date or not trip.end_date:
        return 0
    return (trip.end_date - trip.start_date).days + 1


def compute_average_daily_cost(trip: TripRecord, stops: Sequence[LoadedStop]) -> float:
    total = compute_total_estimated(compute_cost_breakdown(trip, stops))
    return total / max(1, compute_duration_days(trip))


def count_activities(stops: Sequence[LoadedStop]) -> int:
    return sum(len(stop.activities) for stop in stops)


def compute_pace(trip: TripRecord, stops: Sequence[LoadedStop]) -> Pace:
    duration = compute_duration_days(trip)
    if duration == 0 or not stops:
        return Pace.PLANNING

    per_day = count_activities(stops) / duration
    if per_day < PACE_RELAXED_BELOW:
        return Pace.RELAXED
    if per_day <= PACE_BALANCED_UP_TO:
        return Pace.BALANCED
    return Pace.PACKED


def compute_remaining_budget(trip: TripRecord, breakdown: CostBreakdown) -> float:
    """Negative means over budget."""
    return (trip.total_budget or 0) - compute_total_estimated(breakdown)


def per_stop_costs(stops: Sequence[LoadedStop]) -> list[StopCosts]:
    return [
        StopCosts(
            stop_id=stop.id,
            city_name=stop.city_name,
            transport=stop.transport_cost or 0,
            accommodation=stop.accommodation_cost or 0,
            activities=sum(a.estimated_cost or 0 for a in stop.activities),
        )
        for stop in stops
    ]


def summarize_trip(trip: TripRecord, stops: Sequence[LoadedStop]) -> TripSummary:
    breakdown = compute_cost_breakdown(trip, stops)
    total = compute_total_estimated(breakdown)
    remaining = compute_remaining_budget(trip, breakdown)
    duration = compute_duration_days(trip)

    return TripSummary(
        duration_days=duration,
        city_count=len(stops),
        breakdown=breakdown,
        total_estimated=total,
        total_budget=trip.total_budget or 0,
        remaining_budget=remaining,
        is_over_budget=remaining < 0,
        average_daily_cost=total / max(1, duration),
        pace=compute_pace(trip, stops),
        per_stop=per_stop_costs(stops),
    )
