"""Tests for the itinerary aggregator."""
from datetime import date

from globetrotter.schemas import LoadedStop, TripActivityRecord, TripRecord
from globetrotter.services.itinerary_aggregator import (
    MEAL_ALLOWANCE_PER_STOP,
    CostBreakdown,
    Pace,
    compute_average_daily_cost,
    compute_cost_breakdown,
    compute_duration_days,
    compute_pace,
    compute_remaining_budget,
    compute_total_estimated,
    is_meal_category,
    per_stop_costs,
    summarize_trip,
)


def _make_trip(start=date(2024, 1, 1), end=date(2024, 1, 2), budget=10000):
    return TripRecord(
        id="trip-1",
        user_id="user-1",
        name="Rajasthan Loop",
        start_date=start,
        end_date=end,
        total_budget=budget,
    )


def _make_activity(stop_id="stop-1", cost=0, category=None, idx=0):
    return TripActivityRecord(
        id=f"{stop_id}-act-{idx}",
        trip_stop_id=stop_id,
        name=f"Activity {idx}",
        estimated_cost=cost,
        category=category,
        order_index=idx,
    )


def _make_stop(stop_id="stop-1", transport=0, accommodation=0, activities=(), order_index=0):
    return LoadedStop(
        id=stop_id,
        trip_id="trip-1",
        city_name=f"City {stop_id}",
        order_index=order_index,
        transport_cost=transport,
        accommodation_cost=accommodation,
        activities=list(activities),
    )


class TestCostBreakdown:
    def test_single_stop_example(self):
        trip = _make_trip()
        stop = _make_stop(
            transport=1000,
            accommodation=2000,
            activities=[_make_activity(cost=500, category="Sightseeing")],
        )
        breakdown = compute_cost_breakdown(trip, [stop])
        assert breakdown.transport == 1000
        assert breakdown.accommodation == 2000
        assert breakdown.activities == 500
        assert breakdown.meals == 1500
        assert breakdown.meals_estimated is True
        assert compute_total_estimated(breakdown) == 5000

    def test_food_activities_count_as_meals(self):
        stop = _make_stop(activities=[
            _make_activity(cost=400, category="Street Food", idx=0),
            _make_activity(cost=600, category="Fine Dining", idx=1),
            _make_activity(cost=300, category="Adventure", idx=2),
        ])
        breakdown = compute_cost_breakdown(_make_trip(), [stop])
        assert breakdown.meals == 1000
        assert breakdown.activities == 300
        assert breakdown.meals_estimated is False

    def test_meal_allowance_scales_with_stop_count(self):
        stops = [_make_stop("a"), _make_stop("b"), _make_stop("c")]
        breakdown = compute_cost_breakdown(_make_trip(), stops)
        assert breakdown.meals == 3 * MEAL_ALLOWANCE_PER_STOP

    def test_no_stops_is_all_zero(self):
        breakdown = compute_cost_breakdown(_make_trip(), [])
        assert compute_total_estimated(breakdown) == 0

    def test_total_is_exact_sum_of_components(self):
        breakdown = CostBreakdown(transport=0.1, accommodation=0.2, activities=0.3, meals=0.4)
        assert compute_total_estimated(breakdown) == 0.1 + 0.2 + 0.3 + 0.4

    def test_stop_order_does_not_change_breakdown(self):
        a = _make_stop("a", transport=100, activities=[_make_activity("a", cost=50)])
        b = _make_stop("b", accommodation=700, activities=[_make_activity("b", cost=20, category="food")])
        trip = _make_trip()
        assert compute_cost_breakdown(trip, [a, b]) == compute_cost_breakdown(trip, [b, a])

    def test_is_meal_category(self):
        assert is_meal_category("Food")
        assert is_meal_category("fine DINING")
        assert not is_meal_category("Culture")
        assert not is_meal_category(None)


class TestDurationAndPace:
    def test_duration_is_inclusive(self):
        assert compute_duration_days(_make_trip(date(2024, 1, 1), date(2024, 1, 1))) == 1
        assert compute_duration_days(_make_trip(date(2024, 1, 1), date(2024, 1, 10))) == 10

    def test_duration_zero_without_dates(self):
        assert compute_duration_days(_make_trip(start=None)) == 0
        assert compute_duration_days(_make_trip(end=None)) == 0

    def test_pace_planning_without_stops(self):
        assert compute_pace(_make_trip(), []) == Pace.PLANNING

    def test_pace_planning_without_dates(self):
        stop = _make_stop(activities=[_make_activity()])
        assert compute_pace(_make_trip(start=None, end=None), [stop]) == Pace.PLANNING

    def test_pace_relaxed(self):
        # 3 activities over 2 days
        stop = _make_stop(activities=[_make_activity(idx=i) for i in range(3)])
        assert compute_pace(_make_trip(), [stop]) == Pace.RELAXED

    def test_pace_balanced_at_upper_bound(self):
        # exactly 4 per day
        stop = _make_stop(activities=[_make_activity(idx=i) for i in range(8)])
        assert compute_pace(_make_trip(), [stop]) == Pace.BALANCED

    def test_pace_balanced_at_lower_bound(self):
        stop = _make_stop(activities=[_make_activity(idx=i) for i in range(4)])
        assert compute_pace(_make_trip(), [stop]) == Pace.BALANCED

    def test_pace_packed(self):
        stop = _make_stop(activities=[_make_activity(idx=i) for i in range(9)])
        assert compute_pace(_make_trip(), [stop]) == Pace.PACKED


class TestBudget:
    def test_remaining_budget_can_go_negative(self):
        trip = _make_trip(budget=1000)
        stop = _make_stop(transport=3000)
        breakdown = compute_cost_breakdown(trip, [stop])
        assert compute_remaining_budget(trip, breakdown) == 1000 - 4500

    def test_average_daily_cost_uses_inclusive_days(self):
        trip = _make_trip()
        stop = _make_stop(transport=1000, accommodation=2000, activities=[_make_activity(cost=500)])
        assert compute_average_daily_cost(trip, [stop]) == 2500

    def test_average_daily_cost_without_dates_divides_by_one(self):
        trip = _make_trip(start=None, end=None)
        stop = _make_stop(transport=100)
        assert compute_average_daily_cost(trip, [stop]) == 1600


class TestSummarizeTrip:
    def test_summary_fields(self):
        trip = _make_trip(budget=4000)
        stop = _make_stop(
            transport=1000,
            accommodation=2000,
            activities=[_make_activity(cost=500, category="Sightseeing")],
        )
        summary = summarize_trip(trip, [stop])
        assert summary.duration_days == 2
        assert summary.city_count == 1
        assert summary.total_estimated == 5000
        assert summary.remaining_budget == -1000
        assert summary.is_over_budget is True
        assert summary.average_daily_cost == 2500
        assert summary.pace == Pace.RELAXED
        assert summary.per_stop[0].activities == 500

    def test_summary_is_idempotent(self):
        trip = _make_trip()
        stops = [_make_stop("a", transport=10, activities=[_make_activity("a", cost=5)])]
        assert summarize_trip(trip, stops) == summarize_trip(trip, stops)

    def test_per_stop_costs_keeps_stop_order(self):
        stops = [_make_stop("b", transport=5), _make_stop("a", accommodation=7)]
        costs = per_stop_costs(stops)
        assert [c.stop_id for c in costs] == ["b", "a"]
        assert costs[1].accommodation == 7


class TestPaceOverThreeDays:
    def _trip(self):
        return _make_trip(date(2024, 3, 1), date(2024, 3, 3))

    def _stops(self, total_activities):
        first = total_activities // 2
        return [
            _make_stop("a", activities=[_make_activity("a", idx=i) for i in range(first)]),
            _make_stop("b", activities=[_make_activity("b", idx=i) for i in range(total_activities - first)]),
        ]

    def test_three_per_day_is_balanced(self):
        assert compute_pace(self._trip(), self._stops(9)) == Pace.BALANCED

    def test_one_per_day_is_relaxed(self):
        assert compute_pace(self._trip(), self._stops(3)) == Pace.RELAXED

    def test_twenty_is_packed(self):
        assert compute_pace(self._trip(), self._stops(20)) == Pace.PACKED
