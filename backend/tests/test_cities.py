"""Tests for the city catalog service."""
from globetrotter.schemas import CityRecord
from globetrotter.services.cities import (
    SEED_CITIES,
    activities_for_city,
    search_cities,
    seed_cities,
    suggest_destinations,
)


def _make_city(name, country="India", region="Asia", cost_index=50, popularity=50):
    return CityRecord(
        id=f"city-{name.lower()}",
        name=name,
        country=country,
        region=region,
        cost_index=cost_index,
        popularity=popularity,
    )


CITIES = [
    _make_city("Jaipur", popularity=85, cost_index=45),
    _make_city("Goa", popularity=90, cost_index=55),
    _make_city("Paris", country="France", region="Europe", popularity=95, cost_index=90),
    _make_city("Dubai", country="UAE", region="Middle East", popularity=88, cost_index=80),
]


class TestSearchCities:
    def test_matches_name(self):
        assert [c.name for c in search_cities(CITIES, "jai")] == ["Jaipur"]

    def test_matches_country_sorted_by_popularity(self):
        assert [c.name for c in search_cities(CITIES, "INDIA")] == ["Goa", "Jaipur"]

    def test_matches_region(self):
        assert [c.name for c in search_cities(CITIES, "europe")] == ["Paris"]

    def test_region_filter(self):
        assert search_cities(CITIES, "", region="Middle East")[0].name == "Dubai"

    def test_empty_query_returns_all(self):
        assert len(search_cities(CITIES, "  ")) == len(CITIES)


class TestSuggestDestinations:
    def test_cost_ceiling(self):
        names = [c.name for c in suggest_destinations(CITIES, max_cost_index=60)]
        assert names == ["Goa", "Jaipur"]

    def test_region_and_limit(self):
        assert len(suggest_destinations(CITIES, region="Asia", limit=1)) == 1

    def test_most_popular_first(self):
        assert suggest_destinations(CITIES)[0].name == "Paris"


class TestSeedCities:
    async def test_seeds_once(self, local_stores):
        assert await seed_cities(local_stores) == len(SEED_CITIES)
        assert await seed_cities(local_stores) == 0
        assert len(await local_stores.cities.list()) == len(SEED_CITIES)

    async def test_sql_seed_keeps_ids(self, sql_stores):
        await seed_cities(sql_stores)
        jaipur = await sql_stores.cities.get_by_id("city-jaipur")
        assert jaipur.name == "Jaipur"

    async def test_activities_for_city(self, local_stores):
        await local_stores.catalog_activities.insert({"city_id": "c1", "name": "Zipline", "category": "Adventure"})
        await local_stores.catalog_activities.insert({"city_id": "c1", "name": "Boat Ride"})
        await local_stores.catalog_activities.insert({"city_id": "c2", "name": "Elsewhere"})

        activities = await activities_for_city(local_stores, "c1")

        assert [a.name for a in activities] == ["Boat Ride", "Zipline"]
