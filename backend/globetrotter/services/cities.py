"""City catalog - seed data, search and destination suggestions."""

import logging
from typing import Optional, Sequence

from globetrotter.schemas import CatalogActivityRecord, CityRecord
from globetrotter.store.base import OrderBy
from globetrotter.store.registry import Stores

logger = logging.getLogger(__name__)

REGIONS = ["Europe", "Asia", "North America", "South America", "Africa", "Oceania", "Middle East"]

ACTIVITY_CATEGORIES = [
    "Historical",
    "Nature",
    "Beach",
    "Adventure",
    "Food",
    "Shopping",
    "Culture",
    "Nightlife",
]

SEED_CITIES: list[dict] = [
    {
        "id": "city-jaipur", "name": "Jaipur", "country": "India", "region": "Asia",
        "cost_index": 45, "popularity": 85, "best_season": "Oct - Mar",
        "description": "The Pink City - capital of Rajasthan known for royal palaces and vibrant bazaars",
        "latitude": 26.9124, "longitude": 75.7873,
    },
    {
        "id": "city-udaipur", "name": "Udaipur", "country": "India", "region": "Asia",
        "cost_index": 50, "popularity": 80, "best_season": "Oct - Mar",
        "description": "City of Lakes with stunning palaces and romantic boat rides",
        "latitude": 24.5854, "longitude": 73.7125,
    },
    {
        "id": "city-jodhpur", "name": "Jodhpur", "country": "India", "region": "Asia",
        "cost_index": 40, "popularity": 75, "best_season": "Oct - Mar",
        "description": "The Blue City with magnificent Mehrangarh Fort",
        "latitude": 26.2389, "longitude": 73.0243,
    },
    {
        "id": "city-goa", "name": "Goa", "country": "India", "region": "Asia",
        "cost_index": 55, "popularity": 90, "best_season": "Nov - Feb",
        "description": "Beach paradise with Portuguese heritage and vibrant nightlife",
        "latitude": 15.2993, "longitude": 74.1240,
    },
    {
        "id": "city-kerala", "name": "Kerala", "country": "India", "region": "Asia",
        "cost_index": 50, "popularity": 88, "best_season": "Sep - Mar",
        "description": "Backwaters, beaches, and lush greenery",
        "latitude": 10.1632, "longitude": 76.6413,
    },
    {
        "id": "city-manali", "name": "Manali", "country": "India", "region": "Asia",
        "cost_index": 45, "popularity": 82, "best_season": "Mar - Jun, Oct - Feb",
        "description": "Hill station with snow-capped mountains and adventure activities",
        "latitude": 32.2432, "longitude": 77.1892,
    },
    {
        "id": "city-london", "name": "London", "country": "United Kingdom", "region": "Europe",
        "cost_index": 85, "popularity": 95, "best_season": "Apr - Oct",
        "description": "A global hub of history, culture, and iconic landmarks",
        "latitude": 51.5074, "longitude": -0.1278,
    },
    {
        "id": "city-paris", "name": "Paris", "country": "France", "region": "Europe",
        "cost_index": 90, "popularity": 98, "best_season": "Apr - Oct",
        "description": "The City of Light - romance, art, and world-class cuisine",
        "latitude": 48.8566, "longitude": 2.3522,
    },
    {
        "id": "city-tokyo", "name": "Tokyo", "country": "Japan", "region": "Asia",
        "cost_index": 80, "popularity": 92, "best_season": "Mar - May, Sep - Nov",
        "description": "Modern metropolis blending tradition and cutting-edge technology",
        "latitude": 35.6762, "longitude": 139.6503,
    },
    {
        "id": "city-bali", "name": "Bali", "country": "Indonesia", "region": "Asia",
        "cost_index": 60, "popularity": 93, "best_season": "Apr - Oct",
        "description": "Tropical paradise with stunning beaches and rich culture",
        "latitude": -8.3405, "longitude": 115.0920,
    },
    {
        "id": "city-dubai", "name": "Dubai", "country": "UAE", "region": "Middle East",
        "cost_index": 75, "popularity": 87, "best_season": "Nov - Mar",
        "description": "Ultra-modern city with luxury shopping and stunning architecture",
        "latitude": 25.2048, "longitude": 55.2708,
    },
    {
        "id": "city-newyork", "name": "New York", "country": "USA", "region": "North America",
        "cost_index": 88, "popularity": 96, "best_season": "Apr - Jun, Sep - Nov",
        "description": "The city that never sleeps - iconic landmarks and vibrant culture",
        "latitude": 40.7128, "longitude": -74.0060,
    },
]


async def seed_cities(stores: Stores) -> int:
    """Insert the seed cities when the catalog is empty. Returns the count added."""
    if await stores.cities.list():
        return 0
    for city in SEED_CITIES:
        await stores.cities.insert(city)
    logger.info(f"Seeded {len(SEED_CITIES)} cities")
    return len(SEED_CITIES)


def search_cities(cities: Sequence[CityRecord], query: str, region: Optional[str] = None) -> list[CityRecord]:
    q = query.strip().lower()
    matches = []
    for city in cities:
        if region and city.region != region:
            continue
        if (
            q in city.name.lower()
            or q in city.country.lower()
            or (city.region and q in city.region.lower())
        ):
            matches.append(city)
    return sorted(matches, key=lambda c: -c.popularity)


def suggest_destinations(
    cities: Sequence[CityRecord],
    region: Optional[str] = None,
    max_cost_index: Optional[int] = None,
    limit: int = 6,
) -> list[CityRecord]:
    candidates = [
        c for c in cities
        if (not region or c.region == region)
        and (max_cost_index is None or c.cost_index <= max_cost_index)
    ]
    candidates.sort(key=lambda c: -c.popularity)
    return candidates[:limit]


async def activities_for_city(stores: Stores, city_id: str) -> list[CatalogActivityRecord]:
    return await stores.catalog_activities.list({"city_id": city_id}, OrderBy("name"))
