from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from globetrotter.api.deps import get_stores
from globetrotter.services.cities import (
    ACTIVITY_CATEGORIES,
    REGIONS,
    activities_for_city,
    search_cities,
    suggest_destinations,
)
from globetrotter.store import OrderBy, Stores

router = APIRouter()

BY_POPULARITY = OrderBy("popularity", descending=True)


@router.get("")
async def list_cities(
    q: str = Query(""),
    region: Optional[str] = Query(None),
    stores: Stores = Depends(get_stores),
):
    cities = await stores.cities.list(order_by=BY_POPULARITY)
    matches = search_cities(cities, q, region)
    return {"cities": matches, "count": len(matches)}


@router.get("/suggestions")
async def get_suggestions(
    region: Optional[str] = Query(None),
    max_cost_index: Optional[int] = Query(None, ge=0, le=100),
    limit: int = Query(6, ge=1, le=50),
    stores: Stores = Depends(get_stores),
):
    cities = await stores.cities.list()
    return {"suggestions": suggest_destinations(cities, region, max_cost_index, limit)}


@router.get("/meta")
async def get_catalog_meta():
    return {"regions": REGIONS, "categories": ACTIVITY_CATEGORIES}


@router.get("/{city_id}/activities")
async def get_city_activities(city_id: str, stores: Stores = Depends(get_stores)):
    city = await stores.cities.get_by_id(city_id)
    if not city:
        raise HTTPException(status_code=404, detail="City not found")
    return {"city": city, "activities": await activities_for_city(stores, city.id)}
