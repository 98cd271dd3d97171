from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class CityRecord(BaseModel):
    id: str
    name: str
    country: str
    region: Optional[str] = None
    cost_index: int = 50
    popularity: int = 0
    image_url: Optional[str] = None
    description: Optional[str] = None
    best_season: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    class Config:
        from_attributes = True


class CatalogActivityRecord(BaseModel):
    id: str
    city_id: str
    category: Optional[str] = None
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    estimated_cost: float = 0
    duration_hours: float = 1

    class Config:
        from_attributes = True


class ProfileRecord(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    language: str = "en"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
