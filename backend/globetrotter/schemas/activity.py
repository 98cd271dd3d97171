from pydantic import BaseModel, Field
from datetime import date, time
from typing import Optional


class TripActivityCreate(BaseModel):
    activity_id: Optional[str] = None
    name: str = Field(default="New Activity", min_length=1, max_length=150)
    description: Optional[str] = None
    scheduled_date: Optional[date] = None
    scheduled_time: Optional[time] = None
    duration_hours: float = Field(default=1, ge=0)
    estimated_cost: float = Field(default=0, ge=0)
    category: Optional[str] = None
    is_custom: bool = True
    # Appended after the stop's last activity when omitted
    order_index: Optional[int] = Field(default=None, ge=0)


class TripActivityRecord(BaseModel):
    id: str
    trip_stop_id: str
    activity_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    scheduled_date: Optional[date] = None
    scheduled_time: Optional[time] = None
    duration_hours: float = 0
    estimated_cost: float = 0
    order_index: int = 0
    category: Optional[str] = None
    is_custom: bool = False

    class Config:
        from_attributes = True
