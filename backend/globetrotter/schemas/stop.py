from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import date
from typing import Literal, Optional

from globetrotter.schemas._validators import check_date_range, reject_null
from globetrotter.schemas.activity import TripActivityRecord


class TripStopBase(BaseModel):
    city_id: Optional[str] = None
    city_name: str = Field(min_length=1, max_length=120)
    country: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    transport_cost: float = Field(default=0, ge=0)
    accommodation_cost: float = Field(default=0, ge=0)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def dates_in_order(self):
        check_date_range(self.start_date, self.end_date, "Stop")
        return self


class TripStopCreate(TripStopBase):
    # Appended after the current last stop when omitted
    order_index: Optional[int] = Field(default=None, ge=0)


class TripStopUpdate(BaseModel):
    city_id: Optional[str] = None
    city_name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    country: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    transport_cost: Optional[float] = Field(default=None, ge=0)
    accommodation_cost: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None

    @field_validator("city_name", "transport_cost", "accommodation_cost")
    @classmethod
    def not_null(cls, value, info):
        return reject_null(value, info)


class StopMoveRequest(BaseModel):
    direction: Literal["up", "down"]


class TripStopRecord(BaseModel):
    id: str
    trip_id: str
    city_id: Optional[str] = None
    city_name: str
    country: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    order_index: int = 0
    transport_cost: float = 0
    accommodation_cost: float = 0
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class LoadedStop(TripStopRecord):
    """A stop together with its activities, ordered by order_index."""
    activities: list[TripActivityRecord] = []

    def as_record(self) -> TripStopRecord:
        return TripStopRecord(**self.model_dump(exclude={"activities"}))
