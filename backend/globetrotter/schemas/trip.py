from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import date, datetime
from typing import Optional

from globetrotter.schemas._validators import check_date_range, reject_null


class TripBase(BaseModel):
    name: str = Field(min_length=1, max_length=150)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    cover_image: Optional[str] = None
    is_public: bool = False
    total_budget: float = Field(default=0, ge=0)

    @model_validator(mode="after")
    def dates_in_order(self):
        check_date_range(self.start_date, self.end_date, "Trip")
        return self


class TripCreate(TripBase):
    pass


class TripUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    cover_image: Optional[str] = None
    is_public: Optional[bool] = None
    total_budget: Optional[float] = Field(default=None, ge=0)

    @field_validator("name", "is_public", "total_budget")
    @classmethod
    def not_null(cls, value, info):
        return reject_null(value, info)


class TripRecord(BaseModel):
    id: str
    user_id: str
    name: str
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    cover_image: Optional[str] = None
    is_public: bool = False
    share_code: Optional[str] = None
    total_budget: float = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
