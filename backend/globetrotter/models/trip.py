from datetime import datetime
from sqlalchemy import Column, String, Text, Date, DateTime, Boolean, Float
from sqlalchemy.orm import relationship
from globetrotter.database import Base
from globetrotter.models._ids import new_id


class Trip(Base):
    __tablename__ = "trips"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False, index=True)

    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    cover_image = Column(String(500), nullable=True)

    is_public = Column(Boolean, default=False, nullable=False)
    share_code = Column(String(16), nullable=True, unique=True, index=True)

    # User-declared spending ceiling
    total_budget = Column(Float, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    stops = relationship(
        "TripStop",
        back_populates="trip",
        cascade="all, delete-orphan",
        order_by="TripStop.order_index",
    )
