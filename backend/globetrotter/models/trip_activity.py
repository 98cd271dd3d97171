from sqlalchemy import Column, Integer, String, Text, Date, Time, Float, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from globetrotter.database import Base
from globetrotter.models._ids import new_id


class TripActivity(Base):
    __tablename__ = "trip_activities"

    id = Column(String(36), primary_key=True, default=new_id)
    trip_stop_id = Column(String(36), ForeignKey("trip_stops.id", ondelete="CASCADE"), nullable=False, index=True)
    activity_id = Column(String(64), nullable=True)  # loose reference into the activity catalog

    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=True)
    scheduled_date = Column(Date, nullable=True)
    scheduled_time = Column(Time, nullable=True)

    duration_hours = Column(Float, default=1, nullable=False)
    estimated_cost = Column(Float, default=0, nullable=False)
    order_index = Column(Integer, default=0, nullable=False)

    # Free text label, e.g. "Food", "Adventure"
    category = Column(String(60), nullable=True)
    is_custom = Column(Boolean, default=True, nullable=False)

    stop = relationship("TripStop", back_populates="activities")
