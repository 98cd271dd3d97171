from sqlalchemy import Column, Integer, String, Text, Date, Float, ForeignKey
from sqlalchemy.orm import relationship
from globetrotter.database import Base
from globetrotter.models._ids import new_id


class TripStop(Base):
    __tablename__ = "trip_stops"

    id = Column(String(36), primary_key=True, default=new_id)
    trip_id = Column(String(36), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    city_id = Column(String(64), nullable=True)  # loose reference into the city catalog

    # Free text, present even when city_id is null
    city_name = Column(String(120), nullable=False)
    country = Column(String(120), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)

    # Unique within a trip, not necessarily contiguous
    order_index = Column(Integer, default=0, nullable=False)

    transport_cost = Column(Float, default=0, nullable=False)
    accommodation_cost = Column(Float, default=0, nullable=False)
    notes = Column(Text, nullable=True)

    trip = relationship("Trip", back_populates="stops")
    activities = relationship(
        "TripActivity",
        back_populates="stop",
        cascade="all, delete-orphan",
        order_by="TripActivity.order_index",
    )
