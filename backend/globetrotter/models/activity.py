from sqlalchemy import Column, String, Text, Float, ForeignKey
from globetrotter.database import Base
from globetrotter.models._ids import new_id


class Activity(Base):
    """Catalog entry a trip activity can be sourced from."""
    __tablename__ = "activities"

    id = Column(String(64), primary_key=True, default=new_id)
    city_id = Column(String(64), ForeignKey("cities.id", ondelete="CASCADE"), nullable=False, index=True)
    category = Column(String(60), nullable=True)
    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)
    estimated_cost = Column(Float, default=0, nullable=False)
    duration_hours = Column(Float, default=1, nullable=False)
