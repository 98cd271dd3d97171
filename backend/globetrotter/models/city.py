from sqlalchemy import Column, Integer, String, Text, Float
from globetrotter.database import Base
from globetrotter.models._ids import new_id


class City(Base):
    """Read-only reference data consulted when adding stops."""
    __tablename__ = "cities"

    id = Column(String(64), primary_key=True, default=new_id)
    name = Column(String(120), nullable=False, index=True)
    country = Column(String(120), nullable=False)
    region = Column(String(60), nullable=True)

    # 0-100, relative cost of a day in the city
    cost_index = Column(Integer, default=50, nullable=False)
    popularity = Column(Integer, default=0, nullable=False)

    image_url = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
    best_season = Column(String(60), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
