from datetime import datetime
from sqlalchemy import Column, String, DateTime
from globetrotter.database import Base
from globetrotter.models._ids import new_id


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), nullable=False, unique=True, index=True)
    full_name = Column(String(150), nullable=True)
    avatar_url = Column(String(500), nullable=True)
    language = Column(String(10), default="en", nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
