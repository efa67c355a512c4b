from sqlalchemy import Column, String, Float, Integer, ForeignKey
from sqlalchemy.orm import relationship
from core.base import Base


class StopModel(Base):
    """SQLAlchemy model for GTFS Stop."""

    __tablename__ = "gtfs_stops"

    id = Column(String(100), primary_key=True)
    name = Column(String(255), nullable=False)
    lat = Column(Float, nullable=False)
    lon = Column(Float, nullable=False)
    code = Column(String(50), nullable=True)
    description = Column(String(500), nullable=True)
    location_type = Column(Integer, nullable=False, default=0)
    parent_station_id = Column(String(100), ForeignKey("gtfs_stops.id"), nullable=True)
    wheelchair_boarding = Column(Integer, nullable=True)
    platform_code = Column(String(50), nullable=True)

    # Self-referential relationship for parent station
    parent_station = relationship("StopModel", remote_side=[id], backref="child_stops")
