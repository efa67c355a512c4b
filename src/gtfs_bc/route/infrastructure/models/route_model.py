from sqlalchemy import Column, String, Integer
from core.base import Base


class RouteModel(Base):
    """SQLAlchemy model for GTFS Route."""

    __tablename__ = "gtfs_routes"

    id = Column(String(100), primary_key=True)
    agency_id = Column(String(100), nullable=True)
    short_name = Column(String(50), nullable=True)
    long_name = Column(String(255), nullable=True)
    route_type = Column(Integer, nullable=False, default=3)  # 3 = Bus
    color = Column(String(6), nullable=True)  # Hex color without #
    text_color = Column(String(6), nullable=True)
    description = Column(String(500), nullable=True)
    url = Column(String(500), nullable=True)
    sort_order = Column(Integer, nullable=True)
