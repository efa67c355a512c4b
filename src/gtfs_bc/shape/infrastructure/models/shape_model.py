from sqlalchemy import Column, String, Float, Integer, Index
from core.base import Base


class ShapePointModel(Base):
    """SQLAlchemy model for GTFS shape points (shapes.txt rows)."""

    __tablename__ = "gtfs_shape_points"

    # Composite primary key
    shape_id = Column(String(100), primary_key=True)
    sequence = Column(Integer, primary_key=True)

    lat = Column(Float, nullable=False)
    lon = Column(Float, nullable=False)
    dist_traveled = Column(Float, nullable=True)

    __table_args__ = (
        Index("ix_shape_points_shape_id", "shape_id"),
    )
