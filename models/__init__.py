# Models registry
# Import all SQLAlchemy models here so Base.metadata knows every table

from src.gtfs_bc.route.infrastructure.models import RouteModel
from src.gtfs_bc.stop.infrastructure.models import StopModel
from src.gtfs_bc.trip.infrastructure.models import TripModel
from src.gtfs_bc.stop_time.infrastructure.models import StopTimeModel
from src.gtfs_bc.shape.infrastructure.models import ShapePointModel

__all__ = [
    "RouteModel",
    "StopModel",
    "TripModel",
    "StopTimeModel",
    "ShapePointModel",
]
