from .trip_model import TripModel

__all__ = ["TripModel"]
