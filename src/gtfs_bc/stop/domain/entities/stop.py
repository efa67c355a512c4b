from dataclasses import dataclass

from src.gtfs_bc.shape.domain.value_objects.geo import GeoPoint


@dataclass(frozen=True)
class Stop:
    """GTFS Stop entity - immutable snapshot of a stop for one planning request."""

    id: str
    name: str
    lat: float
    lon: float

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.lat, self.lon)

    @classmethod
    def from_model(cls, model) -> "Stop":
        """Create Stop from a StopModel row."""
        return cls(
            id=model.id,
            name=model.name,
            lat=float(model.lat),
            lon=float(model.lon),
        )

    def to_dict(self) -> dict:
        return {
            "stop_id": self.id,
            "stop_name": self.name,
            "lat": self.lat,
            "lon": self.lon,
        }
