"""Great-circle distances and nearest-point lookup on stop and shape coordinates."""

from dataclasses import dataclass
from math import radians, cos, sin, atan2, sqrt
from typing import Sequence

# Earth's radius in kilometers
EARTH_RADIUS_KM = 6371


@dataclass(frozen=True)
class GeoPoint:
    """Geographic point with latitude and longitude."""
    lat: float
    lon: float

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lon": self.lon}


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    """Calculate the great-circle distance between two points in kilometers.

    Args:
        a: First point
        b: Second point

    Returns:
        Distance in kilometers
    """
    lat1_rad = radians(a.lat)
    lat2_rad = radians(b.lat)
    delta_lat = radians(b.lat - a.lat)
    delta_lon = radians(b.lon - a.lon)

    h = sin(delta_lat / 2) ** 2 + cos(lat1_rad) * cos(lat2_rad) * sin(delta_lon / 2) ** 2
    return EARTH_RADIUS_KM * 2 * atan2(sqrt(h), sqrt(1 - h))


def nearest_index(points: Sequence[GeoPoint], target: GeoPoint) -> int:
    """Index of the point closest to target.

    Ties resolve to the lowest index.

    Raises:
        ValueError: if points is empty
    """
    if not points:
        raise ValueError("nearest_index() requires at least one point")

    min_idx = 0
    min_dist = haversine_km(points[0], target)
    for i in range(1, len(points)):
        dist = haversine_km(points[i], target)
        if dist < min_dist:
            min_dist = dist
            min_idx = i
    return min_idx


def polyline_length_km(points: Sequence[GeoPoint]) -> float:
    """Sum of distances between consecutive points."""
    return sum(
        haversine_km(points[i - 1], points[i])
        for i in range(1, len(points))
    )
