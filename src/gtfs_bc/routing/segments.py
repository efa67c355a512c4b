"""Turn a stop-by-stop path into ride and walking segments with geometry."""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from src.gtfs_bc.routing.dijkstra import PathStep
from src.gtfs_bc.shape.domain.value_objects.geo import GeoPoint, nearest_index, polyline_length_km
from src.gtfs_bc.routing.graph import RouteRef, TransitHop
from src.gtfs_bc.stop.domain.entities.stop import Stop

ShapeLoader = Callable[[str], List[GeoPoint]]


def extract_shape_segment(
    shape: Sequence[GeoPoint],
    from_point: GeoPoint,
    to_point: GeoPoint
) -> List[GeoPoint]:
    """Extract the portion of a shape between two points.

    Each point is snapped independently to its closest shape point and the
    inclusive range between the two indexes is returned in shape order.
    If the shape runs against the direction of travel the slice is returned
    reversed relative to travel; it is only used for display.
    """
    if not shape:
        return []

    from_idx = nearest_index(shape, from_point)
    to_idx = nearest_index(shape, to_point)
    return list(shape[min(from_idx, to_idx):max(from_idx, to_idx) + 1])


@dataclass
class Segment:
    """A contiguous part of a journey on one trip, or one walking transfer."""
    stops: List[Stop]
    route: Optional[RouteRef] = None
    trip_id: Optional[str] = None
    shape_id: Optional[str] = None
    polyline: List[GeoPoint] = field(default_factory=list)

    @property
    def is_transit(self) -> bool:
        return self.trip_id is not None

    @property
    def mode(self) -> str:
        return "transit" if self.is_transit else "walking"

    @property
    def distance_km(self) -> float:
        return polyline_length_km(self.polyline)

    def to_dict(self) -> dict:
        return {
            "mode": self.mode,
            "trip_id": self.trip_id,
            "route": self.route.to_dict() if self.route else None,
            "stops": [s.to_dict() for s in self.stops],
            "shape": [p.to_dict() for p in self.polyline],
        }


class PathSegmenter:
    """Groups consecutive path steps into segments.

    Steps that continue the running trip extend the open segment. Any other
    step (a different trip, or a walk) closes it and opens a new segment made
    of the previous stop and the current one, so every walking transfer is a
    two-stop segment of its own.
    """

    def __init__(self, stops: Dict[str, Stop], shape_loader: ShapeLoader):
        self.stops = stops
        self.shape_loader = shape_loader

    def segment(self, path: Sequence[PathStep]) -> List[Segment]:
        segments: List[Segment] = []
        current: Optional[Segment] = None

        for prev_step, step in zip(path, path[1:]):
            stop = self.stops[step.stop_id]

            if current is not None and step.trip_id is not None and step.trip_id == current.trip_id:
                current.stops.append(stop)
                continue

            if current is not None:
                segments.append(self._finalize(current))

            current = self._open(self.stops[prev_step.stop_id], stop, step.hop)

        if current is not None:
            segments.append(self._finalize(current))

        return segments

    def _open(self, from_stop: Stop, to_stop: Stop, hop: Optional[TransitHop]) -> Segment:
        if hop is None:
            return Segment(stops=[from_stop, to_stop])
        return Segment(
            stops=[from_stop, to_stop],
            route=hop.route,
            trip_id=hop.trip_id,
            shape_id=hop.shape_id,
        )

    def _finalize(self, segment: Segment) -> Segment:
        first, last = segment.stops[0], segment.stops[-1]

        if not segment.is_transit:
            segment.polyline = [first.point, last.point]
            return segment

        shape = self.shape_loader(segment.shape_id) if segment.shape_id else []
        if shape:
            segment.polyline = extract_shape_segment(shape, first.point, last.point)
        else:
            # No geometry for this trip: straight lines through the visited stops
            segment.polyline = [s.point for s in segment.stops]
        return segment
