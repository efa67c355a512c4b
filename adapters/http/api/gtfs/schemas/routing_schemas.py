"""Route planner response schemas.

A response carries up to 5 routes, one per (origin stop, destination stop)
candidate pair, each made of transit rides and walking transfers.
"""

from typing import Optional, List
from pydantic import BaseModel


class RouteStopResponse(BaseModel):
    """A stop within a route segment."""
    stop_id: str
    stop_name: str
    lat: float
    lon: float


class RouteCoordinate(BaseModel):
    """A coordinate point in a segment shape."""
    lat: float
    lon: float


class RouteReferenceResponse(BaseModel):
    """Transit line used by a segment."""
    route_id: str
    route_short_name: Optional[str] = None
    route_long_name: Optional[str] = None


class RouteSegmentResponse(BaseModel):
    """A single segment of a route (transit ride or walking transfer).

    - mode="transit": a ride on one trip, `route` is set
    - mode="walking": a straight-line walk between two stops, `route` is null
    """
    mode: str  # "transit" or "walking"
    trip_id: Optional[str] = None
    route: Optional[RouteReferenceResponse] = None
    stops: List[RouteStopResponse]

    # Geometry for map display
    shape: List[RouteCoordinate] = []


class WalkingStepResponse(BaseModel):
    """One turn-by-turn walking instruction."""
    instruction: str
    distance: str
    duration: str
    polyline: str  # Encoded polyline


class WalkingDirectionsResponse(BaseModel):
    """Routed walk from the rider's position to the first stop."""
    distance: str
    duration: str
    steps: List[WalkingStepResponse] = []
    polyline: str  # Encoded overview polyline


class PlannedRouteResponse(BaseModel):
    """Best route for one origin/destination stop pair."""
    from_stop: str
    to_stop: str
    from_stop_id: str
    to_stop_id: str
    segments: List[RouteSegmentResponse]
    walking_directions: Optional[WalkingDirectionsResponse] = None
    total_transfers: int
    total_distance: float  # Kilometers, 2 decimals


class RoutePlannerResponse(BaseModel):
    """Response from the route planner endpoint.

    `unmatched` lists which side(s) ("origin", "destination") had no matching
    stops when no route could be attempted.
    """
    success: bool
    message: Optional[str] = None
    unmatched: List[str] = []
    routes: List[PlannedRouteResponse] = []
