"""Trip planning service using Dijkstra's algorithm.

This service answers "how do I get from A to B" for free-text stop names:

1. Resolve origin/destination texts into candidate stops (max 3 per side)
2. Build a graph over every matched stop: scheduled hops + walking transfers
3. Run Dijkstra for every (origin, destination) candidate pair
4. Split each path into ride/walking segments with map geometry
5. Rank by (transfers, distance) and keep the best 5

Everything is built per request from the request's own session; nothing is
shared between requests.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol

from sqlalchemy.orm import Session

from src.gtfs_bc.routing.dijkstra import ShortestPathSolver
from src.gtfs_bc.routing.exceptions import NoMatchingStopsError
from src.gtfs_bc.shape.domain.value_objects.geo import GeoPoint
from src.gtfs_bc.routing.graph import TransitGraph, TransitGraphBuilder
from src.gtfs_bc.routing.segments import PathSegmenter, Segment
from src.gtfs_bc.routing.stop_resolver import MAX_CANDIDATES_PER_SIDE, StopResolver
from src.gtfs_bc.routing.transit_repository import TransitRepository
from src.gtfs_bc.stop.domain.entities.stop import Stop

logger = logging.getLogger(__name__)

MAX_RESULTS = 5

OUTCOME_OK = "ok"
OUTCOME_NO_STOPS_MATCHED = "no_stops_matched"
OUTCOME_NO_ROUTES_FOUND = "no_routes_found"


class DirectionsProvider(Protocol):
    def get_walking_directions(self, origin: GeoPoint, destination: GeoPoint):
        ...


@dataclass
class RouteResult:
    """Best path for one (origin candidate, destination candidate) pair."""
    from_stop: Stop
    to_stop: Stop
    segments: List[Segment]
    total_transfers: int
    total_distance: float
    walking_directions: Optional[object] = None

    @property
    def sort_key(self):
        return (self.total_transfers, self.total_distance)


@dataclass
class TripPlan:
    """Outcome of a planning request."""
    outcome: str
    message: Optional[str] = None
    unmatched: List[str] = field(default_factory=list)
    routes: List[RouteResult] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.outcome == OUTCOME_OK


def count_transfers(segments: List[Segment]) -> int:
    """Number of rides minus one, never negative. Walks are not counted."""
    rides = sum(1 for s in segments if s.is_transit)
    return max(rides - 1, 0)


def total_distance_km(segments: List[Segment]) -> float:
    """Length of all segment polylines, rounded to 2 decimals."""
    return round(sum(s.distance_km for s in segments), 2)


class RoutingService:
    """Plans trips between free-text origin and destination names."""

    def __init__(
        self,
        db: Session,
        directions_provider: Optional[DirectionsProvider] = None,
        max_candidates: int = MAX_CANDIDATES_PER_SIDE,
        max_results: int = MAX_RESULTS,
        graph_builder: Optional[TransitGraphBuilder] = None,
    ):
        self.db = db
        self.repository = TransitRepository(db)
        self.resolver = StopResolver(self.repository, max_candidates=max_candidates)
        self.graph_builder = graph_builder or TransitGraphBuilder()
        self.directions_provider = directions_provider
        self.max_results = max_results

    @classmethod
    def from_settings(cls, db: Session, settings, directions_provider=None) -> "RoutingService":
        routing = settings.routing
        return cls(
            db,
            directions_provider=directions_provider,
            max_candidates=routing.ROUTING_MAX_CANDIDATES,
            max_results=routing.ROUTING_MAX_RESULTS,
            graph_builder=TransitGraphBuilder(
                transit_weight_factor=routing.ROUTING_TRANSIT_WEIGHT_FACTOR,
                max_walking_km=routing.ROUTING_MAX_WALKING_KM,
                walking_penalty=routing.ROUTING_WALKING_PENALTY,
            ),
        )

    def build_graph(self, stops: List[Stop]) -> TransitGraph:
        hops = self.repository.find_hops([s.id for s in stops])
        graph = self.graph_builder.build(stops, hops)
        logger.debug(f"Built graph with {len(graph.stops)} stops and {graph.edge_count} edges")
        return graph

    def plan_trip(
        self,
        origin_text: str,
        destination_text: str,
        current_position: Optional[GeoPoint] = None,
    ) -> TripPlan:
        """Plan routes between two stop names.

        Args:
            origin_text: Free-text origin (matched against stop names)
            destination_text: Free-text destination
            current_position: Rider position; when given, walking directions
                to each origin candidate are attached

        Returns:
            TripPlan with at most `max_results` routes ordered by
            (transfers, distance)

        Raises:
            InvalidQueryError: blank origin or destination
            TransitStoreError: the transit store could not be queried
        """
        try:
            candidates = self.resolver.resolve(origin_text, destination_text)
        except NoMatchingStopsError as e:
            return TripPlan(
                outcome=OUTCOME_NO_STOPS_MATCHED,
                message=str(e),
                unmatched=e.unmatched,
            )

        graph = self.build_graph(candidates.stops)
        solver = ShortestPathSolver(graph)
        segmenter = PathSegmenter(graph.stops, self.repository.get_shape)
        directions_by_origin: Dict[str, object] = {}

        results: List[RouteResult] = []
        for from_stop in candidates.origins:
            for to_stop in candidates.destinations:
                path = solver.find_path(from_stop.id, to_stop.id)
                if len(path) < 2:
                    continue

                segments = segmenter.segment(path)
                if not segments:
                    continue

                results.append(RouteResult(
                    from_stop=from_stop,
                    to_stop=to_stop,
                    segments=segments,
                    total_transfers=count_transfers(segments),
                    total_distance=total_distance_km(segments),
                    walking_directions=self._walking_directions(
                        current_position, from_stop, directions_by_origin
                    ),
                ))

        results.sort(key=lambda r: r.sort_key)
        results = results[:self.max_results]

        if not results:
            logger.info(f"No routes found from {origin_text!r} to {destination_text!r}")
            return TripPlan(
                outcome=OUTCOME_NO_ROUTES_FOUND,
                message="No routes found between the specified stops",
            )

        return TripPlan(outcome=OUTCOME_OK, routes=results)

    def _walking_directions(
        self,
        current_position: Optional[GeoPoint],
        from_stop: Stop,
        cache: Dict[str, object],
    ):
        """Directions to the first stop, fetched once per origin candidate."""
        if current_position is None or self.directions_provider is None:
            return None
        if from_stop.id not in cache:
            try:
                cache[from_stop.id] = self.directions_provider.get_walking_directions(
                    current_position, from_stop.point
                )
            except Exception as e:
                # The route is still useful without directions
                logger.warning(f"Walking directions to {from_stop.id} failed: {e}")
                cache[from_stop.id] = None
        return cache[from_stop.id]
