"""Per-request transit graph.

The graph is built from scratch for every planning request and only covers
the stops matched by name (the "closure"). Stops that were not matched are
invisible to the search, so transfers through them cannot be found. This
keeps each request small and is an accepted approximation.

Edges come in two flavors:
- Transit hops: two stops visited in increasing sequence order by the same
  trip. Weight is the straight-line distance scaled by TRANSIT_WEIGHT_FACTOR
  so scheduled rides are preferred over walking.
- Walking transfers: any two distinct stops within MAX_WALKING_DISTANCE_KM,
  in both directions. Weight is the distance plus WALKING_PENALTY.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from src.gtfs_bc.shape.domain.value_objects.geo import haversine_km
from src.gtfs_bc.stop.domain.entities.stop import Stop


# =============================================================================
# Constants
# =============================================================================

TRANSIT_WEIGHT_FACTOR = 0.1
MAX_WALKING_DISTANCE_KM = 0.8
WALKING_PENALTY = 1.5


# =============================================================================
# Data Structures
# =============================================================================

@dataclass(frozen=True)
class RouteRef:
    """Route identity shown to the rider."""
    route_id: str
    short_name: Optional[str] = None
    long_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "route_id": self.route_id,
            "route_short_name": self.short_name,
            "route_long_name": self.long_name,
        }


@dataclass(frozen=True)
class TransitHop:
    """One scheduled trip visiting from_stop_id before to_stop_id."""
    from_stop_id: str
    to_stop_id: str
    trip_id: str
    shape_id: Optional[str]
    route: RouteRef
    from_seq: int
    to_seq: int

    @property
    def is_forward(self) -> bool:
        return self.from_seq < self.to_seq


@dataclass(frozen=True)
class Edge:
    """Directed edge. `hop` is None for walking transfers."""
    target: str
    weight: float
    hop: Optional[TransitHop] = None

    @property
    def is_walking(self) -> bool:
        return self.hop is None


@dataclass
class TransitGraph:
    """Adjacency lists plus the stops they were built from."""
    stops: Dict[str, Stop]
    edges: Dict[str, List[Edge]] = field(default_factory=dict)

    def neighbors(self, stop_id: str) -> List[Edge]:
        return self.edges.get(stop_id, [])

    def add_edge(self, from_stop_id: str, edge: Edge) -> None:
        if edge.weight < 0:
            raise ValueError(f"Negative edge weight {edge.weight} from {from_stop_id}")
        self.edges.setdefault(from_stop_id, []).append(edge)

    @property
    def edge_count(self) -> int:
        return sum(len(e) for e in self.edges.values())


# =============================================================================
# Graph Builder
# =============================================================================

class TransitGraphBuilder:
    """Builds a TransitGraph from candidate stops and their scheduled hops."""

    def __init__(
        self,
        transit_weight_factor: float = TRANSIT_WEIGHT_FACTOR,
        max_walking_km: float = MAX_WALKING_DISTANCE_KM,
        walking_penalty: float = WALKING_PENALTY,
    ):
        self.transit_weight_factor = transit_weight_factor
        self.max_walking_km = max_walking_km
        self.walking_penalty = walking_penalty

    def build(self, stops: Sequence[Stop], hops: Iterable[TransitHop]) -> TransitGraph:
        graph = TransitGraph(stops={s.id: s for s in stops})
        self._add_transit_edges(graph, hops)
        self._add_walking_edges(graph)
        return graph

    def _add_transit_edges(self, graph: TransitGraph, hops: Iterable[TransitHop]) -> None:
        for hop in hops:
            # Never ride a trip backwards
            if not hop.is_forward:
                continue

            from_stop = graph.stops.get(hop.from_stop_id)
            to_stop = graph.stops.get(hop.to_stop_id)
            if from_stop is None or to_stop is None:
                continue

            distance = haversine_km(from_stop.point, to_stop.point)
            graph.add_edge(hop.from_stop_id, Edge(
                target=hop.to_stop_id,
                weight=distance * self.transit_weight_factor,
                hop=hop,
            ))

    def _add_walking_edges(self, graph: TransitGraph) -> None:
        stops = list(graph.stops.values())
        for i, s1 in enumerate(stops):
            for s2 in stops[i + 1:]:
                distance = haversine_km(s1.point, s2.point)
                if distance > self.max_walking_km:
                    continue
                # Same weight both ways
                weight = distance + self.walking_penalty
                graph.add_edge(s1.id, Edge(target=s2.id, weight=weight))
                graph.add_edge(s2.id, Edge(target=s1.id, weight=weight))
