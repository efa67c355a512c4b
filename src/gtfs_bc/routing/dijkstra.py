"""Shortest path search over a TransitGraph using Dijkstra's algorithm.

The priority queue uses lazy deletion: improved distances push a new entry
and stale entries are skipped when popped, so no decrease-key is needed.

Queue entries are (distance, stop_id) tuples. When two entries have the same
distance they pop in stop_id order, which makes results deterministic among
equal-weight paths.
"""

import heapq
from dataclasses import dataclass
from typing import Dict, List, Optional

from src.gtfs_bc.routing.graph import TransitGraph, TransitHop

INFINITY = float('inf')


@dataclass(frozen=True)
class PathStep:
    """A stop on a reconstructed path and the hop used to reach it.

    hop is None for the first step and for steps reached on foot.
    """
    stop_id: str
    hop: Optional[TransitHop] = None

    @property
    def trip_id(self) -> Optional[str]:
        return self.hop.trip_id if self.hop else None


class ShortestPathSolver:
    """Single-source shortest paths on one request's graph."""

    def __init__(self, graph: TransitGraph):
        self.graph = graph

    def shortest_distances(self, start: str) -> Dict[str, float]:
        """Distance from start to every stop in the graph (INFINITY if unreachable)."""
        distances, _, _ = self._search(start, None)
        return distances

    def find_path(self, start: str, end: str) -> List[PathStep]:
        """Cheapest path from start to end.

        Returns an empty list when end cannot be reached. That is a normal
        outcome and callers are expected to skip the pair.
        """
        if start not in self.graph.stops or end not in self.graph.stops:
            return []

        distances, predecessors, arrived_by = self._search(start, end)
        if distances[end] == INFINITY:
            return []

        path: List[PathStep] = []
        current: Optional[str] = end
        while current is not None:
            path.append(PathStep(current, arrived_by[current]))
            current = predecessors[current]
        path.reverse()
        return path

    def _search(self, start: str, end: Optional[str]):
        distances: Dict[str, float] = {stop_id: INFINITY for stop_id in self.graph.stops}
        predecessors: Dict[str, Optional[str]] = {stop_id: None for stop_id in self.graph.stops}
        arrived_by: Dict[str, Optional[TransitHop]] = {stop_id: None for stop_id in self.graph.stops}

        distances[start] = 0
        queue = [(0.0, start)]

        while queue:
            current_dist, current = heapq.heappop(queue)
            if current == end:
                break
            # Stale entry
            if current_dist > distances[current]:
                continue

            for edge in self.graph.neighbors(current):
                new_dist = current_dist + edge.weight
                if new_dist < distances.get(edge.target, INFINITY):
                    distances[edge.target] = new_dist
                    predecessors[edge.target] = current
                    arrived_by[edge.target] = edge.hop
                    heapq.heappush(queue, (new_dist, edge.target))

        return distances, predecessors, arrived_by
