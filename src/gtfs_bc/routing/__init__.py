"""Routing module for transit pathfinding.

Plans trips between free-text stop names over a graph built per request.

- RoutingService: resolves stops, builds the graph, runs Dijkstra per
  candidate pair and ranks the results
- TransitGraphBuilder: transit hops + walking transfers
- ShortestPathSolver: Dijkstra with lazy deletion
- PathSegmenter: path -> ride/walking segments with shape geometry
"""

from .dijkstra import ShortestPathSolver, PathStep
from .graph import TransitGraph, TransitGraphBuilder, TransitHop, RouteRef, Edge
from .segments import PathSegmenter, Segment, extract_shape_segment
from .routing_service import RoutingService, RouteResult, TripPlan

__all__ = [
    "ShortestPathSolver",
    "PathStep",
    "TransitGraph",
    "TransitGraphBuilder",
    "TransitHop",
    "RouteRef",
    "Edge",
    "PathSegmenter",
    "Segment",
    "extract_shape_segment",
    "RoutingService",
    "RouteResult",
    "TripPlan",
]
