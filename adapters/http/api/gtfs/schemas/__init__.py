"""Centralized API schemas for GTFS endpoints."""

from .routing_schemas import (
    RouteStopResponse,
    RouteCoordinate,
    RouteReferenceResponse,
    RouteSegmentResponse,
    WalkingStepResponse,
    WalkingDirectionsResponse,
    PlannedRouteResponse,
    RoutePlannerResponse,
)

__all__ = [
    "RouteStopResponse",
    "RouteCoordinate",
    "RouteReferenceResponse",
    "RouteSegmentResponse",
    "WalkingStepResponse",
    "WalkingDirectionsResponse",
    "PlannedRouteResponse",
    "RoutePlannerResponse",
]
