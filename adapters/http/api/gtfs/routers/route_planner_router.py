import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from core.config import settings
from core.database import get_db
from core.rate_limiter import limiter, RateLimits
from adapters.http.api.gtfs.schemas import (
    PlannedRouteResponse,
    RoutePlannerResponse,
    RouteSegmentResponse,
    WalkingDirectionsResponse,
)
from adapters.http.api.gtfs.utils.walking_route import GoogleDirectionsClient
from src.gtfs_bc.routing import RoutingService, RouteResult
from src.gtfs_bc.routing.exceptions import InvalidQueryError, TransitStoreError
from src.gtfs_bc.shape.domain.value_objects.geo import GeoPoint

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/gtfs", tags=["GTFS Route Planner"])


def get_routing_service(db: Session = Depends(get_db)) -> RoutingService:
    """One service per request; nothing is shared between requests."""
    return RoutingService.from_settings(
        db,
        settings,
        directions_provider=GoogleDirectionsClient.from_settings(settings),
    )


def _to_response(result: RouteResult) -> PlannedRouteResponse:
    directions = result.walking_directions
    return PlannedRouteResponse(
        from_stop=result.from_stop.name,
        to_stop=result.to_stop.name,
        from_stop_id=result.from_stop.id,
        to_stop_id=result.to_stop.id,
        segments=[RouteSegmentResponse(**s.to_dict()) for s in result.segments],
        walking_directions=WalkingDirectionsResponse(**directions.to_dict()) if directions else None,
        total_transfers=result.total_transfers,
        total_distance=result.total_distance,
    )


@router.get("/route-planner", response_model=RoutePlannerResponse)
@limiter.limit(RateLimits.ROUTE_PLANNER)
def plan_route(
    request: Request,
    response: Response,
    from_text: str = Query(..., alias="from", description="Origin stop name (partial, case-insensitive)"),
    to_text: str = Query(..., alias="to", description="Destination stop name (partial, case-insensitive)"),
    user_lat: Optional[float] = Query(None, ge=-90, le=90, description="Current latitude, for walking directions"),
    user_lon: Optional[float] = Query(None, ge=-180, le=180, description="Current longitude, for walking directions"),
    service: RoutingService = Depends(get_routing_service),
):
    """Plan routes between two stops given by name.

    Up to 3 stops are matched for each name; every origin/destination pair
    is routed over scheduled trips and short walking transfers, and the best
    5 results are returned ordered by number of transfers, then distance.

    When both `user_lat` and `user_lon` are given, each route includes
    walking directions from that position to its first stop (if available).

    **Example requests:**
    ```
    GET /gtfs/route-planner?from=plaza&to=terminal
    GET /gtfs/route-planner?from=plaza&to=terminal&user_lat=-33.45&user_lon=-70.66
    ```
    """
    current_position = None
    if user_lat is not None and user_lon is not None:
        current_position = GeoPoint(user_lat, user_lon)

    try:
        plan = service.plan_trip(from_text, to_text, current_position=current_position)
    except InvalidQueryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TransitStoreError as e:
        logger.exception(f"Route planning failed during {e.stage} (from={from_text!r}, to={to_text!r})")
        raise HTTPException(status_code=500, detail="Failed to plan route")

    if not plan.success:
        response.status_code = 404
        return RoutePlannerResponse(
            success=False,
            message=plan.message,
            unmatched=plan.unmatched,
        )

    return RoutePlannerResponse(
        success=True,
        routes=[_to_response(r) for r in plan.routes],
    )
