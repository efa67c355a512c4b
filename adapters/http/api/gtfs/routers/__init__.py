from .route_planner_router import router as route_planner_router

__all__ = ["route_planner_router"]
