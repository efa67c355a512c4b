"""Read-only queries against the transit store used by the trip planner."""

import logging
from typing import Dict, List, Sequence

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, aliased

from src.gtfs_bc.routing.exceptions import TransitStoreError
from src.gtfs_bc.shape.domain.value_objects.geo import GeoPoint
from src.gtfs_bc.routing.graph import RouteRef, TransitHop
from src.gtfs_bc.route.infrastructure.models import RouteModel
from src.gtfs_bc.shape.infrastructure.models import ShapePointModel
from src.gtfs_bc.stop.domain.entities.stop import Stop
from src.gtfs_bc.stop.infrastructure.models import StopModel
from src.gtfs_bc.stop_time.infrastructure.models import StopTimeModel
from src.gtfs_bc.trip.infrastructure.models import TripModel

logger = logging.getLogger(__name__)


class TransitRepository:
    """Queries for stops, scheduled hops and shapes.

    Shapes are memoized for the lifetime of the repository, which is one
    planning request.
    """

    def __init__(self, db: Session):
        self.db = db
        self._shapes_cache: Dict[str, List[GeoPoint]] = {}

    def find_stops_by_name(self, *terms: str) -> List[Stop]:
        """Stops whose name contains any of the (already lower-cased) terms, ordered by name."""
        try:
            rows = self.db.query(StopModel).filter(
                or_(*[StopModel.name.icontains(term, autoescape=True) for term in terms])
            ).order_by(StopModel.name, StopModel.id).all()
        except SQLAlchemyError as e:
            raise TransitStoreError("stop_lookup", e) from e

        logger.debug(f"Stop lookup for {terms!r} returned {len(rows)} stops")
        return [Stop.from_model(row) for row in rows]

    def find_hops(self, stop_ids: Sequence[str]) -> List[TransitHop]:
        """Every (trip, earlier stop, later stop) combination among the given stops."""
        if not stop_ids:
            return []

        st1 = aliased(StopTimeModel)
        st2 = aliased(StopTimeModel)
        try:
            rows = self.db.query(
                st1.stop_id.label("from_stop_id"),
                st2.stop_id.label("to_stop_id"),
                TripModel.id.label("trip_id"),
                TripModel.shape_id,
                RouteModel.id.label("route_id"),
                RouteModel.short_name,
                RouteModel.long_name,
                st1.stop_sequence.label("from_seq"),
                st2.stop_sequence.label("to_seq"),
            ).join(
                st2, st1.trip_id == st2.trip_id
            ).join(
                TripModel, TripModel.id == st1.trip_id
            ).join(
                RouteModel, RouteModel.id == TripModel.route_id
            ).filter(
                st1.stop_id.in_(stop_ids),
                st2.stop_id.in_(stop_ids),
                st1.stop_sequence < st2.stop_sequence,
            ).order_by(
                st1.stop_id, st2.stop_id, TripModel.id, st1.stop_sequence
            ).all()
        except SQLAlchemyError as e:
            raise TransitStoreError("hop_lookup", e) from e

        logger.debug(f"Hop lookup over {len(stop_ids)} stops returned {len(rows)} hops")
        return [
            TransitHop(
                from_stop_id=row.from_stop_id,
                to_stop_id=row.to_stop_id,
                trip_id=row.trip_id,
                shape_id=row.shape_id,
                route=RouteRef(row.route_id, row.short_name, row.long_name),
                from_seq=row.from_seq,
                to_seq=row.to_seq,
            )
            for row in rows
        ]

    def get_shape(self, shape_id: str) -> List[GeoPoint]:
        """Shape points ordered by sequence (empty if the shape is unknown)."""
        if shape_id not in self._shapes_cache:
            try:
                points = self.db.query(
                    ShapePointModel.lat, ShapePointModel.lon
                ).filter(
                    ShapePointModel.shape_id == shape_id
                ).order_by(ShapePointModel.sequence).all()
            except SQLAlchemyError as e:
                raise TransitStoreError("shape_lookup", e) from e
            self._shapes_cache[shape_id] = [GeoPoint(float(p.lat), float(p.lon)) for p in points]
        return self._shapes_cache[shape_id]
