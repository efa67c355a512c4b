"""Resolve free-text origin/destination into candidate stops."""

import logging
from dataclasses import dataclass
from typing import List

from src.gtfs_bc.routing.exceptions import InvalidQueryError, NoMatchingStopsError
from src.gtfs_bc.routing.transit_repository import TransitRepository
from src.gtfs_bc.stop.domain.entities.stop import Stop

logger = logging.getLogger(__name__)

MAX_CANDIDATES_PER_SIDE = 3


def normalize_query(text: str) -> str:
    return (text or "").strip().lower()


@dataclass
class StopCandidates:
    """Result of resolving both ends of a query.

    `stops` holds every stop matched by either text and is the set the graph
    is built over. `origins` and `destinations` are the truncated lists used
    for pairing.
    """
    origins: List[Stop]
    destinations: List[Stop]
    stops: List[Stop]


class StopResolver:
    """Case-insensitive substring match of stop names."""

    def __init__(self, repository: TransitRepository, max_candidates: int = MAX_CANDIDATES_PER_SIDE):
        self.repository = repository
        self.max_candidates = max_candidates

    def resolve(self, origin_text: str, destination_text: str) -> StopCandidates:
        origin = normalize_query(origin_text)
        destination = normalize_query(destination_text)

        if not origin or not destination:
            raise InvalidQueryError("Missing 'from' or 'to' parameter")

        # One lookup for both sides; matches can overlap
        stops = self.repository.find_stops_by_name(origin, destination)

        origins = [s for s in stops if origin in s.name.lower()]
        destinations = [s for s in stops if destination in s.name.lower()]

        unmatched = []
        if not origins:
            unmatched.append("origin")
        if not destinations:
            unmatched.append("destination")
        if unmatched:
            logger.info(f"No stops matched {unmatched} for from={origin!r} to={destination!r}")
            raise NoMatchingStopsError(unmatched)

        return StopCandidates(
            origins=origins[:self.max_candidates],
            destinations=destinations[:self.max_candidates],
            stops=stops,
        )
