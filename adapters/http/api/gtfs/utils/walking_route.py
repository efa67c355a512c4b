"""Walking directions using the Google Directions API.

Used for the leg between the rider's current position and the first stop of
a planned route. The call is made once, bounded by a timeout, and never
retried: any failure means "no directions" and the route is still returned.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import httpx

from src.gtfs_bc.shape.domain.value_objects.geo import GeoPoint

logger = logging.getLogger(__name__)

DIRECTIONS_URL = "https://maps.googleapis.com/maps/api/directions/json"
REQUEST_TIMEOUT = 10.0


@dataclass
class WalkingStep:
    """One turn-by-turn instruction."""
    instruction: str
    distance: str
    duration: str
    polyline: str

    def to_dict(self) -> dict:
        return {
            "instruction": self.instruction,
            "distance": self.distance,
            "duration": self.duration,
            "polyline": self.polyline,
        }


@dataclass
class WalkingDirections:
    """Routed walking path: totals, steps and the encoded overview polyline."""
    distance: str
    duration: str
    polyline: str
    steps: List[WalkingStep] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "distance": self.distance,
            "duration": self.duration,
            "steps": [s.to_dict() for s in self.steps],
            "polyline": self.polyline,
        }


def parse_directions(data: dict) -> Optional[WalkingDirections]:
    """Parse a Directions API JSON body. Returns None unless status is OK with a route."""
    if data.get("status") != "OK" or not data.get("routes"):
        logger.warning(f"Google Directions: no routes found or invalid response ({data.get('status')})")
        return None

    route = data["routes"][0]
    leg = route["legs"][0]
    return WalkingDirections(
        distance=leg["distance"]["text"],
        duration=leg["duration"]["text"],
        steps=[
            WalkingStep(
                instruction=step["html_instructions"],
                distance=step["distance"]["text"],
                duration=step["duration"]["text"],
                polyline=step["polyline"]["points"],
            )
            for step in leg.get("steps", [])
        ],
        polyline=route["overview_polyline"]["points"],
    )


class GoogleDirectionsClient:
    """Walking directions provider backed by Google Directions."""

    def __init__(
        self,
        api_key: str,
        timeout: float = REQUEST_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings) -> Optional["GoogleDirectionsClient"]:
        """Client configured from app settings, or None when no API key is set."""
        if not settings.GOOGLE_MAPS_API_KEY:
            return None
        return cls(settings.GOOGLE_MAPS_API_KEY, timeout=settings.DIRECTIONS_TIMEOUT_SECONDS)

    def get_walking_directions(self, origin: GeoPoint, destination: GeoPoint) -> Optional[WalkingDirections]:
        """Walking directions from origin to destination, or None if unavailable."""
        params = {
            "origin": f"{origin.lat},{origin.lon}",
            "destination": f"{destination.lat},{destination.lon}",
            "mode": "walking",
            "key": self.api_key,
        }

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.get(DIRECTIONS_URL, params=params)
            if response.status_code != 200:
                logger.warning(f"Google Directions API error: HTTP {response.status_code}")
                return None
            return parse_directions(response.json())
        except httpx.TimeoutException:
            logger.warning(f"Google Directions timed out after {self.timeout}s")
            return None
        except httpx.HTTPError as e:
            logger.warning(f"Google Directions request failed: {e}")
            return None
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.warning(f"Google Directions returned an unexpected payload: {e}")
            return None
