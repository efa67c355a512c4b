"""Errors raised while planning a trip.

Search misses (no path between one candidate pair) are not errors and never
raise; they are skipped by the planner.
"""

from typing import List


class InvalidQueryError(ValueError):
    """Origin or destination text is missing or blank."""


class NoMatchingStopsError(Exception):
    """No stop name matched the origin and/or destination text."""

    def __init__(self, unmatched: List[str]):
        self.unmatched = unmatched
        super().__init__(f"No matching stops found for {' and '.join(unmatched)}")


class TransitStoreError(Exception):
    """A query against the transit store failed.

    `stage` names the lookup that failed (stop_lookup, hop_lookup, shape_lookup).
    """

    def __init__(self, stage: str, cause: Exception):
        self.stage = stage
        self.cause = cause
        super().__init__(f"Transit store failure during {stage}: {cause}")
