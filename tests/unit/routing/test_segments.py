"""Unit tests for shape slicing and path segmentation."""

from unittest.mock import MagicMock

import pytest

from src.gtfs_bc.routing.dijkstra import PathStep
from src.gtfs_bc.routing.graph import RouteRef, TransitHop
from src.gtfs_bc.routing.segments import PathSegmenter, Segment, extract_shape_segment
from src.gtfs_bc.shape.domain.value_objects.geo import GeoPoint, polyline_length_km
from src.gtfs_bc.stop.domain.entities.stop import Stop


STOPS = {
    "A": Stop("A", "Alpha", 0.0, 0.0),
    "B": Stop("B", "Bravo", 0.0, 0.01),
    "C": Stop("C", "Charlie", 0.0, 0.02),
    "D": Stop("D", "Delta", 0.003, 0.02),
    "E": Stop("E", "Echo", 0.003, 0.03),
}

SHAPE_1 = [GeoPoint(0.0, 0.0), GeoPoint(0.001, 0.005), GeoPoint(0.0, 0.01),
           GeoPoint(0.001, 0.015), GeoPoint(0.0, 0.02)]


def ride(from_id, to_id, trip_id, shape_id=None, route_id="R1", seq=1):
    return TransitHop(from_id, to_id, trip_id, shape_id, RouteRef(route_id), seq, seq + 1)


def no_shapes(shape_id):
    return []


class TestExtractShapeSegment:
    """Tests for slicing a shape between two stops."""

    def test_slice_is_inclusive(self):
        piece = extract_shape_segment(SHAPE_1, GeoPoint(0.0, 0.0), GeoPoint(0.0, 0.01))
        assert piece == SHAPE_1[0:3]

    def test_reversed_points_give_same_slice(self):
        forward = extract_shape_segment(SHAPE_1, GeoPoint(0.0, 0.01), GeoPoint(0.0, 0.02))
        backward = extract_shape_segment(SHAPE_1, GeoPoint(0.0, 0.02), GeoPoint(0.0, 0.01))
        assert forward == backward == SHAPE_1[2:5]

    def test_same_point_gives_single_point(self):
        assert extract_shape_segment(SHAPE_1, GeoPoint(0.0, 0.01), GeoPoint(0.0, 0.01)) == [SHAPE_1[2]]

    def test_off_shape_points_are_snapped(self):
        piece = extract_shape_segment(SHAPE_1, GeoPoint(0.0002, 0.0001), GeoPoint(0.0009, 0.0149))
        assert piece == SHAPE_1[0:4]

    def test_empty_shape(self):
        assert extract_shape_segment([], GeoPoint(0, 0), GeoPoint(1, 1)) == []

    def test_never_empty_for_non_empty_shape(self):
        piece = extract_shape_segment([GeoPoint(5, 5)], GeoPoint(0, 0), GeoPoint(1, 1))
        assert piece == [GeoPoint(5, 5)]


class TestPathSegmenter:
    """Tests for grouping path steps into segments."""

    def test_single_trip_is_one_segment(self):
        path = [PathStep("A"), PathStep("B", ride("A", "B", "T1")), PathStep("C", ride("B", "C", "T1", seq=2))]
        segments = PathSegmenter(STOPS, no_shapes).segment(path)

        assert len(segments) == 1
        assert [s.id for s in segments[0].stops] == ["A", "B", "C"]
        assert segments[0].trip_id == "T1"
        assert segments[0].mode == "transit"
        assert segments[0].route.route_id == "R1"

    def test_trip_change_starts_new_segment(self):
        path = [
            PathStep("A"),
            PathStep("B", ride("A", "B", "T1")),
            PathStep("C", ride("B", "C", "T2", route_id="R2")),
        ]
        segments = PathSegmenter(STOPS, no_shapes).segment(path)

        assert [[s.id for s in seg.stops] for seg in segments] == [["A", "B"], ["B", "C"]]
        assert [seg.trip_id for seg in segments] == ["T1", "T2"]

    def test_walking_step_is_own_segment(self):
        path = [
            PathStep("A"),
            PathStep("C", ride("A", "C", "T1")),
            PathStep("D"),
            PathStep("E", ride("D", "E", "T2")),
        ]
        segments = PathSegmenter(STOPS, no_shapes).segment(path)

        assert [seg.mode for seg in segments] == ["transit", "walking", "transit"]
        walk = segments[1]
        assert [s.id for s in walk.stops] == ["C", "D"]
        assert walk.route is None
        assert walk.trip_id is None

    def test_consecutive_walks_are_separate_segments(self):
        path = [PathStep("B"), PathStep("C"), PathStep("D")]
        segments = PathSegmenter(STOPS, no_shapes).segment(path)
        assert [[s.id for s in seg.stops] for seg in segments] == [["B", "C"], ["C", "D"]]

    def test_walk_polyline_is_straight_line(self):
        segments = PathSegmenter(STOPS, no_shapes).segment([PathStep("C"), PathStep("D")])
        assert segments[0].polyline == [STOPS["C"].point, STOPS["D"].point]

    def test_transit_polyline_from_shape(self):
        path = [PathStep("A"), PathStep("B", ride("A", "B", "T1", shape_id="SH1"))]
        segments = PathSegmenter(STOPS, lambda shape_id: SHAPE_1).segment(path)
        assert segments[0].polyline == SHAPE_1[0:3]
        assert segments[0].distance_km == pytest.approx(polyline_length_km(SHAPE_1[0:3]))

    def test_transit_without_shape_falls_back_to_stops(self):
        path = [PathStep("A"), PathStep("B", ride("A", "B", "T1")), PathStep("C", ride("B", "C", "T1", seq=2))]
        segments = PathSegmenter(STOPS, no_shapes).segment(path)
        assert segments[0].polyline == [STOPS["A"].point, STOPS["B"].point, STOPS["C"].point]

    def test_unknown_shape_falls_back_to_stops(self):
        path = [PathStep("A"), PathStep("B", ride("A", "B", "T1", shape_id="MISSING"))]
        segments = PathSegmenter(STOPS, no_shapes).segment(path)
        assert segments[0].polyline == [STOPS["A"].point, STOPS["B"].point]

    def test_shape_loaded_once_per_segment(self):
        loader = MagicMock(return_value=SHAPE_1)
        path = [
            PathStep("A"),
            PathStep("B", ride("A", "B", "T1", shape_id="SH1")),
            PathStep("C", ride("B", "C", "T1", shape_id="SH1", seq=2)),
        ]
        PathSegmenter(STOPS, loader).segment(path)
        loader.assert_called_once_with("SH1")

    def test_segments_concatenate_to_path(self):
        path = [
            PathStep("A"),
            PathStep("B", ride("A", "B", "T1")),
            PathStep("C", ride("B", "C", "T1", seq=2)),
            PathStep("D"),
            PathStep("E", ride("D", "E", "T2")),
        ]
        segments = PathSegmenter(STOPS, no_shapes).segment(path)

        joined = [s.id for s in segments[0].stops]
        for seg in segments[1:]:
            assert seg.stops[0].id == joined[-1]
            joined.extend(s.id for s in seg.stops[1:])
        assert joined == [step.stop_id for step in path]

    def test_single_step_path_has_no_segments(self):
        assert PathSegmenter(STOPS, no_shapes).segment([PathStep("A")]) == []


class TestSegment:
    """Tests for segment serialization."""

    def test_walking_to_dict(self):
        seg = Segment(stops=[STOPS["C"], STOPS["D"]], polyline=[STOPS["C"].point, STOPS["D"].point])
        data = seg.to_dict()
        assert data["mode"] == "walking"
        assert data["route"] is None
        assert data["trip_id"] is None
        assert data["stops"][0] == {"stop_id": "C", "stop_name": "Charlie", "lat": 0.0, "lon": 0.02}
        assert data["shape"][1] == {"lat": 0.003, "lon": 0.02}

    def test_transit_to_dict(self):
        seg = Segment(
            stops=[STOPS["A"], STOPS["B"]],
            route=RouteRef("R1", "1", "Line One"),
            trip_id="T1",
        )
        data = seg.to_dict()
        assert data["mode"] == "transit"
        assert data["route"] == {
            "route_id": "R1",
            "route_short_name": "1",
            "route_long_name": "Line One",
        }
