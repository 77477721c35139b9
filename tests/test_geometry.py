import sys

import pytest

from ne2json.pipeline.geometry import (
    extract_points,
    summarize_geometry,
    summarize_points,
)

POLYGON_WITH_HOLE = [
    [[0, 0], [0, 4], [4, 4], [4, 0], [0, 0]],
    [[1, 1], [1, 2], [2, 2], [1, 1]],
]

MULTIPOLYGON_3_PARTS = [
    [[[0, 0], [1, 0], [1, 1], [0, 0]]],
    [[[10, 10], [11, 10], [11, 11], [10, 10]], [[10.2, 10.2], [10.4, 10.2], [10.2, 10.4], [10.2, 10.2]]],
    [[[-5, -5], [-4, -5], [-4, -4], [-5, -5]]],
]


class TestExtractPoints:
    def test_point(self):
        assert extract_points([30.5, 50.25]) == [(30.5, 50.25)]

    def test_linestring(self):
        assert extract_points([[0, 0], [1, 1], [2, 0]]) == [(0, 0), (1, 1), (2, 0)]

    def test_polygon_with_hole_keeps_ring_order(self):
        points = extract_points(POLYGON_WITH_HOLE)
        assert points == [
            (0, 0), (0, 4), (4, 4), (4, 0), (0, 0),
            (1, 1), (1, 2), (2, 2), (1, 1),
        ]

    def test_multipolygon_depth_first(self):
        points = extract_points(MULTIPOLYGON_3_PARTS)
        assert len(points) == 16
        assert points[:4] == [(0, 0), (1, 0), (1, 1), (0, 0)]
        assert points[4] == (10, 10)
        assert points[8] == (10.2, 10.2)
        assert points[-1] == (-5, -5)

    def test_extra_ordinates_dropped(self):
        assert extract_points([[1, 2, 300], [3, 4, 400]]) == [(1, 2), (3, 4)]

    def test_points_are_floats(self):
        (point,) = extract_points([1, 2])
        assert all(isinstance(v, float) for v in point)

    def test_malformed_leaves_contribute_nothing(self):
        coordinates = [[0, 0], ["a", "b"], [1], None, "x", [[2, 2]], [5, "north"]]
        assert extract_points(coordinates) == [(0, 0), (2, 2)]

    def test_booleans_are_not_coordinates(self):
        assert extract_points([True, False]) == []

    @pytest.mark.parametrize("value", [None, [], [[]], [[[]]], {}, "coords", 42])
    def test_empty_or_invalid_input(self, value):
        assert extract_points(value) == []

    def test_nesting_deeper_than_recursion_limit(self):
        coordinates = [1.0, 2.0]
        for _ in range(sys.getrecursionlimit() + 50):
            coordinates = [coordinates]
        assert extract_points(coordinates) == [(1.0, 2.0)]


class TestSummarizeGeometry:
    def test_square(self):
        summary = summarize_points([(0, 0), (0, 2), (2, 2), (2, 0)])
        assert summary.bbox == (0, 0, 2, 2)
        assert summary.center == (1, 1)
        assert summary.centroid == (1, 1)
        assert summary.vertex_count == 4

    def test_centroid_is_unweighted_vertex_mean(self):
        summary = summarize_geometry({"type": "LineString", "coordinates": [[0, 0], [0, 0], [4, 0], [0, 4]]})
        assert summary.center == (2, 2)
        assert summary.centroid == (1, 1)

    def test_bbox_encloses_every_vertex(self):
        summary = summarize_geometry({"type": "MultiPolygon", "coordinates": MULTIPOLYGON_3_PARTS})
        min_lon, min_lat, max_lon, max_lat = summary.bbox
        for lon, lat in extract_points(MULTIPOLYGON_3_PARTS):
            assert min_lon <= lon <= max_lon
            assert min_lat <= lat <= max_lat
        assert summary.bbox == (-5, -5, 11, 11)
        assert summary.center == (3, 3)

    def test_closing_vertex_counts_toward_centroid(self):
        ring = [[[0, 0], [0, 3], [3, 3], [3, 0], [0, 0]]]
        summary = summarize_geometry({"type": "Polygon", "coordinates": ring})
        assert summary.vertex_count == 5
        assert summary.centroid == pytest.approx((1.2, 1.2))

    def test_antimeridian_is_not_wrapped(self):
        summary = summarize_geometry({"type": "LineString", "coordinates": [[179, -16], [-179, -17]]})
        assert summary.bbox == (-179, -17, 179, -16)
        assert summary.center == (0, -16.5)

    @pytest.mark.parametrize("geometry", [
        None,
        {},
        {"type": "Polygon"},
        {"type": "Polygon", "coordinates": []},
        {"type": "MultiPolygon", "coordinates": [[[]]]},
        "not a geometry",
    ])
    def test_empty_geometry_defaults(self, geometry):
        summary = summarize_geometry(geometry)
        assert summary.bbox == (0, 0, 0, 0)
        assert summary.center == (0, 0)
        assert summary.centroid == (0, 0)
        assert summary.vertex_count == 0
