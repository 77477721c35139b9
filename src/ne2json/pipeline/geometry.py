"""
Geometry summaries for GeoJSON features.

Coordinate trees are walked with a single depth-agnostic rule: an array whose
first two elements are numbers is a coordinate pair, anything else is a
container. This covers Point, LineString, Polygon and MultiPolygon without
reading the geometry type tag.

Known limitations:
- The centroid is the unweighted mean of all vertices, not the area centroid.
- No antimeridian handling; geometries crossing +/-180 get a wide bbox.
- A ring holding exactly one 2-element list is indistinguishable from a pair.
"""

from __future__ import annotations

from collections.abc import Mapping
from numbers import Real
from typing import Any

from ..domain.models import GeometrySummary, Point2D

EMPTY_SUMMARY = GeometrySummary()


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _is_pair(node: Any) -> bool:
    return isinstance(node, list) and len(node) >= 2 and _is_number(node[0]) and _is_number(node[1])


def extract_points(coordinates: Any) -> list[Point2D]:
    """
    Flatten a nested GeoJSON coordinate array into (lon, lat) pairs.

    Args:
        coordinates: Coordinate pair, nested list of pairs, or None

    Returns:
        Points in depth-first, left-to-right order. Extra ordinates are
        dropped; malformed leaves contribute nothing.
    """
    points: list[Point2D] = []
    stack = [coordinates]
    while stack:
        node = stack.pop()
        if not isinstance(node, list):
            continue
        if _is_pair(node):
            points.append((float(node[0]), float(node[1])))
        else:
            stack.extend(reversed(node))
    return points


def summarize_points(points: list[Point2D]) -> GeometrySummary:
    """Bounding box, bbox center and mean centroid of a point list."""
    if not points:
        return EMPTY_SUMMARY

    min_lon, min_lat = points[0]
    max_lon, max_lat = points[0]
    sum_lon = sum_lat = 0.0
    for lon, lat in points:
        if lon < min_lon:
            min_lon = lon
        elif lon > max_lon:
            max_lon = lon
        if lat < min_lat:
            min_lat = lat
        elif lat > max_lat:
            max_lat = lat
        sum_lon += lon
        sum_lat += lat

    count = len(points)
    return GeometrySummary(
        bbox=(min_lon, min_lat, max_lon, max_lat),
        center=((min_lon + max_lon) / 2, (min_lat + max_lat) / 2),
        centroid=(sum_lon / count, sum_lat / count),
        vertex_count=count,
    )


def summarize_geometry(geometry: Any) -> GeometrySummary:
    """
    Summarize a GeoJSON geometry object.

    Args:
        geometry: Mapping with a ``coordinates`` member, or None

    Returns:
        GeometrySummary; all-zero defaults for missing or empty geometry
    """
    if not isinstance(geometry, Mapping):
        return EMPTY_SUMMARY
    return summarize_points(extract_points(geometry.get("coordinates")))
