"""
Topological dimension of geometries.

Degenerate input reports the dimension it collapses to: a line whose
endpoints coincide is a point, a polygon whose exterior has only two
distinct coordinates is a line.
"""

from __future__ import annotations

from enum import IntEnum

from .kernels import Kernel, Orientation
from .types import (
    Geometry,
    GeometryCollection,
    Line,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    Rect,
    Triangle,
)


class Dimensions(IntEnum):
    """
    Topological dimension, totally ordered.

    Doubles as the cell value of an intersection matrix, where it may only
    ever be raised.
    """

    EMPTY = -1
    POINT = 0
    LINE = 1
    AREA = 2

    def to_char(self) -> str:
        return "F" if self is Dimensions.EMPTY else str(int(self))


def dimensions(geom: Geometry) -> Dimensions:
    """
    Dimension of a geometry.

    Args:
        geom: Any supported geometry

    Returns:
        The highest dimension of any of its parts, EMPTY for empty input

    Raises:
        TypeError: If geom is not a supported geometry type
    """
    if isinstance(geom, Point):
        return Dimensions.POINT
    if isinstance(geom, Line):
        return Dimensions.POINT if geom.start == geom.end else Dimensions.LINE
    if isinstance(geom, LineString):
        return _distinct_dimension(geom.coords, limit=2)
    if isinstance(geom, Polygon):
        return _distinct_dimension(geom.exterior.coords, limit=3)
    if isinstance(geom, MultiPoint):
        return Dimensions.POINT if geom.points else Dimensions.EMPTY
    if isinstance(geom, MultiLineString):
        return _max_dimension(dimensions(ls) for ls in geom.line_strings)
    if isinstance(geom, MultiPolygon):
        return _max_dimension(dimensions(p) for p in geom.polygons)
    if isinstance(geom, GeometryCollection):
        return _max_dimension(dimensions(g) for g in geom.geometries)
    if isinstance(geom, Rect):
        if geom.min == geom.max:
            return Dimensions.POINT
        if geom.min[0] == geom.max[0] or geom.min[1] == geom.max[1]:
            return Dimensions.LINE
        return Dimensions.AREA
    if isinstance(geom, Triangle):
        if Kernel.ROBUST.orient2d(geom.a, geom.b, geom.c) is Orientation.COLLINEAR:
            if geom.a == geom.b == geom.c:
                return Dimensions.POINT
            return Dimensions.LINE
        return Dimensions.AREA
    raise TypeError(f"Unsupported geometry type: {type(geom).__name__}")


def boundary_dimensions(geom: Geometry) -> Dimensions:
    """
    Dimension of the boundary of a geometry.

    Points have no boundary; closed lines have no boundary; an open line's
    boundary is its endpoints; an area's boundary is its rings.

    Raises:
        TypeError: If geom is not a supported geometry type
    """
    if isinstance(geom, (Point, MultiPoint)):
        return Dimensions.EMPTY
    if isinstance(geom, (LineString, MultiLineString)) and geom.is_closed:
        return Dimensions.EMPTY
    if isinstance(geom, (Line, LineString, MultiLineString)):
        if dimensions(geom) == Dimensions.LINE:
            return Dimensions.POINT
        return Dimensions.EMPTY
    if isinstance(geom, (Polygon, MultiPolygon, Rect, Triangle)):
        dim = dimensions(geom)
        if dim <= Dimensions.POINT:
            return Dimensions.EMPTY
        return Dimensions(dim - 1)
    if isinstance(geom, GeometryCollection):
        return _max_dimension(boundary_dimensions(g) for g in geom.geometries)
    raise TypeError(f"Unsupported geometry type: {type(geom).__name__}")


def is_empty(geom: Geometry) -> bool:
    """True if the geometry has no coordinates at all."""
    if isinstance(geom, (Point, Line, Rect, Triangle)):
        return False
    if isinstance(geom, LineString):
        return not geom.coords
    if isinstance(geom, Polygon):
        return not geom.exterior.coords
    if isinstance(geom, MultiPoint):
        return not geom.points
    if isinstance(geom, MultiLineString):
        return all(is_empty(ls) for ls in geom.line_strings)
    if isinstance(geom, MultiPolygon):
        return all(is_empty(p) for p in geom.polygons)
    if isinstance(geom, GeometryCollection):
        return all(is_empty(g) for g in geom.geometries)
    raise TypeError(f"Unsupported geometry type: {type(geom).__name__}")


def _distinct_dimension(coords, limit: int) -> Dimensions:
    # 0, 1, 2 or 3+ distinct coordinates map to EMPTY, POINT, LINE, AREA
    distinct: list = []
    for coord in coords:
        if coord not in distinct:
            distinct.append(coord)
            if len(distinct) == limit:
                break
    return Dimensions(len(distinct) - 1)


def _max_dimension(values) -> Dimensions:
    result = Dimensions.EMPTY
    for value in values:
        if value > result:
            result = value
    return result


__all__ = [
    "Dimensions",
    "dimensions",
    "boundary_dimensions",
    "is_empty",
]
