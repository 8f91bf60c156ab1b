"""
Point location: where a coordinate lies relative to a geometry.

Boundary contacts are counted across every part of a geometry and resolved
with the mod-2 rule, so a coordinate shared by the boundaries of an even
number of parts is not on the boundary of the whole.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Sequence

from .envelope import bounding_rect
from .kernels import Kernel, Orientation
from .types import (
    Coord,
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


class CoordPos(IntEnum):
    """
    Position of a coordinate relative to one geometry.

    Values index the rows and columns of an intersection matrix.
    """

    INSIDE = 0
    ON_BOUNDARY = 1
    OUTSIDE = 2


class _Accumulator:
    __slots__ = ("is_inside", "boundary_count")

    def __init__(self) -> None:
        self.is_inside = False
        self.boundary_count = 0


def coordinate_position(
    geom: Geometry,
    coord: Coord,
    kernel: Kernel = Kernel.ROBUST,
) -> CoordPos:
    """
    Locate a coordinate relative to a geometry.

    Args:
        geom: Any supported geometry
        coord: (x, y) coordinate
        kernel: Orientation kernel for on-segment and winding tests

    Returns:
        ON_BOUNDARY if the coordinate lies on an odd number of part
        boundaries, otherwise INSIDE if it lies in any part, else OUTSIDE
    """
    acc = _Accumulator()
    _locate(geom, coord, kernel, acc)
    if acc.boundary_count % 2 == 1:
        return CoordPos.ON_BOUNDARY
    if acc.is_inside:
        return CoordPos.INSIDE
    return CoordPos.OUTSIDE


def coord_pos_relative_to_ring(
    coord: Coord,
    ring: Sequence[Coord],
    kernel: Kernel = Kernel.ROBUST,
) -> CoordPos:
    """
    Locate a coordinate relative to a closed ring using the winding number.

    Args:
        coord: (x, y) coordinate
        ring: Closed sequence of coordinates
        kernel: Orientation kernel

    Returns:
        INSIDE if the winding number is non-zero, ON_BOUNDARY if the
        coordinate lies on a ring segment, otherwise OUTSIDE
    """
    if not ring:
        return CoordPos.OUTSIDE
    if len(ring) == 1:
        return CoordPos.ON_BOUNDARY if coord == ring[0] else CoordPos.OUTSIDE

    x, y = coord
    winding_number = 0
    for start, end in zip(ring, ring[1:]):
        if start[1] <= y:
            if end[1] >= y:
                orientation = kernel.orient2d(start, end, coord)
                if orientation is Orientation.COUNTER_CLOCKWISE and end[1] != y:
                    winding_number += 1
                elif orientation is Orientation.COLLINEAR and _between(x, start[0], end[0]):
                    return CoordPos.ON_BOUNDARY
        elif end[1] <= y:
            orientation = kernel.orient2d(start, end, coord)
            if orientation is Orientation.CLOCKWISE:
                winding_number -= 1
            elif orientation is Orientation.COLLINEAR and _between(x, start[0], end[0]):
                return CoordPos.ON_BOUNDARY

    return CoordPos.OUTSIDE if winding_number == 0 else CoordPos.INSIDE


def _between(value, a, b) -> bool:
    return min(a, b) <= value <= max(a, b)


def _segment_contains(start: Coord, end: Coord, coord: Coord, kernel: Kernel) -> bool:
    return (
        kernel.orient2d(start, end, coord) is Orientation.COLLINEAR
        and _between(coord[0], start[0], end[0])
        and _between(coord[1], start[1], end[1])
    )


def _locate(geom: Geometry, coord: Coord, kernel: Kernel, acc: _Accumulator) -> None:
    if isinstance(geom, Point):
        if geom.coord == coord:
            acc.is_inside = True
    elif isinstance(geom, Line):
        _locate_segment(geom.start, geom.end, coord, kernel, acc)
    elif isinstance(geom, LineString):
        _locate_line_string(geom, coord, kernel, acc)
    elif isinstance(geom, Polygon):
        _locate_polygon(geom, coord, kernel, acc)
    elif isinstance(geom, MultiPoint):
        if any(p.coord == coord for p in geom.points):
            acc.is_inside = True
    elif isinstance(geom, MultiLineString):
        for line_string in geom.line_strings:
            _locate_line_string(line_string, coord, kernel, acc)
    elif isinstance(geom, MultiPolygon):
        for polygon in geom.polygons:
            _locate_polygon(polygon, coord, kernel, acc)
    elif isinstance(geom, GeometryCollection):
        for part in geom.geometries:
            _locate(part, coord, kernel, acc)
    elif isinstance(geom, (Rect, Triangle)):
        _locate_polygon(geom.to_polygon(), coord, kernel, acc)
    else:
        raise TypeError(f"Unsupported geometry type: {type(geom).__name__}")


def _locate_segment(
    start: Coord, end: Coord, coord: Coord, kernel: Kernel, acc: _Accumulator
) -> None:
    if start == end:
        if start == coord:
            acc.is_inside = True
        return
    if coord == start or coord == end:
        acc.boundary_count += 1
    elif _segment_contains(start, end, coord, kernel):
        acc.is_inside = True


def _locate_line_string(
    line_string: LineString, coord: Coord, kernel: Kernel, acc: _Accumulator
) -> None:
    coords = line_string.coords
    if len(coords) < 2:
        return
    if len(coords) == 2:
        _locate_segment(coords[0], coords[1], coord, kernel, acc)
        return

    envelope = bounding_rect(line_string)
    if not envelope.contains_coord(coord):
        return

    if not line_string.is_closed and (coord == coords[0] or coord == coords[-1]):
        acc.boundary_count += 1
        return

    if any(_segment_contains(s, e, coord, kernel) for s, e in zip(coords, coords[1:])):
        acc.is_inside = True


def _locate_polygon(polygon: Polygon, coord: Coord, kernel: Kernel, acc: _Accumulator) -> None:
    if not polygon.exterior.coords:
        return

    position = coord_pos_relative_to_ring(coord, polygon.exterior.coords, kernel)
    if position is CoordPos.OUTSIDE:
        return
    if position is CoordPos.ON_BOUNDARY:
        acc.boundary_count += 1
        return

    for hole in polygon.interiors:
        hole_position = coord_pos_relative_to_ring(coord, hole.coords, kernel)
        if hole_position is CoordPos.ON_BOUNDARY:
            acc.boundary_count += 1
            return
        if hole_position is CoordPos.INSIDE:
            return

    acc.is_inside = True


__all__ = [
    "CoordPos",
    "coordinate_position",
    "coord_pos_relative_to_ring",
]
