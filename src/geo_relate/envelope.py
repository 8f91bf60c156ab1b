"""
Axis-aligned bounding envelopes.

Bounds are computed with numpy over the coordinate array. numpy keeps
Fraction and Decimal coordinates as object arrays, so exact input stays
exact and comparisons remain precise.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional

import numpy as np

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


@dataclass(frozen=True)
class Envelope:
    """Closed axis-aligned rectangle [min_x, max_x] x [min_y, max_y]."""

    min_x: Any
    min_y: Any
    max_x: Any
    max_y: Any

    @classmethod
    def of_segment(cls, p: Coord, q: Coord) -> Envelope:
        return cls(min(p[0], q[0]), min(p[1], q[1]), max(p[0], q[0]), max(p[1], q[1]))

    def intersects(self, other: Envelope) -> bool:
        """True if the envelopes share at least one point (touching counts)."""
        return (
            self.min_x <= other.max_x
            and other.min_x <= self.max_x
            and self.min_y <= other.max_y
            and other.min_y <= self.max_y
        )

    def contains_coord(self, coord: Coord) -> bool:
        return self.min_x <= coord[0] <= self.max_x and self.min_y <= coord[1] <= self.max_y


def iter_coords(geom: Geometry) -> Iterator[Coord]:
    """Yield every coordinate of a geometry, ring closures included."""
    if isinstance(geom, Point):
        yield geom.coord
    elif isinstance(geom, Line):
        yield geom.start
        yield geom.end
    elif isinstance(geom, LineString):
        yield from geom.coords
    elif isinstance(geom, Polygon):
        yield from geom.exterior.coords
        for ring in geom.interiors:
            yield from ring.coords
    elif isinstance(geom, MultiPoint):
        for point in geom.points:
            yield point.coord
    elif isinstance(geom, MultiLineString):
        for line_string in geom.line_strings:
            yield from line_string.coords
    elif isinstance(geom, MultiPolygon):
        for polygon in geom.polygons:
            yield from iter_coords(polygon)
    elif isinstance(geom, GeometryCollection):
        for part in geom.geometries:
            yield from iter_coords(part)
    elif isinstance(geom, Rect):
        yield geom.min
        yield geom.max
    elif isinstance(geom, Triangle):
        yield geom.a
        yield geom.b
        yield geom.c
    else:
        raise TypeError(f"Unsupported geometry type: {type(geom).__name__}")


def bounding_rect(geom: Geometry) -> Optional[Envelope]:
    """
    Smallest envelope containing every coordinate of a geometry.

    Args:
        geom: Any supported geometry

    Returns:
        Envelope, or None if the geometry has no coordinates
    """
    coords = list(iter_coords(geom))
    if not coords:
        return None
    arr = np.asarray(coords)
    lows = arr.min(axis=0).tolist()
    highs = arr.max(axis=0).tolist()
    return Envelope(lows[0], lows[1], highs[0], highs[1])


__all__ = [
    "Envelope",
    "iter_coords",
    "bounding_rect",
]
