"""
Intersection of two line segments.

Pure functions: given two segments, report no intersection, a single point
(flagged proper when it lies in the interior of both segments), or the
collinear overlap as a sub-segment.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional, Union

from ..envelope import Envelope
from ..kernels import Kernel, Orientation
from ..types import Coord, Line

COLLINEAR = Orientation.COLLINEAR


@dataclass(frozen=True)
class SinglePoint:
    """Segments meet in one point; proper if it is interior to both."""

    intersection: Coord
    is_proper: bool

    @property
    def is_collinear(self) -> bool:
        return False


@dataclass(frozen=True)
class Collinear:
    """Segments overlap along a sub-segment."""

    intersection: Line

    @property
    def is_proper(self) -> bool:
        return False

    @property
    def is_collinear(self) -> bool:
        return True


LineIntersection = Union[SinglePoint, Collinear]


def line_intersection(
    p: Line,
    q: Line,
    kernel: Kernel = Kernel.ROBUST,
) -> Optional[LineIntersection]:
    """
    Intersect two segments.

    Args:
        p: First segment
        q: Second segment
        kernel: Orientation kernel

    Returns:
        SinglePoint, Collinear, or None if the segments do not meet
    """
    p_bounds = Envelope.of_segment(p.start, p.end)
    q_bounds = Envelope.of_segment(q.start, q.end)
    if not p_bounds.intersects(q_bounds):
        return None

    p_q1 = kernel.orient2d(p.start, p.end, q.start)
    p_q2 = kernel.orient2d(p.start, p.end, q.end)
    if p_q1 is p_q2 and p_q1 is not COLLINEAR:
        return None

    q_p1 = kernel.orient2d(q.start, q.end, p.start)
    q_p2 = kernel.orient2d(q.start, q.end, p.end)
    if q_p1 is q_p2 and q_p1 is not COLLINEAR:
        return None

    if p_q1 is p_q2 is q_p1 is q_p2 is COLLINEAR:
        return _collinear_intersection(p, q, p_bounds, q_bounds)

    if COLLINEAR in (p_q1, p_q2, q_p1, q_p2):
        # an endpoint touches the other segment; prefer shared endpoints
        if p.start == q.start or p.start == q.end:
            point = p.start
        elif p.end == q.start or p.end == q.end:
            point = p.end
        elif p_q1 is COLLINEAR:
            point = q.start
        elif p_q2 is COLLINEAR:
            point = q.end
        elif q_p1 is COLLINEAR:
            point = p.start
        else:
            point = p.end
        return SinglePoint(point, is_proper=False)

    return SinglePoint(_proper_intersection(p, q, p_bounds, q_bounds), is_proper=True)


def _collinear_intersection(
    p: Line, q: Line, p_bounds: Envelope, q_bounds: Envelope
) -> Optional[LineIntersection]:
    q_start_in_p = p_bounds.contains_coord(q.start)
    q_end_in_p = p_bounds.contains_coord(q.end)
    p_start_in_q = q_bounds.contains_coord(p.start)
    p_end_in_q = q_bounds.contains_coord(p.end)

    if q_start_in_p and q_end_in_p:
        return Collinear(q)
    if p_start_in_q and p_end_in_q:
        return Collinear(p)
    if q_start_in_p and p_start_in_q:
        if q.start == p.start and not q_end_in_p and not p_end_in_q:
            return SinglePoint(q.start, is_proper=False)
        return Collinear(Line(q.start, p.start))
    if q_start_in_p and p_end_in_q:
        if q.start == p.end and not q_end_in_p and not p_start_in_q:
            return SinglePoint(q.start, is_proper=False)
        return Collinear(Line(q.start, p.end))
    if q_end_in_p and p_start_in_q:
        if q.end == p.start and not q_start_in_p and not p_end_in_q:
            return SinglePoint(q.end, is_proper=False)
        return Collinear(Line(q.end, p.start))
    if q_end_in_p and p_end_in_q:
        if q.end == p.end and not q_start_in_p and not p_start_in_q:
            return SinglePoint(q.end, is_proper=False)
        return Collinear(Line(q.end, p.end))
    return None


def _proper_intersection(p: Line, q: Line, p_bounds: Envelope, q_bounds: Envelope) -> Coord:
    point = _raw_line_intersection(p, q)
    if point is None or not (p_bounds.contains_coord(point) and q_bounds.contains_coord(point)):
        point = _nearest_endpoint(p, q)
    return point


def _raw_line_intersection(p: Line, q: Line) -> Optional[Coord]:
    """
    Intersection of the infinite lines through p and q, in homogeneous form.

    Coordinates are translated so the middle of the overlap of the two
    bounding boxes is the origin, which keeps the products small.
    """
    int_min_x = max(min(p.start[0], p.end[0]), min(q.start[0], q.end[0]))
    int_max_x = min(max(p.start[0], p.end[0]), max(q.start[0], q.end[0]))
    int_min_y = max(min(p.start[1], p.end[1]), min(q.start[1], q.end[1]))
    int_max_y = min(max(p.start[1], p.end[1]), max(q.start[1], q.end[1]))

    mid_x = (int_min_x + int_max_x) / 2
    mid_y = (int_min_y + int_max_y) / 2

    p1x = p.start[0] - mid_x
    p1y = p.start[1] - mid_y
    p2x = p.end[0] - mid_x
    p2y = p.end[1] - mid_y
    q1x = q.start[0] - mid_x
    q1y = q.start[1] - mid_y
    q2x = q.end[0] - mid_x
    q2y = q.end[1] - mid_y

    px = p1y - p2y
    py = p2x - p1x
    pw = p1x * p2y - p2x * p1y

    qx = q1y - q2y
    qy = q2x - q1x
    qw = q1x * q2y - q2x * q1y

    xw = py * qw - qy * pw
    yw = qx * pw - px * qw
    w = px * qy - qx * py

    if w == 0:
        return None
    x_int = xw / w
    y_int = yw / w
    if not (math.isfinite(x_int) and math.isfinite(y_int)):
        return None
    return (x_int + mid_x, y_int + mid_y)


def _nearest_endpoint(p: Line, q: Line) -> Coord:
    """The endpoint of either segment closest to the other segment."""
    candidates = (
        (p.start, q),
        (p.end, q),
        (q.start, p),
        (q.end, p),
    )
    nearest, min_dist = None, math.inf
    for point, segment in candidates:
        dist = _point_segment_distance(point, segment)
        if nearest is None or dist < min_dist:
            nearest, min_dist = point, dist
    return nearest


def _point_segment_distance(point: Coord, segment: Line) -> float:
    start, end = segment.start, segment.end
    if start == end:
        return math.hypot(point[0] - start[0], point[1] - start[1])
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    d_squared = dx * dx + dy * dy
    r = ((point[0] - start[0]) * dx + (point[1] - start[1]) * dy) / d_squared
    if r <= 0:
        return math.hypot(point[0] - start[0], point[1] - start[1])
    if r >= 1:
        return math.hypot(point[0] - end[0], point[1] - end[1])
    s = ((start[1] - point[1]) * dx - (start[0] - point[0]) * dy) / d_squared
    return abs(s) * math.hypot(dx, dy)


def compute_edge_distance(intersection: Coord, line: Line) -> Any:
    """
    Position of an intersection point along a segment, for ordering only.

    Measured along whichever axis the segment spans further. Not a true
    distance, but monotone along the segment, and zero only at its start.

    Args:
        intersection: Point on the segment
        line: The segment

    Returns:
        Ordering distance from ``line.start``
    """
    dx = abs(line.end[0] - line.start[0])
    dy = abs(line.end[1] - line.start[1])

    if intersection == line.start:
        return 0
    if intersection == line.end:
        return dx if dx > dy else dy

    intersection_dx = abs(intersection[0] - line.start[0])
    intersection_dy = abs(intersection[1] - line.start[1])
    dist = intersection_dx if dx > dy else intersection_dy
    # a point that is not the start must not sort as the start
    if dist == 0:
        dist = max(intersection_dx, intersection_dy)
    return dist


__all__ = [
    "SinglePoint",
    "Collinear",
    "LineIntersection",
    "line_intersection",
    "compute_edge_distance",
]
