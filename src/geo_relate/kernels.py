"""
Orientation predicates.

Every orientation test in the library (segment intersection, edge-end
ordering, ring winding, point location) goes through ``Kernel.orient2d`` so
that one predicate decides all of them consistently.

Kernels:
    SIMPLE: direct evaluation of the 2x2 determinant in the input number type
    ROBUST: floating-point evaluation guarded by Shewchuk's static error
        bound, falling back to exact rational arithmetic when the sign is
        not certain
"""

from __future__ import annotations

import sys
from enum import Enum
from fractions import Fraction
from typing import Any, Optional, Sequence

Coord = tuple[Any, Any]

# Shewchuk's epsilon is half an ulp of 1.0
_EPSILON = sys.float_info.epsilon / 2
_CCW_ERRBOUND_A = (3.0 + 16.0 * _EPSILON) * _EPSILON


class Orientation(Enum):
    """Orientation of an ordered triple of points."""

    COUNTER_CLOCKWISE = "counter_clockwise"
    CLOCKWISE = "clockwise"
    COLLINEAR = "collinear"


def _orientation_of(det: Any) -> Orientation:
    if det > 0:
        return Orientation.COUNTER_CLOCKWISE
    if det < 0:
        return Orientation.CLOCKWISE
    return Orientation.COLLINEAR


def orient2d_simple(p: Coord, q: Coord, r: Coord) -> Orientation:
    """Orientation of ``r`` relative to the directed line ``p -> q``."""
    det = (q[0] - p[0]) * (r[1] - q[1]) - (q[1] - p[1]) * (r[0] - q[0])
    return _orientation_of(det)


def orient2d_robust(p: Coord, q: Coord, r: Coord) -> Orientation:
    """
    Orientation of ``r`` relative to the directed line ``p -> q``.

    Integer and Fraction input is already exact and is evaluated directly.
    Float input is evaluated in floating point first; only when the result
    lies inside the error bound is it recomputed exactly. Any other real
    type (Decimal, numpy scalars) is converted to Fraction.
    """
    values = (p[0], p[1], q[0], q[1], r[0], r[1])

    if all(isinstance(v, (int, Fraction)) for v in values):
        return _orientation_of(_determinant(*values))

    if all(isinstance(v, (int, float)) for v in values):
        px, py, qx, qy, rx, ry = values
        detleft = (px - rx) * (qy - ry)
        detright = (py - ry) * (qx - rx)
        det = detleft - detright

        if detleft > 0:
            if detright <= 0:
                return _orientation_of(det)
            detsum = detleft + detright
        elif detleft < 0:
            if detright >= 0:
                return _orientation_of(det)
            detsum = -detleft - detright
        else:
            return _orientation_of(det)

        errbound = _CCW_ERRBOUND_A * detsum
        if det >= errbound or -det >= errbound:
            return _orientation_of(det)

    return _orientation_of(_determinant(*(Fraction(v) for v in values)))


def _determinant(px: Any, py: Any, qx: Any, qy: Any, rx: Any, ry: Any) -> Any:
    return (px - rx) * (qy - ry) - (py - ry) * (qx - rx)


class Kernel(Enum):
    """Choice of orientation predicate."""

    SIMPLE = "simple"
    ROBUST = "robust"

    def orient2d(self, p: Coord, q: Coord, r: Coord) -> Orientation:
        """
        Orientation of ``r`` relative to the directed line ``p -> q``.

        Args:
            p: Start of the directed line
            q: End of the directed line
            r: Point to classify

        Returns:
            COUNTER_CLOCKWISE if r lies to the left, CLOCKWISE if to the
            right, COLLINEAR if on the line
        """
        if self is Kernel.SIMPLE:
            return orient2d_simple(p, q, r)
        return orient2d_robust(p, q, r)


def winding_order(
    ring: Sequence[Coord],
    kernel: Kernel = Kernel.ROBUST,
) -> Optional[Orientation]:
    """
    Winding order of a closed ring.

    Evaluated at the lexicographically lowest vertex, which is always convex,
    against its nearest distinct neighbours on either side.

    Args:
        ring: Closed sequence of coordinates (first == last)
        kernel: Orientation kernel

    Returns:
        CLOCKWISE or COUNTER_CLOCKWISE, or None if the ring is degenerate
    """
    if len(ring) < 4 or ring[0] != ring[-1]:
        return None

    n = len(ring) - 1
    lowest = min(range(n), key=lambda i: ring[i])
    origin = ring[lowest]

    prev = _nearest_distinct(ring, lowest, n, -1)
    following = _nearest_distinct(ring, lowest, n, 1)
    if prev is None or following is None:
        return None

    orientation = kernel.orient2d(ring[prev], origin, ring[following])
    if orientation is Orientation.COLLINEAR:
        return None
    return orientation


def _nearest_distinct(ring: Sequence[Coord], start: int, n: int, step: int) -> Optional[int]:
    for offset in range(1, n):
        i = (start + step * offset) % n
        if ring[i] != ring[start]:
            return i
    return None


__all__ = [
    "Orientation",
    "Kernel",
    "orient2d_simple",
    "orient2d_robust",
    "winding_order",
]
