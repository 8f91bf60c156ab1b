"""
Edge ends: directed stubs leaving a node along one edge.

Stubs at a node are ordered by angle, counter-clockwise from the positive
x axis. The ordering first compares quadrants and only falls back to an
orientation test for stubs in the same quadrant.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Optional

from ..kernels import Kernel, Orientation
from ..types import Coord
from ._types import Label


class Quadrant(IntEnum):
    """
    Quadrant of a direction vector, in counter-clockwise order::

            NW | NE
           ----+----
            SW | SE
    """

    NE = 0
    NW = 1
    SW = 2
    SE = 3


def quadrant(dx: Any, dy: Any) -> Optional[Quadrant]:
    """Quadrant of the vector ``(dx, dy)``, or None for the zero vector."""
    if dx == 0 and dy == 0:
        return None
    if dy >= 0:
        return Quadrant.NE if dx >= 0 else Quadrant.NW
    return Quadrant.SE if dx >= 0 else Quadrant.SW


class EdgeEnd:
    """
    A stub of an edge, from a node (``coord_0``) toward ``coord_1``.

    Args:
        coord_0: The node the stub leaves from
        coord_1: The next point along the edge
        label: The stub's own copy of the edge label, flipped if the stub
            runs against the edge's direction
        edge_index: Index of the parent edge in its graph's edge list
        kernel: Orientation kernel used for ordering
    """

    __slots__ = ("coord_0", "coord_1", "label", "edge_index", "delta", "quadrant", "kernel")

    def __init__(
        self,
        coord_0: Coord,
        coord_1: Coord,
        label: Label,
        edge_index: int = -1,
        kernel: Kernel = Kernel.ROBUST,
    ) -> None:
        self.coord_0 = coord_0
        self.coord_1 = coord_1
        self.label = label
        self.edge_index = edge_index
        self.kernel = kernel
        self.delta = (coord_1[0] - coord_0[0], coord_1[1] - coord_0[1])
        self.quadrant = quadrant(*self.delta)

    def __repr__(self) -> str:
        return f"EdgeEnd({self.coord_0!r} -> {self.coord_1!r}, {self.label!r})"

    @property
    def coordinate(self) -> Coord:
        return self.coord_0

    def compare_direction(self, other: EdgeEnd) -> int:
        """
        Compare the angles of two stubs leaving the same node.

        Returns:
            Negative, zero or positive as this stub's angle is smaller than,
            equal to or greater than the other's
        """
        if self.delta == other.delta:
            return 0
        if self.quadrant is not None and other.quadrant is not None:
            if self.quadrant > other.quadrant:
                return 1
            if self.quadrant < other.quadrant:
                return -1
        orientation = self.kernel.orient2d(other.coord_0, other.coord_1, self.coord_1)
        if orientation is Orientation.CLOCKWISE:
            return -1
        if orientation is Orientation.COUNTER_CLOCKWISE:
            return 1
        return 0


__all__ = ["Quadrant", "quadrant", "EdgeEnd"]
