"""
Edges of a geometry graph and the ledger of points where they are cut.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass
from typing import Any, Iterator, Sequence

from ..dimensions import Dimensions
from ..types import Coord, Line
from ._types import Direction, Label
from .intersection_matrix import IntersectionMatrix
from .line_intersector import LineIntersection, SinglePoint, compute_edge_distance


@dataclass(frozen=True)
class EdgeIntersection:
    """
    A point where an edge is cut.

    Ordered along the edge by ``(segment_index, distance)``; the distance is
    only meaningful for ordering points within one segment.
    """

    coord: Coord
    segment_index: int
    distance: Any

    @property
    def key(self) -> tuple[int, Any]:
        return (self.segment_index, self.distance)


class Edge:
    """
    A polyline of one input geometry, with its label and cut points.

    Attributes:
        coords: Vertices, at least one
        label: Topology of the edge relative to both geometries
        is_isolated: True until an edge of the other geometry touches it
    """

    def __init__(self, coords: Sequence[Coord], label: Label) -> None:
        if not coords:
            raise ValueError("cannot create an edge with no coordinates")
        self.coords: list[Coord] = list(coords)
        self.label = label
        self.is_isolated = True
        self._keys: list[tuple[int, Any]] = []
        self._intersections: dict[tuple[int, Any], EdgeIntersection] = {}

    def __repr__(self) -> str:
        return f"Edge({self.coords!r}, {self.label!r})"

    @property
    def is_closed(self) -> bool:
        return self.coords[0] == self.coords[-1]

    def segment(self, segment_index: int) -> Line:
        return Line(self.coords[segment_index], self.coords[segment_index + 1])

    def mark_as_unisolated(self) -> None:
        self.is_isolated = False

    # -------------------------------------------------------------------------
    # Intersection ledger
    # -------------------------------------------------------------------------

    def edge_intersections(self) -> Iterator[EdgeIntersection]:
        """Cut points in order along the edge."""
        for key in self._keys:
            yield self._intersections[key]

    def _insert(self, intersection: EdgeIntersection) -> None:
        key = intersection.key
        if key in self._intersections:
            return
        self._intersections[key] = intersection
        bisect.insort(self._keys, key)

    def add_edge_intersection_list_endpoints(self) -> None:
        """Make sure the first and last vertices are cut points."""
        last = len(self.coords) - 1
        self._insert(EdgeIntersection(self.coords[0], 0, 0))
        self._insert(EdgeIntersection(self.coords[last], last, 0))

    def add_intersections(
        self, intersection: LineIntersection, line: Line, segment_index: int
    ) -> None:
        """Record every point of a segment intersection as a cut point."""
        if isinstance(intersection, SinglePoint):
            self.add_intersection(intersection.intersection, line, segment_index)
        else:
            self.add_intersection(intersection.intersection.start, line, segment_index)
            self.add_intersection(intersection.intersection.end, line, segment_index)

    def add_intersection(self, coord: Coord, line: Line, segment_index: int) -> None:
        """
        Record one cut point on segment ``segment_index``.

        A point equal to the segment's end vertex is stored as the start of
        the next segment, so vertices always have a single canonical key.
        """
        distance = compute_edge_distance(coord, line)
        next_segment_index = segment_index + 1
        if next_segment_index < len(self.coords) and coord == self.coords[next_segment_index]:
            segment_index = next_segment_index
            distance = 0
        self._insert(EdgeIntersection(coord, segment_index, distance))

    # -------------------------------------------------------------------------
    # Matrix contribution
    # -------------------------------------------------------------------------

    @staticmethod
    def update_intersection_matrix(label: Label, intersection_matrix: IntersectionMatrix) -> None:
        """
        Raise the matrix with what a label says about a 1-dimensional edge.

        The edge itself contributes a LINE intersection; for area labels the
        two sides contribute AREA intersections.
        """
        intersection_matrix.set_at_least_if_in_both(
            label.on_position(0), label.on_position(1), Dimensions.LINE
        )
        if label.is_area():
            for direction in (Direction.LEFT, Direction.RIGHT):
                intersection_matrix.set_at_least_if_in_both(
                    label.position(0, direction),
                    label.position(1, direction),
                    Dimensions.AREA,
                )


__all__ = ["EdgeIntersection", "Edge"]
