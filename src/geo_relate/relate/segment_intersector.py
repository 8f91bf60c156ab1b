"""
Pairwise segment intersection between edge sets.

``SegmentIntersector`` handles one pair of segments and records what it
finds on the edges. The edge set intersectors decide which pairs to hand it:

- ``SimpleEdgeSetIntersector`` tries every pair of segments.
- ``EnvelopeEdgeSetIntersector`` first finds the pairs whose bounding
  envelopes overlap, vectorised with numpy, and tries only those. Pairs it
  skips cannot intersect, so both strategies give identical results.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Sequence, Union

import numpy as np

from ..kernels import Kernel
from ..types import Coord
from .edge import Edge
from .line_intersector import LineIntersection, SinglePoint, line_intersection


class SegmentIntersector:
    """
    Intersects single segment pairs and records the results on their edges.

    Args:
        kernel: Orientation kernel for the line intersector
        edges_are_from_same_geometry: True for the self-noding pass within
            one graph. Between two graphs, edges that meet are marked as
            not isolated, and proper crossings are tracked instead of cut.
    """

    def __init__(self, kernel: Kernel, edges_are_from_same_geometry: bool) -> None:
        self.kernel = kernel
        self.edges_are_from_same_geometry = edges_are_from_same_geometry
        self.proper_intersection_point: Optional[Coord] = None
        self._has_proper_interior_intersection = False
        self._boundary_coords: frozenset = frozenset()

    def set_boundary_nodes(self, boundary_coords: Iterable[Coord]) -> None:
        """Coordinates of the boundary nodes of both graphs."""
        self._boundary_coords = frozenset(boundary_coords)

    def has_proper_intersection(self) -> bool:
        return self.proper_intersection_point is not None

    def has_proper_interior_intersection(self) -> bool:
        """A proper crossing was found away from every boundary node."""
        return self._has_proper_interior_intersection

    def add_intersections(
        self,
        edge0: Edge,
        segment_index_0: int,
        edge1: Edge,
        segment_index_1: int,
    ) -> None:
        if edge0 is edge1 and segment_index_0 == segment_index_1:
            return

        line_0 = edge0.segment(segment_index_0)
        line_1 = edge1.segment(segment_index_1)
        intersection = line_intersection(line_0, line_1, self.kernel)
        if intersection is None:
            return

        if not self.edges_are_from_same_geometry:
            edge0.mark_as_unisolated()
            edge1.mark_as_unisolated()

        if self._is_trivial_intersection(
            intersection, edge0, segment_index_0, edge1, segment_index_1
        ):
            return

        if self.edges_are_from_same_geometry or not intersection.is_proper:
            edge0.add_intersections(intersection, line_0, segment_index_0)
            edge1.add_intersections(intersection, line_1, segment_index_1)

        if isinstance(intersection, SinglePoint) and intersection.is_proper:
            self.proper_intersection_point = intersection.intersection
            if intersection.intersection not in self._boundary_coords:
                self._has_proper_interior_intersection = True

    @staticmethod
    def _is_trivial_intersection(
        intersection: LineIntersection,
        edge0: Edge,
        segment_index_0: int,
        edge1: Edge,
        segment_index_1: int,
    ) -> bool:
        # neighbouring segments of one edge always share their common vertex
        if edge0 is not edge1 or intersection.is_collinear:
            return False
        if abs(segment_index_0 - segment_index_1) == 1:
            return True
        if edge0.is_closed:
            max_segment_index = len(edge0.coords) - 2
            if {segment_index_0, segment_index_1} == {0, max_segment_index}:
                return True
        return False


# -----------------------------------------------------------------------------
# Edge set intersectors
# -----------------------------------------------------------------------------


class SimpleEdgeSetIntersector:
    """Full cross product of segments."""

    def compute_intersections_within_set(
        self,
        edges: Sequence[Edge],
        check_for_self_intersecting_edges: bool,
        segment_intersector: SegmentIntersector,
    ) -> None:
        for edge0 in edges:
            for edge1 in edges:
                if check_for_self_intersecting_edges or edge0 is not edge1:
                    self._compute_intersects(edge0, edge1, segment_intersector)

    def compute_intersections_between_sets(
        self,
        edges_0: Sequence[Edge],
        edges_1: Sequence[Edge],
        segment_intersector: SegmentIntersector,
    ) -> None:
        for edge0 in edges_0:
            for edge1 in edges_1:
                self._compute_intersects(edge0, edge1, segment_intersector)

    @staticmethod
    def _compute_intersects(
        edge0: Edge, edge1: Edge, segment_intersector: SegmentIntersector
    ) -> None:
        for i0 in range(len(edge0.coords) - 1):
            for i1 in range(len(edge1.coords) - 1):
                segment_intersector.add_intersections(edge0, i0, edge1, i1)


class _SegmentEnvelopes:
    """Bounding envelopes of every segment of a list of edges, as arrays."""

    def __init__(self, edges: Sequence[Edge]) -> None:
        refs: list[tuple[int, int]] = []
        bounds: list[tuple] = []
        for edge_index, edge in enumerate(edges):
            coords = edge.coords
            for segment_index in range(len(coords) - 1):
                p, q = coords[segment_index], coords[segment_index + 1]
                refs.append((edge_index, segment_index))
                bounds.append(
                    (min(p[0], q[0]), min(p[1], q[1]), max(p[0], q[0]), max(p[1], q[1]))
                )

        self.refs = refs
        arr = np.asarray(bounds) if bounds else np.empty((0, 4))
        self.min_x = arr[:, 0]
        self.min_y = arr[:, 1]
        self.max_x = arr[:, 2]
        self.max_y = arr[:, 3]

    def __len__(self) -> int:
        return len(self.refs)

    def overlapping(self, other: _SegmentEnvelopes) -> Iterator[tuple[int, int]]:
        """Index pairs (into self, into other) of overlapping envelopes."""
        if not len(self) or not len(other):
            return
        overlap = (
            _as_bool(self.min_x[:, None] <= other.max_x[None, :])
            & _as_bool(other.min_x[None, :] <= self.max_x[:, None])
            & _as_bool(self.min_y[:, None] <= other.max_y[None, :])
            & _as_bool(other.min_y[None, :] <= self.max_y[:, None])
        )
        for i, j in np.argwhere(overlap):
            yield int(i), int(j)


def _as_bool(arr: np.ndarray) -> np.ndarray:
    # comparisons of object arrays (Fraction, Decimal) yield object arrays
    return arr.astype(bool, copy=False)


class EnvelopeEdgeSetIntersector:
    """Only segment pairs with overlapping bounding envelopes are tested."""

    def compute_intersections_within_set(
        self,
        edges: Sequence[Edge],
        check_for_self_intersecting_edges: bool,
        segment_intersector: SegmentIntersector,
    ) -> None:
        envelopes = _SegmentEnvelopes(edges)
        for i, j in envelopes.overlapping(envelopes):
            edge_index_0, segment_index_0 = envelopes.refs[i]
            edge_index_1, segment_index_1 = envelopes.refs[j]
            if check_for_self_intersecting_edges or edge_index_0 != edge_index_1:
                segment_intersector.add_intersections(
                    edges[edge_index_0], segment_index_0, edges[edge_index_1], segment_index_1
                )

    def compute_intersections_between_sets(
        self,
        edges_0: Sequence[Edge],
        edges_1: Sequence[Edge],
        segment_intersector: SegmentIntersector,
    ) -> None:
        envelopes_0 = _SegmentEnvelopes(edges_0)
        envelopes_1 = _SegmentEnvelopes(edges_1)
        for i, j in envelopes_0.overlapping(envelopes_1):
            edge_index_0, segment_index_0 = envelopes_0.refs[i]
            edge_index_1, segment_index_1 = envelopes_1.refs[j]
            segment_intersector.add_intersections(
                edges_0[edge_index_0], segment_index_0, edges_1[edge_index_1], segment_index_1
            )


EdgeSetIntersector = Union[SimpleEdgeSetIntersector, EnvelopeEdgeSetIntersector]

_INTERSECTORS = {
    "simple": SimpleEdgeSetIntersector,
    "envelope": EnvelopeEdgeSetIntersector,
}


def make_edge_set_intersector(name: str) -> EdgeSetIntersector:
    """Build the edge set intersector for a validated strategy name."""
    return _INTERSECTORS[name]()


__all__ = [
    "SegmentIntersector",
    "SimpleEdgeSetIntersector",
    "EnvelopeEdgeSetIntersector",
    "EdgeSetIntersector",
    "make_edge_set_intersector",
]
