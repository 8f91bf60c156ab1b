"""
Split edges into edge ends at their intersection points.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..kernels import Kernel
from .edge import Edge, EdgeIntersection
from .edge_end import EdgeEnd


class EdgeEndBuilder:
    """
    Builds the stubs of every edge of a graph.

    Each intersection point on an edge emits up to two stubs: one back
    toward the previous point (with a flipped label) and one forward toward
    the next. The first point has no backward stub and the last has no
    forward stub. A stub ends at the neighbouring intersection when that
    lies on the same segment, otherwise at the neighbouring vertex.

    Args:
        kernel: Orientation kernel handed to the stubs for ordering
    """

    def __init__(self, kernel: Kernel = Kernel.ROBUST) -> None:
        self.kernel = kernel

    def compute_ends_for_edges(self, edges: Sequence[Edge]) -> list[EdgeEnd]:
        ends: list[EdgeEnd] = []
        for edge_index, edge in enumerate(edges):
            self.compute_ends_for_edge(edge, edge_index, ends)
        return ends

    def compute_ends_for_edge(self, edge: Edge, edge_index: int, ends: list[EdgeEnd]) -> None:
        edge.add_edge_intersection_list_endpoints()
        intersections = list(edge.edge_intersections())

        for i, curr in enumerate(intersections):
            prev = intersections[i - 1] if i > 0 else None
            following = intersections[i + 1] if i + 1 < len(intersections) else None
            self._create_edge_end_for_prev(edge, edge_index, ends, curr, prev)
            self._create_edge_end_for_next(edge, edge_index, ends, curr, following)

    def _create_edge_end_for_prev(
        self,
        edge: Edge,
        edge_index: int,
        ends: list[EdgeEnd],
        curr: EdgeIntersection,
        prev: Optional[EdgeIntersection],
    ) -> None:
        i_prev = curr.segment_index
        if curr.distance == 0:
            # at a vertex: the previous point is on the segment before
            if i_prev == 0:
                return
            i_prev -= 1

        coord_prev = edge.coords[i_prev]
        if prev is not None and prev.segment_index >= i_prev:
            coord_prev = prev.coord

        label = edge.label.copy()
        label.flip()
        ends.append(EdgeEnd(curr.coord, coord_prev, label, edge_index, self.kernel))

    def _create_edge_end_for_next(
        self,
        edge: Edge,
        edge_index: int,
        ends: list[EdgeEnd],
        curr: EdgeIntersection,
        following: Optional[EdgeIntersection],
    ) -> None:
        i_next = curr.segment_index + 1
        if i_next >= len(edge.coords) and following is None:
            return

        coord_next = edge.coords[i_next]
        if following is not None and following.segment_index == curr.segment_index:
            coord_next = following.coord

        ends.append(EdgeEnd(curr.coord, coord_next, edge.label.copy(), edge_index, self.kernel))


__all__ = ["EdgeEndBuilder"]
