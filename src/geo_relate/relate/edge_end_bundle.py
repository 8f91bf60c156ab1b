"""
Bundles of coincident edge ends, and the star of bundles around a node.

Stubs at a node that leave in exactly the same direction are merged into a
bundle whose label summarises them. The bundles around a node, in angular
order, form its star. Labelling a star walks around the node and fills in
the sides of each bundle from its neighbours, then asks point location for
whatever is still unknown.
"""

from __future__ import annotations

import warnings
from typing import Iterator, Optional, Sequence

from ..coordinate_position import CoordPos, coordinate_position
from ..dimensions import Dimensions, dimensions
from ..types import Coord
from ._types import Direction, Label
from .edge import Edge
from .edge_end import EdgeEnd
from .geometry_graph import GeometryGraph, TopologyWarning, determine_boundary
from .intersection_matrix import IntersectionMatrix


class EdgeEndBundle:
    """
    Edge ends at one node that share a direction.

    Args:
        edge_end: The first stub; later stubs are added with ``insert``
    """

    __slots__ = ("coordinate", "edge_ends")

    def __init__(self, edge_end: EdgeEnd) -> None:
        self.coordinate: Coord = edge_end.coordinate
        self.edge_ends: list[EdgeEnd] = [edge_end]

    def __repr__(self) -> str:
        return f"EdgeEndBundle({self.coordinate!r}, {len(self.edge_ends)} stub(s))"

    @property
    def key(self) -> EdgeEnd:
        """The stub whose direction stands for the bundle."""
        return self.edge_ends[0]

    def insert(self, edge_end: EdgeEnd) -> None:
        self.edge_ends.append(edge_end)

    def into_labeled(self) -> LabeledEdgeEndBundle:
        """
        Summarise the stubs' labels into a single bundle label.

        The bundle is an area bundle if any stub is. Per geometry, the ``on``
        position is Inside if any stub is Inside, overridden by the mod-2
        rule when any stub is on the boundary. Each side is Inside if any
        area stub has it Inside, else Outside if any has it Outside.
        """
        is_area = any(edge_end.label.is_area() for edge_end in self.edge_ends)
        label = Label.empty_area() if is_area else Label.empty_line_or_point()

        for geom_index in (0, 1):
            self._compute_label_on(label, geom_index)
            if is_area:
                self._compute_label_side(label, geom_index, Direction.LEFT)
                self._compute_label_side(label, geom_index, Direction.RIGHT)

        return LabeledEdgeEndBundle(label, self)

    def _compute_label_on(self, label: Label, geom_index: int) -> None:
        boundary_count = 0
        found_interior = False
        for edge_end in self.edge_ends:
            position = edge_end.label.on_position(geom_index)
            if position is CoordPos.ON_BOUNDARY:
                boundary_count += 1
            elif position is CoordPos.INSIDE:
                found_interior = True

        position: Optional[CoordPos] = None
        if found_interior:
            position = CoordPos.INSIDE
        if boundary_count > 0:
            position = determine_boundary(boundary_count)
        if position is not None:
            label.set_on_position(geom_index, position)

    def _compute_label_side(self, label: Label, geom_index: int, side: Direction) -> None:
        position: Optional[CoordPos] = None
        for edge_end in self.edge_ends:
            if not edge_end.label.is_area():
                continue
            side_position = edge_end.label.position(geom_index, side)
            if side_position is CoordPos.INSIDE:
                position = CoordPos.INSIDE
                break
            if side_position is CoordPos.OUTSIDE:
                position = CoordPos.OUTSIDE
        if position is not None:
            label.set_position(geom_index, side, position)


class LabeledEdgeEndBundle:
    """A bundle together with its summary label."""

    __slots__ = ("label", "bundle")

    def __init__(self, label: Label, bundle: EdgeEndBundle) -> None:
        self.label = label
        self.bundle = bundle

    def __repr__(self) -> str:
        return f"LabeledEdgeEndBundle({self.coordinate!r}, {self.label!r})"

    @property
    def coordinate(self) -> Coord:
        return self.bundle.coordinate

    def update_intersection_matrix(self, intersection_matrix: IntersectionMatrix) -> None:
        Edge.update_intersection_matrix(self.label, intersection_matrix)


class EdgeEndBundleStar:
    """
    The bundles around one node, kept in angular order.

    Stubs that compare equal by direction land in the same bundle.
    """

    __slots__ = ("_bundles",)

    def __init__(self) -> None:
        self._bundles: list[EdgeEndBundle] = []

    def __len__(self) -> int:
        return len(self._bundles)

    def __iter__(self) -> Iterator[EdgeEndBundle]:
        return iter(self._bundles)

    def insert(self, edge_end: EdgeEnd) -> None:
        lo, hi = 0, len(self._bundles)
        while lo < hi:
            mid = (lo + hi) // 2
            cmp = edge_end.compare_direction(self._bundles[mid].key)
            if cmp == 0:
                self._bundles[mid].insert(edge_end)
                return
            if cmp < 0:
                hi = mid
            else:
                lo = mid + 1
        self._bundles.insert(lo, EdgeEndBundle(edge_end))

    def into_labeled(
        self, graph_a: GeometryGraph, graph_b: GeometryGraph
    ) -> LabeledEdgeEndBundleStar:
        labeled = [bundle.into_labeled() for bundle in self._bundles]
        return LabeledEdgeEndBundleStar(labeled, graph_a, graph_b)


class LabeledEdgeEndBundleStar:
    """
    A fully labelled star.

    Labelling happens on construction: side labels are propagated around
    the node for each geometry, then any position still unknown is filled
    from point location against that geometry.

    Args:
        bundles: Labelled bundles in angular order
        graph_a: Graph of geometry A
        graph_b: Graph of geometry B
    """

    __slots__ = ("bundles",)

    def __init__(
        self,
        bundles: Sequence[LabeledEdgeEndBundle],
        graph_a: GeometryGraph,
        graph_b: GeometryGraph,
    ) -> None:
        self.bundles = list(bundles)
        self._compute_labeling(graph_a, graph_b)

    def __iter__(self) -> Iterator[LabeledEdgeEndBundle]:
        return iter(self.bundles)

    def _compute_labeling(self, graph_a: GeometryGraph, graph_b: GeometryGraph) -> None:
        graphs = (graph_a, graph_b)
        for geom_index in (0, 1):
            self._propagate_side_labels(geom_index)

        has_dimensional_collapse_edge = [False, False]
        for bundle in self.bundles:
            for geom_index in (0, 1):
                if (
                    bundle.label.is_line(geom_index)
                    and bundle.label.on_position(geom_index) is CoordPos.ON_BOUNDARY
                ):
                    has_dimensional_collapse_edge[geom_index] = True

        for bundle in self.bundles:
            for geom_index, graph in enumerate(graphs):
                if not bundle.label.is_any_empty(geom_index):
                    continue
                if has_dimensional_collapse_edge[geom_index]:
                    position = CoordPos.OUTSIDE
                elif dimensions(graph.geometry) == Dimensions.AREA:
                    position = coordinate_position(graph.geometry, bundle.coordinate, graph.kernel)
                else:
                    position = CoordPos.OUTSIDE
                bundle.label.set_all_positions_if_empty(geom_index, position)

    def _propagate_side_labels(self, geom_index: int) -> None:
        start_position: Optional[CoordPos] = None
        for bundle in self.bundles:
            label = bundle.label
            if label.is_geom_area(geom_index):
                left = label.position(geom_index, Direction.LEFT)
                if left is not None:
                    start_position = left
        if start_position is None:
            return

        current_position = start_position
        for bundle in self.bundles:
            label = bundle.label
            if label.on_position(geom_index) is None:
                label.set_on_position(geom_index, current_position)
            if not label.is_geom_area(geom_index):
                continue

            left = label.position(geom_index, Direction.LEFT)
            right = label.position(geom_index, Direction.RIGHT)
            if right is not None:
                if right is not current_position:
                    warnings.warn(
                        f"Side location conflict at {bundle.coordinate!r}: "
                        f"right side is {right.name} but {current_position.name} was "
                        "propagated. This can happen with invalid geometries.",
                        TopologyWarning,
                        stacklevel=7,
                    )
                if left is not None:
                    current_position = left
            else:
                label.set_position(geom_index, Direction.RIGHT, current_position)
                label.set_position(geom_index, Direction.LEFT, current_position)

    def update_intersection_matrix(self, intersection_matrix: IntersectionMatrix) -> None:
        for bundle in self.bundles:
            bundle.update_intersection_matrix(intersection_matrix)


__all__ = [
    "EdgeEndBundle",
    "LabeledEdgeEndBundle",
    "EdgeEndBundleStar",
    "LabeledEdgeEndBundleStar",
]
