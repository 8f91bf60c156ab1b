"""
Computes the intersection matrix of two geometries.

The pipeline, for geometries whose bounding boxes meet:

1. Build a geometry graph for each input and self-node it.
2. Intersect the edges of A with the edges of B.
3. Gather every node of both graphs, and every intersection point, into one
   node map, labelling each node for both geometries. Nodes seen by only
   one geometry are located against the other.
4. Raise the matrix from proper crossings.
5. Split the edges into stubs at their nodes, bundle them, and label the
   bundle stars around each node.
6. Label edges the other geometry never touched by locating them.
7. Fold every node, bundle and isolated edge label into the matrix.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..coordinate_position import CoordPos, coordinate_position
from ..dimensions import Dimensions, dimensions
from ..envelope import bounding_rect
from ..kernels import Kernel
from ..types import Coord, Geometry
from .edge import Edge
from .edge_end import EdgeEnd
from .edge_end_builder import EdgeEndBuilder
from .edge_end_bundle import EdgeEndBundleStar, LabeledEdgeEndBundleStar
from .geometry_graph import GeometryGraph
from .intersection_matrix import IntersectionMatrix
from .node_map import CoordNode, NodeMap
from .segment_intersector import EdgeSetIntersector, SegmentIntersector, make_edge_set_intersector


class RelateNode(CoordNode):
    """A node of the combined graph, with the star of stubs around it."""

    __slots__ = ("star", "labeled_star")

    def __init__(self, coord: Coord) -> None:
        super().__init__(coord)
        self.star = EdgeEndBundleStar()
        self.labeled_star: Optional[LabeledEdgeEndBundleStar] = None


# Lower bounds implied by a proper crossing, keyed by the input dimensions.
# Each entry is (pattern if any proper crossing, pattern if a proper crossing
# away from all boundary nodes).
_PROPER_INTERSECTION_PATTERNS = {
    (Dimensions.AREA, Dimensions.AREA): ("212101212", None),
    (Dimensions.AREA, Dimensions.LINE): ("FFF0FFFF2", "1FFFFF1FF"),
    (Dimensions.LINE, Dimensions.AREA): ("F0FFFFFF2", "1F1FFFFFF"),
    (Dimensions.LINE, Dimensions.LINE): (None, "0FFFFFFFF"),
}


class RelateOperation:
    """
    One relate computation. Not reusable: build a new one per pair.

    Args:
        geometry_a: First geometry
        geometry_b: Second geometry
        kernel: Orientation kernel
        intersector: Edge set intersector strategy name, ``"simple"`` or
            ``"envelope"``
    """

    def __init__(
        self,
        geometry_a: Geometry,
        geometry_b: Geometry,
        kernel: Kernel = Kernel.ROBUST,
        intersector: str = "envelope",
    ) -> None:
        self.geometry_a = geometry_a
        self.geometry_b = geometry_b
        self.kernel = kernel
        self.edge_set_intersector: EdgeSetIntersector = make_edge_set_intersector(intersector)
        self.graph_a: Optional[GeometryGraph] = None
        self.graph_b: Optional[GeometryGraph] = None
        self.nodes: NodeMap[RelateNode] = NodeMap(RelateNode)
        self.isolated_edges: list[Edge] = []

    def compute_intersection_matrix(self) -> IntersectionMatrix:
        intersection_matrix = IntersectionMatrix.empty_disjoint()

        envelope_a = bounding_rect(self.geometry_a)
        envelope_b = bounding_rect(self.geometry_b)
        if envelope_a is None or envelope_b is None or not envelope_a.intersects(envelope_b):
            intersection_matrix.compute_disjoint(self.geometry_a, self.geometry_b)
            return intersection_matrix

        self.graph_a = GeometryGraph(0, self.geometry_a, self.kernel)
        self.graph_b = GeometryGraph(1, self.geometry_b, self.kernel)
        self.graph_a.compute_self_nodes(self.edge_set_intersector)
        self.graph_b.compute_self_nodes(self.edge_set_intersector)

        segment_intersector = self.graph_a.compute_edge_intersections(
            self.graph_b, self.edge_set_intersector
        )

        self._compute_intersection_nodes(0)
        self._compute_intersection_nodes(1)
        # graph nodes override the labels from intersection points
        self._copy_nodes_and_labels(0)
        self._copy_nodes_and_labels(1)
        self._label_isolated_nodes()

        self._compute_proper_intersection_im(segment_intersector, intersection_matrix)

        edge_end_builder = EdgeEndBuilder(self.kernel)
        self._insert_edge_ends(edge_end_builder.compute_ends_for_edges(self.graph_a.edges))
        self._insert_edge_ends(edge_end_builder.compute_ends_for_edges(self.graph_b.edges))

        for node in self.nodes:
            node.labeled_star = node.star.into_labeled(self.graph_a, self.graph_b)

        self._label_isolated_edges(self.graph_a, self.graph_b)
        self._label_isolated_edges(self.graph_b, self.graph_a)

        self._update_intersection_matrix(intersection_matrix)
        return intersection_matrix

    def _graph(self, geom_index: int) -> GeometryGraph:
        graph = self.graph_a if geom_index == 0 else self.graph_b
        assert graph is not None
        return graph

    def _compute_intersection_nodes(self, geom_index: int) -> None:
        for edge in self._graph(geom_index).edges:
            edge_position = edge.label.on_position(geom_index)
            for edge_intersection in edge.edge_intersections():
                node = self.nodes.insert_node_with_coordinate(edge_intersection.coord)
                if edge_position is CoordPos.ON_BOUNDARY:
                    node.set_label_boundary(geom_index)
                elif node.label.is_empty(geom_index):
                    node.set_label_on_position(geom_index, CoordPos.INSIDE)

    def _copy_nodes_and_labels(self, geom_index: int) -> None:
        for graph_node in self._graph(geom_index).nodes:
            node = self.nodes.insert_node_with_coordinate(graph_node.coord)
            position = graph_node.label.on_position(geom_index)
            if position is not None:
                node.set_label_on_position(geom_index, position)

    def _label_isolated_nodes(self) -> None:
        for node in self.nodes:
            if not node.is_isolated():
                continue
            if node.label.is_empty(0):
                target_index, target = 0, self.geometry_a
            else:
                target_index, target = 1, self.geometry_b
            position = coordinate_position(target, node.coord, self.kernel)
            node.label.set_all_positions(target_index, position)

    def _compute_proper_intersection_im(
        self,
        segment_intersector: SegmentIntersector,
        intersection_matrix: IntersectionMatrix,
    ) -> None:
        key = (dimensions(self.geometry_a), dimensions(self.geometry_b))
        patterns = _PROPER_INTERSECTION_PATTERNS.get(key)
        if patterns is None:
            return
        if_proper, if_proper_interior = patterns
        if if_proper is not None and segment_intersector.has_proper_intersection():
            intersection_matrix.set_at_least_from_string(if_proper)
        if (
            if_proper_interior is not None
            and segment_intersector.has_proper_interior_intersection()
        ):
            intersection_matrix.set_at_least_from_string(if_proper_interior)

    def _insert_edge_ends(self, edge_ends: Sequence[EdgeEnd]) -> None:
        for edge_end in edge_ends:
            node = self.nodes.insert_node_with_coordinate(edge_end.coordinate)
            node.star.insert(edge_end)

    def _label_isolated_edges(self, this_graph: GeometryGraph, target_graph: GeometryGraph) -> None:
        target_index = target_graph.arg_index
        target = target_graph.geometry
        for edge in this_graph.edges:
            if not edge.is_isolated:
                continue
            if dimensions(target) > Dimensions.POINT:
                position = coordinate_position(target, edge.coords[0], self.kernel)
            else:
                position = CoordPos.OUTSIDE
            edge.label.set_all_positions(target_index, position)
            self.isolated_edges.append(edge)

    def _update_intersection_matrix(self, intersection_matrix: IntersectionMatrix) -> None:
        for edge in self.isolated_edges:
            Edge.update_intersection_matrix(edge.label, intersection_matrix)
        for node in self.nodes:
            node.update_intersection_matrix(intersection_matrix)
            if node.labeled_star is not None:
                node.labeled_star.update_intersection_matrix(intersection_matrix)


__all__ = ["RelateNode", "RelateOperation"]
