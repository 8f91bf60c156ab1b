"""
Geometry graph: one input geometry decomposed into labelled edges and nodes.

Each ring, line string and line becomes an Edge; every point, line endpoint
and ring start becomes a node. Polygon edges carry area labels (Inside on
one side, Outside on the other, chosen from the ring's winding order); line
edges carry line labels. Line endpoints are put on the boundary by the mod-2
rule, so an endpoint shared by an even number of lines is interior.

Self-intersection points are not required to be vertices, so the graph must
be self-noded (``compute_self_nodes``) before it is compared with another.
"""

from __future__ import annotations

import warnings
from typing import Iterator, Sequence

from ..coordinate_position import CoordPos
from ..dimensions import is_empty
from ..kernels import Kernel, Orientation, winding_order
from ..types import (
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
from ._types import Label, TopologyPosition
from .edge import Edge
from .node_map import CoordNode, NodeMap
from .segment_intersector import EdgeSetIntersector, SegmentIntersector


class TopologyWarning(UserWarning):
    """Warning issued when input geometry is not valid enough for a defined result."""

    pass


def determine_boundary(boundary_count: int) -> CoordPos:
    """
    The mod-2 rule: a component shared by an odd number of boundaries is on
    the boundary, otherwise it is interior.
    """
    if boundary_count % 2 == 1:
        return CoordPos.ON_BOUNDARY
    return CoordPos.INSIDE


def _remove_repeated(coords: Sequence[Coord]) -> list[Coord]:
    result: list[Coord] = []
    for coord in coords:
        if not result or result[-1] != coord:
            result.append(coord)
    return result


class GeometryGraph:
    """
    Planar graph of one input geometry.

    Args:
        arg_index: 0 for geometry A, 1 for geometry B
        geometry: The geometry to decompose
        kernel: Orientation kernel for ring winding and intersections

    Attributes:
        edges: Edges in insertion order; edge ends refer to them by index
        nodes: Nodes keyed by coordinate
        use_boundary_determination_rule: False for multi-polygons, whose
            self-intersection points are never put on the boundary by
            the mod-2 rule
    """

    def __init__(self, arg_index: int, geometry: Geometry, kernel: Kernel = Kernel.ROBUST) -> None:
        self.arg_index = arg_index
        self.geometry = geometry
        self.kernel = kernel
        self.edges: list[Edge] = []
        self.nodes: NodeMap[CoordNode] = NodeMap(CoordNode)
        self.use_boundary_determination_rule = True
        self._has_computed_self_nodes = False
        self.add_geometry(geometry)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def is_boundary_node(self, coord: Coord) -> bool:
        node = self.nodes.find(coord)
        return node is not None and node.label.on_position(self.arg_index) is CoordPos.ON_BOUNDARY

    def boundary_nodes(self) -> Iterator[CoordNode]:
        for node in self.nodes:
            if node.label.on_position(self.arg_index) is CoordPos.ON_BOUNDARY:
                yield node

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def add_geometry(self, geometry: Geometry) -> None:
        if is_empty(geometry):
            return

        if isinstance(geometry, Point):
            self._add_point(geometry.coord)
        elif isinstance(geometry, Line):
            self._add_line(geometry)
        elif isinstance(geometry, LineString):
            self._add_line_string(geometry)
        elif isinstance(geometry, Polygon):
            self._add_polygon(geometry)
        elif isinstance(geometry, (Rect, Triangle)):
            self._add_polygon(geometry.to_polygon())
        elif isinstance(geometry, MultiPoint):
            for point in geometry.points:
                self._add_point(point.coord)
        elif isinstance(geometry, MultiLineString):
            for line_string in geometry.line_strings:
                self._add_line_string(line_string)
        elif isinstance(geometry, MultiPolygon):
            self.use_boundary_determination_rule = False
            for polygon in geometry.polygons:
                self._add_polygon(polygon)
        elif isinstance(geometry, GeometryCollection):
            for part in geometry:
                self.add_geometry(part)
        else:
            raise TypeError(f"Unsupported geometry type: {type(geometry).__name__}")

    def _add_polygon(self, polygon: Polygon) -> None:
        self._add_polygon_ring(polygon.exterior, CoordPos.OUTSIDE, CoordPos.INSIDE)
        # holes have the polygon interior on the opposite side
        for hole in polygon.interiors:
            self._add_polygon_ring(hole, CoordPos.INSIDE, CoordPos.OUTSIDE)

    def _add_polygon_ring(
        self, ring: LineString, cw_left: CoordPos, cw_right: CoordPos
    ) -> None:
        if not ring.coords:
            return

        coords = _remove_repeated(ring.coords)
        if len(coords) < 4:
            warnings.warn(
                f"Polygon ring has only {len(coords)} distinct consecutive coordinate(s). "
                "The relate result is undefined for invalid rings.",
                TopologyWarning,
                stacklevel=3,
            )

        orientation = winding_order(ring.coords, self.kernel)
        if orientation is Orientation.CLOCKWISE:
            left, right = cw_left, cw_right
        elif orientation is Orientation.COUNTER_CLOCKWISE:
            left, right = cw_right, cw_left
        else:
            warnings.warn(
                "Polygon ring has no winding order. The relate result is undefined.",
                TopologyWarning,
                stacklevel=3,
            )
            left, right = cw_right, cw_left

        label = Label.new(
            self.arg_index, TopologyPosition.area(CoordPos.ON_BOUNDARY, left, right)
        )
        self.edges.append(Edge(coords, label))
        # the ring start is a node on the boundary
        self._insert_point(coords[0], CoordPos.ON_BOUNDARY)

    def _add_line_string(self, line_string: LineString) -> None:
        if not line_string.coords:
            return

        coords = _remove_repeated(line_string.coords)
        if len(coords) < 2:
            warnings.warn(
                "Line string collapses to a single coordinate and is treated as a point.",
                TopologyWarning,
                stacklevel=3,
            )
            self._add_point(coords[0])
            return

        self._insert_boundary_point(coords[0])
        self._insert_boundary_point(coords[-1])
        label = Label.new(self.arg_index, TopologyPosition.line_or_point(CoordPos.INSIDE))
        self.edges.append(Edge(coords, label))

    def _add_line(self, line: Line) -> None:
        self._insert_boundary_point(line.start)
        self._insert_boundary_point(line.end)
        label = Label.new(self.arg_index, TopologyPosition.line_or_point(CoordPos.INSIDE))
        self.edges.append(Edge([line.start, line.end], label))

    def _add_point(self, coord: Coord) -> None:
        node = self.nodes.insert_node_with_coordinate(coord)
        # a point on a line endpoint leaves the endpoint's boundary count alone
        if node.label.on_position(self.arg_index) is None:
            node.set_label_on_position(self.arg_index, CoordPos.INSIDE)

    def _insert_point(self, coord: Coord, position: CoordPos) -> None:
        node = self.nodes.insert_node_with_coordinate(coord)
        node.set_label_on_position(self.arg_index, position)

    def _insert_boundary_point(self, coord: Coord) -> None:
        node = self.nodes.insert_node_with_coordinate(coord)
        previous = node.label.on_position(self.arg_index)
        boundary_count = (1 if previous is CoordPos.ON_BOUNDARY else 0) + 1
        node.set_label_on_position(self.arg_index, determine_boundary(boundary_count))

    # -------------------------------------------------------------------------
    # Noding
    # -------------------------------------------------------------------------

    def compute_self_nodes(self, edge_set_intersector: EdgeSetIntersector) -> None:
        """
        Cut every edge where it meets another edge of the same geometry and
        add a node at each cut point.

        Rings are assumed valid and are not tested against themselves.
        Calling this more than once has no further effect.
        """
        if self._has_computed_self_nodes:
            return
        self._has_computed_self_nodes = True

        segment_intersector = SegmentIntersector(self.kernel, edges_are_from_same_geometry=True)
        geometry = self.geometry
        if isinstance(geometry, (LineString, MultiLineString)):
            is_rings = geometry.is_closed
        else:
            is_rings = isinstance(geometry, (Polygon, MultiPolygon))

        edge_set_intersector.compute_intersections_within_set(
            self.edges, not is_rings, segment_intersector
        )
        self._add_self_intersection_nodes()

    def _add_self_intersection_nodes(self) -> None:
        for edge in self.edges:
            position = edge.label.on_position(self.arg_index)
            for edge_intersection in edge.edge_intersections():
                coord = edge_intersection.coord
                if self.is_boundary_node(coord):
                    continue
                if position is CoordPos.ON_BOUNDARY and self.use_boundary_determination_rule:
                    self._insert_boundary_point(coord)
                else:
                    self._insert_point(coord, position)

    def compute_edge_intersections(
        self, other: GeometryGraph, edge_set_intersector: EdgeSetIntersector
    ) -> SegmentIntersector:
        """
        Cut the edges of both graphs where they meet each other.

        Returns:
            The segment intersector, holding what was found about proper
            crossings
        """
        segment_intersector = SegmentIntersector(self.kernel, edges_are_from_same_geometry=False)
        boundary_coords = [node.coord for node in self.boundary_nodes()]
        boundary_coords.extend(node.coord for node in other.boundary_nodes())
        segment_intersector.set_boundary_nodes(boundary_coords)
        edge_set_intersector.compute_intersections_between_sets(
            self.edges, other.edges, segment_intersector
        )
        return segment_intersector


__all__ = ["TopologyWarning", "determine_boundary", "GeometryGraph"]
