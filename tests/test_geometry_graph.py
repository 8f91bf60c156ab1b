"""Tests for geometry graphs, nodes, edge ends and their bundles."""

import pytest

from geo_relate import (
    CoordPos,
    GeometryCollection,
    IntersectionMatrix,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    Rect,
    TopologyWarning,
)
from geo_relate.relate._types import Direction, Label, TopologyPosition
from geo_relate.relate.edge import Edge
from geo_relate.relate.edge_end import EdgeEnd, Quadrant, quadrant
from geo_relate.relate.edge_end_builder import EdgeEndBuilder
from geo_relate.relate.edge_end_bundle import EdgeEndBundle, EdgeEndBundleStar
from geo_relate.relate.geometry_graph import GeometryGraph, determine_boundary
from geo_relate.relate.node_map import CoordNode, NodeMap
from geo_relate.relate.segment_intersector import (
    EnvelopeEdgeSetIntersector,
    SimpleEdgeSetIntersector,
)
from geo_relate.types import Line

I, B, E = CoordPos.INSIDE, CoordPos.ON_BOUNDARY, CoordPos.OUTSIDE

SQUARE_CCW = [(0, 0), (10, 0), (10, 10), (0, 10)]


def node_positions(graph):
    return {node.coord: node.label.on_position(graph.arg_index) for node in graph.nodes}


def line_label(geom_index, position):
    return Label.new(geom_index, TopologyPosition.line_or_point(position))


def east_stub(label):
    return EdgeEnd((0, 0), (1, 0), label)


class TestDetermineBoundary:
    """Tests for the mod-2 boundary rule."""

    def test_odd_is_boundary(self):
        assert determine_boundary(1) is B
        assert determine_boundary(3) is B

    def test_even_is_interior(self):
        assert determine_boundary(2) is I
        assert determine_boundary(0) is I


class TestPolygonGraph:
    """Tests for decomposing polygons."""

    def test_ccw_exterior(self):
        """A counter-clockwise exterior has the interior on its left."""
        graph = GeometryGraph(0, Polygon(SQUARE_CCW))
        assert len(graph.edges) == 1
        edge = graph.edges[0]
        assert len(edge.coords) == 5
        assert edge.label == Label.new(0, TopologyPosition.area(B, I, E))
        assert node_positions(graph) == {(0, 0): B}
        assert graph.is_boundary_node((0, 0))

    def test_cw_exterior(self):
        """A clockwise exterior has the interior on its right."""
        graph = GeometryGraph(1, Polygon(list(reversed(SQUARE_CCW))))
        assert graph.edges[0].label == Label.new(1, TopologyPosition.area(B, E, I))

    def test_hole(self):
        """The polygon interior is on the outer side of a hole."""
        ccw_hole = [(2, 2), (4, 2), (4, 4), (2, 4)]
        graph = GeometryGraph(0, Polygon(SQUARE_CCW, [ccw_hole]))
        assert len(graph.edges) == 2
        assert graph.edges[1].label == Label.new(0, TopologyPosition.area(B, E, I))

        graph = GeometryGraph(0, Polygon(SQUARE_CCW, [list(reversed(ccw_hole))]))
        assert graph.edges[1].label == Label.new(0, TopologyPosition.area(B, I, E))
        assert set(node_positions(graph)) == {(0, 0), (2, 4)}

    def test_rect(self):
        """A rectangle becomes a single closed ring."""
        graph = GeometryGraph(0, Rect((0, 0), (2, 1)))
        assert len(graph.edges) == 1
        assert len(graph.edges[0].coords) == 5
        assert graph.edges[0].is_closed

    def test_multi_polygon_disables_boundary_rule(self):
        graph = GeometryGraph(
            0,
            MultiPolygon(
                [Polygon(SQUARE_CCW), Polygon([(20, 0), (30, 0), (30, 10), (20, 10)])]
            ),
        )
        assert not graph.use_boundary_determination_rule
        assert len(graph.edges) == 2

    def test_collapsed_ring_warns(self):
        """A ring that is too short to enclose anything is reported."""
        with pytest.warns(TopologyWarning) as record:
            GeometryGraph(0, Polygon([(0, 0), (1, 1)]))
        messages = [str(w.message) for w in record]
        assert any("distinct consecutive" in m for m in messages)
        assert any("no winding order" in m for m in messages)

    def test_collapsed_ring_labelled_as_counter_clockwise(self):
        """A ring with no winding order gets the counter-clockwise sides."""
        with pytest.warns(TopologyWarning):
            graph = GeometryGraph(0, Polygon([(0, 0), (1, 1)]))
        assert graph.edges[0].label == Label.new(0, TopologyPosition.area(B, I, E))


class TestLinealGraph:
    """Tests for decomposing lines, points and collections."""

    def test_line_string_endpoints_are_boundary(self):
        graph = GeometryGraph(1, LineString([(0, 0), (1, 0), (1, 1)]))
        assert [node.coord for node in graph.boundary_nodes()] == [(0, 0), (1, 1)]
        assert graph.edges[0].label == Label.new(1, TopologyPosition.line_or_point(I))

    def test_closed_line_string_has_no_boundary(self):
        """Both ends of a closed line string land on one node, making it interior."""
        graph = GeometryGraph(0, LineString([(0, 0), (1, 0), (1, 1), (0, 0)]))
        assert list(graph.boundary_nodes()) == []
        assert node_positions(graph) == {(0, 0): I}

    def test_shared_endpoint_is_interior(self):
        """An endpoint shared by two parts is interior by the mod-2 rule."""
        graph = GeometryGraph(0, MultiLineString([[(0, 0), (1, 0)], [(1, 0), (2, 0)]]))
        assert node_positions(graph) == {(0, 0): B, (1, 0): I, (2, 0): B}

    def test_repeated_coordinates_are_dropped(self):
        graph = GeometryGraph(0, LineString([(0, 0), (0, 0), (1, 0), (1, 0)]))
        assert graph.edges[0].coords == [(0, 0), (1, 0)]

    def test_collapsed_line_string_warns(self):
        """A line string with a single distinct coordinate becomes a point."""
        with pytest.warns(TopologyWarning, match="collapses"):
            graph = GeometryGraph(0, LineString([(1, 1), (1, 1)]))
        assert graph.edges == []
        assert node_positions(graph) == {(1, 1): I}

    def test_line(self):
        graph = GeometryGraph(0, Line((0, 0), (3, 4)))
        assert graph.edges[0].coords == [(0, 0), (3, 4)]
        assert node_positions(graph) == {(0, 0): B, (3, 4): B}

    def test_multi_point(self):
        graph = GeometryGraph(0, MultiPoint([(0, 0), (1, 1)]))
        assert graph.edges == []
        assert node_positions(graph) == {(0, 0): I, (1, 1): I}

    @pytest.mark.parametrize(
        "parts",
        [
            [LineString([(0, 0), (1, 0)]), Point(1, 0)],
            [Point(1, 0), LineString([(0, 0), (1, 0)])],
        ],
    )
    def test_point_on_line_endpoint(self, parts):
        """A point on a line endpoint keeps the endpoint on the boundary, in any order."""
        graph = GeometryGraph(0, GeometryCollection(parts))
        assert node_positions(graph)[(1, 0)] is B

    def test_empty_geometries_are_skipped(self):
        for empty in (Polygon(), LineString(), MultiPoint(), GeometryCollection()):
            graph = GeometryGraph(0, empty)
            assert graph.edges == []
            assert len(graph.nodes) == 0


class TestSelfNoding:
    """Tests for cutting a graph's edges where they meet each other."""

    @pytest.mark.parametrize("intersector", [SimpleEdgeSetIntersector, EnvelopeEdgeSetIntersector])
    def test_self_crossing_line(self, intersector):
        """A bow-tie line string gets an interior node where it crosses itself."""
        graph = GeometryGraph(0, LineString([(0, 0), (2, 2), (2, 0), (0, 2)]))
        graph.compute_self_nodes(intersector())
        assert node_positions(graph) == {(0, 0): B, (0, 2): B, (1.0, 1.0): I}

    def test_idempotent(self):
        """A second call finds nothing new."""
        graph = GeometryGraph(0, LineString([(0, 0), (2, 2), (2, 0), (0, 2)]))
        graph.compute_self_nodes(SimpleEdgeSetIntersector())
        cuts = [len(list(edge.edge_intersections())) for edge in graph.edges]
        graph.compute_self_nodes(SimpleEdgeSetIntersector())
        assert [len(list(edge.edge_intersections())) for edge in graph.edges] == cuts

    def test_crossing_parts(self):
        """Two parts of a multi line string crossing get an interior node."""
        graph = GeometryGraph(0, MultiLineString([[(0, 0), (2, 2)], [(0, 2), (2, 0)]]))
        graph.compute_self_nodes(SimpleEdgeSetIntersector())
        assert node_positions(graph)[(1.0, 1.0)] is I


class TestNodes:
    """Tests for nodes and the node map."""

    def test_boundary_toggle(self):
        """Each boundary call flips the node on or off the boundary."""
        node = CoordNode((0, 0))
        node.set_label_boundary(0)
        assert node.label.on_position(0) is B
        node.set_label_boundary(0)
        assert node.label.on_position(0) is I
        node.set_label_boundary(0)
        assert node.label.on_position(0) is B

    def test_isolated(self):
        """A node known to only one geometry is isolated."""
        node = CoordNode((0, 0))
        node.set_label_on_position(0, I)
        assert node.is_isolated()
        node.set_label_on_position(1, B)
        assert not node.is_isolated()

    def test_update_intersection_matrix(self):
        """A node contributes a point at its two positions."""
        node = CoordNode((0, 0))
        node.set_label_on_position(0, I)
        matrix = IntersectionMatrix.empty()
        node.update_intersection_matrix(matrix)
        assert matrix == IntersectionMatrix.empty()

        node.set_label_on_position(1, B)
        node.update_intersection_matrix(matrix)
        assert str(matrix) == "F0FFFFFFF"

    def test_node_map(self):
        """Nodes are unique per coordinate and iterate in coordinate order."""
        nodes = NodeMap(CoordNode)
        first = nodes.insert_node_with_coordinate((2, 0))
        nodes.insert_node_with_coordinate((0, 1))
        nodes.insert_node_with_coordinate((0, 0))

        assert nodes.insert_node_with_coordinate((2, 0)) is first
        assert len(nodes) == 3
        assert (0, 1) in nodes
        assert nodes.find((5, 5)) is None
        assert [node.coord for node in nodes] == [(0, 0), (0, 1), (2, 0)]


class TestEdgeEnd:
    """Tests for stub direction ordering."""

    @pytest.mark.parametrize(
        "delta, expected",
        [
            ((1, 1), Quadrant.NE),
            ((-1, 1), Quadrant.NW),
            ((-1, -1), Quadrant.SW),
            ((1, -1), Quadrant.SE),
            ((1, 0), Quadrant.NE),
            ((0, 1), Quadrant.NE),
            ((-1, 0), Quadrant.NW),
            ((0, -1), Quadrant.SE),
            ((0, 0), None),
        ],
    )
    def test_quadrant(self, delta, expected):
        assert quadrant(*delta) is expected

    def test_compare_across_quadrants(self):
        label = Label.empty_line_or_point()
        north_east = EdgeEnd((0, 0), (1, 1), label)
        south_east = EdgeEnd((0, 0), (1, -1), label)
        assert north_east.compare_direction(south_east) == -1
        assert south_east.compare_direction(north_east) == 1

    def test_compare_within_quadrant(self):
        """Within a quadrant the stub turned clockwise comes first."""
        label = Label.empty_line_or_point()
        shallow = EdgeEnd((0, 0), (2, 1), label)
        steep = EdgeEnd((0, 0), (1, 2), label)
        assert shallow.compare_direction(steep) == -1
        assert steep.compare_direction(shallow) == 1

    def test_same_direction(self):
        """Stubs along the same ray compare equal, whatever their length."""
        label = Label.empty_line_or_point()
        short = EdgeEnd((0, 0), (1, 1), label)
        long = EdgeEnd((0, 0), (2, 2), label)
        assert short.compare_direction(long) == 0
        assert short.compare_direction(EdgeEnd((0, 0), (1, 1), label)) == 0


class TestEdgeEndBuilder:
    """Tests for splitting edges into stubs."""

    def test_stubs_around_cut_point(self):
        """A cut point in the middle of a segment emits stubs both ways."""
        label = Label.new(0, TopologyPosition.area(B, I, E))
        edge = Edge([(0, 0), (2, 0)], label)
        edge.add_intersection((1, 0), Line((0, 0), (2, 0)), 0)

        ends = []
        EdgeEndBuilder().compute_ends_for_edge(edge, 0, ends)

        assert [(end.coord_0, end.coord_1) for end in ends] == [
            ((0, 0), (1, 0)),
            ((1, 0), (0, 0)),
            ((1, 0), (2, 0)),
            ((2, 0), (1, 0)),
        ]
        backward = ends[1]
        assert backward.label.position(0, Direction.LEFT) is E
        assert backward.label.position(0, Direction.RIGHT) is I
        assert ends[2].label == label

    def test_stubs_end_at_vertices(self):
        """Without cut points, stubs run to the neighbouring vertex."""
        edge = Edge([(0, 0), (1, 0), (1, 1)], Label.new(0, TopologyPosition.line_or_point(I)))
        ends = EdgeEndBuilder().compute_ends_for_edges([edge])
        assert [(end.coord_0, end.coord_1) for end in ends] == [
            ((0, 0), (1, 0)),
            ((1, 1), (1, 0)),
        ]

    def test_edge_index(self):
        edges = [
            Edge([(0, 0), (1, 0)], Label.new(0, TopologyPosition.line_or_point(I))),
            Edge([(5, 5), (6, 5)], Label.new(0, TopologyPosition.line_or_point(I))),
        ]
        ends = EdgeEndBuilder().compute_ends_for_edges(edges)
        assert [end.edge_index for end in ends] == [0, 0, 1, 1]


class TestEdgeEndBundles:
    """Tests for bundling stubs around a node."""

    def test_star_order_and_bundling(self):
        """Bundles are kept counter-clockwise from east; parallel stubs share a bundle."""
        label = Label.new(0, TopologyPosition.line_or_point(I))
        star = EdgeEndBundleStar()
        for target in [(0, -1), (1, 0), (-1, 0), (0, 1), (2, 0)]:
            star.insert(EdgeEnd((0, 0), target, label.copy()))

        assert len(star) == 4
        assert [bundle.key.coord_1 for bundle in star] == [(1, 0), (0, 1), (-1, 0), (0, -1)]
        assert [len(bundle.edge_ends) for bundle in star] == [2, 1, 1, 1]

    def test_bundle_on_position_mod_2(self):
        """Two boundary stubs in one bundle make it interior."""
        bundle = EdgeEndBundle(east_stub(line_label(0, B)))
        assert bundle.into_labeled().label.on_position(0) is B

        bundle.insert(EdgeEnd((0, 0), (2, 0), line_label(0, B)))
        labeled = bundle.into_labeled()
        assert labeled.label.on_position(0) is I
        assert labeled.label.on_position(1) is None
        assert labeled.coordinate == (0, 0)

    def test_bundle_interior_wins(self):
        """An interior stub makes the bundle interior when none is on the boundary."""
        bundle = EdgeEndBundle(east_stub(line_label(1, I)))
        bundle.insert(east_stub(line_label(1, I)))
        assert bundle.into_labeled().label.on_position(1) is I

    def test_bundle_boundary_count_beats_interior(self):
        """With boundary stubs present, the mod-2 count decides over interior stubs."""
        bundle = EdgeEndBundle(east_stub(line_label(0, I)))
        bundle.insert(east_stub(line_label(0, B)))
        assert bundle.into_labeled().label.on_position(0) is B

        bundle.insert(east_stub(line_label(0, B)))
        assert bundle.into_labeled().label.on_position(0) is I

    def test_bundle_sides(self):
        """A side is Inside if any area stub has it Inside."""
        bundle = EdgeEndBundle(east_stub(Label.new(0, TopologyPosition.area(B, E, E))))
        bundle.insert(east_stub(Label.new(0, TopologyPosition.area(B, I, E))))
        label = bundle.into_labeled().label
        assert label.is_area()
        assert label.position(0, Direction.LEFT) is I
        assert label.position(0, Direction.RIGHT) is E
