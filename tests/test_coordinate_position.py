"""Tests for point location, dimensions and envelopes."""

from fractions import Fraction

import pytest

from geo_relate import (
    CoordPos,
    Dimensions,
    GeometryCollection,
    Kernel,
    Line,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    Rect,
    Triangle,
    boundary_dimensions,
    bounding_rect,
    coordinate_position,
    dimensions,
    is_empty,
)
from geo_relate.coordinate_position import coord_pos_relative_to_ring
from geo_relate.envelope import Envelope

I, B, E = CoordPos.INSIDE, CoordPos.ON_BOUNDARY, CoordPos.OUTSIDE

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]
HOLE = [(2, 2), (4, 2), (4, 4), (2, 4)]


class TestRingPosition:
    """Tests for the winding-number ring test."""

    RING = SQUARE + [SQUARE[0]]

    @pytest.mark.parametrize(
        "coord, expected",
        [
            ((5, 5), I),
            ((0, 5), B),
            ((10, 10), B),
            ((5, 0), B),
            ((11, 5), E),
            ((-1, 0), E),
            ((5, 10.5), E),
        ],
    )
    def test_square(self, coord, expected):
        assert coord_pos_relative_to_ring(coord, self.RING) is expected

    def test_clockwise_ring(self):
        """Winding direction does not matter."""
        assert coord_pos_relative_to_ring((5, 5), list(reversed(self.RING))) is I

    def test_degenerate_rings(self):
        assert coord_pos_relative_to_ring((0, 0), []) is E
        assert coord_pos_relative_to_ring((0, 0), [(0, 0)]) is B
        assert coord_pos_relative_to_ring((1, 0), [(0, 0)]) is E

    def test_simple_kernel(self):
        assert coord_pos_relative_to_ring((5, 5), self.RING, Kernel.SIMPLE) is I


class TestCoordinatePosition:
    """Tests for locating coordinates against whole geometries."""

    def test_point(self):
        assert coordinate_position(Point(1, 1), (1, 1)) is I
        assert coordinate_position(Point(1, 1), (1, 2)) is E

    def test_multi_point(self):
        points = MultiPoint([(0, 0), (1, 1)])
        assert coordinate_position(points, (1, 1)) is I
        assert coordinate_position(points, (0.5, 0.5)) is E

    def test_line(self):
        line = Line((0, 0), (2, 2))
        assert coordinate_position(line, (0, 0)) is B
        assert coordinate_position(line, (1, 1)) is I
        assert coordinate_position(line, (3, 3)) is E

    def test_line_string(self):
        """Endpoints are boundary, vertices and segment points are interior."""
        line_string = LineString([(0, 0), (2, 0), (2, 2)])
        assert coordinate_position(line_string, (0, 0)) is B
        assert coordinate_position(line_string, (2, 2)) is B
        assert coordinate_position(line_string, (2, 0)) is I
        assert coordinate_position(line_string, (2, 1)) is I
        assert coordinate_position(line_string, (1, 1)) is E

    def test_closed_line_string(self):
        """A closed line string has no boundary."""
        ring = LineString([(0, 0), (2, 0), (2, 2), (0, 0)])
        assert coordinate_position(ring, (0, 0)) is I
        assert coordinate_position(ring, (1, 1)) is I
        assert coordinate_position(ring, (1.5, 0.5)) is E

    def test_multi_line_string_boundary_rule(self):
        """Endpoint hits across parts are resolved by the mod-2 rule."""
        lines = MultiLineString([[(0, 0), (1, 0)], [(1, 0), (2, 0)]])
        assert coordinate_position(lines, (0, 0)) is B
        # two endpoint hits cancel, and no part has the point in its interior
        assert coordinate_position(lines, (1, 0)) is E

        crossed = MultiLineString([[(0, 0), (1, 0)], [(1, 0), (2, 0)], [(1, -1), (1, 1)]])
        assert coordinate_position(crossed, (1, 0)) is I

        three = MultiLineString([[(0, 0), (1, 0)], [(1, 0), (2, 0)], [(1, 0), (1, 1)]])
        assert coordinate_position(three, (1, 0)) is B

    def test_polygon_with_hole(self):
        polygon = Polygon(SQUARE, [HOLE])
        assert coordinate_position(polygon, (1, 1)) is I
        assert coordinate_position(polygon, (3, 3)) is E
        assert coordinate_position(polygon, (3, 2)) is B
        assert coordinate_position(polygon, (0, 3)) is B
        assert coordinate_position(polygon, (20, 20)) is E

    def test_multi_polygon(self):
        polygons = MultiPolygon([Polygon(SQUARE), Polygon([(20, 0), (30, 0), (30, 10), (20, 10)])])
        assert coordinate_position(polygons, (25, 5)) is I
        assert coordinate_position(polygons, (15, 5)) is E
        assert coordinate_position(polygons, (20, 5)) is B

    def test_rect_and_triangle(self):
        assert coordinate_position(Rect((0, 0), (2, 2)), (1, 1)) is I
        assert coordinate_position(Rect((0, 0), (2, 2)), (2, 1)) is B
        assert coordinate_position(Triangle((0, 0), (4, 0), (0, 4)), (2, 2)) is B
        assert coordinate_position(Triangle((0, 0), (4, 0), (0, 4)), (3, 3)) is E

    def test_collection(self):
        """Parts of a collection are combined."""
        collection = GeometryCollection([Point(5, 5), LineString([(0, 0), (1, 0)])])
        assert coordinate_position(collection, (5, 5)) is I
        assert coordinate_position(collection, (1, 0)) is B

    def test_empty(self):
        assert coordinate_position(Polygon(), (0, 0)) is E
        assert coordinate_position(LineString(), (0, 0)) is E

    def test_exact_coordinates(self):
        """Fraction coordinates are located exactly."""
        third = Fraction(1, 3)
        line = LineString([(0, 0), (1, 1), (2, 0)])
        assert coordinate_position(line, (third, third)) is I
        assert coordinate_position(line, (third, third + Fraction(1, 10**20))) is E


class TestDimensions:
    """Tests for geometry and boundary dimensions."""

    @pytest.mark.parametrize(
        "geom, expected",
        [
            (Point(0, 0), Dimensions.POINT),
            (Line((0, 0), (1, 1)), Dimensions.LINE),
            (Line((1, 1), (1, 1)), Dimensions.POINT),
            (LineString([(0, 0), (1, 1)]), Dimensions.LINE),
            (LineString([(0, 0), (0, 0)]), Dimensions.POINT),
            (LineString(), Dimensions.EMPTY),
            (Polygon(SQUARE), Dimensions.AREA),
            (Polygon([(0, 0), (1, 1)]), Dimensions.LINE),
            (Polygon(), Dimensions.EMPTY),
            (MultiPoint(), Dimensions.EMPTY),
            (MultiPoint([(0, 0)]), Dimensions.POINT),
            (Rect((0, 0), (0, 0)), Dimensions.POINT),
            (Rect((0, 0), (0, 5)), Dimensions.LINE),
            (Rect((0, 0), (1, 5)), Dimensions.AREA),
            (Triangle((0, 0), (1, 1), (2, 2)), Dimensions.LINE),
            (Triangle((0, 0), (1, 0), (0, 1)), Dimensions.AREA),
            (GeometryCollection([Point(0, 0), LineString([(0, 0), (1, 0)])]), Dimensions.LINE),
            (GeometryCollection(), Dimensions.EMPTY),
        ],
    )
    def test_dimensions(self, geom, expected):
        assert dimensions(geom) is expected

    @pytest.mark.parametrize(
        "geom, expected",
        [
            (Point(0, 0), Dimensions.EMPTY),
            (MultiPoint([(0, 0)]), Dimensions.EMPTY),
            (Line((0, 0), (1, 1)), Dimensions.POINT),
            (LineString([(0, 0), (1, 1)]), Dimensions.POINT),
            (LineString([(0, 0), (1, 0), (1, 1), (0, 0)]), Dimensions.EMPTY),
            (MultiLineString([[(0, 0), (1, 0)], [(1, 0), (0, 0)]]), Dimensions.POINT),
            (Polygon(SQUARE), Dimensions.LINE),
            (Polygon([(0, 0), (1, 1)]), Dimensions.POINT),
            (Rect((0, 0), (1, 5)), Dimensions.LINE),
            (GeometryCollection([Point(0, 0), Polygon(SQUARE)]), Dimensions.LINE),
        ],
    )
    def test_boundary_dimensions(self, geom, expected):
        assert boundary_dimensions(geom) is expected

    def test_is_empty(self):
        assert is_empty(Polygon())
        assert is_empty(MultiLineString([[]]))
        assert is_empty(GeometryCollection([MultiPoint()]))
        assert not is_empty(Point(0, 0))
        assert not is_empty(MultiPolygon([Polygon(), Polygon(SQUARE)]))

    def test_ordering(self):
        """Dimensions are totally ordered."""
        assert Dimensions.EMPTY < Dimensions.POINT < Dimensions.LINE < Dimensions.AREA

    def test_unsupported_type(self):
        with pytest.raises(TypeError, match="Unsupported geometry type"):
            dimensions("POINT (0 0)")


class TestBoundingRect:
    """Tests for envelopes."""

    def test_polygon(self):
        envelope = bounding_rect(Polygon(SQUARE, [HOLE]))
        assert envelope == Envelope(0, 0, 10, 10)

    def test_collection(self):
        envelope = bounding_rect(GeometryCollection([Point(-1, 3), Line((2, 2), (4, -5))]))
        assert envelope == Envelope(-1, -5, 4, 3)

    def test_empty(self):
        assert bounding_rect(LineString()) is None
        assert bounding_rect(GeometryCollection()) is None

    def test_intersects_touching(self):
        """Envelopes that only touch still intersect."""
        a = Envelope(0, 0, 1, 1)
        assert a.intersects(Envelope(1, 1, 2, 2))
        assert not a.intersects(Envelope(1.5, 0, 2, 1))

    def test_fraction_coordinates(self):
        """Exact bounds are kept exact."""
        envelope = bounding_rect(LineString([(Fraction(1, 3), 0), (Fraction(2, 3), 1)]))
        assert envelope.min_x == Fraction(1, 3)
        assert isinstance(envelope.max_x, Fraction)
